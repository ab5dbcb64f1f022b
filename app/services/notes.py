import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models.note import Note
from app.models.note_tag import note_tags
from app.models.tag import Tag
from app.utils.slug import slugify

logger = logging.getLogger(__name__)


async def find_active_note(db: AsyncSession, note_id: int) -> Note:
    result = await db.execute(
        select(Note).where(Note.id == note_id, Note.deleted_at.is_(None))
    )
    note = result.scalar_one_or_none()
    if not note:
        raise NotFoundError(f"Note with id {note_id} not found")
    return note


async def list_notes(
    db: AsyncSession,
    offset: int,
    limit: int,
    search: Optional[str] = None,
    note_type: Optional[str] = None,
    tags: Optional[List[str]] = None,
    book_id: Optional[int] = None,
) -> Tuple[List[Note], int]:
    """Page through active notes with optional text, type, tag and book filters"""
    filters = [Note.deleted_at.is_(None)]

    if book_id is not None:
        filters.append(Note.book_id == book_id)

    if search and search.strip():
        term = f"%{search.strip()}%"
        filters.append(or_(Note.title.ilike(term), Note.content.ilike(term)))

    if note_type:
        filters.append(Note.note_type == note_type)

    if tags:
        slugs = [slugify(tag) for tag in tags if slugify(tag)]
        if slugs:
            tagged = (
                select(note_tags.c.note_id)
                .join(Tag, Tag.id == note_tags.c.tag_id)
                .where(
                    Tag.slug.in_(slugs),
                    Tag.deleted_at.is_(None),
                    note_tags.c.deleted_at.is_(None),
                )
            )
            filters.append(Note.id.in_(tagged))

    total = await db.scalar(select(func.count(Note.id)).where(*filters))
    result = await db.execute(
        select(Note)
        .where(*filters)
        .order_by(Note.created_at.desc(), Note.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0


async def soft_delete_note(db: AsyncSession, note_id: int) -> None:
    """Soft delete a note and drop its tag associations.

    Tag rows and their cached usage counts are not touched.
    """
    note = await find_active_note(db, note_id)
    note.deleted_at = datetime.now(timezone.utc)
    await db.execute(delete(note_tags).where(note_tags.c.note_id == note_id))
    await db.commit()
    logger.info("Soft deleted note %s", note_id)
