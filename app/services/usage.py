"""Tag usage accounting.

``book_count`` and ``note_count`` are always computed live from the
association tables. ``Tag.usage_count`` is a cache of their sum that only
changes when ``refresh_usage_count`` runs; association writes do not touch
it, so it can lag behind the live numbers until the next refresh.
"""
import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.book import Book
from app.models.book_tag import book_tags
from app.models.note import Note
from app.models.note_tag import note_tags
from app.models.tag import Tag
from app.services import tag_store

logger = logging.getLogger(__name__)


async def book_count(db: AsyncSession, tag_id: int) -> int:
    """Active book associations whose book is also active"""
    count = await db.scalar(
        select(func.count())
        .select_from(book_tags)
        .join(Book, Book.id == book_tags.c.book_id)
        .where(
            book_tags.c.tag_id == tag_id,
            book_tags.c.deleted_at.is_(None),
            Book.deleted_at.is_(None),
        )
    )
    return count or 0


async def note_count(db: AsyncSession, tag_id: int) -> int:
    """Active note associations whose note is also active"""
    count = await db.scalar(
        select(func.count())
        .select_from(note_tags)
        .join(Note, Note.id == note_tags.c.note_id)
        .where(
            note_tags.c.tag_id == tag_id,
            note_tags.c.deleted_at.is_(None),
            Note.deleted_at.is_(None),
        )
    )
    return count or 0


async def refresh_usage_count(db: AsyncSession, tag_id: int) -> int:
    """Persist book_count + note_count as the tag's cached usage_count"""
    tag = await tag_store.find_by_id(db, tag_id)
    tag.usage_count = await book_count(db, tag_id) + await note_count(db, tag_id)
    await db.commit()
    await db.refresh(tag)
    logger.debug("Refreshed usage count of tag %s to %s", tag_id, tag.usage_count)
    return tag.usage_count


async def popular(db: AsyncSession, limit: int) -> List[Tag]:
    """Active tags ranked by their cached usage_count.

    Ties keep whatever order the database returns them in.
    """
    result = await db.execute(
        select(Tag)
        .where(Tag.deleted_at.is_(None), Tag.usage_count.is_not(None))
        .order_by(Tag.usage_count.desc())
        .limit(limit)
    )
    return list(result.scalars().all())
