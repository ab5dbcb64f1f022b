"""Replace-all tag associations for notes and books.

A note's (or book's) association rows are a derived view of the tag names
last supplied: every update deletes all rows for the owner and inserts the
newly resolved set in the same transaction. There is no add/remove-one
primitive at this layer.
"""
import logging
from typing import List, Sequence

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AppError, InternalError
from app.models.book_tag import book_tags
from app.models.note_tag import note_tags
from app.models.tag import Tag
from app.services import tag_store
from app.services.books import find_active_book
from app.services.notes import find_active_note
from app.utils.slug import slugify

logger = logging.getLogger(__name__)


def clean_tag_names(tag_names: Sequence[str]) -> List[str]:
    """Trim and validate names up front, dropping ones with no usable slug"""
    cleaned = []
    for raw in tag_names:
        name = (raw or "").strip()
        if not slugify(name):
            continue
        name, _ = tag_store.normalize_name(name)
        cleaned.append(name)
    return cleaned


async def _replace_tags(db: AsyncSession, table, owner_column: str, owner_id: int, names: List[str]) -> List[int]:
    owner = table.c[owner_column]
    await db.execute(delete(table).where(owner == owner_id))

    if not names:
        return []

    # Names sharing a slug resolve to the same tag and collapse to one row
    tag_ids: List[int] = []
    for name in names:
        tag = await tag_store.find_or_create(db, name)
        if tag.id not in tag_ids:
            tag_ids.append(tag.id)

    await db.execute(
        insert(table),
        [{owner_column: owner_id, "tag_id": tag_id} for tag_id in tag_ids],
    )
    return tag_ids


async def _set_tags(db: AsyncSession, table, owner_column: str, owner_id: int, names: List[str]) -> List[int]:
    try:
        tag_ids = await _replace_tags(db, table, owner_column, owner_id, names)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Replacing tags on %s %s failed", table.name, owner_id)
        raise InternalError("Failed to update tags") from exc
    except AppError:
        await db.rollback()
        raise

    logger.debug("%s %s now carries tags %s", table.name, owner_id, tag_ids)
    return tag_ids


async def set_note_tags(db: AsyncSession, note_id: int, tag_names: Sequence[str]) -> List[int]:
    """Atomically replace the full tag set of a note.

    Returns the ids of the tags the note carries afterwards. Anything the
    current session has pending (a freshly created note, edited fields) is
    committed together with the new associations, or rolled back with them.
    """
    names = clean_tag_names(tag_names)
    await find_active_note(db, note_id)
    return await _set_tags(db, note_tags, "note_id", note_id, names)


async def set_book_tags(db: AsyncSession, book_id: int, tag_names: Sequence[str]) -> List[int]:
    """Atomically replace the full tag set of a book"""
    names = clean_tag_names(tag_names)
    await find_active_book(db, book_id)
    return await _set_tags(db, book_tags, "book_id", book_id, names)


async def _tag_names(db: AsyncSession, table, owner_column: str, owner_id: int) -> List[str]:
    result = await db.execute(
        select(Tag.name)
        .join(table, table.c.tag_id == Tag.id)
        .where(
            table.c[owner_column] == owner_id,
            table.c.deleted_at.is_(None),
            Tag.deleted_at.is_(None),
        )
        .order_by(Tag.id)
    )
    return [row[0] for row in result.fetchall()]


async def get_note_tag_names(db: AsyncSession, note_id: int) -> List[str]:
    return await _tag_names(db, note_tags, "note_id", note_id)


async def get_book_tag_names(db: AsyncSession, book_id: int) -> List[str]:
    return await _tag_names(db, book_tags, "book_id", book_id)
