import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models.book import Book

logger = logging.getLogger(__name__)


async def find_active_book(db: AsyncSession, book_id: int) -> Book:
    result = await db.execute(
        select(Book).where(Book.id == book_id, Book.deleted_at.is_(None))
    )
    book = result.scalar_one_or_none()
    if not book:
        raise NotFoundError(f"Book with id {book_id} not found")
    return book


async def list_books(
    db: AsyncSession,
    offset: int,
    limit: int,
    search: Optional[str] = None,
) -> Tuple[List[Book], int]:
    filters = [Book.deleted_at.is_(None)]
    if search and search.strip():
        term = f"%{search.strip()}%"
        filters.append(or_(Book.title.ilike(term), Book.author.ilike(term)))

    total = await db.scalar(select(func.count(Book.id)).where(*filters))
    result = await db.execute(
        select(Book)
        .where(*filters)
        .order_by(Book.created_at.desc(), Book.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0


async def soft_delete_book(db: AsyncSession, book_id: int) -> None:
    book = await find_active_book(db, book_id)
    book.deleted_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info("Soft deleted book %s", book_id)
