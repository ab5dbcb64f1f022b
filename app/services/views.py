"""Response read-models composed from the tag, association and usage services"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.book import Book
from app.models.note import Note
from app.models.tag import Tag
from app.schemas.book import BookResponse
from app.schemas.note import NoteResponse
from app.schemas.tag import PopularTagResponse, TagResponse
from app.services import associations, usage

logger = logging.getLogger(__name__)


async def tag_to_response(db: AsyncSession, tag: Tag) -> TagResponse:
    # book_count/note_count are live, usage_count is the cached value as stored
    return TagResponse(
        id=tag.id,
        name=tag.name,
        slug=tag.slug,
        book_count=await usage.book_count(db, tag.id),
        note_count=await usage.note_count(db, tag.id),
        usage_count=tag.usage_count,
        created_at=tag.created_at,
    )


def popular_tag_to_response(tag: Tag) -> PopularTagResponse:
    return PopularTagResponse(
        id=tag.id,
        name=tag.name,
        slug=tag.slug,
        usage_count=tag.usage_count,
    )


async def note_to_response(db: AsyncSession, note: Note) -> NoteResponse:
    try:
        tags = await associations.get_note_tag_names(db, note.id)
    except SQLAlchemyError:
        # Read path only: a note whose tags cannot be loaded is shown untagged
        logger.warning("Could not load tags for note %s", note.id, exc_info=True)
        tags = []

    return NoteResponse(
        id=note.id,
        book_id=note.book_id,
        title=note.title,
        content=note.content,
        note_type=note.note_type,
        page_reference=note.page_reference,
        is_favorite=note.is_favorite,
        tags=tags,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


async def book_to_response(db: AsyncSession, book: Book) -> BookResponse:
    return BookResponse(
        id=book.id,
        isbn=book.isbn,
        title=book.title,
        author=book.author,
        publisher=book.publisher,
        publication_date=book.publication_date,
        page_count=book.page_count,
        cover_image=book.cover_image,
        description=book.description,
        tags=await associations.get_book_tag_names(db, book.id),
        created_at=book.created_at,
        updated_at=book.updated_at,
    )
