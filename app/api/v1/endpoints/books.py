from typing import List, Optional
from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import ValidationError
from app.models.book import Book
from app.schemas.book import BookCreate, BookUpdate, BookResponse, BookListResponse
from app.schemas.note import NoteListResponse
from app.services import associations, views
from app.services.books import find_active_book, list_books, soft_delete_book
from app.services.notes import list_notes
from app.utils.pagination import resolve_page, offset_for, total_pages

router = APIRouter()


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(book: BookCreate, db: AsyncSession = Depends(get_db)):
    """Create a new book"""
    if not book.title.strip():
        raise ValidationError("Title is required")
    if not book.author.strip():
        raise ValidationError("Author is required")

    db_book = Book(**book.model_dump())
    db.add(db_book)
    await db.commit()
    await db.refresh(db_book)

    return await views.book_to_response(db, db_book)


@router.get("", response_model=BookListResponse)
async def get_books(
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    per_page: Optional[int] = Query(None, description="Items per page"),
    search: Optional[str] = Query(None, description="Search text in title and author"),
    db: AsyncSession = Depends(get_db)
):
    """List books with optional search"""
    page, per_page = resolve_page(page, per_page)
    books, total = await list_books(db, offset_for(page, per_page), per_page, search=search)

    book_responses = []
    for book in books:
        book_responses.append(await views.book_to_response(db, book))

    return BookListResponse(
        books=book_responses,
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages(total, per_page)
    )


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: int, db: AsyncSession = Depends(get_db)):
    """Get a specific book by ID"""
    book = await find_active_book(db, book_id)
    return await views.book_to_response(db, book)


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: int,
    book_update: BookUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update a book"""
    update_data = book_update.model_dump(exclude_unset=True)

    if "title" in update_data and not (update_data["title"] or "").strip():
        raise ValidationError("Title cannot be empty")
    if "author" in update_data and not (update_data["author"] or "").strip():
        raise ValidationError("Author cannot be empty")

    book = await find_active_book(db, book_id)
    for field, value in update_data.items():
        setattr(book, field, value)

    await db.commit()
    await db.refresh(book)

    return await views.book_to_response(db, book)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(book_id: int, db: AsyncSession = Depends(get_db)):
    """Soft delete a book"""
    await soft_delete_book(db, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{book_id}/notes", response_model=NoteListResponse)
async def get_book_notes(
    book_id: int,
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    per_page: Optional[int] = Query(None, description="Items per page"),
    db: AsyncSession = Depends(get_db)
):
    """List the notes of a book"""
    await find_active_book(db, book_id)

    page, per_page = resolve_page(page, per_page)
    notes, total = await list_notes(db, offset_for(page, per_page), per_page, book_id=book_id)

    note_responses = []
    for note in notes:
        note_responses.append(await views.note_to_response(db, note))

    return NoteListResponse(
        notes=note_responses,
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages(total, per_page)
    )


@router.put("/{book_id}/tags", response_model=BookResponse)
async def update_book_tags(
    book_id: int,
    tags: List[str] = Body(..., description="Full list of tag names for the book"),
    db: AsyncSession = Depends(get_db)
):
    """Replace all tags of a book"""
    await associations.set_book_tags(db, book_id, tags)
    book = await find_active_book(db, book_id)
    return await views.book_to_response(db, book)
