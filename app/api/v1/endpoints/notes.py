from typing import List, Optional
from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import ValidationError
from app.models.note import Note
from app.schemas.note import NoteCreate, NoteUpdate, NoteResponse, NoteListResponse
from app.services import associations, views
from app.services.books import find_active_book
from app.services.notes import find_active_note, list_notes, soft_delete_note
from app.utils.pagination import resolve_page, offset_for, total_pages

router = APIRouter()


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(note: NoteCreate, db: AsyncSession = Depends(get_db)):
    """Create a new note, optionally tagging it in the same transaction"""
    if not note.content.strip():
        raise ValidationError("Content is required")

    await find_active_book(db, note.book_id)

    db_note = Note(
        book_id=note.book_id,
        title=note.title,
        content=note.content,
        note_type=note.note_type,
        page_reference=note.page_reference,
        is_favorite=note.is_favorite
    )
    db.add(db_note)
    await db.flush()

    if note.tags is not None:
        await associations.set_note_tags(db, db_note.id, note.tags)
    else:
        await db.commit()
    await db.refresh(db_note)

    return await views.note_to_response(db, db_note)


@router.get("", response_model=NoteListResponse)
async def get_notes(
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    per_page: Optional[int] = Query(None, description="Items per page"),
    search: Optional[str] = Query(None, description="Search text in title and content"),
    note_type: Optional[str] = Query(None, description="Filter by note type"),
    tags: Optional[str] = Query(None, description="Comma-separated list of tag names to filter by"),
    db: AsyncSession = Depends(get_db)
):
    """List notes with optional search, type and tag filtering"""
    page, per_page = resolve_page(page, per_page)
    tag_names = [tag.strip() for tag in tags.split(",") if tag.strip()] if tags else None

    notes, total = await list_notes(
        db,
        offset_for(page, per_page),
        per_page,
        search=search,
        note_type=note_type,
        tags=tag_names
    )

    note_responses = []
    for db_note in notes:
        note_responses.append(await views.note_to_response(db, db_note))

    return NoteListResponse(
        notes=note_responses,
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages(total, per_page)
    )


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(note_id: int, db: AsyncSession = Depends(get_db)):
    """Get a specific note by ID"""
    note = await find_active_note(db, note_id)
    return await views.note_to_response(db, note)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    note_update: NoteUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update a note; tags are only replaced when the request carries them"""
    update_data = note_update.model_dump(exclude_unset=True)

    if "content" in update_data and not (update_data["content"] or "").strip():
        raise ValidationError("Content cannot be empty")

    tag_names = update_data.pop("tags", None)
    if tag_names is not None:
        associations.clean_tag_names(tag_names)

    note = await find_active_note(db, note_id)

    for field, value in update_data.items():
        setattr(note, field, value)

    if tag_names is not None:
        await associations.set_note_tags(db, note.id, tag_names)
    else:
        await db.commit()
    await db.refresh(note)

    return await views.note_to_response(db, note)


@router.put("/{note_id}/tags", response_model=NoteResponse)
async def update_note_tags(
    note_id: int,
    tags: List[str] = Body(..., description="Full list of tag names for the note"),
    db: AsyncSession = Depends(get_db)
):
    """Replace all tags of a note"""
    await associations.set_note_tags(db, note_id, tags)
    note = await find_active_note(db, note_id)
    return await views.note_to_response(db, note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: int, db: AsyncSession = Depends(get_db)):
    """Soft delete a note and drop its tag associations"""
    await soft_delete_note(db, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
