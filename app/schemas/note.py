from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Literal, Optional, List, Union

NoteType = Literal["quote", "summary", "thought", "general"]


class NoteBase(BaseModel):
    title: Optional[str] = None
    content: str
    note_type: Optional[NoteType] = "general"
    page_reference: Optional[str] = None
    is_favorite: Optional[bool] = False

    @field_validator("page_reference", mode="before")
    @classmethod
    def page_reference_as_text(cls, value: Union[str, int, None]):
        return str(value) if isinstance(value, int) else value


class NoteCreate(NoteBase):
    book_id: int
    # Omitted means "no tags"; an explicit list replaces the tag set
    tags: Optional[List[str]] = None


class NoteUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    note_type: Optional[NoteType] = None
    page_reference: Optional[str] = None
    is_favorite: Optional[bool] = None
    tags: Optional[List[str]] = None

    @field_validator("page_reference", mode="before")
    @classmethod
    def page_reference_as_text(cls, value: Union[str, int, None]):
        return str(value) if isinstance(value, int) else value


class NoteResponse(BaseModel):
    id: int
    book_id: int
    title: Optional[str] = None
    content: str
    note_type: Optional[str] = None
    page_reference: Optional[str] = None
    is_favorite: Optional[bool] = None
    tags: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NoteListResponse(BaseModel):
    notes: List[NoteResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
