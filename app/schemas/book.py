from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional, List


class BookBase(BaseModel):
    title: str
    author: str
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    publication_date: Optional[date] = None
    page_count: Optional[int] = None
    cover_image: Optional[str] = None
    description: Optional[str] = None


class BookCreate(BookBase):
    pass


class BookUpdate(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    publication_date: Optional[date] = None
    page_count: Optional[int] = None
    cover_image: Optional[str] = None
    description: Optional[str] = None


class BookResponse(BookBase):
    id: int
    tags: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BookListResponse(BaseModel):
    books: List[BookResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
