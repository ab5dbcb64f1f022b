from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List


class TagCreate(BaseModel):
    name: str


class TagUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None


class TagResponse(BaseModel):
    id: int
    name: str
    slug: str
    book_count: int = 0  # live
    note_count: int = 0  # live
    usage_count: Optional[int] = None  # cached, refreshed explicitly
    created_at: Optional[datetime] = None


class PopularTagResponse(BaseModel):
    id: int
    name: str
    slug: str
    usage_count: Optional[int] = None


class TagListResponse(BaseModel):
    tags: List[TagResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
