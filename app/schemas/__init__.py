from .book import BookCreate, BookUpdate, BookResponse, BookListResponse
from .note import NoteCreate, NoteUpdate, NoteResponse, NoteListResponse
from .tag import TagCreate, TagUpdate, TagResponse, PopularTagResponse, TagListResponse

__all__ = [
    "BookCreate", "BookUpdate", "BookResponse", "BookListResponse",
    "NoteCreate", "NoteUpdate", "NoteResponse", "NoteListResponse",
    "TagCreate", "TagUpdate", "TagResponse", "PopularTagResponse", "TagListResponse",
]
