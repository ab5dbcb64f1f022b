from .book import Book
from .note import Note
from .tag import Tag
from .note_tag import note_tags
from .book_tag import book_tags

__all__ = ["Book", "Note", "Tag", "note_tags", "book_tags"]
