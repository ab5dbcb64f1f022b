from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index, Table
from sqlalchemy.sql import func
from app.core.database import Base

# Association table for many-to-many relationship between books and tags
book_tags = Table(
    'book_tags',
    Base.metadata,
    Column('book_id', Integer, ForeignKey('books.id', ondelete='CASCADE'), primary_key=True),
    Column('tag_id', Integer, ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
    Column('deleted_at', DateTime(timezone=True), nullable=True),
    Column('created_at', DateTime(timezone=True), server_default=func.now()),
    Index('ix_book_tags_tag_id', 'tag_id'),
)
