from sqlalchemy import Column, Integer, String, DateTime, Index, text
from sqlalchemy.sql import func
from app.core.database import Base


class Tag(Base):
    __tablename__ = "tags"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(30), nullable=False)
    slug = Column(String(30), nullable=False, index=True)
    # Cached book_count + note_count, only written by an explicit refresh
    usage_count = Column(Integer, nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        # Slugs are unique among active tags only
        Index(
            "uq_tags_slug_active",
            "slug",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
