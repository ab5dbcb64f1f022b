"""Tag identity and slug uniqueness.

Every lookup here ignores soft-deleted tags. Operations that change state
commit their own transaction, except ``find_or_create`` which runs inside
whatever transaction the caller already has open.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InternalError, NotFoundError, ValidationError
from app.models.tag import Tag
from app.utils.slug import slugify

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 30


def normalize_name(name: str, empty_message: str = "Tag name is required") -> Tuple[str, str]:
    """Trim a tag name and derive its slug, rejecting unusable names"""
    name = (name or "").strip()
    if not name:
        raise ValidationError(empty_message)
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Tag name must be at most {MAX_NAME_LENGTH} characters")
    slug = slugify(name)
    if not slug:
        raise ValidationError("Tag name must contain at least one letter or digit")
    return name, slug


async def find_by_id(db: AsyncSession, tag_id: int) -> Tag:
    result = await db.execute(
        select(Tag).where(Tag.id == tag_id, Tag.deleted_at.is_(None))
    )
    tag = result.scalar_one_or_none()
    if not tag:
        raise NotFoundError(f"Tag with id {tag_id} not found")
    return tag


async def find_by_slug(db: AsyncSession, slug: str) -> Optional[Tag]:
    result = await db.execute(
        select(Tag).where(Tag.slug == slug, Tag.deleted_at.is_(None))
    )
    return result.scalar_one_or_none()


async def list_active(db: AsyncSession, offset: int, limit: int) -> Tuple[List[Tag], int]:
    """Return one page of active tags together with the total count"""
    total = await db.scalar(
        select(func.count(Tag.id)).where(Tag.deleted_at.is_(None))
    )
    result = await db.execute(
        select(Tag)
        .where(Tag.deleted_at.is_(None))
        .order_by(Tag.id)
        .offset(offset)
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0


async def create(db: AsyncSession, name: str) -> Tag:
    """Create a new tag; a slug already held by an active tag is a conflict"""
    name, slug = normalize_name(name)

    if await find_by_slug(db, slug):
        raise ConflictError(f"Tag '{name}' already exists")

    tag = Tag(name=name, slug=slug, usage_count=0)
    db.add(tag)
    try:
        await db.commit()
    except IntegrityError as exc:
        # Lost the race against a concurrent create of the same slug
        await db.rollback()
        raise ConflictError(f"Tag '{name}' already exists") from exc

    await db.refresh(tag)
    logger.info("Created tag %s with slug %r", tag.id, slug)
    return tag


async def find_or_create(db: AsyncSession, name: str) -> Tag:
    """Resolve a tag name to an active tag, creating it when missing.

    The insert runs in a SAVEPOINT so a unique violation caused by a
    concurrent request only discards that insert; the tag the other request
    created is then fetched by slug and returned. Nothing is committed here.
    """
    name, slug = normalize_name(name)

    tag = await find_by_slug(db, slug)
    if tag:
        return tag

    try:
        async with db.begin_nested():
            tag = Tag(name=name, slug=slug, usage_count=0)
            db.add(tag)
    except IntegrityError as exc:
        logger.warning("Tag slug %r was created concurrently, re-fetching", slug)
        tag = await find_by_slug(db, slug)
        if tag is None:
            raise InternalError(f"Could not resolve tag '{name}'") from exc
        return tag

    logger.info("Created tag %s with slug %r on demand", tag.id, slug)
    return tag


async def update(
    db: AsyncSession,
    tag_id: int,
    name: Optional[str] = None,
    slug: Optional[str] = None,
) -> Tag:
    """Rename a tag and/or change its slug.

    A new name always recomputes the slug. The collision check and the
    write share one transaction, and the partial unique index on active
    slugs turns a rename that races past the check into a conflict too.
    """
    new_name = None
    new_slug = None
    if name is not None:
        new_name, new_slug = normalize_name(name, "Tag name cannot be empty")
    elif slug is not None:
        new_slug = slugify(slug)
        if not new_slug:
            raise ValidationError("Tag slug cannot be empty")

    tag = await find_by_id(db, tag_id)

    if new_slug is not None and new_slug != tag.slug:
        existing = await find_by_slug(db, new_slug)
        if existing and existing.id != tag.id:
            raise ConflictError(f"Tag '{new_name or new_slug}' already exists")

    if new_name is not None:
        tag.name = new_name
    if new_slug is not None:
        tag.slug = new_slug

    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(f"Tag '{new_name or new_slug}' already exists") from exc

    await db.refresh(tag)
    return tag


async def soft_delete(db: AsyncSession, tag_id: int) -> None:
    """Mark a tag deleted; its associations and counters are left alone"""
    tag = await find_by_id(db, tag_id)
    tag.deleted_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info("Soft deleted tag %s", tag_id)
