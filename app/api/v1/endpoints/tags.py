from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.schemas.tag import TagCreate, TagUpdate, TagResponse, PopularTagResponse, TagListResponse
from app.services import tag_store, usage, views
from app.utils.pagination import resolve_page, offset_for, total_pages

router = APIRouter()


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(tag: TagCreate, db: AsyncSession = Depends(get_db)):
    """Create a new tag"""
    db_tag = await tag_store.create(db, tag.name)
    return await views.tag_to_response(db, db_tag)


@router.get("", response_model=TagListResponse)
async def list_tags(
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    per_page: Optional[int] = Query(None, description="Items per page"),
    db: AsyncSession = Depends(get_db)
):
    """List active tags with live book/note counts"""
    page, per_page = resolve_page(page, per_page)
    tags, total = await tag_store.list_active(db, offset_for(page, per_page), per_page)

    tag_responses = []
    for tag in tags:
        tag_responses.append(await views.tag_to_response(db, tag))

    return TagListResponse(
        tags=tag_responses,
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages(total, per_page)
    )


@router.get("/popular", response_model=List[PopularTagResponse])
async def get_popular_tags(
    limit: Optional[int] = Query(None, description="Number of tags to return"),
    db: AsyncSession = Depends(get_db)
):
    """Get tags ranked by their cached usage count"""
    if limit is None:
        limit = settings.POPULAR_TAGS_DEFAULT_LIMIT
    limit = min(max(limit, 1), settings.POPULAR_TAGS_MAX_LIMIT)

    tags = await usage.popular(db, limit)
    return [views.popular_tag_to_response(tag) for tag in tags]


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(tag_id: int, db: AsyncSession = Depends(get_db)):
    """Get a specific tag by ID"""
    tag = await tag_store.find_by_id(db, tag_id)
    return await views.tag_to_response(db, tag)


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: int,
    tag_update: TagUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Rename a tag, then refresh its cached usage count"""
    tag = await tag_store.update(db, tag_id, name=tag_update.name, slug=tag_update.slug)
    await usage.refresh_usage_count(db, tag.id)
    return await views.tag_to_response(db, tag)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(tag_id: int, db: AsyncSession = Depends(get_db)):
    """Soft delete a tag"""
    await tag_store.soft_delete(db, tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
