import math
from typing import Optional, Tuple

from app.core.config import settings


def resolve_page(page: Optional[int], per_page: Optional[int]) -> Tuple[int, int]:
    """Clamp page/per_page query values to the configured bounds"""
    page = max(page or 1, 1)
    if per_page is None:
        per_page = settings.DEFAULT_PAGE_SIZE
    per_page = min(max(per_page, 1), settings.MAX_PAGE_SIZE)
    return page, per_page


def offset_for(page: int, per_page: int) -> int:
    return (page - 1) * per_page


def total_pages(total: int, per_page: int) -> int:
    return math.ceil(total / per_page) if per_page else 0
