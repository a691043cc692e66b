"""Fixed-size page slicing."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from app.schemas.dashboard import PageInfo

T = TypeVar("T")

PAGE_WINDOW = 5


@dataclass
class Page(Generic[T]):
    items: list[T]
    info: PageInfo


def page_window(current: int, total_pages: int, width: int = PAGE_WINDOW) -> list[int]:
    """
    Page numbers for the pager buttons.

    Shows up to ``width`` pages, keeping ``current`` centred except near
    either end of the range.
    """
    if total_pages <= 0:
        return []
    if total_pages <= width:
        return list(range(1, total_pages + 1))

    half = width // 2
    if current <= half + 1:
        start = 1
    elif current >= total_pages - half:
        start = total_pages - width + 1
    else:
        start = current - half
    return list(range(start, start + width))


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """
    Return page ``page`` (1-based) of ``items``.

    Pages past the end are empty rather than an error. Concatenating every
    page in order gives back ``items``.
    """
    if page_size < 1:
        raise ValueError("page_size must be positive")
    if page < 1:
        raise ValueError("page must be 1 or greater")

    total = len(items)
    total_pages = math.ceil(total / page_size)
    start = (page - 1) * page_size
    sliced = list(items[start : start + page_size])

    return Page(
        items=sliced,
        info=PageInfo(
            page=page,
            page_size=page_size,
            total_items=total,
            total_pages=total_pages,
            first_item=start + 1 if sliced else 0,
            last_item=start + len(sliced) if sliced else 0,
            page_numbers=page_window(page, total_pages),
        ),
    )
