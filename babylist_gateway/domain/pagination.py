"""Sorting and pagination of registry items"""

import math
from enum import Enum
from typing import Optional, Sequence

from babylist_gateway.domain.models import Page

DEFAULT_PAGE_SIZE = 20


class SortOrder(str, Enum):
    DEFAULT = "id"
    PRICE_ASC = "price_lowest"
    PRICE_DESC = "price_highest"


def sort_items(items: Sequence, order: Optional[str]) -> list:
    """
    Order items by unit price, or keep registry line order.

    Items only need a `unit_price_cents` attribute. Sorting is stable in both
    directions, so equal prices keep their line order.
    """
    if order == SortOrder.PRICE_ASC:
        return sorted(items, key=lambda item: item.unit_price_cents)
    if order == SortOrder.PRICE_DESC:
        return sorted(items, key=lambda item: item.unit_price_cents, reverse=True)
    return list(items)


def _positive_int(value) -> Optional[int]:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number >= 1 else None


def resolve_page_number(
    paged: Optional[str],
    account_path: Optional[str] = None,
    is_account_view: bool = False,
) -> int:
    """
    Resolve the requested page.

    The `paged` parameter is the primary source. On the owner's account view
    the path may carry `page/<n>` (e.g. "ABC123/page/2"), which wins when
    numeric.
    """
    page = _positive_int(paged) or 1

    if is_account_view and account_path:
        segments = account_path.strip("/").split("/")
        if "page" in segments:
            index = segments.index("page")
            if index + 1 < len(segments):
                page = _positive_int(segments[index + 1]) or page

    return page


def paginate(
    items: Sequence,
    order: Optional[str] = None,
    page_number: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page:
    """Sort items and cut out one page; pages past the end are empty, not an error"""
    ordered = sort_items(items, order)
    total_count = len(ordered)
    total_pages = math.ceil(total_count / page_size)
    current_page = max(page_number, 1)

    start = (current_page - 1) * page_size
    page_items = tuple(ordered[start:start + page_size])

    return Page(
        items=page_items,
        has_next=total_pages > current_page,
        has_prev=current_page > 1,
        total_count=total_count,
        page_size=page_size,
        current_page=current_page,
        total_pages=total_pages,
    )
