"""Unit tests for sorting and pagination"""

import pytest
from conftest import make_line
from babylist_gateway.domain.enrichment import EnrichmentContext, enrich_all
from babylist_gateway.domain.pagination import SortOrder, paginate, resolve_page_number, sort_items


def _items(prices):
    lines = [make_line(sku=f"sku{i}", line_id=i, unit_price_cents=p) for i, p in enumerate(prices)]
    return enrich_all(lines, EnrichmentContext())


def test_page_math_for_45_items():
    items = _items([1000] * 45)

    first = paginate(items, page_number=1)
    last = paginate(items, page_number=3)

    assert first.total_pages == 3
    assert first.total_count == 45
    assert first.page_size == 20
    assert len(first.items) == 20
    assert first.has_next is True
    assert first.has_prev is False

    assert len(last.items) == 5
    assert last.has_next is False
    assert last.has_prev is True


def test_page_beyond_range_is_empty():
    page = paginate(_items([1000] * 45), page_number=4)

    assert page.items == ()
    assert page.has_next is False
    assert page.has_prev is True
    assert page.current_page == 4


def test_empty_collection():
    page = paginate([], page_number=1)

    assert page.total_pages == 0
    assert page.items == ()
    assert page.has_next is False
    assert page.has_prev is False


def test_sort_by_price_ascending_and_descending():
    items = _items([3000, 1000, 2000])

    assert [i.unit_price_cents for i in sort_items(items, SortOrder.PRICE_ASC)] == [1000, 2000, 3000]
    assert [i.unit_price_cents for i in sort_items(items, "price_highest")] == [3000, 2000, 1000]


def test_default_order_keeps_registry_order():
    items = _items([3000, 1000, 2000])

    assert [i.sku for i in sort_items(items, None)] == ["sku0", "sku1", "sku2"]
    assert [i.sku for i in sort_items(items, SortOrder.DEFAULT)] == ["sku0", "sku1", "sku2"]


@pytest.mark.parametrize("order", [SortOrder.PRICE_ASC, SortOrder.PRICE_DESC])
def test_price_sort_is_stable_for_ties(order):
    items = _items([2000, 1000, 2000, 1000, 2000])

    ordered = sort_items(items, order)

    for price in (1000, 2000):
        tied = [i.line_id for i in ordered if i.unit_price_cents == price]
        assert tied == sorted(tied)


def test_paginate_applies_sort_before_slicing():
    items = _items([5000 - i for i in range(25)])

    page = paginate(items, SortOrder.PRICE_ASC, page_number=2)

    assert [i.unit_price_cents for i in page.items] == [4996, 4997, 4998, 4999, 5000]


@pytest.mark.parametrize(
    "paged, path, account_view, expected",
    [
        (None, None, False, 1),
        ("3", None, False, 3),
        ("abc", None, False, 1),
        ("0", None, False, 1),
        ("2", "0101ABC/page/4", True, 4),
        ("2", "0101ABC/page/x", True, 2),
        ("2", "0101ABC", True, 2),
        ("2", "0101ABC/page", True, 2),
        ("2", "0101ABC/page/4", False, 2),  # path only counts on the account view
    ],
)
def test_resolve_page_number(paged, path, account_view, expected):
    assert resolve_page_number(paged, path, account_view) == expected
