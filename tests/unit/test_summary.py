"""Unit tests for registry read model assembly"""

from datetime import date
from conftest import make_entry, make_line, make_record
from babylist_gateway.domain.enrichment import EnrichmentContext
from babylist_gateway.domain.filters import FilterSelection
from babylist_gateway.domain.models import RewardTier, Store, ViewerContext
from babylist_gateway.domain.registry import Registry
from babylist_gateway.domain.summary import build_stats, build_summary

STORE = Store(locate_id="0101", name="Prenatal Milano", allow_registry_purchase=True)


def test_scenario_three_lines(scenario_record, scenario_catalog):
    """Two catalog-matched lines (30 and 60) and one gifted line at 40"""
    registry = Registry.build(scenario_record, EnrichmentContext(catalog=scenario_catalog))

    summary = build_summary(registry, FilterSelection(), store=STORE, today=date(2026, 1, 1))

    assert summary.reward.cumulative_gifted_cents == 4_000
    assert summary.reward.tier is RewardTier.NONE
    assert summary.reward.discount_cents == 0

    counts = {band.slug: band.count for band in summary.price_bands}
    assert counts == {"0-50": 2, "50-100": 1, "100-150": 0, "150": 0}

    prices = {card.item.sku: card.item.unit_price_cents for card in summary.page.items}
    assert prices == {"1001": 3000, "1002": 6000, "1003": 4000}


def test_price_bands_follow_status_filters_not_price_filter(scenario_record, scenario_catalog):
    registry = Registry.build(scenario_record, EnrichmentContext(catalog=scenario_catalog))

    summary = build_summary(registry, FilterSelection(available=True, price_band="50-100"))

    counts = {band.slug: band.count for band in summary.price_bands}
    assert counts == {"0-50": 1, "50-100": 1, "100-150": 0, "150": 0}
    assert [card.item.sku for card in summary.page.items] == ["1002"]
    assert summary.page.total_count == 1


def test_summary_sorting_and_filters_echo(scenario_record, scenario_catalog):
    registry = Registry.build(scenario_record, EnrichmentContext(catalog=scenario_catalog))

    summary = build_summary(registry, FilterSelection(order_by="price_highest"))

    assert [card.item.sku for card in summary.page.items] == ["1002", "1003", "1001"]
    assert summary.filters == {"order_by": "price_highest"}
    assert summary.order_by == "price_highest"


def test_summary_groups_and_details(scenario_record, scenario_catalog):
    registry = Registry.build(scenario_record, EnrichmentContext(catalog=scenario_catalog))

    summary = build_summary(registry, FilterSelection(), viewer=ViewerContext(), store=STORE)

    assert summary.gifted.count == 1
    assert summary.gifted.amount_cents == 4_000
    assert summary.available.count == 2
    assert summary.available.amount_cents == 9_000
    assert summary.details.store_name == "Prenatal Milano"
    assert summary.details.full_name == "Giulia Rossi e Marco Bianchi"
    assert summary.details.can_buy_from_list is True
    assert [(c.slug, c.count) for c in summary.categories] == [("passeggio", 1), ("pappa", 1)]

    hidden = {card.item.sku: card.hide_add_to_cart for card in summary.page.items}
    assert hidden == {"1001": False, "1002": False, "1003": True}


def test_stats():
    lines = [
        make_line(sku="a", line_id=1, available_qty=0, unit_price_cents=3000, participates=True),
        make_line(sku="b", line_id=2, available_qty=0, unit_price_cents=2000, participates=False),
        make_line(sku="c", line_id=3, unit_price_cents=5000),
    ]
    registry = Registry.build(make_record(lines), EnrichmentContext())

    stats = build_stats(registry.items)

    assert stats.item_count == 3
    assert stats.gifted_count == 2
    assert stats.available_count == 1
    assert stats.gifted_items_percentage == 67
    assert stats.total_amount_cents == 10_000
    assert stats.gifted_amount_cents == 3_000
    assert stats.available_amount_cents == 5_000
    assert stats.gifted_amount_percentage == 30


def test_summary_pages_with_configured_size():
    lines = [make_line(sku=str(i), line_id=i) for i in range(45)]
    registry = Registry.build(make_record(lines), EnrichmentContext())

    summary = build_summary(registry, FilterSelection(), page_number=3)

    assert summary.page.total_pages == 3
    assert len(summary.page.items) == 5
    assert summary.page.has_next is False
    assert summary.page.has_prev is True


def test_vip_registry_prices():
    line = make_line(sku="1001", unit_price_cents=3000)
    context = EnrichmentContext(
        catalog={"1001": make_entry(price_cents=3000, vip_price_cents=2400)},
        viewer_is_vip=True,
    )

    registry = Registry.build(make_record([line]), context)

    assert registry.is_vip is True
    assert registry.items[0].unit_price_cents == 2400
