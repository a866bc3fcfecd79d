"""Registry read model assembly"""

from datetime import date
from typing import Optional, Sequence

from babylist_gateway.domain.filters import (
    FilterSelection,
    apply_status_filters,
    category_counts,
    filter_by_price_band,
    price_band_histogram,
)
from babylist_gateway.domain.models import (
    ItemCard,
    ItemGroup,
    RegistryDetails,
    RegistryItem,
    RegistryStats,
    RegistrySummary,
    Store,
    ViewerContext,
)
from babylist_gateway.domain.pagination import DEFAULT_PAGE_SIZE, paginate
from babylist_gateway.domain.registry import Registry
from babylist_gateway.domain.rewards import calculate_reward, reward_eligible
from babylist_gateway.utils.money import ratio_percentage


def total_amount(items: Sequence[RegistryItem]) -> int:
    return sum(item.line_total_cents for item in items)


def item_group(items: Sequence[RegistryItem]) -> ItemGroup:
    return ItemGroup(items=tuple(items), count=len(items), amount_cents=total_amount(items))


def build_details(
    registry: Registry,
    viewer: ViewerContext,
    store: Optional[Store],
    today: date,
) -> RegistryDetails:
    record = registry.record
    return RegistryDetails(
        id=registry.id,
        list_name=registry.list_name,
        first_name=record.first_name.strip(),
        last_name=record.last_name.strip(),
        full_name=registry.full_name,
        card_number=record.card_number,
        store_name=store.name if store else None,
        donation_total_cents=record.donation_total_cents,
        created_date=record.open_date,
        close_date=record.end_date,
        is_closed=registry.is_closed,
        days_left=registry.days_left(today),
        is_empty=registry.is_empty,
        has_must_have=registry.has_must_have,
        is_list_user=registry.is_list_user(viewer),
        can_buy_from_list=registry.can_buy_from_list(viewer, store),
    )


def build_stats(items: Sequence[RegistryItem]) -> RegistryStats:
    """
    Progress counters.

    The gifted amount only counts lines taking part in the reward program,
    matching what the reward tier is computed on.
    """
    gifted = [item for item in items if item.gifted]
    available = [item for item in items if not item.gifted]
    total = total_amount(items)
    gifted_amount = total_amount(reward_eligible(items))

    return RegistryStats(
        item_count=len(items),
        gifted_count=len(gifted),
        available_count=len(available),
        gifted_items_percentage=ratio_percentage(len(gifted), len(items)),
        total_amount_cents=total,
        gifted_amount_cents=gifted_amount,
        available_amount_cents=total_amount(available),
        gifted_amount_percentage=ratio_percentage(gifted_amount, total),
    )


def build_summary(
    registry: Registry,
    selection: FilterSelection,
    page_number: int = 1,
    viewer: ViewerContext | None = None,
    store: Optional[Store] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    today: date | None = None,
) -> RegistrySummary:
    """
    Assemble the registry read model from the already enriched items.

    Flow:
    1. Status filters (must-have, category, gifted, available)
    2. Price band histogram over the status-filtered set
    3. Price band restriction, sort and pagination
    4. Stats, reward and gifted/available groups over all items
    """
    viewer = viewer or ViewerContext()
    items = registry.items

    status_filtered = apply_status_filters(items, selection)
    price_bands = price_band_histogram(status_filtered)

    listed = filter_by_price_band(status_filtered, selection.price_band)
    cards = [ItemCard(item=item, hide_add_to_cart=registry.hide_add_to_cart(item, viewer, store)) for item in listed]
    page = paginate(cards, selection.order_by, page_number, page_size)

    return RegistrySummary(
        details=build_details(registry, viewer, store, today or date.today()),
        stats=build_stats(items),
        reward=calculate_reward(items),
        page=page,
        categories=tuple(category_counts(items)),
        price_bands=tuple(price_bands),
        filters=selection.as_query_params(),
        order_by=selection.order_by or "",
        gifted=item_group([item for item in items if item.gifted]),
        available=item_group([item for item in items if not item.gifted]),
    )
