"""Registry item filtering: status filters, price bands and category counts"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from babylist_gateway.domain.models import CategoryCount, CategoryRef, PriceBand, RegistryItem
from babylist_gateway.domain.pagination import SortOrder

# Recognized query parameters; anything else in the request is discarded
MUST_HAVE = "must_have"
AVAILABLE = "disponibili"
GIFTED = "regalati"
CATEGORY = "categoria"
PRICE = "price"
ORDER_BY = "order_by"

RECOGNIZED_FILTERS = (MUST_HAVE, AVAILABLE, GIFTED, CATEGORY, PRICE, ORDER_BY)

PRICE_BAND_BOUNDS = (0, 5_000, 10_000, 15_000)  # cents


def price_ranges() -> List[PriceBand]:
    """
    Fixed price bands: 0-50, 50-100, 100-150, 150 +.

    The last band is open-ended. Slugs are what the `price` filter carries.
    """
    bands = []
    for index, low in enumerate(PRICE_BAND_BOUNDS):
        is_last = index == len(PRICE_BAND_BOUNDS) - 1
        high = None if is_last else PRICE_BAND_BOUNDS[index + 1]
        low_label = low // 100
        if high is None:
            name, slug = f"{low_label} +", f"{low_label}"
        else:
            name = slug = f"{low_label}-{high // 100}"
        bands.append(PriceBand(min_cents=low, max_cents=high, name=name, slug=slug))
    return bands


PRICE_BAND_SLUGS = tuple(band.slug for band in price_ranges())


def in_band(price_cents: int, band: PriceBand) -> bool:
    if band.max_cents is None:
        return price_cents >= band.min_cents
    return band.min_cents <= price_cents < band.max_cents


@dataclass(frozen=True)
class FilterSelection:
    """Recognized filters of one request; built once at the request boundary"""

    must_have: bool = False
    available: bool = False
    gifted: bool = False
    category: Optional[str] = None
    price_band: Optional[str] = None
    order_by: Optional[str] = None

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "FilterSelection":
        """
        Keep only recognized keys.

        Flag filters are active when the key is present, whatever its value.
        Unknown price slugs and sort orders are dropped.
        """
        price_band = params.get(PRICE)
        if price_band not in PRICE_BAND_SLUGS:
            price_band = None

        order_by = params.get(ORDER_BY)
        if order_by not in {order.value for order in SortOrder}:
            order_by = None

        category = params.get(CATEGORY) or None

        return cls(
            must_have=MUST_HAVE in params,
            available=AVAILABLE in params,
            gifted=GIFTED in params,
            category=category,
            price_band=price_band,
            order_by=order_by,
        )

    def as_query_params(self) -> Dict[str, str]:
        """Active filters in their query-parameter form"""
        params: Dict[str, str] = {}
        if self.must_have:
            params[MUST_HAVE] = "1"
        if self.available:
            params[AVAILABLE] = "1"
        if self.gifted:
            params[GIFTED] = "1"
        if self.category:
            params[CATEGORY] = self.category
        if self.price_band:
            params[PRICE] = self.price_band
        if self.order_by:
            params[ORDER_BY] = self.order_by
        return params


def matches_category(item: RegistryItem, category: str) -> bool:
    """Match a top-level category by id or slug; items without a catalog match never match"""
    if not item.has_catalog_match:
        return False
    return any(category in (str(c.id), c.slug) for c in item.categories)


def apply_status_filters(items: Sequence[RegistryItem], selection: FilterSelection) -> List[RegistryItem]:
    """
    Narrow items by must-have, category, gifted and available, in that order.

    Gifted and available are independent predicates: when both are
    requested both apply (and nothing survives).
    """
    result = list(items)

    if selection.must_have:
        result = [item for item in result if item.is_must_have]

    if selection.category:
        result = [item for item in result if matches_category(item, selection.category)]

    if selection.gifted:
        result = [item for item in result if item.gifted or item.reserved]

    if selection.available:
        result = [item for item in result if not item.gifted and not item.reserved]

    return result


def filter_by_price_band(items: Sequence, slug: Optional[str]) -> list:
    """Keep items whose unit price falls into the band with this slug"""
    if not slug:
        return list(items)
    band = next((b for b in price_ranges() if b.slug == slug), None)
    if band is None:
        return list(items)
    return [item for item in items if in_band(item.unit_price_cents, band)]


def price_band_histogram(items: Sequence[RegistryItem]) -> List[PriceBand]:
    """Count items per fixed price band"""
    bands = price_ranges()
    for item in items:
        for band in bands:
            if in_band(item.unit_price_cents, band):
                band.count += 1
                break
    return bands


def category_counts(items: Sequence[RegistryItem]) -> List[CategoryCount]:
    """
    Count catalog-matched items per top-level category.

    An item counts once per distinct category; categories keep the order
    they first appear in.
    """
    counts: Dict[int, int] = {}
    refs: Dict[int, CategoryRef] = {}
    for item in items:
        if not item.has_catalog_match:
            continue
        for category in {c.id: c for c in item.categories}.values():
            refs.setdefault(category.id, category)
            counts[category.id] = counts.get(category.id, 0) + 1

    return [
        CategoryCount(id=ref.id, name=ref.name, slug=ref.slug, count=counts[ref.id])
        for ref in refs.values()
    ]
