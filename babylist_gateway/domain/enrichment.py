"""Item enrichment - merges raw registry lines with catalog data and derived status"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Mapping, Optional, Protocol, Tuple, Union

from babylist_gateway.domain.models import (
    CatalogEntry,
    RawRegistryLine,
    RecommendationEntry,
    RegistryItem,
)
from babylist_gateway.domain.pricing import resolve_unit_price


class ReservationLookup(Protocol):
    """Reports whether a line was ordered against the registry within the trailing window"""

    def exists(self, sku: str, line_id: int) -> bool:
        ...


@dataclass(frozen=True)
class RecentOrderLookup:
    """ReservationLookup backed by the (sku, line_id) pairs of recent registry orders"""

    lines: FrozenSet[Tuple[str, int]] = frozenset()

    def exists(self, sku: str, line_id: int) -> bool:
        return (sku, line_id) in self.lines


@dataclass(frozen=True)
class EnrichmentContext:
    """Collaborator responses and viewer state shared by every line of one enrichment pass"""

    catalog: Mapping[str, CatalogEntry] = field(default_factory=dict)
    recommendations: Mapping[str, RecommendationEntry] = field(default_factory=dict)
    reservations: ReservationLookup = field(default_factory=RecentOrderLookup)
    viewer_is_vip: bool = False
    coupon_override: bool = False
    category_mapping: Mapping[str, str] = field(default_factory=dict)
    private_label_prefix: str = "privato: "


@dataclass(frozen=True)
class CatalogMatch:
    line: RawRegistryLine
    entry: CatalogEntry


@dataclass(frozen=True)
class UnmatchedLine:
    line: RawRegistryLine
    recommendation: Optional[RecommendationEntry] = None


LineSource = Union[CatalogMatch, UnmatchedLine]


def map_category(raw_category: str, mapping: Mapping[str, str]) -> str:
    """Map an upstream category code to its label; unmapped codes pass through uppercased"""
    code = (raw_category or "").upper()
    return mapping.get(code, code)


def normalize_catalog_name(name: str, private_label_prefix: str) -> str:
    """Lower-case a catalog name and drop the private-label prefix"""
    return name.lower().replace(private_label_prefix, "")


def classify_line(
    line: RawRegistryLine,
    catalog: Mapping[str, CatalogEntry],
    recommendations: Mapping[str, RecommendationEntry],
) -> LineSource:
    """Resolve which data source a line is displayed from"""
    entry = catalog.get(line.sku)
    if entry is not None:
        return CatalogMatch(line=line, entry=entry)
    return UnmatchedLine(line=line, recommendation=recommendations.get(line.sku))


def enrich_line(line: RawRegistryLine, context: EnrichmentContext) -> RegistryItem:
    """
    Build the RegistryItem for one raw line.

    Pure: the same line and context always produce an equal item.
    Availability is clamped to [0, quantity] so gifted_qty stays in range.
    """
    quantity = max(line.quantity, 0)
    available_qty = min(max(line.available_qty, 0), quantity)
    gifted = available_qty == 0

    source = classify_line(line, context.catalog, context.recommendations)
    entry = source.entry if isinstance(source, CatalogMatch) else None

    unit_price = resolve_unit_price(
        line,
        entry,
        gifted=gifted,
        viewer_is_vip=context.viewer_is_vip,
        coupon_override=context.coupon_override,
    )

    common = dict(
        sku=line.sku,
        line_id=line.line_id,
        quantity=quantity,
        available_qty=available_qty,
        gifted_qty=quantity - available_qty,
        effective_price_cents=unit_price,
        line_total_cents=unit_price * quantity,
        gifted=gifted,
        reserved=context.reservations.exists(line.sku, line.line_id) and not gifted,
        participates=line.participates is True,
        mandatory=line.mandatory,
        importance=line.importance,
    )

    if isinstance(source, CatalogMatch):
        return RegistryItem(
            **common,
            has_catalog_match=True,
            in_stock=not gifted,
            name=normalize_catalog_name(entry.name, context.private_label_prefix),
            catalog_id=entry.catalog_id,
            is_visible_online=entry.is_visible_online,
            categories=entry.categories,
        )

    recommendation = source.recommendation
    return RegistryItem(
        **common,
        has_catalog_match=False,
        in_stock=False,
        name=line.name,
        description=recommendation.full_title if recommendation else (line.description or None),
        brand=recommendation.brand if recommendation else None,
        category=map_category(recommendation.category, context.category_mapping) if recommendation else None,
    )


def enrich_all(lines: Iterable[RawRegistryLine], context: EnrichmentContext) -> Tuple[RegistryItem, ...]:
    """Enrich every line, keeping registry line order"""
    return tuple(enrich_line(line, context) for line in lines)
