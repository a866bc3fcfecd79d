"""Registry aggregate - header, raw lines and the enriched items derived from them"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from babylist_gateway.domain.enrichment import EnrichmentContext, enrich_all
from babylist_gateway.domain.models import (
    RawRegistryLine,
    RegistryItem,
    RegistryRecord,
    Store,
    ViewerContext,
)
from babylist_gateway.utils.date_utils import days_until


@dataclass(frozen=True)
class Registry:
    """
    A gift registry as seen in one request.

    Items are enriched once, when the registry is built, and never again:
    every view (page, stats, reward, price bands) reads the same tuple.
    """

    record: RegistryRecord
    is_vip: bool
    items: Tuple[RegistryItem, ...]

    @classmethod
    def build(cls, record: RegistryRecord, context: EnrichmentContext) -> "Registry":
        return cls(
            record=record,
            is_vip=context.viewer_is_vip,
            items=enrich_all(record.lines, context),
        )

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def lines(self) -> Tuple[RawRegistryLine, ...]:
        return self.record.lines

    @property
    def list_name(self) -> str:
        return f"{self.record.first_name} {self.record.last_name}".strip()

    @property
    def full_name(self) -> str:
        """Owner name, joined with the second parent's when there is one"""
        if not self.list_name:
            return ""
        if self.record.second_parent_name:
            return f"{self.list_name} e {self.record.second_parent_name}"
        return self.list_name

    @property
    def is_closed(self) -> bool:
        return self.record.is_closed

    @property
    def is_empty(self) -> bool:
        return not self.record.lines

    def days_left(self, today: date | None = None) -> Optional[int]:
        return days_until(self.record.end_date, today or date.today())

    @property
    def has_must_have(self) -> bool:
        return any(item.is_must_have for item in self.items)

    def is_must_have(self, line_id: int) -> bool:
        item = self.item_by_line(line_id)
        return item is not None and item.is_must_have

    def line(self, line_id: int) -> Optional[RawRegistryLine]:
        return next((line for line in self.record.lines if line.line_id == line_id), None)

    def line_by_sku(self, sku: str) -> Optional[RawRegistryLine]:
        return next((line for line in self.record.lines if line.sku == sku), None)

    def item(self, sku: str, line_id: int) -> Optional[RegistryItem]:
        return next((i for i in self.items if i.sku == sku and i.line_id == line_id), None)

    def item_by_line(self, line_id: int) -> Optional[RegistryItem]:
        return next((i for i in self.items if i.line_id == line_id), None)

    def is_line_available(self, line_id: int, quantity: int) -> bool:
        """Whether `quantity` units of a line can still be gifted"""
        item = self.item_by_line(line_id)
        if item is None:
            return False
        return item.available_qty >= quantity

    def has_minimum_amount(self, line_id: int, quantity: int) -> Optional[bool]:
        """
        Whether `quantity` is exactly what is left on the line.

        Returns None (unknown) rather than False when the line cannot supply
        the quantity at all.
        """
        if not self.is_line_available(line_id, quantity):
            return None
        return self.item_by_line(line_id).available_qty == quantity

    # Viewer rules

    def is_list_user(self, viewer: ViewerContext) -> bool:
        return viewer.registry_code is not None and viewer.registry_code == self.id

    def show_admin_info(self, viewer: ViewerContext) -> bool:
        card_matches = bool(viewer.card_number) and viewer.card_number == self.record.card_number
        return card_matches or self.is_list_user(viewer)

    def can_buy_from_list(self, viewer: ViewerContext, store: Optional[Store]) -> bool:
        """Guests may buy when the list is open and its store allows registry purchases"""
        in_store = store is not None and store.allow_registry_purchase
        return (
            not self.is_closed
            and not self.is_list_user(viewer)
            and not self.show_admin_info(viewer)
            and in_store
        )

    def hide_add_to_cart(self, item: RegistryItem, viewer: ViewerContext, store: Optional[Store]) -> bool:
        if item.reserved:
            return True
        if not self.can_buy_from_list(viewer, store) or item.available_qty == 0:
            return True
        if item.has_catalog_match and not item.is_visible_online:
            return True
        return item.unit_price_cents <= 0
