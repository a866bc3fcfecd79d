"""Effective price resolution for a single registry line"""

from typing import Optional
from babylist_gateway.domain.models import CatalogEntry, RawRegistryLine


def resolve_vip_price(entry: CatalogEntry) -> Optional[int]:
    """VIP price of a catalog entry; variable products use the variant price, not the parent's"""
    if entry.is_variable_product:
        return entry.variation_vip_price_cents
    return entry.vip_price_cents


def resolve_unit_price(
    line: RawRegistryLine,
    entry: Optional[CatalogEntry],
    gifted: bool,
    viewer_is_vip: bool,
    coupon_override: bool = False,
) -> int:
    """
    Resolve the effective per-unit price of a registry line, in cents.

    Precedence (first match wins):
    1. Mandatory or gifted line: raw registry price. Once committed, the
       registry price is authoritative and promotions must not leak into
       gifted amounts used for rewards.
    2. No catalog match: raw registry price
    3. Overriding coupon active: catalog regular price
    4. VIP viewer and a VIP price exists: VIP price
    5. Catalog current price
    """
    if line.mandatory or gifted:
        return line.unit_price_cents

    if entry is None:
        return line.unit_price_cents

    if coupon_override:
        return entry.regular_price_cents

    if viewer_is_vip:
        vip_price = resolve_vip_price(entry)
        if vip_price is not None:
            return vip_price

    return entry.price_cents
