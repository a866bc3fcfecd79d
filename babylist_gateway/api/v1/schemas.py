"""Pydantic schemas for API responses"""

from pydantic import BaseModel, ConfigDict
from datetime import date
from typing import Dict, List, Optional

from babylist_gateway.domain.models import RewardTier


class Schema(BaseModel):
    """Base schema reading from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


class CategoryRefSchema(Schema):
    id: int
    name: str
    slug: str


class RegistryItemSchema(Schema):
    """Single enriched registry line"""

    sku: str
    line_id: int
    catalog_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    categories: List[CategoryRefSchema] = []
    quantity: int
    available_qty: int
    gifted_qty: int
    effective_price_cents: int
    unit_price_cents: int
    line_total_cents: int
    gifted: bool
    reserved: bool
    participates: bool
    has_catalog_match: bool
    in_stock: bool
    mandatory: bool
    importance: int
    is_must_have: bool


class ItemCardSchema(Schema):
    """Registry item as listed on a page"""

    item: RegistryItemSchema
    hide_add_to_cart: bool


class PageSchema(Schema):
    items: List[ItemCardSchema]
    has_next: bool
    has_prev: bool
    total_count: int
    page_size: int
    current_page: int
    total_pages: int


class RegistryDetailsSchema(Schema):
    id: str
    list_name: str
    first_name: str
    last_name: str
    full_name: str
    card_number: str
    store_name: Optional[str] = None
    donation_total_cents: int
    created_date: Optional[date] = None
    close_date: Optional[date] = None
    is_closed: bool
    days_left: Optional[int] = None
    is_empty: bool
    has_must_have: bool
    is_list_user: bool
    can_buy_from_list: bool


class RegistryStatsSchema(Schema):
    item_count: int
    gifted_count: int
    available_count: int
    gifted_items_percentage: int
    total_amount_cents: int
    gifted_amount_cents: int
    available_amount_cents: int
    gifted_amount_percentage: int


class RewardProgressSchema(Schema):
    kind: str
    amount_cents: int
    is_disabled: bool
    is_hidden: bool


class RewardStateSchema(Schema):
    cumulative_gifted_cents: int
    tier: RewardTier
    percent: int
    discount_cents: int
    progress: List[RewardProgressSchema]


class CategoryCountSchema(Schema):
    id: int
    name: str
    slug: str
    count: int


class PriceBandSchema(Schema):
    min_cents: int
    max_cents: Optional[int] = None
    name: str
    slug: str
    count: int


class ItemGroupSchema(Schema):
    items: List[RegistryItemSchema]
    count: int
    amount_cents: int


class RegistrySummaryResponse(Schema):
    """Response for GET /v1/registries/{registry_id}"""

    details: RegistryDetailsSchema
    stats: RegistryStatsSchema
    reward: RewardStateSchema
    page: PageSchema
    categories: List[CategoryCountSchema]
    price_bands: List[PriceBandSchema]
    filters: Dict[str, str]
    order_by: str
    gifted: ItemGroupSchema
    available: ItemGroupSchema


class LineAvailabilityResponse(BaseModel):
    """Response for GET /v1/registries/{registry_id}/lines/{line_id}/availability"""

    registry_id: str
    line_id: int
    quantity: int
    available: bool
    exact_amount: Optional[bool] = None
