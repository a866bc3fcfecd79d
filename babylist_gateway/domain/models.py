"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple

MUST_HAVE_IMPORTANCE = (1, 2, 3)


@dataclass(frozen=True)
class RawRegistryLine:
    """Registry line as tracked by the external list service"""

    sku: str
    line_id: int
    quantity: int
    unit_price_cents: int
    available_qty: int
    mandatory: bool = False
    participates: bool = False
    importance: int = 0
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class CategoryRef:
    """Top-level catalog category"""

    id: int
    name: str
    slug: str


@dataclass(frozen=True)
class CatalogEntry:
    """Live catalog product, as returned by the catalog bulk lookup"""

    sku: str
    catalog_id: int
    name: str
    price_cents: int
    regular_price_cents: int
    vip_price_cents: Optional[int] = None
    variation_vip_price_cents: Optional[int] = None
    is_variable_product: bool = False
    is_visible_online: bool = True
    categories: Tuple[CategoryRef, ...] = ()


@dataclass(frozen=True)
class RecommendationEntry:
    """Display metadata for SKUs the catalog does not carry"""

    sku: str
    full_title: str
    brand: str
    category: str


@dataclass(frozen=True)
class RegistryItem:
    """Registry line merged with catalog data and derived status"""

    sku: str
    line_id: int
    quantity: int
    available_qty: int
    gifted_qty: int
    effective_price_cents: int
    line_total_cents: int
    gifted: bool
    reserved: bool
    participates: bool
    has_catalog_match: bool
    in_stock: bool
    mandatory: bool
    importance: int
    name: str
    catalog_id: Optional[int] = None
    is_visible_online: bool = True
    description: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    categories: Tuple[CategoryRef, ...] = ()

    @property
    def unit_price_cents(self) -> int:
        # Storefront naming: the "unit price" shown for a line is its total
        return self.line_total_cents

    @property
    def is_must_have(self) -> bool:
        return self.importance in MUST_HAVE_IMPORTANCE


@dataclass(frozen=True)
class RegistryRecord:
    """Registry header and raw lines parsed from the list service"""

    id: str
    first_name: str
    last_name: str
    email: str
    second_parent_name: str
    open_date: Optional[date]
    end_date: Optional[date]
    is_closed: bool
    donation_total_cents: int
    card_number: str
    store_locate_id: str
    lines: Tuple[RawRegistryLine, ...] = ()


@dataclass(frozen=True)
class ViewerContext:
    """Who is looking at the registry"""

    card_number: Optional[str] = None
    registry_code: Optional[str] = None  # Registry owned by the viewer, if any
    coupon_override: bool = False
    is_account_view: bool = False


@dataclass(frozen=True)
class Store:
    """Physical store a registry is opened in"""

    locate_id: str
    name: str
    allow_registry_purchase: bool


@dataclass
class PriceBand:
    """Fixed price band with the number of items falling into it"""

    min_cents: int
    max_cents: Optional[int]
    name: str
    slug: str
    count: int = 0


class RewardTier(str, Enum):
    """Cashback band unlocked by cumulative gifted value"""

    NONE = "none"
    TIER5 = "tier5"
    TIER10 = "tier10"


@dataclass(frozen=True)
class RewardProgress:
    """One line of the reward progress panel"""

    kind: str
    amount_cents: int
    is_disabled: bool
    is_hidden: bool


@dataclass(frozen=True)
class RewardState:
    """Output of reward calculation"""

    cumulative_gifted_cents: int
    tier: RewardTier
    percent: int
    discount_cents: int
    progress: Tuple[RewardProgress, ...]


@dataclass(frozen=True)
class CategoryCount:
    """Top-level category with the number of registry items in it"""

    id: int
    name: str
    slug: str
    count: int


@dataclass(frozen=True)
class ItemCard:
    """Registry item as listed on a page, with its purchase action state"""

    item: RegistryItem
    hide_add_to_cart: bool

    @property
    def unit_price_cents(self) -> int:
        return self.item.unit_price_cents


@dataclass(frozen=True)
class Page:
    """Single page of sorted registry items"""

    items: tuple
    has_next: bool
    has_prev: bool
    total_count: int
    page_size: int
    current_page: int
    total_pages: int


@dataclass(frozen=True)
class ItemGroup:
    """Items sharing a status, with their count and total value"""

    items: Tuple[RegistryItem, ...]
    count: int
    amount_cents: int


@dataclass(frozen=True)
class RegistryDetails:
    """Registry header as shown to guests and owners"""

    id: str
    list_name: str
    first_name: str
    last_name: str
    full_name: str
    card_number: str
    store_name: Optional[str]
    donation_total_cents: int
    created_date: Optional[date]
    close_date: Optional[date]
    is_closed: bool
    days_left: Optional[int]
    is_empty: bool
    has_must_have: bool
    is_list_user: bool
    can_buy_from_list: bool


@dataclass(frozen=True)
class RegistryStats:
    """Item and amount progress counters"""

    item_count: int
    gifted_count: int
    available_count: int
    gifted_items_percentage: int
    total_amount_cents: int
    gifted_amount_cents: int
    available_amount_cents: int
    gifted_amount_percentage: int


@dataclass(frozen=True)
class RegistrySummary:
    """Complete registry read model"""

    details: RegistryDetails
    stats: RegistryStats
    reward: RewardState
    page: Page
    categories: Tuple[CategoryCount, ...]
    price_bands: Tuple[PriceBand, ...]
    filters: dict
    order_by: str
    gifted: ItemGroup
    available: ItemGroup
