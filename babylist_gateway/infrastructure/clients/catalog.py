"""Catalog HTTP client - bulk product lookup by SKU"""

import httpx
from typing import Any, Dict, Iterable
from babylist_gateway.domain.models import CatalogEntry, CategoryRef
from babylist_gateway.domain.exceptions import LookupFailure
from babylist_gateway.config import settings
from babylist_gateway.infrastructure.observability.metrics import upstream_latency_histogram
from babylist_gateway.utils.money import to_cents


def _optional_cents(value) -> int | None:
    if value is None or value == "":
        return None
    return to_cents(value)


def parse_entry(product: Dict[str, Any]) -> CatalogEntry:
    price_cents = to_cents(product["price"])
    return CatalogEntry(
        sku=str(product["sku"]),
        catalog_id=int(product["id"]),
        name=product.get("name") or "",
        price_cents=price_cents,
        regular_price_cents=_optional_cents(product.get("regular_price")) or price_cents,
        vip_price_cents=_optional_cents(product.get("vip_price")),
        variation_vip_price_cents=_optional_cents(product.get("variation_vip_price")),
        is_variable_product=product.get("type") == "variable",
        is_visible_online=bool(product.get("visible", True)),
        categories=tuple(
            CategoryRef(id=int(c["id"]), name=c.get("name") or "", slug=c.get("slug") or "")
            for c in product.get("categories") or []
        ),
    )


class CatalogClient:
    """Client for the storefront catalog API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.catalog_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def bulk_fetch(self, skus: Iterable[str]) -> Dict[str, CatalogEntry]:
        """
        Fetch catalog entries for a set of SKUs in a single request.

        SKUs the catalog does not carry are simply absent from the result.
        Entries are joined back by SKU, never by position.

        Raises:
            LookupFailure: On timeout, HTTP errors, or invalid response (no partial result)
        """
        wanted = sorted(set(skus))
        if not wanted:
            return {}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with upstream_latency_histogram.labels(service="catalog").time():
                    response = await client.get(f"{self.base_url}/products", params={"sku": wanted})
                response.raise_for_status()
                data = response.json()

                entries = [parse_entry(product) for product in data.get("products", [])]

            except httpx.TimeoutException as e:
                raise LookupFailure("catalog", f"timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise LookupFailure("catalog", f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise LookupFailure("catalog", str(e)) from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise LookupFailure("catalog", f"invalid product data: {e}") from e

        return {entry.sku: entry for entry in entries if entry.sku in wanted}
