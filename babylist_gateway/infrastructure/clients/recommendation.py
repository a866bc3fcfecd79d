"""Product recommendation HTTP client - display metadata for SKUs outside the catalog"""

import httpx
from typing import Dict, Iterable
from babylist_gateway.domain.models import RecommendationEntry
from babylist_gateway.domain.exceptions import LookupFailure
from babylist_gateway.config import settings
from babylist_gateway.infrastructure.observability.metrics import upstream_latency_histogram


class RecommendationClient:
    """Client for the product recommendation API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.recommendation_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def fetch(self, skus: Iterable[str]) -> Dict[str, RecommendationEntry]:
        """
        Fetch descriptive metadata for SKUs.

        Best effort: SKUs without metadata are absent. A failing call is still
        a LookupFailure.
        """
        wanted = sorted(set(skus))
        if not wanted:
            return {}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with upstream_latency_histogram.labels(service="recommendation").time():
                    response = await client.post(f"{self.base_url}/products", json={"skus": wanted})
                response.raise_for_status()
                data = response.json()

                return {
                    str(product["sku"]): RecommendationEntry(
                        sku=str(product["sku"]),
                        full_title=product.get("full_title") or "",
                        brand=product.get("brand") or "",
                        category=product.get("category") or "",
                    )
                    for product in data.get("result") or []
                }

            except httpx.TimeoutException as e:
                raise LookupFailure("recommendation", f"timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise LookupFailure("recommendation", f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise LookupFailure("recommendation", str(e)) from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise LookupFailure("recommendation", f"invalid product data: {e}") from e
