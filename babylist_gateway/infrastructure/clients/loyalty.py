"""Loyalty card HTTP client - VIP status lookup"""

import httpx
from babylist_gateway.domain.exceptions import LookupFailure
from babylist_gateway.config import settings
from babylist_gateway.infrastructure.observability.metrics import upstream_latency_histogram


class LoyaltyClient:
    """Client for the loyalty card service"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.loyalty_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def is_vip(self, card_number: str | None) -> bool:
        """Whether a loyalty card belongs to the VIP program (False for no card)"""
        if not card_number:
            return False

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with upstream_latency_histogram.labels(service="loyalty").time():
                    response = await client.get(f"{self.base_url}/cards/{card_number}")
                if response.status_code == 404:
                    return False
                response.raise_for_status()
                return bool(response.json().get("vip", False))

            except httpx.TimeoutException as e:
                raise LookupFailure("loyalty", f"timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise LookupFailure("loyalty", f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise LookupFailure("loyalty", str(e)) from e
            except (ValueError, AttributeError) as e:
                raise LookupFailure("loyalty", f"invalid card data: {e}") from e
