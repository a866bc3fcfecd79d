"""List service HTTP client for fetching gift registries"""

import logging
import httpx
from typing import Any, Dict, List, Optional
from babylist_gateway.domain.models import RawRegistryLine, RegistryRecord
from babylist_gateway.domain.exceptions import SourceDataError
from babylist_gateway.config import settings
from babylist_gateway.infrastructure.observability.metrics import upstream_latency_histogram
from babylist_gateway.utils.date_utils import parse_date
from babylist_gateway.utils.money import to_cents

logger = logging.getLogger(__name__)


def parse_line(item: Dict[str, Any]) -> RawRegistryLine:
    """Parse one registry line from the list service payload"""
    return RawRegistryLine(
        sku=str(item["alpha_code"]),
        line_id=int(item["detail_id"]),
        quantity=int(item.get("qty") or 0),
        unit_price_cents=to_cents(item["unit_price"]),
        available_qty=int(item["available_qty"]),
        mandatory=int(item.get("mandatory") or 0) == 1,
        participates=int(item.get("participate") or 0) == 1,
        importance=int(item.get("importance") or 0),
        name=item.get("descr") or item.get("name") or "",
        description=item.get("descr") or "",
    )


def parse_record(data: Dict[str, Any]) -> RegistryRecord:
    """
    Parse a registry from the list service payload.

    The end date is the close date for closed lists that carry one,
    otherwise the expiration date.
    """
    mother = data.get("mother") or {}
    father = data.get("father") or {}
    is_closed = bool(data.get("is_closed", False))
    end_date = data.get("close_date") if is_closed and data.get("close_date") else data.get("expiration_date")

    return RegistryRecord(
        id=str(data["list_code"]),
        first_name=mother.get("name") or "",
        last_name=mother.get("surname") or "",
        email=data.get("email") or "",
        second_parent_name=f"{father.get('name') or ''} {father.get('surname') or ''}".strip(),
        open_date=parse_date(data.get("open_date")),
        end_date=parse_date(end_date),
        is_closed=is_closed,
        donation_total_cents=to_cents(data.get("donation_total_amount")),
        card_number=str(data.get("fidelity_code") or ""),
        store_locate_id=str(data.get("sbs") or ""),
        lines=tuple(parse_line(item) for item in data.get("items") or []),
    )


class ListServiceClient:
    """Client for the external list-management service"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.list_service_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def query(self, payload: Dict[str, Any]) -> Optional[List[Dict[str, Any]]]:
        """
        Run a list query and return the raw lists.

        Error handling:
        - transport errors, HTTP errors, or a failed response without data: SourceDataError
        - the closed-list error code with data: lists returned, marked closed
        - any other failed response with data: None
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with upstream_latency_histogram.labels(service="list_service").time():
                    response = await client.post(f"{self.base_url}/lists/query", json=payload)
                response.raise_for_status()
                body = response.json()
            except httpx.TimeoutException as e:
                raise SourceDataError(f"List service timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise SourceDataError(f"List service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise SourceDataError(f"List service unreachable: {e}") from e
            except ValueError as e:
                raise SourceDataError(f"Invalid response from list service: {e}") from e

        if not isinstance(body, dict):
            raise SourceDataError("Invalid response from list service: not an object")

        successful = bool(body.get("success"))
        data = body.get("data") or {}

        if not successful and not data:
            logger.warning("List service error", extra={"payload": payload, "error_code": body.get("error_code")})
            raise SourceDataError("List service error")

        if not isinstance(data, dict):
            raise SourceDataError("Invalid response from list service: data is not an object")

        lists = data.get("lists") or []
        if not isinstance(lists, list):
            raise SourceDataError("Invalid response from list service: lists is not an array")

        if not successful and body.get("error_code") == settings.closed_list_error_code:
            return [{**raw, "is_closed": True} if isinstance(raw, dict) else raw for raw in lists]

        if successful:
            return lists

        return None

    async def find_registry(self, registry_id: str) -> Optional[RegistryRecord]:
        """
        Fetch a single registry by its list code.

        Returns None when no list matches.

        Raises:
            SourceDataError: On service failure or an unreadable record
        """
        lists = await self.query({"listCode": registry_id, "storeId": registry_id[:4]})
        if not lists:
            return None

        try:
            return parse_record(lists[0])
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise SourceDataError(f"Invalid registry data from list service: {e}") from e
