"""GET /v1/registries/{registry_id} - Registry read model endpoints"""

import time
import logging
from dataclasses import replace
from typing import Optional, Tuple
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from babylist_gateway.api.v1.schemas import LineAvailabilityResponse, RegistrySummaryResponse
from babylist_gateway.api.dependencies import (
    get_catalog_client,
    get_list_service_client,
    get_loyalty_client,
    get_recommendation_client,
    get_request_id,
    get_viewer,
)
from babylist_gateway.config import settings
from babylist_gateway.domain.enrichment import EnrichmentContext
from babylist_gateway.domain.exceptions import LookupFailure, SourceDataError
from babylist_gateway.domain.filters import FilterSelection
from babylist_gateway.domain.models import Store, ViewerContext
from babylist_gateway.domain.pagination import resolve_page_number
from babylist_gateway.domain.registry import Registry
from babylist_gateway.domain.summary import build_summary
from babylist_gateway.infrastructure.clients.catalog import CatalogClient
from babylist_gateway.infrastructure.clients.list_service import ListServiceClient
from babylist_gateway.infrastructure.clients.loyalty import LoyaltyClient
from babylist_gateway.infrastructure.clients.recommendation import RecommendationClient
from babylist_gateway.infrastructure.database.repositories import RegistryOrderRepository, StoreRepository
from babylist_gateway.infrastructure.database.session import get_db
from babylist_gateway.infrastructure.observability.logging import log_registry_view
from babylist_gateway.infrastructure.observability.metrics import lookup_failures_counter, record_registry_view
from babylist_gateway.utils.date_utils import window_start

router = APIRouter()


class RegistryLoader:
    """Loads a registry and enriches it in a single pass"""

    def __init__(
        self,
        db: Session,
        list_client: ListServiceClient,
        catalog_client: CatalogClient,
        recommendation_client: RecommendationClient,
        loyalty_client: LoyaltyClient,
    ):
        self.db = db
        self.list_client = list_client
        self.catalog_client = catalog_client
        self.recommendation_client = recommendation_client
        self.loyalty_client = loyalty_client

    async def load(self, registry_id: str, viewer: ViewerContext) -> Optional[Registry]:
        """
        Fetch a registry and enrich its lines.

        Flow:
        1. Blacklisted ids resolve to nothing
        2. Fetch the registry from the list service
        3. VIP status: registry card or viewer card
        4. One bulk catalog fetch, one recommendation fetch for unmatched SKUs
        5. One query for orders in the reservation window
        6. Enrich every line once

        Returns None when the registry does not exist. Any lookup failure
        aborts the whole pass.
        """
        if registry_id in settings.blacklisted_registry_ids:
            return None

        record = await self.list_client.find_registry(registry_id)
        if record is None:
            return None

        viewer_is_vip = (
            await self.loyalty_client.is_vip(record.card_number)
            or await self.loyalty_client.is_vip(viewer.card_number)
        )

        skus = {line.sku for line in record.lines if line.sku}
        catalog = await self.catalog_client.bulk_fetch(skus)
        recommendations = await self.recommendation_client.fetch(skus - set(catalog))

        since = window_start(settings.reservation_window_days, settings.timezone)
        reservations = RegistryOrderRepository(self.db).recent_lines(record.id, since)

        context = EnrichmentContext(
            catalog=catalog,
            recommendations=recommendations,
            reservations=reservations,
            viewer_is_vip=viewer_is_vip,
            coupon_override=viewer.coupon_override,
            category_mapping=settings.category_mapping,
            private_label_prefix=settings.private_label_prefix,
        )
        return Registry.build(record, context)

    def load_store(self, registry: Registry) -> Optional[Store]:
        """Store the registry was opened in"""
        return StoreRepository(self.db).get_by_locate_id(registry.record.store_locate_id)


def get_registry_loader(
    db: Session = Depends(get_db),
    list_client: ListServiceClient = Depends(get_list_service_client),
    catalog_client: CatalogClient = Depends(get_catalog_client),
    recommendation_client: RecommendationClient = Depends(get_recommendation_client),
    loyalty_client: LoyaltyClient = Depends(get_loyalty_client),
) -> RegistryLoader:
    return RegistryLoader(db, list_client, catalog_client, recommendation_client, loyalty_client)


async def _load_or_fail(
    loader: RegistryLoader,
    registry_id: str,
    viewer: ViewerContext,
    request_id: str,
    with_store: bool = False,
) -> Tuple[Registry, Optional[Store]]:
    """Load a registry (and its store, when asked), translating failures to HTTP errors"""
    try:
        registry = await loader.load(registry_id, viewer)
        store = loader.load_store(registry) if with_store and registry is not None else None

    except SourceDataError as e:
        lookup_failures_counter.labels(collaborator="list_service").inc()
        logging.warning(f"List service error: {e}", extra={"request_id": request_id, "registry_id": registry_id})
        raise HTTPException(status_code=503, detail="Registry service unavailable")

    except LookupFailure as e:
        lookup_failures_counter.labels(collaborator=e.collaborator).inc()
        logging.error(f"Lookup failure: {e}", extra={"request_id": request_id, "registry_id": registry_id})
        raise HTTPException(status_code=503, detail="Service unavailable")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id, "registry_id": registry_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if registry is None:
        raise HTTPException(status_code=404, detail="Registry not found")

    return registry, store


async def _serve_registry(
    registry_id: str,
    request: Request,
    page_number: int,
    viewer: ViewerContext,
    loader: RegistryLoader,
) -> RegistrySummaryResponse:
    start_time = time.time()
    request_id = get_request_id(request)

    # Only recognized filter keys make it past this point
    selection = FilterSelection.from_query_params(request.query_params)

    registry, store = await _load_or_fail(loader, registry_id, viewer, request_id, with_store=True)

    summary = build_summary(
        registry,
        selection,
        page_number=page_number,
        viewer=viewer,
        store=store,
        page_size=settings.page_size,
    )

    if viewer.is_account_view:
        view = "account"
    elif registry.show_admin_info(viewer):
        view = "owner"
    else:
        view = "guest"

    duration_ms = (time.time() - start_time) * 1000
    record_registry_view(view, summary.reward.tier.value)
    log_registry_view(request_id, registry.id, view, len(registry.items), summary.reward.tier.value, duration_ms)

    return RegistrySummaryResponse.model_validate(summary)


@router.get("/registries/{registry_id}", response_model=RegistrySummaryResponse)
async def get_registry(
    registry_id: str,
    request: Request,
    paged: Optional[str] = Query(None, description="Page number"),
    viewer: ViewerContext = Depends(get_viewer),
    loader: RegistryLoader = Depends(get_registry_loader),
):
    """
    Registry as seen by guests (or by the owner, when their card or code matches).

    Filters: must_have, disponibili, regalati, categoria, price, order_by.
    Any other query parameter is ignored.
    """
    page_number = resolve_page_number(paged)
    return await _serve_registry(registry_id, request, page_number, viewer, loader)


@router.get("/account/registry/{account_path:path}", response_model=RegistrySummaryResponse)
async def get_account_registry(
    account_path: str,
    request: Request,
    paged: Optional[str] = Query(None, description="Page number"),
    viewer: ViewerContext = Depends(get_viewer),
    loader: RegistryLoader = Depends(get_registry_loader),
):
    """
    Registry in the owner's account area.

    The path is "<registry_id>[/page/<n>]"; its page segment overrides `paged`.
    """
    registry_id = account_path.strip("/").split("/")[0]
    if not registry_id:
        raise HTTPException(status_code=404, detail="Registry not found")

    viewer = replace(viewer, is_account_view=True)
    page_number = resolve_page_number(paged, account_path, is_account_view=True)
    return await _serve_registry(registry_id, request, page_number, viewer, loader)


@router.get(
    "/registries/{registry_id}/lines/{line_id}/availability",
    response_model=LineAvailabilityResponse,
)
async def get_line_availability(
    registry_id: str,
    line_id: int,
    request: Request,
    quantity: int = Query(..., gt=0, description="Units the guest wants to gift"),
    viewer: ViewerContext = Depends(get_viewer),
    loader: RegistryLoader = Depends(get_registry_loader),
):
    """
    Whether a registry line can still supply `quantity` units.

    `exact_amount` is null when the line cannot supply them at all.
    """
    registry, _ = await _load_or_fail(loader, registry_id, viewer, get_request_id(request))

    return LineAvailabilityResponse(
        registry_id=registry.id,
        line_id=line_id,
        quantity=quantity,
        available=registry.is_line_available(line_id, quantity),
        exact_amount=registry.has_minimum_amount(line_id, quantity),
    )
