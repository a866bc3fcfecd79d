"""Dependency injection for FastAPI endpoints"""

from fastapi import Header, Request
from babylist_gateway.domain.models import ViewerContext
from babylist_gateway.infrastructure.clients.catalog import CatalogClient
from babylist_gateway.infrastructure.clients.list_service import ListServiceClient
from babylist_gateway.infrastructure.clients.loyalty import LoyaltyClient
from babylist_gateway.infrastructure.clients.recommendation import RecommendationClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_viewer(
    x_card_number: str | None = Header(default=None),
    x_registry_code: str | None = Header(default=None),
    x_coupon_override: str | None = Header(default=None),
) -> ViewerContext:
    """Viewer identity forwarded by the storefront"""
    return ViewerContext(
        card_number=x_card_number or None,
        registry_code=x_registry_code or None,
        coupon_override=(x_coupon_override or "").lower() in ("1", "true", "yes"),
    )


def get_list_service_client() -> ListServiceClient:
    """Provide list service client instance"""
    return ListServiceClient()


def get_catalog_client() -> CatalogClient:
    """Provide catalog client instance"""
    return CatalogClient()


def get_recommendation_client() -> RecommendationClient:
    """Provide recommendation client instance"""
    return RecommendationClient()


def get_loyalty_client() -> LoyaltyClient:
    """Provide loyalty client instance"""
    return LoyaltyClient()
