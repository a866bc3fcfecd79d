"""Data access layer for registry orders and stores"""

from datetime import datetime
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from babylist_gateway.infrastructure.database import models
from babylist_gateway.domain.enrichment import RecentOrderLookup
from babylist_gateway.domain.exceptions import LookupFailure
from babylist_gateway.domain.models import Store


class RegistryOrderRepository:
    """Repository for orders placed against registries"""

    def __init__(self, db: Session):
        self.db = db

    def recent_lines(self, registry_id: str, since: datetime) -> RecentOrderLookup:
        """
        Registry lines ordered after `since`.

        These orders may not be reflected in the list service's availability
        yet; the lines are shown as reserved.

        Raises:
            LookupFailure: On database errors
        """
        try:
            rows = (
                self.db.query(models.RegistryOrder.sku, models.RegistryOrder.line_id)
                .filter(models.RegistryOrder.registry_id == registry_id)
                .filter(models.RegistryOrder.created_at > since)
                .all()
            )
        except SQLAlchemyError as e:
            raise LookupFailure("reservation", str(e)) from e

        return RecentOrderLookup(lines=frozenset((str(sku), int(line_id)) for sku, line_id in rows))


class StoreRepository:
    """Repository for stores"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_locate_id(self, locate_id: str) -> Optional[Store]:
        """
        Fetch the store a registry belongs to.

        Raises:
            LookupFailure: On database errors
        """
        if not locate_id:
            return None

        try:
            row = (
                self.db.query(models.Store)
                .filter(models.Store.locate_id == locate_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise LookupFailure("store", str(e)) from e

        if row is None:
            return None

        return Store(
            locate_id=row.locate_id,
            name=row.name,
            allow_registry_purchase=bool(row.allow_registry_purchase),
        )
