"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from babylist_gateway.api.main import create_app
from babylist_gateway.infrastructure.database.models import Base
from babylist_gateway.infrastructure.database.session import get_db
from babylist_gateway.domain.models import CatalogEntry, CategoryRef, RawRegistryLine, RegistryRecord


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def make_line(**overrides) -> RawRegistryLine:
    """Raw registry line with sensible defaults"""
    fields = dict(
        sku="1001",
        line_id=1,
        quantity=1,
        unit_price_cents=3000,
        available_qty=1,
        mandatory=False,
        participates=True,
        importance=0,
        name="Registry line",
    )
    fields.update(overrides)
    return RawRegistryLine(**fields)


def make_entry(**overrides) -> CatalogEntry:
    """Catalog entry with sensible defaults"""
    fields = dict(
        sku="1001",
        catalog_id=501,
        name="Passeggino Trio",
        price_cents=3000,
        regular_price_cents=3500,
        categories=(CategoryRef(id=10, name="Passeggio", slug="passeggio"),),
    )
    fields.update(overrides)
    return CatalogEntry(**fields)


def make_record(lines=(), **overrides) -> RegistryRecord:
    """Registry record with sensible defaults"""
    fields = dict(
        id="0101ABC",
        first_name="Giulia",
        last_name="Rossi",
        email="giulia@example.com",
        second_parent_name="Marco Bianchi",
        open_date=None,
        end_date=None,
        is_closed=False,
        donation_total_cents=0,
        card_number="4000123",
        store_locate_id="0101",
        lines=tuple(lines),
    )
    fields.update(overrides)
    return RegistryRecord(**fields)


@pytest.fixture
def scenario_record() -> RegistryRecord:
    """Three lines: two catalog-matched (30 and 60), one gifted at 40 with no catalog match"""
    return make_record(
        lines=[
            make_line(sku="1001", line_id=1, unit_price_cents=2500, available_qty=1),
            make_line(sku="1002", line_id=2, unit_price_cents=5500, available_qty=1),
            make_line(sku="1003", line_id=3, unit_price_cents=4000, available_qty=0),
        ]
    )


@pytest.fixture
def scenario_catalog() -> dict:
    return {
        "1001": make_entry(sku="1001", catalog_id=501, price_cents=3000, regular_price_cents=3000),
        "1002": make_entry(
            sku="1002",
            catalog_id=502,
            name="Privato: Seggiolone Pappa",
            price_cents=6000,
            regular_price_cents=6500,
            categories=(CategoryRef(id=20, name="Pappa", slug="pappa"),),
        ),
    }
