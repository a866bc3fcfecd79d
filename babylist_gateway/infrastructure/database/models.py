"""SQLAlchemy ORM models for registry orders and stores"""

from sqlalchemy import Column, String, BigInteger, Boolean, DateTime, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class RegistryOrder(Base):
    """Order line placed against a registry line"""

    __tablename__ = "registry_order"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(BigInteger, nullable=False, index=True)
    registry_id = Column(Text, nullable=False, index=True)
    sku = Column(Text, nullable=False)
    line_id = Column(BigInteger, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Store(Base):
    """Physical store registries are opened in"""

    __tablename__ = "store"

    locate_id = Column(String(32), primary_key=True)
    name = Column(Text, nullable=False)
    allow_registry_purchase = Column(Boolean, nullable=False, default=False)
