"""SQLAlchemy ORM models for the storefront database.

String columns are unbounded: the domain puts no length limit on ids or
names.  Money columns use the scale enforced by
:mod:`storefront.domain.money`, so prices read back exactly as written.

Relationships:
    OrderRecord 1--* OrderItemRecord  (order_id foreign key)
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)

from storefront.domain.money import PRICE_PRECISION, PRICE_SCALE


# ---------------------------------------------------------------------------
# Declarative base
# ---------------------------------------------------------------------------

class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""

    pass


# ---------------------------------------------------------------------------
# CustomerRecord
# ---------------------------------------------------------------------------

class CustomerRecord(Base):
    """Persisted customer.  Address columns are all NULL when unset."""

    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    street: Mapped[str | None] = mapped_column(String, nullable=True)
    number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    zipcode: Mapped[str | None] = mapped_column(String, nullable=True)
    city: Mapped[str | None] = mapped_column(String, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reward_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<CustomerRecord(id={self.id!r}, name={self.name!r}, active={self.active!r})>"


# ---------------------------------------------------------------------------
# ProductRecord
# ---------------------------------------------------------------------------

class ProductRecord(Base):
    """Persisted catalogue product."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(PRICE_PRECISION, PRICE_SCALE), nullable=False)

    def __repr__(self) -> str:
        return f"<ProductRecord(id={self.id!r}, name={self.name!r}, price={self.price!r})>"


# ---------------------------------------------------------------------------
# OrderRecord
# ---------------------------------------------------------------------------

class OrderRecord(Base):
    """Persisted order header.

    ``total`` is a snapshot written on create/update.  It is never
    recomputed on read.
    """

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    customer_id: Mapped[str] = mapped_column(String, nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(PRICE_PRECISION, PRICE_SCALE), nullable=False)

    # Relationships
    items: Mapped[list[OrderItemRecord]] = relationship(
        "OrderItemRecord",
        back_populates="order",
        order_by="OrderItemRecord.position",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_orders_customer_id", "customer_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<OrderRecord(id={self.id!r}, customer_id={self.customer_id!r}, "
            f"total={self.total!r})>"
        )


# ---------------------------------------------------------------------------
# OrderItemRecord
# ---------------------------------------------------------------------------

class OrderItemRecord(Base):
    """A line item belonging to an order.

    ``position`` is the item's index in the aggregate and restores
    insertion order on read.
    """

    __tablename__ = "order_items"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    order_id: Mapped[str] = mapped_column(
        String, ForeignKey("orders.id"), nullable=False,
    )
    product_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(PRICE_PRECISION, PRICE_SCALE), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    order: Mapped[OrderRecord] = relationship("OrderRecord", back_populates="items")

    __table_args__ = (
        Index("ix_order_items_order_id", "order_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<OrderItemRecord(id={self.id!r}, order_id={self.order_id!r}, "
            f"product_id={self.product_id!r}, quantity={self.quantity!r})>"
        )
