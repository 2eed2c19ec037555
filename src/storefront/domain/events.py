"""Canonical domain events for the storefront.

Design invariants
-----------------
1.  Every event is **immutable** (``frozen=True``).
2.  Every event kind is its own class with a typed payload; handlers are
    routed by class, never by inspecting a loose ``data`` attribute.
3.  ``event_id`` is a UUID4 generated at creation time.
4.  ``occurred_at`` is a timezone-aware UTC timestamp.
5.  Payload fields are keyword-only and required; only the shared
    ``event_id`` and ``occurred_at`` have defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from storefront.core.ids import new_id as _uuid
from storefront.core.ids import utc_now as _now
from storefront.domain.customer import Address

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DomainEvent:
    """Immutable base for every domain event.

    Shared fields
    ~~~~~~~~~~~~~
    event_id        Unique identity (UUID4).
    occurred_at     UTC creation time.
    """

    event_id: str = field(default_factory=_uuid)
    occurred_at: datetime = field(default_factory=_now)


# =========================================================================
# Customer
# =========================================================================

@dataclass(frozen=True, kw_only=True)
class CustomerCreated(DomainEvent):
    """A new customer was registered."""

    customer_id: str
    name: str


@dataclass(frozen=True, kw_only=True)
class CustomerAddressChanged(DomainEvent):
    """A customer moved to a new address."""

    customer_id: str
    name: str
    address: Address | None


# =========================================================================
# Product
# =========================================================================

@dataclass(frozen=True, kw_only=True)
class ProductCreated(DomainEvent):
    """A product entered the catalogue."""

    product_id: str
    name: str
    price: Decimal


# =========================================================================
# Checkout
# =========================================================================

@dataclass(frozen=True, kw_only=True)
class OrderPlaced(DomainEvent):
    """An order was placed for a customer."""

    order_id: str
    customer_id: str
    total: Decimal


#: All domain event types in a deterministic order.
ALL_DOMAIN_EVENTS: tuple[type[DomainEvent], ...] = (
    CustomerCreated,
    CustomerAddressChanged,
    ProductCreated,
    OrderPlaced,
)
