"""Protocol interfaces for the storefront.

All persistence boundaries are defined here as Protocol classes.
Implementations can be swapped (SQL, in-memory) without changing callers.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from storefront.domain.checkout import Order
from storefront.domain.customer import Customer
from storefront.domain.product import Product

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------

@runtime_checkable
class IRepository(Protocol[T]):
    """Async CRUD boundary for one aggregate type."""

    async def create(self, entity: T) -> None: ...

    async def update(self, entity: T) -> None: ...

    async def find(self, entity_id: str) -> T: ...

    async def find_all(self) -> list[T]: ...


@runtime_checkable
class IOrderRepository(IRepository[Order], Protocol):
    """Persistence boundary for the ``Order`` aggregate.

    ``find`` raises ``OrderNotFoundError`` on a miss.  Store errors
    propagate untranslated.
    """


@runtime_checkable
class ICustomerRepository(IRepository[Customer], Protocol):
    """Persistence boundary for ``Customer``."""


@runtime_checkable
class IProductRepository(IRepository[Product], Protocol):
    """Persistence boundary for ``Product``."""
