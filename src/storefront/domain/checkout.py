"""Order aggregate.

Design invariants
-----------------
1.  An ``Order`` always holds **at least one** ``OrderItem``.  Building
    one with an empty list raises ``InvalidOrderError``.
2.  Items are **append-only**: ``add_new_order_item`` is the only mutation
    and there is no removal.  ``items`` is a read-only tuple, so callers
    cannot clear or replace it.
3.  Item ids are unique within an order.  A duplicate id is rejected on
    construction and on append.
4.  ``total()`` is always derived from the items and never cached.
5.  The order owns its items: the incoming iterable is copied, so the
    caller's list can change without touching the aggregate.
6.  Item prices are storable as-is (see :mod:`storefront.domain.money`).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from storefront.core.errors import InvalidOrderError
from storefront.domain.money import parse_price


@dataclass(frozen=True)
class OrderItem:
    """A product line inside an order."""

    id: str
    name: str
    price: Decimal
    product_id: str
    quantity: int

    def __post_init__(self) -> None:
        for name in ("id", "name", "product_id"):
            value = getattr(self, name)
            if not value or not str(value).strip():
                raise InvalidOrderError(f"Order item {name} is required")
        price = parse_price(self.price, InvalidOrderError)
        if price <= 0:
            raise InvalidOrderError("Price must be greater than zero")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidOrderError("Quantity must be an integer")
        if self.quantity <= 0:
            raise InvalidOrderError("Quantity must be greater than zero")
        object.__setattr__(self, "price", price)

    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Order:
    """Aggregate root for checkout.

    Equality is structural: same id, customer and item sequence.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        id: str,
        customer_id: str,
        items: Iterable[OrderItem] = (),
    ) -> None:
        if not id or not id.strip():
            raise InvalidOrderError("Id is required")
        if not customer_id or not customer_id.strip():
            raise InvalidOrderError("Customer id is required")
        owned = tuple(items)
        if not owned:
            raise InvalidOrderError("Items are required")
        seen: set[str] = set()
        for item in owned:
            if item.id in seen:
                raise InvalidOrderError(f"Duplicate order item id: {item.id!r}")
            seen.add(item.id)
        self._id = id
        self._customer_id = customer_id
        self._items = owned

    @property
    def id(self) -> str:
        return self._id

    @property
    def customer_id(self) -> str:
        return self._customer_id

    @property
    def items(self) -> tuple[OrderItem, ...]:
        return self._items

    def add_new_order_item(self, item: OrderItem) -> None:
        """Append *item*.  Raises ``InvalidOrderError`` on a duplicate id."""
        if any(existing.id == item.id for existing in self._items):
            raise InvalidOrderError(f"Duplicate order item id: {item.id!r}")
        self._items = (*self._items, item)

    def total(self) -> Decimal:
        return sum((item.subtotal() for item in self._items), Decimal("0"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return (
            self._id == other._id
            and self._customer_id == other._customer_id
            and self._items == other._items
        )

    def __repr__(self) -> str:
        return (
            f"Order(id={self._id!r}, customer_id={self._customer_id!r}, "
            f"items={list(self._items)!r})"
        )
