"""Stateless domain services spanning several aggregates."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from storefront.core.errors import InvalidOrderError
from storefront.core.ids import new_id
from storefront.domain.checkout import Order, OrderItem
from storefront.domain.customer import Customer
from storefront.domain.money import round_price
from storefront.domain.product import Product


class OrderService:
    @staticmethod
    def total(orders: Iterable[Order]) -> Decimal:
        """Sum of ``total()`` over *orders*."""
        return sum((order.total() for order in orders), Decimal("0"))

    @staticmethod
    def place_order(
        customer: Customer,
        items: Sequence[OrderItem],
        order_id: str | None = None,
    ) -> Order:
        """Build an order for *customer* and award reward points.

        The customer earns half the order total, rounded down, in points.
        """
        if not items:
            raise InvalidOrderError("Order must have at least one item")
        order = Order(order_id or new_id(), customer.id, list(items))
        customer.add_reward_points(int(order.total() / 2))
        return order


class ProductService:
    @staticmethod
    def increase_price(products: Iterable[Product], percentage: Decimal | int | float) -> list[Product]:
        """Raise every product's price by *percentage* percent, in place.

        New prices are rounded half-up to 8 decimal places.
        """
        factor = Decimal(str(percentage)) / Decimal("100")
        updated: list[Product] = []
        for product in products:
            product.change_price(round_price(product.price + product.price * factor))
            updated.append(product)
        return updated
