"""Domain layer: entities, value objects, aggregates and events.

This package defines the bounded-context primitives that every other
layer depends on.  Nothing here touches storage.
"""

from storefront.domain.checkout import Order, OrderItem
from storefront.domain.customer import Address, Customer
from storefront.domain.product import Product

__all__ = [
    "Address",
    "Customer",
    "Order",
    "OrderItem",
    "Product",
]
