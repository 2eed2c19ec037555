"""Shared fixtures for the storefront test suite."""

from __future__ import annotations

from decimal import Decimal

import pytest
import pytest_asyncio

from storefront.domain.checkout import Order, OrderItem
from storefront.domain.customer import Address, Customer
from storefront.domain.product import Product
from storefront.storage.sql import (
    CustomerRepository,
    Database,
    OrderRepository,
    ProductRepository,
)


# ---------------------------------------------------------------------------
# Domain objects
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_address() -> Address:
    return Address("Street 1", 1, "Zipcode 1", "City 1")


@pytest.fixture
def sample_customer(sample_address: Address) -> Customer:
    """Return customer "123" living at ``sample_address``."""
    customer = Customer("123", "Customer 1")
    customer.change_address(sample_address)
    return customer


@pytest.fixture
def sample_product() -> Product:
    return Product("123", "Product 1", Decimal("10"))


@pytest.fixture
def make_item():
    """Factory for order items with sensible defaults."""

    def _make(
        item_id: str = "1",
        name: str = "Product 1",
        price: Decimal | int | str = Decimal("10"),
        product_id: str = "123",
        quantity: int = 2,
    ) -> OrderItem:
        return OrderItem(item_id, name, price, product_id, quantity)

    return _make


@pytest.fixture
def sample_order(make_item) -> Order:
    """Order "123" for customer "123": one item, 10 x 2."""
    return Order("123", "123", [make_item()])


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def database():
    """Fresh in-memory SQLite database with every table created."""
    db = Database.from_url("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    try:
        yield db
    finally:
        await db.dispose()


@pytest.fixture
def order_repo(database: Database) -> OrderRepository:
    return OrderRepository(database)


@pytest.fixture
def customer_repo(database: Database) -> CustomerRepository:
    return CustomerRepository(database)


@pytest.fixture
def product_repo(database: Database) -> ProductRepository:
    return ProductRepository(database)
