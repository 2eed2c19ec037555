"""Repository pattern for async database operations.

Each repository encapsulates query logic for a single aggregate root and
receives a :class:`~storefront.storage.sql.connection.Database` handle in
its constructor.  Every public method runs inside one
``Database.session()`` block, so multi-row writes commit or roll back as
a unit.

Conversion helpers translate between domain entities
(:mod:`storefront.domain`) and ORM records.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select

from storefront.core.errors import (
    CustomerNotFoundError,
    OrderNotFoundError,
    ProductNotFoundError,
)
from storefront.domain.checkout import Order, OrderItem
from storefront.domain.customer import Address, Customer
from storefront.domain.product import Product

from .connection import Database
from .models import (
    CustomerRecord,
    OrderItemRecord,
    OrderRecord,
    ProductRecord,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------

def _item_to_record(item: OrderItem, order_id: str, position: int) -> OrderItemRecord:
    """Convert a domain :class:`OrderItem` to an ORM :class:`OrderItemRecord`."""
    return OrderItemRecord(
        id=item.id,
        order_id=order_id,
        product_id=item.product_id,
        name=item.name,
        price=item.price,
        quantity=item.quantity,
        position=position,
    )


def _record_to_item(record: OrderItemRecord) -> OrderItem:
    """Convert an ORM :class:`OrderItemRecord` back to a domain :class:`OrderItem`."""
    return OrderItem(
        id=record.id,
        name=record.name,
        price=record.price,
        product_id=record.product_id,
        quantity=record.quantity,
    )


def _order_to_record(order: Order) -> OrderRecord:
    """Convert a domain :class:`Order` to an ORM :class:`OrderRecord` with items."""
    return OrderRecord(
        id=order.id,
        customer_id=order.customer_id,
        total=order.total(),
        items=[
            _item_to_record(item, order.id, position)
            for position, item in enumerate(order.items)
        ],
    )


def _record_to_order(record: OrderRecord) -> Order:
    """Convert an ORM :class:`OrderRecord` back to a domain :class:`Order`."""
    return Order(
        id=record.id,
        customer_id=record.customer_id,
        items=[_record_to_item(item) for item in record.items],
    )


def _apply_customer(record: CustomerRecord, customer: Customer) -> None:
    record.name = customer.name
    address = customer.address
    record.street = address.street if address else None
    record.number = address.number if address else None
    record.zipcode = address.zipcode if address else None
    record.city = address.city if address else None
    record.active = customer.active
    record.reward_points = customer.reward_points


def _customer_to_record(customer: Customer) -> CustomerRecord:
    record = CustomerRecord(id=customer.id)
    _apply_customer(record, customer)
    return record


def _record_to_customer(record: CustomerRecord) -> Customer:
    address = None
    if record.street is not None:
        address = Address(
            street=record.street,
            number=record.number,
            zipcode=record.zipcode,
            city=record.city,
        )
    return Customer(
        id=record.id,
        name=record.name,
        address=address,
        active=record.active,
        reward_points=record.reward_points,
    )


def _record_to_product(record: ProductRecord) -> Product:
    return Product(id=record.id, name=record.name, price=record.price)


# ---------------------------------------------------------------------------
# OrderRepository
# ---------------------------------------------------------------------------

class OrderRepository:
    """Repository for the ``Order`` aggregate.

    ``update`` upserts items by id but never deletes item rows that are
    no longer present on the aggregate.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    async def create(self, order: Order) -> None:
        """Insert the order row, its snapshot total and one row per item.

        A duplicate order id raises the driver's ``IntegrityError``; the
        whole insert is rolled back.
        """
        async with self._db.session() as session:
            session.add(_order_to_record(order))
            await session.flush()
        logger.debug("Inserted order %s with %d items", order.id, len(order.items))

    async def update(self, order: Order) -> None:
        """Rewrite customer and snapshot total, then upsert every item.

        Raises:
            OrderNotFoundError: If the order was never created.
        """
        async with self._db.session() as session:
            record = await session.get(OrderRecord, order.id)
            if record is None:
                raise OrderNotFoundError(order.id)

            record.customer_id = order.customer_id
            record.total = order.total()

            for position, item in enumerate(order.items):
                existing = await session.get(OrderItemRecord, item.id)
                if existing is None:
                    session.add(_item_to_record(item, order.id, position))
                    continue
                existing.order_id = order.id
                existing.product_id = item.product_id
                existing.name = item.name
                existing.price = item.price
                existing.quantity = item.quantity
                existing.position = position
            await session.flush()
        logger.debug("Updated order %s -> total=%s", order.id, order.total())

    async def find(self, order_id: str) -> Order:
        """Load one order with its items in stored order.

        Raises:
            OrderNotFoundError: If no row matches *order_id*.
        """
        async with self._db.session() as session:
            stmt = select(OrderRecord).where(OrderRecord.id == order_id)
            result = await session.execute(stmt)
            record = result.scalar_one_or_none()
            if record is None:
                raise OrderNotFoundError(order_id)
            return _record_to_order(record)

    async def find_all(self) -> list[Order]:
        """Load every order with its items."""
        async with self._db.session() as session:
            result = await session.execute(select(OrderRecord))
            records: Sequence[OrderRecord] = result.scalars().all()
            return [_record_to_order(r) for r in records]


# ---------------------------------------------------------------------------
# CustomerRepository
# ---------------------------------------------------------------------------

class CustomerRepository:
    """Repository for :class:`CustomerRecord` persistence and retrieval."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def create(self, customer: Customer) -> None:
        async with self._db.session() as session:
            session.add(_customer_to_record(customer))
            await session.flush()
        logger.debug("Inserted customer %s", customer.id)

    async def update(self, customer: Customer) -> None:
        """Overwrite every column of an existing customer.

        Raises:
            CustomerNotFoundError: If the customer was never created.
        """
        async with self._db.session() as session:
            record = await session.get(CustomerRecord, customer.id)
            if record is None:
                raise CustomerNotFoundError(customer.id)
            _apply_customer(record, customer)
            await session.flush()
        logger.debug("Updated customer %s", customer.id)

    async def find(self, customer_id: str) -> Customer:
        async with self._db.session() as session:
            record = await session.get(CustomerRecord, customer_id)
            if record is None:
                raise CustomerNotFoundError(customer_id)
            return _record_to_customer(record)

    async def find_all(self) -> list[Customer]:
        async with self._db.session() as session:
            result = await session.execute(select(CustomerRecord))
            return [_record_to_customer(r) for r in result.scalars().all()]


# ---------------------------------------------------------------------------
# ProductRepository
# ---------------------------------------------------------------------------

class ProductRepository:
    """Repository for :class:`ProductRecord` persistence and retrieval."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def create(self, product: Product) -> None:
        async with self._db.session() as session:
            session.add(ProductRecord(id=product.id, name=product.name, price=product.price))
            await session.flush()
        logger.debug("Inserted product %s", product.id)

    async def update(self, product: Product) -> None:
        """Overwrite name and price of an existing product.

        Raises:
            ProductNotFoundError: If the product was never created.
        """
        async with self._db.session() as session:
            record = await session.get(ProductRecord, product.id)
            if record is None:
                raise ProductNotFoundError(product.id)
            record.name = product.name
            record.price = product.price
            await session.flush()
        logger.debug("Updated product %s -> price=%s", product.id, product.price)

    async def find(self, product_id: str) -> Product:
        async with self._db.session() as session:
            record = await session.get(ProductRecord, product_id)
            if record is None:
                raise ProductNotFoundError(product_id)
            return _record_to_product(record)

    async def find_all(self) -> list[Product]:
        async with self._db.session() as session:
            result = await session.execute(select(ProductRecord))
            return [_record_to_product(r) for r in result.scalars().all()]
