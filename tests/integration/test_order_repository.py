"""Integration test: OrderRepository against an in-memory SQLite database."""

from __future__ import annotations

from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from storefront.core.errors import InvalidOrderError, OrderNotFoundError
from storefront.core.interfaces import IOrderRepository
from storefront.domain.checkout import Order, OrderItem
from storefront.domain.product import Product
from storefront.storage.sql.models import OrderItemRecord, OrderRecord


async def _load_row(database, order_id: str) -> dict:
    """Read the raw rows for *order_id* as plain dicts."""
    async with database.session() as session:
        record = await session.get(OrderRecord, order_id)
        return {
            "id": record.id,
            "customer_id": record.customer_id,
            "total": record.total,
            "items": [
                {
                    "id": item.id,
                    "name": item.name,
                    "price": item.price,
                    "quantity": item.quantity,
                    "order_id": item.order_id,
                    "product_id": item.product_id,
                }
                for item in record.items
            ],
        }


async def _count(database, model) -> int:
    async with database.session() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


@pytest_asyncio.fixture
async def seeded(customer_repo, product_repo, sample_customer, sample_product):
    await customer_repo.create(sample_customer)
    await product_repo.create(sample_product)
    await product_repo.create(Product("12345", "Product 2", Decimal("20")))


@pytest.mark.asyncio
async def test_satisfies_protocol(order_repo):
    assert isinstance(order_repo, IOrderRepository)


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_order(self, database, order_repo, sample_order):
        await order_repo.create(sample_order)

        row = await _load_row(database, "123")
        assert row == {
            "id": "123",
            "customer_id": "123",
            "total": Decimal("20"),
            "items": [
                {
                    "id": "1",
                    "name": "Product 1",
                    "price": Decimal("10"),
                    "quantity": 2,
                    "order_id": "123",
                    "product_id": "123",
                },
            ],
        }

    @pytest.mark.asyncio
    async def test_duplicate_id_raises_store_error(self, database, order_repo, sample_order, make_item):
        await order_repo.create(sample_order)
        clash = Order("123", "999", [make_item("other")])

        with pytest.raises(IntegrityError):
            await order_repo.create(clash)

        # the failed insert left nothing behind
        assert await _count(database, OrderRecord) == 1
        assert await _count(database, OrderItemRecord) == 1
        assert (await order_repo.find("123")) == sample_order

    @pytest.mark.asyncio
    async def test_failed_item_insert_rolls_back_order_row(self, database, order_repo, sample_order, make_item):
        await order_repo.create(sample_order)
        # item id "1" already belongs to order 123
        second = Order("456", "123", [make_item("1")])

        with pytest.raises(IntegrityError):
            await order_repo.create(second)

        assert await _count(database, OrderRecord) == 1
        with pytest.raises(OrderNotFoundError):
            await order_repo.find("456")


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_adds_items_and_snapshot(self, database, order_repo, sample_order, make_item, seeded):
        await order_repo.create(sample_order)

        second = make_item("2", name="Product 2", price=Decimal("20"), product_id="12345", quantity=3)
        sample_order.add_new_order_item(second)
        await order_repo.update(sample_order)

        row = await _load_row(database, "123")
        assert row["total"] == Decimal("80")
        assert row["total"] == sample_order.total()
        assert [i["id"] for i in row["items"]] == ["1", "2"]
        assert row["items"][1] == {
            "id": "2",
            "name": "Product 2",
            "price": Decimal("20"),
            "quantity": 3,
            "order_id": "123",
            "product_id": "12345",
        }

        assert (await order_repo.find("123")) == sample_order

    @pytest.mark.asyncio
    async def test_update_overwrites_existing_item_fields(self, order_repo, sample_order, make_item):
        await order_repo.create(sample_order)

        changed = Order("123", "777", [make_item("1", name="Renamed", quantity=5)])
        await order_repo.update(changed)

        found = await order_repo.find("123")
        assert found.customer_id == "777"
        assert found.items[0].name == "Renamed"
        assert found.items[0].quantity == 5
        assert found.total() == Decimal("50")

    @pytest.mark.asyncio
    async def test_update_keeps_rows_of_items_missing_from_aggregate(self, database, order_repo, make_item):
        original = Order("o1", "c1", [make_item("a"), make_item("b", quantity=1)])
        await order_repo.create(original)

        # a different in-memory view of the same order without item "a"
        await order_repo.update(Order("o1", "c1", [make_item("b", quantity=4)]))

        assert await _count(database, OrderItemRecord) == 2
        found = await order_repo.find("o1")
        assert {i.id for i in found.items} == {"a", "b"}
        row = await _load_row(database, "o1")
        assert row["total"] == Decimal("40")

    @pytest.mark.asyncio
    async def test_update_unknown_order_raises(self, database, order_repo, sample_order):
        with pytest.raises(OrderNotFoundError):
            await order_repo.update(sample_order)
        assert await _count(database, OrderItemRecord) == 0


class TestFind:
    @pytest.mark.asyncio
    async def test_concrete_scenario(self, order_repo, sample_order, seeded):
        await order_repo.create(sample_order)

        found = await order_repo.find("123")
        assert len(found.items) == 1
        assert found.total() == Decimal("20")

    @pytest.mark.asyncio
    async def test_round_trip_preserves_structure(self, order_repo, make_item, seeded):
        order = Order(
            "123",
            "123",
            [
                make_item("1"),
                make_item("2", name="Product 2", price=Decimal("20"), product_id="12345", quantity=3),
            ],
        )
        await order_repo.create(order)

        recovered = await order_repo.find(order.id)
        assert recovered == order
        assert all(isinstance(i, OrderItem) for i in recovered.items)

    @pytest.mark.asyncio
    async def test_round_trip_preserves_insertion_order(self, order_repo, make_item):
        ids = ["z", "m", "a", "q"]
        order = Order("o1", "c1", [make_item(i) for i in ids])
        await order_repo.create(order)

        recovered = await order_repo.find("o1")
        assert [i.id for i in recovered.items] == ids

    @pytest.mark.asyncio
    async def test_missing_order_raises_not_found(self, order_repo):
        with pytest.raises(OrderNotFoundError) as info:
            await order_repo.find("nope")
        assert info.value.entity_id == "nope"
        assert "Order not found" in str(info.value)


class TestFindAll:
    @pytest.mark.asyncio
    async def test_find_all_returns_every_order(self, order_repo, make_item):
        first = Order("1", "1", [make_item("1", product_id="1", quantity=2)])
        second = Order("2", "2", [make_item("12", product_id="1", quantity=20)])
        await order_repo.create(first)
        await order_repo.create(second)

        recovered = await order_repo.find_all()
        assert len(recovered) == 2
        assert first in recovered
        assert second in recovered

    @pytest.mark.asyncio
    async def test_find_all_empty(self, order_repo):
        assert await order_repo.find_all() == []


class TestPriceScale:
    @pytest.mark.asyncio
    async def test_eight_place_price_round_trips_exactly(self, database, order_repo, make_item):
        order = Order("o1", "c1", [make_item(price=Decimal("1.12345678"), quantity=3)])
        await order_repo.create(order)

        recovered = await order_repo.find("o1")
        assert recovered == order
        assert recovered.items[0].price == Decimal("1.12345678")
        row = await _load_row(database, "o1")
        assert row["total"] == Decimal("3.37037034")

    @pytest.mark.asyncio
    async def test_smallest_storable_price_round_trips(self, order_repo, make_item):
        order = Order("o1", "c1", [make_item(price=Decimal("0.00000001"))])
        await order_repo.create(order)
        assert await order_repo.find("o1") == order

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", [Decimal("1.123456789"), Decimal("0.000000001")])
    async def test_unstorable_price_never_reaches_the_store(self, database, order_repo, make_item, price):
        with pytest.raises(InvalidOrderError, match="decimal places"):
            Order("o1", "c1", [make_item(price=price)])

        assert await order_repo.find_all() == []
        assert await _count(database, OrderItemRecord) == 0


class TestAggregateGuards:
    @pytest.mark.asyncio
    async def test_emptied_order_cannot_be_persisted(self, database, order_repo, sample_order):
        await order_repo.create(sample_order)

        with pytest.raises(AttributeError):
            sample_order.items.clear()
        with pytest.raises(AttributeError):
            sample_order.items = []
        await order_repo.update(sample_order)

        row = await _load_row(database, "123")
        assert row["total"] == Decimal("20")
        assert len(row["items"]) == 1

    @pytest.mark.asyncio
    async def test_long_ids_round_trip(self, order_repo, make_item):
        order_id = "o" * 300
        order = Order(order_id, "c" * 300, [make_item("i" * 300, product_id="p" * 300)])
        await order_repo.create(order)
        assert await order_repo.find(order_id) == order
