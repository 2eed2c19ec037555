"""Product entity."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.core.errors import InvalidProductError
from storefront.domain.money import parse_price


def _as_price(value: Decimal | int | float | str) -> Decimal:
    price = parse_price(value, InvalidProductError)
    if price < 0:
        raise InvalidProductError("Price must be greater than or equal to zero")
    return price


@dataclass
class Product:
    """A sellable product with a current unit price."""

    id: str
    name: str
    price: Decimal

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise InvalidProductError("Id is required")
        if not self.name or not self.name.strip():
            raise InvalidProductError("Name is required")
        self.price = _as_price(self.price)

    def change_name(self, name: str) -> None:
        if not name or not name.strip():
            raise InvalidProductError("Name is required")
        self.name = name

    def change_price(self, price: Decimal | int | float | str) -> None:
        self.price = _as_price(price)
