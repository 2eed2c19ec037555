"""Customer entity and its Address value object."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.core.errors import InvalidAddressError, InvalidCustomerError


@dataclass(frozen=True)
class Address:
    """Postal address.  Immutable; replace it to change it."""

    street: str
    number: int
    zipcode: str
    city: str

    def __post_init__(self) -> None:
        for name in ("street", "zipcode", "city"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidAddressError(f"{name} is required")
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise InvalidAddressError("number must be an integer")
        if self.number <= 0:
            raise InvalidAddressError("number must be greater than zero")

    def __str__(self) -> str:
        return f"{self.street}, {self.number}, {self.zipcode} {self.city}"


@dataclass
class Customer:
    """A customer that can place orders.

    A customer starts inactive and can only be activated once an address
    has been set.  Reward points accumulate from placed orders.
    """

    id: str
    name: str
    address: Address | None = None
    active: bool = False
    reward_points: int = 0

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        if not self.id or not self.id.strip():
            raise InvalidCustomerError("Id is required")
        if not self.name or not self.name.strip():
            raise InvalidCustomerError("Name is required")
        if self.reward_points < 0:
            raise InvalidCustomerError("Reward points cannot be negative")
        if self.active and self.address is None:
            raise InvalidCustomerError("Address is mandatory to activate a customer")

    @property
    def is_active(self) -> bool:
        return self.active

    def change_name(self, name: str) -> None:
        if not name or not name.strip():
            raise InvalidCustomerError("Name is required")
        self.name = name

    def change_address(self, address: Address) -> None:
        self.address = address

    def activate(self) -> None:
        if self.address is None:
            raise InvalidCustomerError("Address is mandatory to activate a customer")
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def add_reward_points(self, points: int) -> None:
        if points < 0:
            raise InvalidCustomerError("Reward points to add cannot be negative")
        self.reward_points += points
