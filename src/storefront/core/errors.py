"""Custom exception hierarchy for the storefront."""


class StorefrontError(Exception):
    """Base exception for all storefront errors."""


# --- Configuration ---
class ConfigError(StorefrontError):
    """Invalid or missing configuration."""


# --- Domain validation ---
class DomainValidationError(StorefrontError):
    """An entity or value object was built with invalid data."""


class InvalidOrderError(DomainValidationError):
    """Order or order item violates its invariants."""


class InvalidCustomerError(DomainValidationError):
    """Customer violates its invariants."""


class InvalidProductError(DomainValidationError):
    """Product violates its invariants."""


class InvalidAddressError(DomainValidationError):
    """Address has a blank or out-of-range field."""


# --- Lookup ---
class NotFoundError(StorefrontError):
    """No stored record matches the requested identity."""

    entity: str = "Record"

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"{self.entity} not found: {entity_id!r}")


class OrderNotFoundError(NotFoundError):
    entity = "Order"


class CustomerNotFoundError(NotFoundError):
    entity = "Customer"


class ProductNotFoundError(NotFoundError):
    entity = "Product"
