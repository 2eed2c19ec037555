"""Domain event handlers that write to the application log."""

from __future__ import annotations

from storefront.domain.events import CustomerAddressChanged, CustomerCreated
from storefront.infrastructure.event_bus import InMemoryEventDispatcher
from storefront.observability.logger import get_logger


async def log_customer_created_first(event: CustomerCreated) -> None:
    get_logger(__name__).info(
        "Customer created, first handler notified",
        customer_id=event.customer_id,
    )


async def log_customer_created_second(event: CustomerCreated) -> None:
    get_logger(__name__).info(
        "Customer created, second handler notified",
        customer_id=event.customer_id,
    )


async def send_message_when_customer_address_is_changed(
    event: CustomerAddressChanged,
) -> None:
    get_logger(__name__).info(
        "Customer address changed",
        customer_id=event.customer_id,
        name=event.name,
        address=str(event.address),
    )


def register_default_handlers(dispatcher: InMemoryEventDispatcher) -> None:
    """Wire the logging handlers above into *dispatcher*."""
    dispatcher.register(CustomerCreated, log_customer_created_first)
    dispatcher.register(CustomerCreated, log_customer_created_second)
    dispatcher.register(CustomerAddressChanged, send_message_when_customer_address_is_changed)
