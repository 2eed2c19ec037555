"""Price parsing shared by products and order items.

Prices are ``Decimal`` values that fit the store's ``Numeric(24, 8)``
columns exactly: finite, at most 8 fractional digits and at most 16
integer digits.  Anything else is rejected rather than rounded, so a
persisted price always reads back unchanged.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront.core.errors import DomainValidationError

PRICE_PRECISION = 24
PRICE_SCALE = 8

_QUANTUM = Decimal(1).scaleb(-PRICE_SCALE)


def parse_price(
    value: Decimal | int | float | str,
    error: type[DomainValidationError] = DomainValidationError,
) -> Decimal:
    """Coerce *value* to a storable ``Decimal`` or raise *error*.

    Sign is left to the caller.
    """
    try:
        price = Decimal(str(value))
    except InvalidOperation as exc:
        raise error(f"Price is not a number: {value!r}") from exc
    if not price.is_finite():
        raise error(f"Price must be finite: {value!r}")
    if price and price.adjusted() >= PRICE_PRECISION - PRICE_SCALE:
        raise error(
            f"Price has more than {PRICE_PRECISION - PRICE_SCALE} integer digits: {value!r}"
        )
    if price.quantize(_QUANTUM) != price:
        raise error(f"Price has more than {PRICE_SCALE} decimal places: {value!r}")
    return price


def round_price(value: Decimal) -> Decimal:
    """Round a computed price half-up to the storable scale."""
    return value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)
