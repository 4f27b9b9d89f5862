"""Decimal coercion and rounding for amounts, weights and order values."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from paykit.common.errors import InvalidAmountError

CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round a monetary value half-up to whole cents."""

    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_decimal(value, field: str = "amount", error: type[ValueError] = InvalidAmountError) -> Decimal:
    """Coerce int/str/float/Decimal input to a finite Decimal or raise `error`."""

    if isinstance(value, bool):
        raise error(f"{field} must be a number, got {value!r}")
    try:
        number = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise error(f"{field} must be a number, got {value!r}") from None
    if not number.is_finite():
        raise error(f"{field} must be finite, got {value!r}")
    return number


def require_positive(value, field: str = "amount", error: type[ValueError] = InvalidAmountError) -> Decimal:
    number = to_decimal(value, field, error)
    if number <= 0:
        raise error(f"{field} must be greater than zero, got {number}")
    return number


def require_non_negative(value, field: str, error: type[ValueError]) -> Decimal:
    number = to_decimal(value, field, error)
    if number < 0:
        raise error(f"{field} must not be negative, got {number}")
    return number
