"""
Money values stored on records.
Amounts are Decimal in Python and plain JSON numbers on the wire.
"""

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer


ZERO = Decimal("0")


def to_amount(value: Any) -> Decimal:
    """
    Coerce a value to a Decimal amount.

    Numbers and numeric strings convert; None, booleans, non-numeric
    strings, NaN and infinities become zero.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return ZERO
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


def _to_json_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


Amount = Annotated[
    Decimal,
    BeforeValidator(to_amount),
    PlainSerializer(_to_json_number, when_used="json"),
]

NonNegativeAmount = Annotated[
    Decimal,
    BeforeValidator(to_amount),
    Field(ge=0),
    PlainSerializer(_to_json_number, when_used="json"),
]
