"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum, IntEnum

from ims.domain.exceptions import ValidationError


class Category(IntEnum):
    """Closed set of product categories.

    The integer value is the index written to the data file, so the
    numbering must never change.
    """

    FOOD = 0
    ELECTRONICS = 1
    CLOTHING = 2
    HOUSEHOLD = 3
    OTHER = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_index(cls, index: int) -> Category:
        """Strict lookup used when a product is created in memory."""
        try:
            return cls(index)
        except ValueError as exc:
            raise ValidationError(
                f"Category must be between 0 and {len(cls) - 1}, got {index!r}"
            ) from exc

    @classmethod
    def from_persisted(cls, index: int) -> Category:
        """Lenient lookup for stored data: unknown indexes become OTHER."""
        if 0 <= index < len(cls):
            return cls(index)
        return cls.OTHER


class SortField(Enum):
    """Fields the inventory can be bubble-sorted by."""

    CODE = "code"
    NAME = "name"
    QUANTITY = "quantity"
    SELL_PRICE = "sell_price"


# --- Parsing helpers ----------------------------------------------------------


def to_amount(value: str | int | Decimal) -> Decimal:
    """Coerce to a finite Decimal.

    Never goes through float, so "0.1" stays exactly 0.1.
    """
    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip()
        # Decimal() would read "1_000" as 1000
        if "_" in text:
            raise ValidationError(f"Invalid amount: {value!r}")
        try:
            amount = Decimal(text)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    return amount


def to_int(value: str | int) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid integer: {value!r}")
    text = str(value).strip()
    if "_" in text:
        raise ValidationError(f"Invalid integer: {value!r}")
    try:
        return int(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid integer: {value!r}") from exc


def format_amount(amount: Decimal) -> str:
    """Culture-independent text form: '.' separator, no exponent, no grouping."""
    return format(amount, "f")
