"""Product entity.

A product is a plain record of stock on hand plus two derived amounts.
It also owns the one-line text format used by the data file, because
that format is the contract every stored product must satisfy.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import (
    Category,
    format_amount,
    to_amount,
    to_int,
)

FIELD_SEPARATOR = ","
_FORBIDDEN_IN_TEXT = (FIELD_SEPARATOR, "\n", "\r")


@dataclass
class Product:
    """A product held in the inventory.

    Mutable because the update use case edits fields in place. The
    repository keeps ``code`` unique (case-insensitive) across products.
    """

    code: str
    name: str
    category: Category
    quantity: int
    cost_price: Decimal
    sell_price: Decimal

    @property
    def inventory_value(self) -> Decimal:
        return self.quantity * self.sell_price

    @property
    def profit_estimate(self) -> Decimal:
        """Expected profit if the whole stock sells; negative when sold at a loss."""
        return (self.sell_price - self.cost_price) * self.quantity

    # --- Factory --------------------------------------------------------------

    @classmethod
    def create(
        cls,
        code: str,
        name: str,
        category: Category | int,
        quantity: int | str,
        cost_price: Decimal | str | int,
        sell_price: Decimal | str | int,
    ) -> Product:
        """Build a validated product.

        Unlike :meth:`deserialize`, an unknown category index is an error
        here rather than being folded into ``Category.OTHER``.
        """
        code = _require_text(code, "code")
        name = _require_text(name, "name")
        if not isinstance(category, Category):
            category = Category.from_index(to_int(category))
        quantity = to_int(quantity)
        cost = to_amount(cost_price)
        sell = to_amount(sell_price)

        if quantity < 0:
            raise ValidationError("Quantity cannot be negative")
        if cost < 0:
            raise ValidationError("Cost price cannot be negative")
        if sell < 0:
            raise ValidationError("Sell price cannot be negative")

        return cls(
            code=code,
            name=name,
            category=category,
            quantity=quantity,
            cost_price=cost,
            sell_price=sell,
        )

    # --- Data file line format ------------------------------------------------

    def serialize(self) -> str:
        """Return ``code,name,categoryIndex,quantity,cost,sell``."""
        return FIELD_SEPARATOR.join(
            (
                self.code,
                self.name,
                str(int(self.category)),
                str(self.quantity),
                format_amount(self.cost_price),
                format_amount(self.sell_price),
            )
        )

    @classmethod
    def deserialize(cls, line: str) -> Product | None:
        """Parse one data file line, or return None if it is unusable.

        Fields beyond the sixth are ignored. Category indexes outside the
        known range load as ``Category.OTHER``.
        """
        if not line or not line.strip():
            return None
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) < 6:
            return None

        code = parts[0].strip()
        name = parts[1].strip()
        try:
            category_index = to_int(parts[2])
            quantity = to_int(parts[3])
            cost = to_amount(parts[4])
            sell = to_amount(parts[5])
        except ValidationError:
            return None

        if not code or not name:
            return None
        if quantity < 0 or cost < 0 or sell < 0:
            return None

        return cls(
            code=code,
            name=name,
            category=Category.from_persisted(category_index),
            quantity=quantity,
            cost_price=cost,
            sell_price=sell,
        )


def is_valid_text(value: str | None) -> bool:
    """True if ``value`` can be stored as a code or name."""
    if value is None or not value.strip():
        return False
    return not any(ch in value for ch in _FORBIDDEN_IN_TEXT)


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"Product {field} is required")
    if not is_valid_text(value):
        raise ValidationError(
            f"Product {field} cannot contain commas or line breaks"
        )
    return value.strip()
