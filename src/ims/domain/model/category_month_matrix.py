"""CategoryMonthMatrix: quantity added per category and calendar month.

The matrix is a ledger, not a live stock view: it only grows when a
product is added and is never reduced by updates or deletions. Loading
a data file starts a fresh, empty ledger.
"""

from __future__ import annotations

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import Category

MONTHS = 12


class CategoryMonthMatrix:
    """Accumulated quantity added, indexed by (category, month 1-12).

    Invariants:
    - every cell is >= 0
    - cells change only through :meth:`record` or :meth:`reset`
    """

    def __init__(self) -> None:
        self._cells: list[list[int]] = [[0] * MONTHS for _ in Category]

    def record(self, category: Category, month: int, quantity: int) -> None:
        if not 1 <= month <= MONTHS:
            raise ValidationError(f"Month must be between 1 and {MONTHS}, got {month}")
        if quantity < 0:
            raise ValidationError("Recorded quantity cannot be negative")
        self._cells[category][month - 1] += quantity

    def get(self, category: Category, month: int) -> int:
        if not 1 <= month <= MONTHS:
            raise ValidationError(f"Month must be between 1 and {MONTHS}, got {month}")
        return self._cells[category][month - 1]

    def row(self, category: Category) -> tuple[int, ...]:
        return tuple(self._cells[category])

    def rows(self) -> tuple[tuple[int, ...], ...]:
        """Read-only snapshot, one row per category in index order."""
        return tuple(tuple(row) for row in self._cells)

    def total(self) -> int:
        return sum(sum(row) for row in self._cells)

    def reset(self) -> None:
        self._cells = [[0] * MONTHS for _ in Category]
