"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Amounts are
pre-formatted for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ims.domain.model.product import Product


def format_money(amount: Decimal) -> str:
    """Display form with thousands grouping, e.g. ``1,234.50``."""
    return f"{amount:,.2f}"


@dataclass(frozen=True)
class ProductDTO:
    """Output: one product row as displayed to the user."""

    code: str
    name: str
    category: str
    quantity: int
    cost_price: str
    sell_price: str
    inventory_value: str
    profit_estimate: str

    @classmethod
    def from_product(cls, product: Product) -> ProductDTO:
        return cls(
            code=product.code,
            name=product.name,
            category=product.category.label,
            quantity=product.quantity,
            cost_price=format_money(product.cost_price),
            sell_price=format_money(product.sell_price),
            inventory_value=format_money(product.inventory_value),
            profit_estimate=format_money(product.profit_estimate),
        )


@dataclass(frozen=True)
class StatisticsDTO:
    product_count: int
    total_quantity: int
    total_inventory_value: str
    total_profit_estimate: str


@dataclass(frozen=True)
class LowStockDTO:
    threshold: int
    products: list[ProductDTO]


@dataclass(frozen=True)
class MatrixRowDTO:
    category: str
    months: tuple[int, ...]  # index 0 is January
    total: int


@dataclass(frozen=True)
class MatrixDTO:
    rows: list[MatrixRowDTO]
    month_totals: tuple[int, ...]
    grand_total: int
