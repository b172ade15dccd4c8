"""Console rendering shared by the interactive menu and the subcommands."""

from __future__ import annotations

import click

from ims.application.dto import LowStockDTO, MatrixDTO, ProductDTO, StatisticsDTO
from ims.domain.model.value_objects import Category

_TABLE_WIDTH = 100


def render_products(products: list[ProductDTO], empty_message: str = "(empty)") -> None:
    if not products:
        click.echo(empty_message)
        return

    click.echo(
        f"{'Code':<10} {'Name':<20} {'Category':<12} {'Qty':>6} "
        f"{'Cost':>10} {'Sell':>10} {'Value':>12} {'Profit':>12}"
    )
    click.echo("-" * _TABLE_WIDTH)
    for p in products:
        click.echo(
            f"{p.code:<10} {p.name:<20} {p.category:<12} {p.quantity:>6} "
            f"{p.cost_price:>10} {p.sell_price:>10} "
            f"{p.inventory_value:>12} {p.profit_estimate:>12}"
        )


def render_search_results(keyword: str, products: list[ProductDTO]) -> None:
    click.echo(f'Results for "{keyword.strip()}":')
    if not products:
        click.echo("(no match)")
        return
    for p in products:
        click.echo(f"- {p.code} | {p.name} | {p.category} | Qty: {p.quantity}")


def render_statistics(stats: StatisticsDTO) -> None:
    click.echo(f"Products:               {stats.product_count}")
    click.echo(f"Total quantity:         {stats.total_quantity}")
    click.echo(f"Total inventory value:  {stats.total_inventory_value}")
    click.echo(f"Total profit estimate:  {stats.total_profit_estimate}")


def render_low_stock(report: LowStockDTO) -> None:
    click.echo(f"Out of stock or running low (quantity <= {report.threshold}):")
    if not report.products:
        click.echo("(none)")
        return
    for p in report.products:
        click.echo(f"- {p.code} | {p.name} | Qty: {p.quantity}")


def render_matrix(matrix: MatrixDTO) -> None:
    click.echo("Quantity added per category and month (recorded on add):")
    header = f"{'Category':<12}" + "".join(f"{m:>6}" for m in range(1, 13)) + f"{'Total':>8}"
    click.echo(header)
    click.echo("-" * len(header))
    for row in matrix.rows:
        cells = "".join(f"{qty:>6}" for qty in row.months)
        click.echo(f"{row.category:<12}{cells}{row.total:>8}")
    click.echo("-" * len(header))
    totals = "".join(f"{qty:>6}" for qty in matrix.month_totals)
    click.echo(f"{'Total':<12}{totals}{matrix.grand_total:>8}")


def category_choices() -> str:
    return ", ".join(f"{c.value}={c.label}" for c in Category)
