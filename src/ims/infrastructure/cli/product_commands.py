"""Non-interactive commands that report on the data file."""

from __future__ import annotations

import click

from ims.application.list_products import ListProductsHandler
from ims.application.show_low_stock import ShowLowStockHandler
from ims.application.show_statistics import ShowStatisticsHandler
from ims.application.sort_products import SortProductsHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.value_objects import SortField
from ims.domain.repository.product_repository import ProductRepository
from ims.infrastructure.cli import views


def _load(repo: ProductRepository) -> ProductRepository:
    if not repo.has_file():
        raise click.ClickException(f"Data file {repo.data_file} does not exist")
    if not repo.load_from_file():
        raise click.ClickException(f"Could not read data file {repo.data_file}")
    return repo


@click.command("list")
@click.option(
    "--search", "keyword", default=None, help="Only products whose code or name contains this."
)
@click.option(
    "--sort",
    "sort_field",
    type=click.Choice([f.value for f in SortField]),
    default=None,
    help="Sort before listing.",
)
@click.option("--desc", is_flag=True, default=False, help="Sort in descending order.")
@click.pass_obj
def inventory_list(
    repo: ProductRepository, keyword: str | None, sort_field: str | None, desc: bool
) -> None:
    """List products in the data file."""
    _load(repo)
    if sort_field is not None:
        SortProductsHandler(repo).handle(SortField(sort_field), ascending=not desc)

    products = ListProductsHandler(repo).handle(keyword)
    views.render_products(products, empty_message="No products found.")


@click.command("stats")
@click.pass_obj
def inventory_stats(repo: ProductRepository) -> None:
    """Show total quantity, inventory value and profit estimate."""
    _load(repo)
    views.render_statistics(ShowStatisticsHandler(repo).handle())


@click.command("low-stock")
@click.option("--threshold", type=int, default=None, help="Override the restock threshold.")
@click.pass_obj
def inventory_low_stock(repo: ProductRepository, threshold: int | None) -> None:
    """List products at or below the restock threshold."""
    _load(repo)
    try:
        report = ShowLowStockHandler(repo).handle(threshold)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    views.render_low_stock(report)

