"""Interactive numbered menu.

One command runs per loop iteration. A failing command prints an error
and the loop carries on; only option 0 (or end of input) ends the session,
and ending always tries to save to the default data file first.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import click

from ims.application.add_product import AddProductHandler
from ims.application.list_products import ListProductsHandler
from ims.application.persist_inventory import LoadInventoryHandler, SaveInventoryHandler
from ims.application.remove_product import RemoveProductHandler
from ims.application.show_category_month_matrix import ShowCategoryMonthMatrixHandler
from ims.application.show_low_stock import ShowLowStockHandler
from ims.application.show_statistics import ShowStatisticsHandler
from ims.application.sort_products import SortProductsHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.exceptions import DomainException, ValidationError
from ims.domain.model.product import is_valid_text
from ims.domain.model.value_objects import Category, SortField, to_amount, to_int
from ims.domain.repository.product_repository import ProductRepository
from ims.infrastructure.cli import views

logger = logging.getLogger(__name__)

MENU_ITEMS = (
    ("1", "Add product"),
    ("2", "Update product"),
    ("3", "Delete product"),
    ("4", "List products"),
    ("5", "Search (code or name)"),
    ("6", "Sort (code / name / quantity / sell price)"),
    ("7", "Statistics (total quantity, value, profit)"),
    ("8", "Low stock report"),
    ("9", "Category x month matrix"),
    ("10", "Save to file"),
    ("11", "Load from file"),
    ("12", "Help"),
    ("0", "Exit (confirm & auto-save)"),
)

SORT_FIELDS = (SortField.CODE, SortField.NAME, SortField.QUANTITY, SortField.SELL_PRICE)


class AmountType(click.ParamType):
    """Non-negative decimal amount entered at a prompt."""

    name = "amount"

    def convert(self, value, param, ctx) -> Decimal:
        if isinstance(value, Decimal):
            return value
        try:
            amount = to_amount(value)
        except ValidationError:
            self.fail(f"{value!r} is not a valid amount", param, ctx)
        if amount < 0:
            self.fail("amount must be >= 0", param, ctx)
        return amount


class TextType(click.ParamType):
    """Product code or name that fits in one data file field."""

    name = "text"

    def convert(self, value, param, ctx) -> str:
        if not is_valid_text(value):
            self.fail("must be non-blank and contain no commas or line breaks", param, ctx)
        return value.strip()


class InventoryMenu:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._repo = product_repo
        self._commands = {
            "1": self.add_product,
            "2": self.update_product,
            "3": self.delete_product,
            "4": self.list_products,
            "5": self.search_products,
            "6": self.sort_products,
            "7": self.show_statistics,
            "8": self.show_low_stock,
            "9": self.show_matrix,
            "10": self.save,
            "11": self.load,
            "12": self.show_help,
        }

    # --- Loop -----------------------------------------------------------------

    def run(self) -> None:
        self.load_default()
        while True:
            self.print_menu()
            try:
                choice = click.prompt("Choose", default="", show_default=False).strip()
                if choice == "0":
                    if self.confirm_exit():
                        break
                    continue
                self.dispatch(choice)
            except click.Abort:
                click.echo()
                self.auto_save()
                break
        click.echo("Goodbye!")

    def dispatch(self, choice: str) -> None:
        command = self._commands.get(choice)
        if command is None:
            click.echo("Invalid choice.")
            return
        try:
            command()
        except DomainException as exc:
            click.echo(f"Error: {exc}")
        except click.Abort:
            raise
        except Exception as exc:
            logger.exception("Menu command %s failed", choice)
            click.echo(f"Unexpected error, the program keeps running: {exc}")

    def print_menu(self) -> None:
        click.echo()
        click.echo("===== INVENTORY MENU =====")
        for key, label in MENU_ITEMS:
            click.echo(f"{key}. {label}")

    # --- Commands -------------------------------------------------------------

    def add_product(self) -> None:
        code = click.prompt("Code", type=TextType())
        if self._repo.exists_code(code):
            click.echo("Code already exists!")
            return
        name = click.prompt("Name", type=TextType())
        category = click.prompt(
            f"Category ({views.category_choices()})", type=click.IntRange(0, len(Category) - 1)
        )
        quantity = click.prompt("Quantity (>=0)", type=click.IntRange(min=0))
        cost = click.prompt("Cost price (>=0)", type=AmountType())
        sell = click.prompt("Sell price (>=0)", type=AmountType())
        month = click.prompt("Month added (1-12, 0 = current month)", type=click.IntRange(0, 12))

        AddProductHandler(self._repo).handle(code, name, category, quantity, cost, sell, month)
        click.echo("Product added.")

    def update_product(self) -> None:
        code = click.prompt("Code of the product to update").strip()
        name = _prompt_optional("New name (blank = keep)")
        category = _parse_optional_category(
            _prompt_optional(f"New category ({views.category_choices()}, blank = keep)")
        )
        quantity = _parse_optional_int(_prompt_optional("New quantity (>=0, blank = keep)"))
        cost = _parse_optional_amount(_prompt_optional("New cost price (>=0, blank = keep)"))
        sell = _parse_optional_amount(_prompt_optional("New sell price (>=0, blank = keep)"))

        UpdateProductHandler(self._repo).handle(
            code,
            name=name or None,
            category=category,
            quantity=quantity,
            cost_price=cost,
            sell_price=sell,
        )
        click.echo("Product updated.")

    def delete_product(self) -> None:
        code = click.prompt("Code of the product to delete").strip()
        if not click.confirm("Confirm delete", default=False):
            click.echo("Delete cancelled.")
            return
        RemoveProductHandler(self._repo).handle(code)
        click.echo("Product deleted.")

    def list_products(self) -> None:
        click.echo("----- PRODUCTS -----")
        views.render_products(ListProductsHandler(self._repo).handle())

    def search_products(self) -> None:
        keyword = click.prompt("Keyword (code or name)", default="", show_default=False)
        views.render_search_results(keyword, ListProductsHandler(self._repo).handle(keyword))

    def sort_products(self) -> None:
        click.echo("Fields: 0=Code, 1=Name, 2=Quantity, 3=Sell price")
        index = click.prompt("Field", type=click.IntRange(0, len(SORT_FIELDS) - 1))
        order = click.prompt("Order (a=asc, d=desc)", default="a")
        SortProductsHandler(self._repo).handle(
            SORT_FIELDS[index], ascending=order.strip().lower() != "d"
        )
        click.echo("Sorted.")

    def show_statistics(self) -> None:
        views.render_statistics(ShowStatisticsHandler(self._repo).handle())

    def show_low_stock(self) -> None:
        views.render_low_stock(ShowLowStockHandler(self._repo).handle())

    def show_matrix(self) -> None:
        views.render_matrix(ShowCategoryMonthMatrixHandler(self._repo).handle())

    def save(self) -> None:
        path = click.prompt("File path", default=str(self._repo.data_file))
        target = SaveInventoryHandler(self._repo).handle(path.strip() or None)
        click.echo(f"Saved to {target} (previous file backed up as .bak).")

    def load(self) -> None:
        path = click.prompt("File path", default=str(self._repo.data_file))
        count = LoadInventoryHandler(self._repo).handle(path.strip() or None)
        click.echo(f"Loaded {count} product(s).")

    def show_help(self) -> None:
        threshold = self._repo.restock_threshold
        click.echo(
            "\n".join(
                (
                    "=== HELP ===",
                    "1 Add: unique code, name, category 0-4, quantity/prices >= 0, "
                    "month 1-12 (0 = current month).",
                    "2 Update: enter the code, then new values (blank = keep).",
                    "3 Delete: enter the code and confirm (y/n).",
                    "4 List: every product with inventory value and profit estimate.",
                    "5 Search: substring of code or name, case-insensitive.",
                    "6 Sort: 0=Code, 1=Name, 2=Quantity, 3=Sell price; a=asc, d=desc.",
                    "7 Statistics: total quantity, inventory value, profit estimate.",
                    f"8 Low stock: products with quantity <= {threshold}.",
                    "9 Matrix: quantity added per category and month (recorded on add).",
                    "10 Save: write the data file (existing file is backed up as .bak).",
                    "11 Load: replace the inventory with a data file's contents.",
                    "12 Help: show this text.",
                    f"0 Exit: confirm, then auto-save to {self._repo.data_file}.",
                )
            )
        )

    # --- Session helpers ------------------------------------------------------

    def load_default(self) -> None:
        try:
            count = LoadInventoryHandler(self._repo).handle()
        except DomainException as exc:
            click.echo(f"{exc}; starting with an empty inventory.")
            return
        click.echo(f"Loaded {count} product(s) from {self._repo.data_file}.")

    def confirm_exit(self) -> bool:
        if not click.confirm(
            f"Exit now? (auto-saves to {self._repo.data_file})", default=False
        ):
            return False
        self.auto_save()
        return True

    def auto_save(self) -> None:
        try:
            SaveInventoryHandler(self._repo).handle()
        except DomainException as exc:
            click.echo(f"Error: {exc}")


# --- Lenient parsing for "blank = keep" prompts --------------------------------


def _prompt_optional(label: str) -> str:
    return click.prompt(label, default="", show_default=False).strip()


def _parse_optional_int(raw: str) -> int | None:
    if not raw:
        return None
    try:
        value = to_int(raw)
    except ValidationError:
        return None
    return value if value >= 0 else None


def _parse_optional_amount(raw: str) -> Decimal | None:
    if not raw:
        return None
    try:
        value = to_amount(raw)
    except ValidationError:
        return None
    return value if value >= 0 else None


def _parse_optional_category(raw: str) -> Category | None:
    index = _parse_optional_int(raw)
    if index is None:
        return None
    try:
        return Category.from_index(index)
    except ValidationError:
        return None
