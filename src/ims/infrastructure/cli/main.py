import dataclasses
import logging
from pathlib import Path

import click

from ims.infrastructure.bootstrap import product_repository
from ims.infrastructure.cli.menu import InventoryMenu
from ims.infrastructure.cli.product_commands import (
    inventory_list,
    inventory_low_stock,
    inventory_stats,
)
from ims.infrastructure.config import (
    DEFAULT_DATA_FILE,
    DEFAULT_LOG_FILE,
    ENV_DATA_FILE,
    ENV_LOG_FILE,
    ENV_RESTOCK_THRESHOLD,
    ConfigurationError,
    Settings,
)


@click.group(invoke_without_command=True)
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Inventory data file. [env: {ENV_DATA_FILE}; default: {DEFAULT_DATA_FILE}]",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help=(
        "Audit log of add/update/delete operations. "
        f"[env: {ENV_LOG_FILE}; default: {DEFAULT_LOG_FILE}]"
    ),
)
@click.option(
    "--threshold",
    type=click.IntRange(min=0),
    help=f"Restock threshold for the low stock report. [env: {ENV_RESTOCK_THRESHOLD}]",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show diagnostic logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    data_file: Path | None,
    log_file: Path | None,
    threshold: int | None,
    verbose: bool,
) -> None:
    """IMS: Inventory Management System

    Run without a command to start the interactive menu. Options given on
    the command line win over the IMS_* environment variables.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    overrides = {
        "data_file": data_file,
        "log_file": log_file,
        "restock_threshold": threshold,
    }
    try:
        settings = dataclasses.replace(
            Settings.from_env(),
            **{key: value for key, value in overrides.items() if value is not None},
        )
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = product_repository(settings)

    if ctx.invoked_subcommand is None:
        InventoryMenu(ctx.obj).run()


@cli.command("menu")
@click.pass_obj
def menu(repo) -> None:
    """Start the interactive menu."""
    InventoryMenu(repo).run()


# Register subcommands
cli.add_command(inventory_list)
cli.add_command(inventory_stats)
cli.add_command(inventory_low_stock)
