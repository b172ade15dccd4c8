"""Application services: Save / Load Inventory use cases."""

from __future__ import annotations

from pathlib import Path

from ims.domain.exceptions import PersistenceError
from ims.domain.repository.product_repository import ProductRepository


class SaveInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, path: Path | str | None = None) -> Path:
        """Write every product to ``path`` (default: the configured data file).

        An existing file is first copied to a timestamped ``.bak``.
        """
        target = Path(path) if path else self._product_repo.data_file
        if not self._product_repo.save_to_file(target):
            raise PersistenceError(f"Could not save inventory to {target}")
        return target


class LoadInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, path: Path | str | None = None) -> int:
        """Replace the inventory with the file's contents; return the count."""
        target = Path(path) if path else self._product_repo.data_file
        if not self._product_repo.has_file(target):
            raise PersistenceError(f"Data file {target} does not exist")
        if not self._product_repo.load_from_file(target):
            raise PersistenceError(f"Could not load inventory from {target}")
        return len(self._product_repo)
