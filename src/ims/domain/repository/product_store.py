"""Abstract storage port for the inventory data file.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (CSV file, in-memory)
live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class ProductStore(ABC):

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Return True if there is something stored at ``path``."""

    @abstractmethod
    def read(self, path: Path) -> list[str]:
        """Return the raw stored lines. Raises OSError on I/O failure."""

    @abstractmethod
    def write(self, path: Path, lines: list[str]) -> Path | None:
        """Replace the contents at ``path`` with ``lines``.

        Returns the backup location when existing contents were copied
        aside first, otherwise None. Raises OSError on I/O failure.
        """
