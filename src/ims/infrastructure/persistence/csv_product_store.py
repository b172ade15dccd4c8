"""Plain-text file implementation of ProductStore.

One product per line, UTF-8. Before an existing file is overwritten it
is copied to ``<stem>_<yyyyMMdd_HHmmss>.bak`` in the same directory.
The copy and the overwrite are two separate steps, not an atomic swap.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ims.domain.repository.product_store import ProductStore

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class CsvProductStore(ProductStore):

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock

    # --- ProductStore interface -----------------------------------------------

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read(self, path: Path) -> list[str]:
        # utf-8-sig also accepts files written with a byte order mark.
        # Text mode folds \r\n and \r into \n; other Unicode line
        # separators stay inside their line.
        lines = Path(path).read_text(encoding="utf-8-sig").split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def write(self, path: Path, lines: list[str]) -> Path | None:
        path = Path(path)
        backup = None
        if path.is_file():
            backup = self.backup_path(path)
            shutil.copy2(path, backup)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w", encoding="utf-8", newline="\n") as fh:
            for line in lines:
                fh.write(line + "\n")
        return backup

    # --- File helpers ---------------------------------------------------------

    def backup_path(self, path: Path) -> Path:
        stamp = self._clock().strftime(BACKUP_TIMESTAMP_FORMAT)
        return path.with_name(f"{path.stem}_{stamp}.bak")
