"""Append-only text file implementation of AuditLog."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ims.domain.model.product import Product
from ims.domain.model.value_objects import format_amount
from ims.domain.repository.audit_log import AuditLog

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class FileAuditLog(AuditLog):
    """Writes one human-readable line per inventory change.

    Writing is best effort: an I/O error is logged and dropped so the
    inventory operation that triggered it still succeeds.
    """

    def __init__(
        self, file_path: Path, clock: Callable[[], datetime] = datetime.now
    ) -> None:
        self._file_path = Path(file_path)
        self._clock = clock

    @property
    def file_path(self) -> Path:
        return self._file_path

    def record(self, action: str, product: Product) -> None:
        line = self.format_entry(action, product)
        try:
            with self._file_path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as exc:
            logger.warning("Could not append to audit log %s: %s", self._file_path, exc)

    def format_entry(self, action: str, product: Product) -> str:
        return " | ".join(
            (
                self._clock().strftime(TIMESTAMP_FORMAT),
                action,
                product.code,
                product.name,
                f"Qty={product.quantity}",
                f"Cost={format_amount(product.cost_price)}",
                f"Sell={format_amount(product.sell_price)}",
            )
        )
