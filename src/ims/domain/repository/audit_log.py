"""Abstract audit trail port for inventory mutations."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.product import Product


class AuditLog(ABC):

    @abstractmethod
    def record(self, action: str, product: Product) -> None:
        """Append one entry describing ``action`` applied to ``product``."""
