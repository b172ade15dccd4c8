"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from ims.domain.repository.product_repository import ProductRepository
from ims.infrastructure.config import Settings
from ims.infrastructure.persistence.csv_product_store import CsvProductStore
from ims.infrastructure.persistence.file_audit_log import FileAuditLog


def product_repository(settings: Settings) -> ProductRepository:
    return ProductRepository(
        store=CsvProductStore(),
        audit_log=FileAuditLog(settings.log_file),
        data_file=settings.data_file,
        restock_threshold=settings.restock_threshold,
    )
