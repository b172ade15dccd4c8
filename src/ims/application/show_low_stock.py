"""Application service: Low Stock report (query)."""

from __future__ import annotations

from ims.application.dto import LowStockDTO, ProductDTO
from ims.domain.exceptions import ValidationError
from ims.domain.repository.product_repository import ProductRepository


class ShowLowStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, threshold: int | None = None) -> LowStockDTO:
        """List products whose quantity is at or below ``threshold``.

        Defaults to the repository's restock threshold.
        """
        if threshold is None:
            threshold = self._product_repo.restock_threshold
        if threshold < 0:
            raise ValidationError("Threshold cannot be negative")

        products = self._product_repo.report_low_stock(threshold)
        return LowStockDTO(
            threshold=threshold,
            products=[ProductDTO.from_product(p) for p in products],
        )
