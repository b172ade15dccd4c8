"""Application service: Sort Products use case."""

from __future__ import annotations

from ims.application.dto import ProductDTO
from ims.domain.model.value_objects import SortField
from ims.domain.repository.product_repository import ProductRepository


class SortProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, field: SortField, ascending: bool = True) -> list[ProductDTO]:
        """Reorder the stored products in place and return the new order."""
        self._product_repo.bubble_sort(field, ascending)
        return [ProductDTO.from_product(p) for p in self._product_repo]
