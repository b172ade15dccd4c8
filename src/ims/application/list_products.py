"""Application service: List / Search Products use case (query)."""

from __future__ import annotations

from ims.application.dto import ProductDTO
from ims.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, keyword: str | None = None) -> list[ProductDTO]:
        """Return every product, or only those matching ``keyword``.

        Matching is a case-insensitive substring test on code or name.
        """
        if keyword is None:
            products = self._product_repo.list_all()
        else:
            products = self._product_repo.linear_search(keyword)
        return [ProductDTO.from_product(p) for p in products]
