"""Application service: Remove Product use case."""

from __future__ import annotations

from ims.domain.exceptions import EntityNotFoundError
from ims.domain.repository.product_repository import ProductRepository


class RemoveProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, code: str) -> None:
        if not self._product_repo.remove(code):
            raise EntityNotFoundError(f"Product with code '{code}' not found")
