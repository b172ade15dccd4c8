"""Application service: Update Product use case."""

from __future__ import annotations

from decimal import Decimal

from ims.application.dto import ProductDTO
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.value_objects import Category
from ims.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        code: str,
        name: str | None = None,
        category: Category | int | None = None,
        quantity: int | None = None,
        cost_price: Decimal | None = None,
        sell_price: Decimal | None = None,
    ) -> ProductDTO:
        """Apply a partial update.

        Fields left as None keep their value. A field whose new value is
        invalid is skipped without failing the rest of the update.
        """
        if category is not None and not isinstance(category, Category):
            try:
                category = Category.from_index(category)
            except ValidationError:
                category = None

        updated = self._product_repo.update(
            code,
            name=name,
            category=category,
            quantity=quantity,
            cost_price=cost_price,
            sell_price=sell_price,
        )
        if not updated:
            raise EntityNotFoundError(f"Product with code '{code}' not found")

        return ProductDTO.from_product(self._product_repo.get(code))
