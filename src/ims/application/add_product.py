"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal

from ims.application.dto import ProductDTO
from ims.domain.exceptions import ValidationError
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Category
from ims.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        code: str,
        name: str,
        category: Category | int,
        quantity: int | str,
        cost_price: Decimal | str,
        sell_price: Decimal | str,
        month: int = 0,
    ) -> ProductDTO:
        """Add a new product to the inventory.

        ``month`` 1-12 records the added quantity under that month in the
        category x month ledger; anything else means the current month.
        """
        product = Product.create(code, name, category, quantity, cost_price, sell_price)

        if self._product_repo.exists_code(product.code):
            raise ValidationError(f"Product code '{product.code}' already exists")

        if not self._product_repo.add(product, month):
            raise ValidationError(f"Product '{product.code}' could not be added")
        return ProductDTO.from_product(product)
