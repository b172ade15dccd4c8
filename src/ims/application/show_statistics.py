"""Application service: Show Statistics use case (query)."""

from __future__ import annotations

from ims.application.dto import StatisticsDTO, format_money
from ims.domain.repository.product_repository import ProductRepository


class ShowStatisticsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> StatisticsDTO:
        repo = self._product_repo
        return StatisticsDTO(
            product_count=len(repo),
            total_quantity=repo.total_quantity(),
            total_inventory_value=format_money(repo.total_inventory_value()),
            total_profit_estimate=format_money(repo.total_profit_estimate()),
        )
