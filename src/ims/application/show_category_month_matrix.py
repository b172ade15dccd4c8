"""Application service: Category x Month matrix report (query)."""

from __future__ import annotations

from ims.application.dto import MatrixDTO, MatrixRowDTO
from ims.domain.model.category_month_matrix import MONTHS
from ims.domain.model.value_objects import Category
from ims.domain.repository.product_repository import ProductRepository


class ShowCategoryMonthMatrixHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> MatrixDTO:
        """Quantity added through the add use case, per category and month.

        Updates and deletions are not reflected; loading a data file
        clears the figures.
        """
        cells = self._product_repo.statistics_matrix()
        rows = [
            MatrixRowDTO(
                category=category.label,
                months=cells[category],
                total=sum(cells[category]),
            )
            for category in Category
        ]
        month_totals = tuple(sum(row.months[m] for row in rows) for m in range(MONTHS))
        return MatrixDTO(
            rows=rows,
            month_totals=month_totals,
            grand_total=sum(month_totals),
        )
