"""ProductRepository: the in-memory inventory.

Owns the ordered product list, the category x month ledger and the
round trip to the data file. Every mutating operation reports success
as a bool instead of raising, and never leaves a half-applied change on
validation failure.

The repository has no internal locking. Callers sharing one instance
across threads must serialize whole operations themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ims.domain.model.category_month_matrix import MONTHS, CategoryMonthMatrix
from ims.domain.model.product import Product, is_valid_text
from ims.domain.model.value_objects import Category, SortField
from ims.domain.repository.audit_log import AuditLog
from ims.domain.repository.product_store import ProductStore

logger = logging.getLogger(__name__)

DEFAULT_RESTOCK_THRESHOLD = 5

ACTION_ADD = "ADD"
ACTION_UPDATE = "UPDATE"
ACTION_DELETE = "DELETE"


class ProductRepository:

    def __init__(
        self,
        store: ProductStore,
        audit_log: AuditLog,
        data_file: Path,
        restock_threshold: int = DEFAULT_RESTOCK_THRESHOLD,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._audit_log = audit_log
        self._data_file = Path(data_file)
        self._restock_threshold = restock_threshold
        self._clock = clock
        self._items: list[Product] = []
        self._matrix = CategoryMonthMatrix()

    @property
    def data_file(self) -> Path:
        return self._data_file

    @property
    def restock_threshold(self) -> int:
        return self._restock_threshold

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._items)

    def list_all(self) -> list[Product]:
        return list(self._items)

    # --- Lookup ---------------------------------------------------------------

    def _index_of(self, code: str | None) -> int | None:
        if code is None:
            return None
        wanted = code.strip().casefold()
        for i, product in enumerate(self._items):
            if product.code.casefold() == wanted:
                return i
        return None

    def exists_code(self, code: str | None) -> bool:
        return self._index_of(code) is not None

    def get(self, code: str | None) -> Product | None:
        idx = self._index_of(code)
        return None if idx is None else self._items[idx]

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product | None, month: int = 0) -> bool:
        """Append ``product`` and record its quantity in the ledger.

        ``month`` outside 1-12 means "the current month".
        """
        if product is None:
            return False
        if not is_valid_text(product.code) or not is_valid_text(product.name):
            return False
        if product.quantity < 0:
            return False
        if not (_is_valid_amount(product.cost_price) and _is_valid_amount(product.sell_price)):
            return False
        if self.exists_code(product.code):
            return False

        self._items.append(product)

        effective_month = month if 1 <= month <= MONTHS else self._clock().month
        self._matrix.record(product.category, effective_month, product.quantity)

        self._audit(ACTION_ADD, product)
        return True

    def update(
        self,
        code: str,
        name: str | None = None,
        category: Category | None = None,
        quantity: int | None = None,
        cost_price: Decimal | None = None,
        sell_price: Decimal | None = None,
    ) -> bool:
        """Overwrite each supplied, individually valid field.

        Invalid values are skipped one by one, so a single call may apply
        some fields and ignore others. The ledger is left untouched.
        """
        idx = self._index_of(code)
        if idx is None:
            return False
        product = self._items[idx]

        if name is not None and is_valid_text(name):
            product.name = name.strip()
        if isinstance(category, Category):
            product.category = category
        if quantity is not None and quantity >= 0:
            product.quantity = quantity
        if _is_valid_amount(cost_price):
            product.cost_price = cost_price
        if _is_valid_amount(sell_price):
            product.sell_price = sell_price

        self._audit(ACTION_UPDATE, product)
        return True

    def remove(self, code: str) -> bool:
        idx = self._index_of(code)
        if idx is None:
            return False
        product = self._items.pop(idx)
        self._audit(ACTION_DELETE, product)
        return True

    # --- Queries --------------------------------------------------------------

    def linear_search(self, keyword: str | None) -> Iterator[Product]:
        """Yield products whose code or name contains ``keyword``.

        Case-insensitive; an empty keyword matches every product.
        """
        needle = (keyword or "").strip().casefold()
        for product in self._items:
            if needle in product.code.casefold() or needle in product.name.casefold():
                yield product

    def bubble_sort(self, field: SortField, ascending: bool = True) -> None:
        """Sort in place with a classic bubble sort.

        Neighbours are swapped only when strictly out of order, so
        products with equal keys keep their relative order.
        """
        items = self._items
        n = len(items)
        for i in range(n - 1):
            for j in range(n - 1 - i):
                if _compare(items[j], items[j + 1], field, ascending) > 0:
                    items[j], items[j + 1] = items[j + 1], items[j]

    def total_quantity(self) -> int:
        return sum(p.quantity for p in self._items)

    def total_inventory_value(self) -> Decimal:
        return sum((p.inventory_value for p in self._items), Decimal("0"))

    def total_profit_estimate(self) -> Decimal:
        return sum((p.profit_estimate for p in self._items), Decimal("0"))

    def report_low_stock(self, threshold: int | None = None) -> list[Product]:
        if threshold is None:
            threshold = self._restock_threshold
        return [p for p in self._items if p.quantity <= threshold]

    def statistics_matrix(self) -> tuple[tuple[int, ...], ...]:
        """Quantity added per category (rows, index order) and month (columns)."""
        return self._matrix.rows()

    # --- Persistence ----------------------------------------------------------

    def has_file(self, path: Path | str | None = None) -> bool:
        try:
            return self._store.exists(self._resolve(path))
        except OSError:
            return False

    def save_to_file(self, path: Path | str | None = None) -> bool:
        target = self._resolve(path)
        try:
            backup = self._store.write(target, [p.serialize() for p in self._items])
        except OSError as exc:
            logger.error("Failed to write data file %s: %s", target, exc)
            return False

        if backup is not None:
            logger.info("Backed up previous data file to %s", backup)
        logger.info("Saved %d product(s) to %s", len(self._items), target)
        return True

    def load_from_file(self, path: Path | str | None = None) -> bool:
        """Replace the whole inventory with the contents of ``path``.

        Lines that cannot be parsed, and repeats of a code already
        loaded, are skipped. The ledger starts over empty.
        """
        target = self._resolve(path)
        try:
            if not self._store.exists(target):
                logger.info("Data file %s does not exist yet, nothing loaded", target)
                return False
            lines = self._store.read(target)
        except OSError as exc:
            logger.error("Failed to read data file %s: %s", target, exc)
            return False

        items: list[Product] = []
        seen: set[str] = set()
        skipped = 0
        for line in lines:
            product = Product.deserialize(line)
            if product is None or product.code.casefold() in seen:
                if line.strip():
                    skipped += 1
                continue
            seen.add(product.code.casefold())
            items.append(product)

        self._items = items
        self._matrix.reset()

        if skipped:
            logger.warning("Skipped %d unreadable line(s) in %s", skipped, target)
        logger.info("Loaded %d product(s) from %s", len(items), target)
        return True

    # --- Internal helpers -----------------------------------------------------

    def _resolve(self, path: Path | str | None) -> Path:
        if path is None or not str(path).strip():
            return self._data_file
        return Path(path)

    def _audit(self, action: str, product: Product) -> None:
        try:
            self._audit_log.record(action, product)
        except Exception:
            logger.warning(
                "Audit entry %s %s was not written", action, product.code, exc_info=True
            )


def _compare(a: Product, b: Product, field: SortField, ascending: bool) -> int:
    if field is SortField.CODE:
        c = _cmp(a.code.casefold(), b.code.casefold())
    elif field is SortField.NAME:
        c = _cmp(a.name.casefold(), b.name.casefold())
    elif field is SortField.QUANTITY:
        c = _cmp(a.quantity, b.quantity)
    else:
        c = _cmp(a.sell_price, b.sell_price)
    return c if ascending else -c


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _is_valid_amount(value: Decimal | None) -> bool:
    # NaN would raise on comparison instead of failing it
    return isinstance(value, Decimal) and value.is_finite() and value >= 0
