"""Unit tests for ProductRepository, wired to in-memory fakes."""

from decimal import Decimal
from pathlib import Path

from ims.domain.model.product import Product
from ims.domain.model.value_objects import Category, SortField
from tests.fakes import FakeAuditLog, FakeProductStore, make_repository, product


def _codes(repo):
    return [p.code for p in repo]


# ── Add ──────────────────────────────────────────────────────────────────────


class TestAdd:

    def test_add_appends_in_order(self):
        repo, _, _ = make_repository()
        assert repo.add(product("P1"), 1)
        assert repo.add(product("P2", "Fan"), 1)
        assert _codes(repo) == ["P1", "P2"]

    def test_duplicate_code_rejected_case_insensitively(self):
        repo, _, audit = make_repository()
        assert repo.add(product("P1", "Rice", 0, 10, "5.00", "8.00"), 1)
        assert not repo.add(product("p1", "Rice2", 0, 1, "1.00", "2.00"), 1)
        assert len(repo) == 1
        assert repo.get("P1").name == "Rice"
        assert audit.entries == [("ADD", "P1")]

    def test_invalid_product_rejected_without_mutation(self):
        repo, _, audit = make_repository()
        bad = Product("P9", "Broken", Category.FOOD, -1, Decimal("1"), Decimal("1"))
        assert not repo.add(bad, 1)
        assert not repo.add(None, 1)
        assert not repo.add(Product(" ", "x", Category.FOOD, 1, Decimal(1), Decimal(1)), 1)
        assert not repo.add(Product("N1", "x", Category.FOOD, 1, Decimal("NaN"), Decimal(1)), 1)
        assert len(repo) == 0
        assert repo.statistics_matrix()[Category.FOOD] == (0,) * 12
        assert audit.entries == []

    def test_add_records_quantity_in_given_month(self):
        repo, _, _ = make_repository()
        repo.add(product("P1", category=1, quantity=7), 6)
        assert repo.statistics_matrix()[Category.ELECTRONICS][5] == 7

    def test_month_out_of_range_uses_current_month(self):
        repo, _, _ = make_repository()  # clock fixed in March
        repo.add(product("P1", quantity=4), 0)
        repo.add(product("P2", quantity=6), 13)
        assert repo.statistics_matrix()[Category.FOOD][2] == 10

    def test_growth_past_initial_capacity(self):
        repo, _, _ = make_repository()
        for i in range(50):
            assert repo.add(product(f"C{i}"), 1)
        assert len(repo) == 50
        assert repo.total_quantity() == 500


# ── Update ───────────────────────────────────────────────────────────────────


class TestUpdate:

    def test_partial_update_keeps_other_fields(self):
        repo, _, _ = make_repository()
        repo.add(product("P2", "Fan", 1, 3, "20.00", "35.00"), 1)

        assert repo.update("P2", quantity=20)

        p = repo.get("P2")
        assert p.quantity == 20
        assert p.name == "Fan"
        assert p.category is Category.ELECTRONICS
        assert p.cost_price == Decimal("20.00")
        assert p.sell_price == Decimal("35.00")

    def test_invalid_fields_skipped_valid_fields_applied(self):
        repo, _, _ = make_repository()
        repo.add(product("P1"), 1)

        assert repo.update(
            "p1",
            name="   ",
            category=Category.HOUSEHOLD,
            quantity=-5,
            cost_price=Decimal("-1"),
            sell_price=Decimal("9.99"),
        )

        p = repo.get("P1")
        assert p.name == "Rice"
        assert p.category is Category.HOUSEHOLD
        assert p.quantity == 10
        assert p.cost_price == Decimal("5.00")
        assert p.sell_price == Decimal("9.99")

    def test_non_finite_prices_are_skipped(self):
        repo, _, _ = make_repository()
        repo.add(product("P1"), 1)

        assert repo.update("P1", cost_price=Decimal("NaN"), sell_price=Decimal("Infinity"))

        p = repo.get("P1")
        assert p.cost_price == Decimal("5.00")
        assert p.sell_price == Decimal("8.00")

    def test_unknown_code_fails(self):
        repo, _, audit = make_repository()
        assert not repo.update("nope", quantity=1)
        assert audit.entries == []

    def test_update_does_not_touch_matrix(self):
        repo, _, _ = make_repository()
        repo.add(product("P1", quantity=10), 1)
        repo.update("P1", quantity=100, category=Category.OTHER)
        rows = repo.statistics_matrix()
        assert rows[Category.FOOD][0] == 10
        assert rows[Category.OTHER][0] == 0

    def test_update_is_audited(self):
        repo, _, audit = make_repository()
        repo.add(product("P1"), 1)
        repo.update("P1", name="Brown rice")
        assert audit.entries[-1] == ("UPDATE", "P1")


# ── Remove ───────────────────────────────────────────────────────────────────


class TestRemove:

    def test_remove_is_stable(self):
        repo, _, _ = make_repository()
        for code in ("A", "B", "C", "D"):
            repo.add(product(code), 1)
        assert repo.remove("b")
        assert _codes(repo) == ["A", "C", "D"]

    def test_remove_unknown_code_fails(self):
        repo, _, audit = make_repository()
        repo.add(product("P1"), 1)
        assert not repo.remove("P404")
        assert len(repo) == 1
        assert audit.entries == [("ADD", "P1")]

    def test_remove_keeps_matrix(self):
        repo, _, audit = make_repository()
        repo.add(product("P1", quantity=8), 2)
        repo.remove("P1")
        assert repo.statistics_matrix()[Category.FOOD][1] == 8
        assert audit.entries[-1] == ("DELETE", "P1")


# ── Audit failures ───────────────────────────────────────────────────────────


class TestAuditFailure:

    def test_failing_audit_log_never_aborts_operations(self):
        repo, _, _ = make_repository(audit_log=FakeAuditLog(fail=True))
        assert repo.add(product("P1"), 1)
        assert repo.update("P1", quantity=3)
        assert repo.remove("P1")
        assert len(repo) == 0


# ── Search ───────────────────────────────────────────────────────────────────


class TestLinearSearch:

    def _repo(self):
        repo, _, _ = make_repository()
        repo.add(product("RC01", "Rice"), 1)
        repo.add(product("EL02", "Electric fan"), 1)
        repo.add(product("CL03", "Price tag gun"), 1)
        return repo

    def test_matches_code_or_name_case_insensitive(self):
        repo = self._repo()
        assert [p.code for p in repo.linear_search("RICE")] == ["RC01", "CL03"]
        assert [p.code for p in repo.linear_search("el0")] == ["EL02"]

    def test_keyword_is_trimmed(self):
        repo = self._repo()
        assert [p.code for p in repo.linear_search("  fan  ")] == ["EL02"]

    def test_empty_keyword_matches_everything(self):
        repo = self._repo()
        assert len(list(repo.linear_search(""))) == 3
        assert len(list(repo.linear_search(None))) == 3

    def test_no_match(self):
        assert list(self._repo().linear_search("zzz")) == []


# ── Sort ─────────────────────────────────────────────────────────────────────


class TestBubbleSort:

    def _repo(self):
        repo, _, _ = make_repository()
        repo.add(product("b2", "banana", quantity=5, sell="3.00"), 1)
        repo.add(product("A1", "Cherry", quantity=2, sell="10.00"), 1)
        repo.add(product("c3", "apple", quantity=5, sell="1.50"), 1)
        repo.add(product("D4", "date", quantity=1, sell="7.25"), 1)
        return repo

    def test_quantity_ascending_is_non_decreasing_and_stable(self):
        repo = self._repo()
        repo.bubble_sort(SortField.QUANTITY, ascending=True)
        quantities = [p.quantity for p in repo]
        assert all(a <= b for a, b in zip(quantities, quantities[1:]))
        # b2 and c3 tie on quantity and keep their original order
        assert _codes(repo) == ["D4", "A1", "b2", "c3"]

    def test_quantity_descending(self):
        repo = self._repo()
        repo.bubble_sort(SortField.QUANTITY, ascending=False)
        assert _codes(repo) == ["b2", "c3", "A1", "D4"]

    def test_code_is_case_insensitive(self):
        repo = self._repo()
        repo.bubble_sort(SortField.CODE)
        assert _codes(repo) == ["A1", "b2", "c3", "D4"]

    def test_name_is_case_insensitive(self):
        repo = self._repo()
        repo.bubble_sort(SortField.NAME)
        assert [p.name for p in repo] == ["apple", "banana", "Cherry", "date"]

    def test_sell_price_descending(self):
        repo = self._repo()
        repo.bubble_sort(SortField.SELL_PRICE, ascending=False)
        assert _codes(repo) == ["A1", "D4", "b2", "c3"]

    def test_empty_and_single(self):
        repo, _, _ = make_repository()
        repo.bubble_sort(SortField.CODE)
        repo.add(product("X"), 1)
        repo.bubble_sort(SortField.CODE)
        assert _codes(repo) == ["X"]


# ── Aggregates and reports ───────────────────────────────────────────────────


class TestAggregates:

    def test_totals(self):
        repo, _, _ = make_repository()
        repo.add(product("P1", quantity=10, cost="5.00", sell="8.00"), 1)
        repo.add(product("P2", quantity=3, cost="20.00", sell="35.00"), 1)
        assert repo.total_quantity() == 13
        assert repo.total_inventory_value() == Decimal("185.00")
        assert repo.total_profit_estimate() == Decimal("75.00")

    def test_totals_on_empty_repository(self):
        repo, _, _ = make_repository()
        assert repo.total_quantity() == 0
        assert repo.total_inventory_value() == Decimal("0")
        assert repo.total_profit_estimate() == Decimal("0")

    def test_total_quantity_tracks_mutations(self):
        repo, _, _ = make_repository()
        repo.add(product("P1", quantity=10), 1)
        repo.add(product("P2", quantity=4), 1)
        repo.update("P1", quantity=1)
        repo.remove("P2")
        repo.add(product("P3", quantity=6), 1)
        assert repo.total_quantity() == sum(p.quantity for p in repo) == 7

    def test_monetary_sums_have_no_float_drift(self):
        repo, _, _ = make_repository()
        for i in range(10):
            repo.add(product(f"P{i}", quantity=1, cost="0", sell="0.10"), 1)
        assert repo.total_inventory_value() == Decimal("1.00")


class TestLowStock:

    def test_threshold_is_inclusive(self):
        repo, _, _ = make_repository()
        repo.add(product("P2", "Fan", 1, 3, "20.00", "35.00"), 1)
        assert [p.code for p in repo.report_low_stock(5)] == ["P2"]
        assert repo.report_low_stock(2) == []
        assert [p.code for p in repo.report_low_stock(3)] == ["P2"]

    def test_defaults_to_restock_threshold(self):
        repo, _, _ = make_repository(restock_threshold=5)
        repo.add(product("A", quantity=5), 1)
        repo.add(product("B", quantity=6), 1)
        repo.add(product("C", quantity=0), 1)
        assert [p.code for p in repo.report_low_stock()] == ["A", "C"]


# ── Persistence ──────────────────────────────────────────────────────────────


class TestSaveAndLoad:

    def test_save_writes_serialized_lines(self):
        repo, store, _ = make_repository()
        repo.add(product("P1"), 1)
        assert repo.save_to_file()
        assert store.files["data.csv"] == ["P1,Rice,0,10,5.00,8.00"]

    def test_save_to_explicit_path(self):
        repo, store, _ = make_repository()
        assert repo.save_to_file("other.csv")
        assert store.files["other.csv"] == []

    def test_save_failure_returns_false(self):
        repo, store, _ = make_repository()
        store.fail_writes = True
        assert not repo.save_to_file()

    def test_round_trip_preserves_order(self):
        repo, store, _ = make_repository()
        repo.add(product("Z9", "Zucchini"), 1)
        repo.add(product("A1", "Apple", 4, 0, "0", "0"), 1)
        before = repo.list_all()
        repo.save_to_file()

        fresh, _, _ = make_repository(store=store)
        assert fresh.load_from_file()
        assert fresh.list_all() == before

    def test_round_trip_of_empty_inventory(self):
        repo, store, _ = make_repository()
        repo.save_to_file()
        fresh, _, _ = make_repository(store=store)
        fresh.add(product("OLD"), 1)
        assert fresh.load_from_file()
        assert len(fresh) == 0

    def test_load_missing_file_fails_and_keeps_data(self):
        repo, _, _ = make_repository()
        repo.add(product("P1"), 1)
        assert not repo.load_from_file(Path("missing.csv"))
        assert _codes(repo) == ["P1"]

    def test_load_read_error_fails(self):
        store = FakeProductStore({"data.csv": ["P1,Rice,0,1,1,1"]})
        store.fail_reads = True
        repo, _, _ = make_repository(store=store)
        assert not repo.load_from_file()
        assert len(repo) == 0

    def test_load_replaces_everything_and_resets_matrix(self):
        store = FakeProductStore({"data.csv": ["N1,Nails,3,2,0.10,0.20"]})
        repo, _, _ = make_repository(store=store)
        repo.add(product("P1", quantity=9), 4)

        assert repo.load_from_file()

        assert _codes(repo) == ["N1"]
        assert all(sum(row) == 0 for row in repo.statistics_matrix())

    def test_load_skips_bad_lines_and_duplicate_codes(self):
        store = FakeProductStore(
            {
                "data.csv": [
                    "P1,Rice,0,10,5,8",
                    "garbage",
                    "",
                    "P2,Fan,1,-3,20,35",
                    "p1,Rice again,0,1,1,1",
                    "P3,Lamp,42,1,2,3",
                ]
            }
        )
        repo, _, _ = make_repository(store=store)
        assert repo.load_from_file()
        assert _codes(repo) == ["P1", "P3"]
        assert repo.get("P3").category is Category.OTHER

    def test_has_file(self):
        store = FakeProductStore({"data.csv": []})
        repo, _, _ = make_repository(store=store)
        assert repo.has_file()
        assert not repo.has_file("elsewhere.csv")
