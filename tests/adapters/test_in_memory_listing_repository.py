"""
Contract tests for InMemoryListingRepository.

The in-memory adapter is the reference implementation of the
ListingRepository port, so these tests pin down the port semantics:
AND-combined predicates, sorting with NULL handling, windowing after
filtering and total counts before windowing.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from vehiql.adapters.in_memory_listing_repository import InMemoryListingRepository
from vehiql.domain.listing import SortBy, Window
from vehiql.domain.predicates import Contains, Equals, Range

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture()
def rows() -> list[dict]:
    return [
        {
            "id": "1",
            "make": "Suzuki",
            "model": "Swift",
            "price": "7000",  # stored as string
            "status": "AVAILABLE",
            "created_at": BASE_TIME,
        },
        {
            "id": "2",
            "make": "Hyundai",
            "model": "Creta",
            "price": Decimal("15000"),
            "status": "AVAILABLE",
            "created_at": BASE_TIME + timedelta(days=1),
        },
        {
            "id": "3",
            "make": "Honda",
            "model": "City",
            "price": 12000,
            "status": "AVAILABLE",
            "created_at": None,
        },
        {
            "id": "4",
            "make": "Honda",
            "model": "Amaze",
            "price": 9000,
            "status": "SOLD",
            "created_at": BASE_TIME + timedelta(days=2),
        },
    ]


@pytest.fixture()
def repository(rows: list[dict]) -> InMemoryListingRepository:
    return InMemoryListingRepository(rows)


def ids(records: list[dict]) -> list[str]:
    return [record["id"] for record in records]


# ==============================================================================
# Predicates
# ==============================================================================


def test_equals_is_case_sensitive(repository: InMemoryListingRepository) -> None:
    assert ids(repository.list_rows([Equals("make", "Honda")])) == ["3", "4"]
    assert repository.list_rows([Equals("make", "honda")]) == []


def test_contains_is_case_insensitive_and_disjunctive(repository: InMemoryListingRepository) -> None:
    # "CI" matches model "City"; "sw" matches model "Swift"
    assert ids(repository.list_rows([Contains(("make", "model"), "CI")])) == ["3"]
    assert ids(repository.list_rows([Contains(("make", "model"), "hon")])) == ["3", "4"]


def test_contains_treats_wildcards_literally(repository: InMemoryListingRepository) -> None:
    assert repository.list_rows([Contains(("make",), "%")]) == []
    assert repository.list_rows([Contains(("make",), "_")]) == []


def test_range_compares_coerced_prices(repository: InMemoryListingRepository) -> None:
    predicates = [Range("price", minimum=Decimal("7000"), maximum=Decimal("12000"))]

    assert ids(repository.list_rows(predicates)) == ["1", "3", "4"]


def test_predicates_are_and_combined(repository: InMemoryListingRepository) -> None:
    predicates = [Equals("status", "AVAILABLE"), Equals("make", "Honda")]

    assert ids(repository.list_rows(predicates)) == ["3"]


def test_count_matches_list_rows(repository: InMemoryListingRepository) -> None:
    predicates = [Equals("status", "AVAILABLE")]

    assert repository.count(predicates) == len(repository.list_rows(predicates)) == 3
    assert repository.count([]) == 4


# ==============================================================================
# Sorting
# ==============================================================================


def test_price_sorting(repository: InMemoryListingRepository) -> None:
    assert ids(repository.list_rows([], SortBy.PRICE_ASC)) == ["1", "4", "3", "2"]
    assert ids(repository.list_rows([], SortBy.PRICE_DESC)) == ["2", "3", "4", "1"]


def test_newest_puts_missing_timestamps_first(repository: InMemoryListingRepository) -> None:
    assert ids(repository.list_rows([], SortBy.NEWEST)) == ["3", "4", "2", "1"]


def test_oldest_puts_missing_timestamps_last(repository: InMemoryListingRepository) -> None:
    assert ids(repository.list_rows([], SortBy.OLDEST)) == ["1", "2", "4", "3"]


def test_ties_keep_insertion_order() -> None:
    repository = InMemoryListingRepository(
        [{"id": str(i), "price": 100, "created_at": BASE_TIME} for i in range(5)]
    )

    assert ids(repository.list_rows([], SortBy.PRICE_DESC)) == ["0", "1", "2", "3", "4"]


# ==============================================================================
# Windowing
# ==============================================================================


def test_search_windows_after_filtering(repository: InMemoryListingRepository) -> None:
    result = repository.search(
        [Equals("status", "AVAILABLE")], SortBy.PRICE_ASC, Window(offset=1, limit=1)
    )

    assert ids(result.rows) == ["3"]
    assert result.total_count == 3


def test_search_past_the_end_returns_no_rows_but_full_total(
    repository: InMemoryListingRepository,
) -> None:
    result = repository.search([], SortBy.NEWEST, Window(offset=100, limit=10))

    assert result.rows == []
    assert result.total_count == 4


# ==============================================================================
# Mutations
# ==============================================================================


def test_add_assigns_id_and_timestamps() -> None:
    repository = InMemoryListingRepository()

    record = repository.add({"make": "Tata", "model": "Nexon", "price": Decimal("9000")})

    assert record["id"]
    assert record["status"] == "AVAILABLE"
    assert record["featured"] is False
    assert record["created_at"] is not None
    assert repository.get_by_id(record["id"]) == record


def test_update_applies_partial_changes(repository: InMemoryListingRepository) -> None:
    updated = repository.update("2", {"status": "SOLD"})

    assert updated is not None
    assert updated["status"] == "SOLD"
    assert updated["make"] == "Hyundai"


def test_update_unknown_listing_returns_none(repository: InMemoryListingRepository) -> None:
    assert repository.update("missing", {"status": "SOLD"}) is None


def test_delete(repository: InMemoryListingRepository) -> None:
    assert repository.delete("1") is True
    assert repository.get_by_id("1") is None
    assert repository.delete("1") is False


def test_returned_rows_are_copies(repository: InMemoryListingRepository) -> None:
    record = repository.get_by_id("1")
    assert record is not None
    record["make"] = "Changed"

    assert repository.get_by_id("1")["make"] == "Suzuki"  # type: ignore[index]
