"""Tests for listing record normalization."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from vehiql.domain.normalizer import coerce_price, normalize_listing


# ==============================================================================
# coerce_price
# ==============================================================================


@pytest.mark.parametrize(
    ("stored", "expected"),
    [
        (None, Decimal("0")),
        ("", Decimal("0")),
        (0, Decimal("0")),
        ("7000", Decimal("7000")),
        (" 7000.50 ", Decimal("7000.50")),
        (12000, Decimal("12000")),
        (15000.5, Decimal("15000.5")),
        (Decimal("9999.99"), Decimal("9999.99")),
    ],
)
def test_coerce_price(stored: object, expected: Decimal) -> None:
    assert coerce_price(stored) == expected


@pytest.mark.parametrize(
    "garbage",
    ["abc", "   ", "NaN", "Infinity", float("nan"), float("inf"), Decimal("NaN"), [], {}, True],
)
def test_coerce_price_never_raises_on_garbage(garbage: object) -> None:
    """Malformed prices degrade to 0 instead of failing."""
    assert coerce_price(garbage) == Decimal("0")


# ==============================================================================
# normalize_listing
# ==============================================================================


def test_string_price_normalizes_to_number() -> None:
    record = normalize_listing({"id": "1", "price": "7000"})

    assert record["price"] == 7000
    assert isinstance(record["price"], Decimal)


def test_missing_price_normalizes_to_zero() -> None:
    record = normalize_listing({"id": "1", "make": "Honda"})

    assert record["price"] == 0


def test_missing_timestamps_become_explicit_none() -> None:
    record = normalize_listing({"id": "1", "price": 100})

    assert "created_at" in record and record["created_at"] is None
    assert "updated_at" in record and record["updated_at"] is None


def test_present_timestamps_are_kept() -> None:
    created = datetime(2025, 1, 2, tzinfo=timezone.utc)

    record = normalize_listing({"id": "1", "created_at": created, "updated_at": created})

    assert record["created_at"] == created
    assert record["updated_at"] == created


def test_other_fields_are_copied_unchanged() -> None:
    raw = {
        "id": "1",
        "make": "Hyundai",
        "model": "Creta",
        "images": ["https://example.com/a.jpg"],
        "status": "AVAILABLE",
        "featured": True,
        "price": 15000,
    }

    record = normalize_listing(raw)

    for key in ("id", "make", "model", "images", "status", "featured"):
        assert record[key] == raw[key]


def test_normalize_does_not_mutate_input() -> None:
    raw = {"id": "1", "price": "7000"}

    normalize_listing(raw)

    assert raw == {"id": "1", "price": "7000"}


@pytest.mark.parametrize(
    "raw",
    [
        {"id": "1", "price": "7000"},
        {"id": "2"},
        {"id": "3", "price": None, "created_at": "2025-01-01T00:00:00Z"},
        {"id": "4", "price": "garbage", "updated_at": None},
        {"id": "5", "price": Decimal("12000.00"), "extra": [1, 2]},
    ],
)
def test_normalize_is_idempotent(raw: dict) -> None:
    once = normalize_listing(raw)

    assert normalize_listing(once) == once
