from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from vehiql.domain.listing import SortBy, Window
from vehiql.domain.normalizer import coerce_price
from vehiql.domain.predicates import Contains, Equals, Predicate, Range
from vehiql.ports.listing_repository import ListingRepository, Record, SearchResult


class InMemoryListingRepository(ListingRepository):
    """
    Canonical contract implementation for tests.

    - Stores raw rows in insertion order (storage quirks included)
    - Applies AND-semantics predicates
    - Sorts like PostgreSQL: NULLs last ascending, first descending
    - Applies the window AFTER filtering and sorting
    - Returns total_count of matching rows before windowing
    """

    def __init__(self, rows: list[Record] | None = None) -> None:
        self._rows = [dict(row) for row in rows or []]

    def search(
        self, predicates: Sequence[Predicate], sort: SortBy, window: Window
    ) -> SearchResult:
        # Trust that UseCase has validated inputs (contract programming)
        matches = self.list_rows(predicates, sort)
        total_count = len(matches)  # Count BEFORE windowing

        start = window.offset
        end = window.offset + window.limit

        return SearchResult(rows=matches[start:end], total_count=total_count)

    def list_rows(
        self, predicates: Sequence[Predicate], sort: SortBy | None = None
    ) -> list[Record]:
        matches = [row for row in self._rows if self._matches(row, predicates)]
        if sort is not None:
            matches = self._sorted(matches, sort)
        return [dict(row) for row in matches]

    def count(self, predicates: Sequence[Predicate]) -> int:
        return sum(1 for row in self._rows if self._matches(row, predicates))

    def get_by_id(self, listing_id: str) -> Record | None:
        row = self._find(listing_id)
        return dict(row) if row is not None else None

    def add(self, values: Mapping[str, Any]) -> Record:
        now = datetime.now(timezone.utc)
        row = {
            "id": str(uuid.uuid4()),
            "status": "AVAILABLE",
            "featured": False,
            **values,
            "created_at": now,
            "updated_at": now,
        }
        self._rows.append(row)
        return dict(row)

    def update(self, listing_id: str, values: Mapping[str, Any]) -> Record | None:
        row = self._find(listing_id)
        if row is None:
            return None
        row.update(values)
        row["updated_at"] = datetime.now(timezone.utc)
        return dict(row)

    def delete(self, listing_id: str) -> bool:
        row = self._find(listing_id)
        if row is None:
            return False
        self._rows.remove(row)
        return True

    def _find(self, listing_id: str) -> Record | None:
        for row in self._rows:
            if str(row.get("id")) == listing_id:
                return row
        return None

    def _matches(self, row: Record, predicates: Sequence[Predicate]) -> bool:
        return all(self._matches_one(row, predicate) for predicate in predicates)

    def _matches_one(self, row: Record, predicate: Predicate) -> bool:
        if isinstance(predicate, Equals):
            return row.get(predicate.field) == predicate.value
        if isinstance(predicate, Contains):
            needle = predicate.substring.lower()
            return any(needle in str(row.get(name) or "").lower() for name in predicate.fields)
        if isinstance(predicate, Range):
            value = coerce_price(row.get(predicate.field))
            if predicate.minimum is not None and value < predicate.minimum:
                return False
            if predicate.maximum is not None and value > predicate.maximum:
                return False
            return True
        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def _sorted(self, rows: list[Record], sort: SortBy) -> list[Record]:
        if sort.column == "price":
            # Python's sort is stable, so ties keep insertion order
            return sorted(rows, key=lambda row: coerce_price(row.get("price")), reverse=sort.descending)

        present = [row for row in rows if row.get(sort.column) is not None]
        missing = [row for row in rows if row.get(sort.column) is None]
        present.sort(key=lambda row: row[sort.column], reverse=sort.descending)
        return missing + present if sort.descending else present + missing
