from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from vehiql.domain.listing import SortBy, Window
from vehiql.domain.predicates import Predicate

Record = dict[str, Any]


@dataclass(frozen=True)
class SearchResult:
    """One window of raw rows plus the size of the full filtered set."""

    rows: list[Record] = field(default_factory=list)
    total_count: int = 0  # Total matching rows before windowing


class ListingRepository(ABC):
    """
    Port for listing storage.

    Rows are returned raw (plain dicts keyed by column name); callers
    normalize them. Predicates are AND-combined.

    Contract (Preconditions):
        - predicates, sort and window are built and validated by the caller (UseCase)
        - Implementations trust inputs are valid and do not re-validate
        - Store failures surface as RepositoryError
    """

    @abstractmethod
    def search(
        self, predicates: Sequence[Predicate], sort: SortBy, window: Window
    ) -> SearchResult:
        """
        Return one sorted window of matching rows and the total match count.

        Raises:
            RepositoryError: If the store is unreachable or rejects the query
        """
        ...

    @abstractmethod
    def list_rows(
        self, predicates: Sequence[Predicate], sort: SortBy | None = None
    ) -> list[Record]:
        """Return every matching row, unwindowed."""
        ...

    @abstractmethod
    def count(self, predicates: Sequence[Predicate]) -> int: ...

    @abstractmethod
    def get_by_id(self, listing_id: str) -> Record | None: ...

    @abstractmethod
    def add(self, values: Mapping[str, Any]) -> Record:
        """Insert a listing; the store assigns id and timestamps."""
        ...

    @abstractmethod
    def update(self, listing_id: str, values: Mapping[str, Any]) -> Record | None:
        """Apply a partial update; None when the listing does not exist."""
        ...

    @abstractmethod
    def delete(self, listing_id: str) -> bool:
        """Delete a listing; False when it did not exist."""
        ...
