from __future__ import annotations

from typing import Any

from vehiql.domain.listing import SortBy
from vehiql.domain.normalizer import normalize_listing
from vehiql.domain.predicates import ADMIN_SEARCH_FIELDS, Contains, Predicate
from vehiql.ports.listing_repository import ListingRepository


class SearchAdminListings:
    """Inventory view for administrators: every status, newest first."""

    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self, search: str = "") -> list[dict[str, Any]]:
        predicates: list[Predicate] = []
        term = search.strip()
        if term:
            predicates.append(Contains(ADMIN_SEARCH_FIELDS, term))

        rows = self._repository.list_rows(predicates, sort=SortBy.NEWEST)
        return [normalize_listing(row) for row in rows]
