from __future__ import annotations

from typing import Any

from vehiql.domain.listing import PagingValidationError, SortBy, Window
from vehiql.domain.normalizer import normalize_listing
from vehiql.domain.predicates import Equals, available_only
from vehiql.ports.listing_repository import ListingRepository

DEFAULT_FEATURED_LIMIT = 3


class GetFeaturedListings:
    """Newest featured listings that are still for sale, for the home page."""

    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self, limit: int = DEFAULT_FEATURED_LIMIT) -> list[dict[str, Any]]:
        if limit < 1:
            raise PagingValidationError("limit must be >= 1")

        result = self._repository.search(
            predicates=[available_only(), Equals("featured", True)],
            sort=SortBy.NEWEST,
            window=Window(offset=0, limit=limit),
        )
        return [normalize_listing(row) for row in result.rows]
