from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from vehiql.domain.errors import RepositoryError
from vehiql.domain.listing import ListingQuery, Pagination
from vehiql.domain.normalizer import normalize_listing
from vehiql.domain.predicates import build_catalog_predicates
from vehiql.ports.listing_repository import ListingRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BrowseListingsResponse:
    success: bool
    listings: list[dict[str, Any]] = field(default_factory=list)
    pagination: Pagination | None = None
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> BrowseListingsResponse:
        return cls(success=False, error=error)


class BrowseListings:
    """
    Public catalog query: filters, sort and one page of AVAILABLE listings.

    Filtering lives in the predicate builder and the repository; this use
    case validates the query, normalizes the returned rows and assembles
    pagination metadata from the repository's total count.

    A store failure is returned as an unsuccessful response instead of
    raised, so the caller can render an empty state.
    """

    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self, query: ListingQuery) -> BrowseListingsResponse:
        """
        Execute catalog query.

        Args:
            query: Filters, sort key and page

        Returns:
            Successful response with normalized listings and pagination,
            or an unsuccessful response carrying the store error message

        Raises:
            PagingValidationError: If page or limit are below 1
            FilterValidationError: If price bounds are not Decimal or are NaN
        """
        query.validate()

        try:
            result = self._repository.search(
                predicates=build_catalog_predicates(query),
                sort=query.sort_by,
                window=query.window(),
            )
        except RepositoryError as exc:
            logger.warning(
                "Catalog query failed",
                extra={"error": exc.message, "page": query.page, "limit": query.limit},
            )
            return BrowseListingsResponse.failure(exc.message)

        return BrowseListingsResponse(
            success=True,
            listings=[normalize_listing(row) for row in result.rows],
            pagination=Pagination.compute(
                total=result.total_count, page=query.page, limit=query.limit
            ),
        )
