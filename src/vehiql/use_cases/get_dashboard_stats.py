from __future__ import annotations

from vehiql.domain.listing import DashboardStats, ListingStatus, SortBy, Window
from vehiql.domain.normalizer import normalize_listing
from vehiql.domain.predicates import Equals
from vehiql.ports.listing_repository import ListingRepository

RECENT_LISTINGS_LIMIT = 5


class GetDashboardStats:
    """Inventory counts plus the newest listings (any status) for the admin dashboard."""

    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self) -> DashboardStats:
        def by_status(status: ListingStatus) -> int:
            return self._repository.count([Equals("status", status.value)])

        recent = self._repository.search(
            predicates=[],
            sort=SortBy.NEWEST,
            window=Window(offset=0, limit=RECENT_LISTINGS_LIMIT),
        )

        return DashboardStats(
            total=self._repository.count([]),
            available=by_status(ListingStatus.AVAILABLE),
            sold=by_status(ListingStatus.SOLD),
            unavailable=by_status(ListingStatus.UNAVAILABLE),
            featured=self._repository.count([Equals("featured", True)]),
            recent=[normalize_listing(row) for row in recent.rows],
        )
