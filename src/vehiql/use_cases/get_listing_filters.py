from __future__ import annotations

from vehiql.domain.listing import FACET_FIELDS, FacetSet, PriceRange
from vehiql.domain.normalizer import coerce_price
from vehiql.domain.predicates import available_only
from vehiql.ports.listing_repository import ListingRepository


class GetListingFilters:
    """
    Derive the filter facets offered to buyers.

    Scans every AVAILABLE listing once and collects the distinct non-empty
    makes, body types, fuel types and transmissions, plus the observed
    price bounds (0..0 for an empty catalog).

    Recomputed on every call; store failures propagate (no partial facets).
    """

    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self) -> FacetSet:
        rows = self._repository.list_rows([available_only()])

        values: dict[str, set[str]] = {name: set() for name in FACET_FIELDS}
        for row in rows:
            for name in FACET_FIELDS:
                value = row.get(name)
                if value:
                    values[name].add(value)

        prices = [coerce_price(row.get("price")) for row in rows]
        price_range = PriceRange(min=min(prices), max=max(prices)) if prices else PriceRange()

        return FacetSet(
            makes=frozenset(values["make"]),
            body_types=frozenset(values["body_type"]),
            fuel_types=frozenset(values["fuel_type"]),
            transmissions=frozenset(values["transmission"]),
            price_range=price_range,
        )
