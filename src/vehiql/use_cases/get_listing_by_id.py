"""Get listing by ID use case."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from vehiql.domain.errors import NotFoundError, ValidationError
from vehiql.domain.normalizer import normalize_listing
from vehiql.ports.listing_repository import ListingRepository


def validate_listing_id(listing_id: str) -> None:
    """
    Raises:
        ValidationError: If listing_id is not a valid UUID
    """
    try:
        UUID(listing_id)
    except ValueError:
        raise ValidationError(
            errors=[
                {
                    "field": "listing_id",
                    "message": "Must be a valid UUID format",
                    "code": "INVALID_UUID",
                }
            ]
        )


@dataclass(frozen=True, slots=True)
class GetListingByIdResponse:
    listing: dict[str, Any]


class GetListingById:
    """
    Use case for retrieving a single listing by ID.

    Listings of every status are returned; a sold car's page stays reachable.
    """

    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self, listing_id: str) -> GetListingByIdResponse:
        """
        Raises:
            ValidationError: If listing_id is not a valid UUID format
            NotFoundError: If the listing doesn't exist
        """
        validate_listing_id(listing_id)

        record = self._repository.get_by_id(listing_id)
        if record is None:
            raise NotFoundError(resource="Listing", identifier=listing_id)

        return GetListingByIdResponse(listing=normalize_listing(record))
