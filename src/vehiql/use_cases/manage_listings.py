"""Administrative listing mutations.

Callers are expected to have passed the admin authorization check; these
use cases only enforce listing invariants.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from vehiql.domain.errors import ImageStoreError, NotFoundError
from vehiql.domain.images import public_id_from_url
from vehiql.domain.listing import ListingChanges, ListingDraft, parse_status
from vehiql.domain.normalizer import normalize_listing
from vehiql.ports.image_store import ImageStore
from vehiql.ports.listing_repository import ListingRepository
from vehiql.use_cases.get_listing_by_id import validate_listing_id

logger = logging.getLogger(__name__)


class CreateListing:
    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self, draft: ListingDraft) -> dict[str, Any]:
        """
        Validate and store a new listing.

        Invalid image URLs are dropped; at least one valid one must remain.

        Raises:
            ListingValidationError: If the draft breaks a listing invariant
        """
        draft.validate()
        record = self._repository.add(draft.to_record())
        logger.info("Listing created", extra={"listing_id": record.get("id")})
        return normalize_listing(record)


class UpdateListing:
    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self, listing_id: str, changes: ListingChanges) -> dict[str, Any]:
        """
        Apply a partial update.

        Images are replaced only when the update carries at least one
        valid URL.

        Raises:
            ValidationError: If listing_id is malformed or a value is invalid
            NotFoundError: If the listing doesn't exist
        """
        validate_listing_id(listing_id)
        record = self._repository.update(listing_id, changes.to_record())
        if record is None:
            raise NotFoundError(resource="Listing", identifier=listing_id)
        return normalize_listing(record)


@dataclass(frozen=True, slots=True)
class UpdateListingStatusRequest:
    status: str | None = None
    featured: bool | None = None


class UpdateListingStatus:
    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self, listing_id: str, request: UpdateListingStatusRequest) -> dict[str, Any]:
        """
        Raises:
            ValidationError: If listing_id or status are invalid
            NotFoundError: If the listing doesn't exist
        """
        validate_listing_id(listing_id)

        values: dict[str, Any] = {}
        if request.status is not None:
            values["status"] = parse_status(request.status).value
        if request.featured is not None:
            values["featured"] = request.featured

        record = self._repository.update(listing_id, values)
        if record is None:
            raise NotFoundError(resource="Listing", identifier=listing_id)
        return normalize_listing(record)


class DeleteListing:
    """
    Delete a listing and, best effort, its images.

    A failed image deletion is logged and skipped; it never blocks the
    remaining images or the listing row.
    """

    def __init__(self, listing_repository: ListingRepository, image_store: ImageStore) -> None:
        self._repository = listing_repository
        self._image_store = image_store

    def execute(self, listing_id: str) -> None:
        """
        Raises:
            ValidationError: If listing_id is malformed
            NotFoundError: If the listing doesn't exist
        """
        validate_listing_id(listing_id)

        record = self._repository.get_by_id(listing_id)
        if record is None:
            raise NotFoundError(resource="Listing", identifier=listing_id)

        for url in record.get("images") or []:
            self._delete_image(url)

        if not self._repository.delete(listing_id):
            raise NotFoundError(resource="Listing", identifier=listing_id)

        logger.info("Listing deleted", extra={"listing_id": listing_id})

    def _delete_image(self, url: str) -> None:
        public_id = public_id_from_url(url)
        if public_id is None:
            logger.warning("Skipping image without public id", extra={"url": url})
            return
        try:
            self._image_store.delete(public_id)
        except ImageStoreError as exc:
            logger.warning(
                "Failed to delete listing image",
                extra={"url": url, "public_id": public_id, "error": exc.message},
            )
