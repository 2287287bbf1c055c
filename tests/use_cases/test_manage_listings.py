"""Tests for the administrative listing mutations."""

from __future__ import annotations

import uuid
from decimal import Decimal
from unittest.mock import Mock

import pytest

from vehiql.adapters.in_memory_listing_repository import InMemoryListingRepository
from vehiql.domain.errors import ImageStoreError, NotFoundError, ValidationError
from vehiql.domain.listing import ListingChanges, ListingDraft, ListingValidationError
from vehiql.ports.image_store import ImageStore
from vehiql.use_cases.manage_listings import (
    CreateListing,
    DeleteListing,
    UpdateListing,
    UpdateListingStatus,
    UpdateListingStatusRequest,
)

IMAGE_A = "https://res.cloudinary.com/demo/image/upload/v1/cars/a.jpg"
IMAGE_B = "https://res.cloudinary.com/demo/image/upload/v2/cars/b.png"
LISTING_ID = str(uuid.UUID("11111111-1111-1111-1111-111111111111"))
MISSING_ID = str(uuid.UUID("22222222-2222-2222-2222-222222222222"))


@pytest.fixture()
def repository() -> InMemoryListingRepository:
    return InMemoryListingRepository(
        [
            {
                "id": LISTING_ID,
                "make": "Honda",
                "model": "City",
                "price": Decimal("12000"),
                "images": [IMAGE_A, "https://example.com/no-public-id.jpg", IMAGE_B],
                "status": "AVAILABLE",
                "featured": False,
            }
        ]
    )


@pytest.fixture()
def image_store() -> Mock:
    return Mock(spec=ImageStore)


def draft(**overrides: object) -> ListingDraft:
    values: dict = {
        "make": "Tata",
        "model": "Nexon",
        "year": 2023,
        "price": Decimal("9500"),
        "mileage": 1200,
        "images": ["junk", IMAGE_A],
    }
    values.update(overrides)
    return ListingDraft(**values)


# ==============================================================================
# CreateListing
# ==============================================================================


def test_create_stores_valid_images_only(repository: InMemoryListingRepository) -> None:
    created = CreateListing(repository).execute(draft())

    assert created["images"] == [IMAGE_A]
    assert created["status"] == "AVAILABLE"
    assert repository.get_by_id(created["id"]) is not None


def test_create_returns_normalized_listing(repository: InMemoryListingRepository) -> None:
    created = CreateListing(repository).execute(draft())

    assert created["price"] == Decimal("9500")
    assert created["created_at"] is not None


def test_create_without_valid_images_stores_nothing(repository: InMemoryListingRepository) -> None:
    with pytest.raises(ListingValidationError):
        CreateListing(repository).execute(draft(images=["junk"]))

    assert repository.count([]) == 1


# ==============================================================================
# UpdateListing
# ==============================================================================


def test_update_changes_supplied_fields(repository: InMemoryListingRepository) -> None:
    updated = UpdateListing(repository).execute(LISTING_ID, ListingChanges(price=Decimal("11000")))

    assert updated["price"] == Decimal("11000")
    assert updated["make"] == "Honda"
    assert len(updated["images"]) == 3


def test_update_replaces_images(repository: InMemoryListingRepository) -> None:
    updated = UpdateListing(repository).execute(LISTING_ID, ListingChanges(images=[IMAGE_B]))

    assert updated["images"] == [IMAGE_B]


def test_update_missing_listing(repository: InMemoryListingRepository) -> None:
    with pytest.raises(NotFoundError):
        UpdateListing(repository).execute(MISSING_ID, ListingChanges(make="Kia"))


def test_update_malformed_id(repository: InMemoryListingRepository) -> None:
    with pytest.raises(ValidationError) as exc_info:
        UpdateListing(repository).execute("not-a-uuid", ListingChanges(make="Kia"))

    assert exc_info.value.errors[0]["code"] == "INVALID_UUID"


# ==============================================================================
# UpdateListingStatus
# ==============================================================================


def test_mark_sold(repository: InMemoryListingRepository) -> None:
    updated = UpdateListingStatus(repository).execute(
        LISTING_ID, UpdateListingStatusRequest(status="SOLD")
    )

    assert updated["status"] == "SOLD"
    assert updated["featured"] is False


def test_toggle_featured(repository: InMemoryListingRepository) -> None:
    updated = UpdateListingStatus(repository).execute(
        LISTING_ID, UpdateListingStatusRequest(featured=True)
    )

    assert updated["featured"] is True
    assert updated["status"] == "AVAILABLE"


def test_unknown_status_is_rejected(repository: InMemoryListingRepository) -> None:
    with pytest.raises(ListingValidationError):
        UpdateListingStatus(repository).execute(
            LISTING_ID, UpdateListingStatusRequest(status="RESERVED")
        )

    assert repository.get_by_id(LISTING_ID)["status"] == "AVAILABLE"  # type: ignore[index]


# ==============================================================================
# DeleteListing
# ==============================================================================


def test_delete_removes_images_then_listing(
    repository: InMemoryListingRepository, image_store: Mock
) -> None:
    DeleteListing(repository, image_store).execute(LISTING_ID)

    deleted = [call.args[0] for call in image_store.delete.call_args_list]
    assert deleted == ["cars/a", "cars/b"]
    assert repository.get_by_id(LISTING_ID) is None


def test_delete_survives_image_store_failures(
    repository: InMemoryListingRepository, image_store: Mock
) -> None:
    image_store.delete.side_effect = [ImageStoreError("boom"), None]

    DeleteListing(repository, image_store).execute(LISTING_ID)

    assert image_store.delete.call_count == 2
    assert repository.get_by_id(LISTING_ID) is None


def test_delete_missing_listing(repository: InMemoryListingRepository, image_store: Mock) -> None:
    with pytest.raises(NotFoundError):
        DeleteListing(repository, image_store).execute(MISSING_ID)

    image_store.delete.assert_not_called()
