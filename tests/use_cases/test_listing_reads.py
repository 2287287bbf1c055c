"""Tests for single-listing, featured, admin inventory, dashboard and upload use cases."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest

from vehiql.adapters.in_memory_listing_repository import InMemoryListingRepository
from vehiql.domain.errors import NotFoundError, ValidationError
from vehiql.domain.listing import DashboardStats, PagingValidationError
from vehiql.ports.image_store import ImageStore
from vehiql.use_cases.get_dashboard_stats import GetDashboardStats
from vehiql.use_cases.get_featured_listings import GetFeaturedListings
from vehiql.use_cases.get_listing_by_id import GetListingById
from vehiql.use_cases.search_admin_listings import SearchAdminListings
from vehiql.use_cases.upload_listing_image import MAX_IMAGE_BYTES, UploadListingImage

BASE_TIME = datetime(2025, 6, 1, tzinfo=timezone.utc)


def make_id(n: int) -> str:
    return str(uuid.UUID(int=n))


@pytest.fixture()
def repository() -> InMemoryListingRepository:
    specs = [
        ("Suzuki", "Swift", "Red", "AVAILABLE", True),
        ("Honda", "City", "White", "AVAILABLE", False),
        ("Hyundai", "Creta", "Black", "AVAILABLE", True),
        ("Tata", "Nexon", "Red", "SOLD", True),
        ("Kia", "Seltos", "Grey", "UNAVAILABLE", False),
        ("Mahindra", "Thar", "Green", "AVAILABLE", True),
        ("Toyota", "Glanza", "Blue", "AVAILABLE", True),
    ]
    return InMemoryListingRepository(
        [
            {
                "id": make_id(index),
                "make": make,
                "model": model,
                "color": color,
                "status": status,
                "featured": featured,
                "price": "10000",
                "created_at": BASE_TIME + timedelta(days=index),
            }
            for index, (make, model, color, status, featured) in enumerate(specs, start=1)
        ]
    )


# ==============================================================================
# GetListingById
# ==============================================================================


def test_get_by_id_returns_normalized_listing(repository: InMemoryListingRepository) -> None:
    response = GetListingById(repository).execute(make_id(1))

    assert response.listing["model"] == "Swift"
    assert response.listing["price"] == Decimal("10000")
    assert response.listing["updated_at"] is None


def test_get_by_id_includes_sold_listings(repository: InMemoryListingRepository) -> None:
    assert GetListingById(repository).execute(make_id(4)).listing["status"] == "SOLD"


def test_get_by_id_missing(repository: InMemoryListingRepository) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        GetListingById(repository).execute(make_id(99))

    assert exc_info.value.context["identifier"] == make_id(99)


def test_get_by_id_malformed(repository: InMemoryListingRepository) -> None:
    with pytest.raises(ValidationError):
        GetListingById(repository).execute("abc")


# ==============================================================================
# GetFeaturedListings
# ==============================================================================


def test_featured_are_newest_available_first(repository: InMemoryListingRepository) -> None:
    featured = GetFeaturedListings(repository).execute()

    # Tata Nexon is featured but SOLD
    assert [row["model"] for row in featured] == ["Glanza", "Thar", "Creta"]


def test_featured_limit(repository: InMemoryListingRepository) -> None:
    assert len(GetFeaturedListings(repository).execute(limit=10)) == 4


def test_featured_limit_must_be_positive(repository: InMemoryListingRepository) -> None:
    with pytest.raises(PagingValidationError):
        GetFeaturedListings(repository).execute(limit=0)


# ==============================================================================
# SearchAdminListings
# ==============================================================================


def test_admin_search_sees_every_status(repository: InMemoryListingRepository) -> None:
    rows = SearchAdminListings(repository).execute()

    assert len(rows) == 7
    assert rows[0]["model"] == "Glanza"  # newest first


def test_admin_search_matches_color(repository: InMemoryListingRepository) -> None:
    rows = SearchAdminListings(repository).execute("red")

    assert sorted(row["model"] for row in rows) == ["Nexon", "Swift"]


# ==============================================================================
# GetDashboardStats
# ==============================================================================


def test_dashboard_counts(repository: InMemoryListingRepository) -> None:
    stats = GetDashboardStats(repository).execute()

    assert stats.total == 7
    assert (stats.available, stats.sold, stats.unavailable) == (5, 1, 1)
    assert stats.featured == 5


def test_dashboard_lists_five_newest_listings_of_any_status(
    repository: InMemoryListingRepository,
) -> None:
    recent = GetDashboardStats(repository).execute().recent

    assert [row["model"] for row in recent] == ["Glanza", "Thar", "Seltos", "Nexon", "Creta"]
    assert {row["status"] for row in recent} == {"AVAILABLE", "SOLD", "UNAVAILABLE"}
    assert recent[0]["price"] == Decimal("10000")


def test_dashboard_on_empty_inventory() -> None:
    assert GetDashboardStats(InMemoryListingRepository()).execute() == DashboardStats()


# ==============================================================================
# UploadListingImage
# ==============================================================================


def test_upload_returns_store_url() -> None:
    image_store = Mock(spec=ImageStore)
    image_store.upload.return_value = "https://res.cloudinary.com/demo/image/upload/v1/cars/x.jpg"

    url = UploadListingImage(image_store).execute(b"\xff\xd8", "x.jpg")

    assert url.endswith("cars/x.jpg")
    image_store.upload.assert_called_once_with(b"\xff\xd8", "x.jpg")


@pytest.mark.parametrize("content", [b"", b"0" * (MAX_IMAGE_BYTES + 1)])
def test_upload_rejects_empty_or_oversized(content: bytes) -> None:
    image_store = Mock(spec=ImageStore)

    with pytest.raises(ValidationError):
        UploadListingImage(image_store).execute(content, "x.jpg")

    image_store.upload.assert_not_called()
