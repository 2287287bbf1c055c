"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons (authorizer, image store) use lru_cache.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from vehiql.adapters.cloudinary_image_store import CloudinaryImageStore
from vehiql.adapters.postgres_listing_repository import PostgresListingRepository
from vehiql.domain.access import Authorizer, Principal
from vehiql.infra import config
from vehiql.infra.db.session import get_session
from vehiql.ports.image_store import ImageStore
from vehiql.ports.listing_repository import ListingRepository
from vehiql.use_cases.browse_listings import BrowseListings
from vehiql.use_cases.get_dashboard_stats import GetDashboardStats
from vehiql.use_cases.get_featured_listings import GetFeaturedListings
from vehiql.use_cases.get_listing_by_id import GetListingById
from vehiql.use_cases.get_listing_filters import GetListingFilters
from vehiql.use_cases.manage_listings import (
    CreateListing,
    DeleteListing,
    UpdateListing,
    UpdateListingStatus,
)
from vehiql.use_cases.search_admin_listings import SearchAdminListings
from vehiql.use_cases.upload_listing_image import UploadListingImage


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() context manager commits on success,
    rolls back on exception and always closes the session.

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


def get_listing_repository(db: Session = Depends(get_db)) -> ListingRepository:
    return PostgresListingRepository(session=db)


@lru_cache
def get_image_store() -> ImageStore:
    return CloudinaryImageStore(folder=config.image_folder())


@lru_cache
def get_authorizer() -> Authorizer:
    return Authorizer(config.admin_policy())


# ==============================================================================
# Identity
# ==============================================================================


def get_principal(
    x_user_id: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Principal | None:
    """
    Caller identity as forwarded by the identity proxy.

    Returns None for anonymous requests.
    """
    if not x_user_id:
        return None
    return Principal(user_id=x_user_id, email=x_user_email or "", role=x_user_role or "")


def require_admin(
    principal: Principal | None = Depends(get_principal),
    authorizer: Authorizer = Depends(get_authorizer),
) -> Principal:
    """
    Raises:
        UnauthorizedError: Anonymous caller
        ForbiddenError: Caller is not an administrator
    """
    return authorizer.require_admin(principal)


# ==============================================================================
# Public use cases
# ==============================================================================


def get_browse_listings_use_case(
    repository: ListingRepository = Depends(get_listing_repository),
) -> BrowseListings:
    """
    Factory function that returns a configured BrowseListings use case.

    Called per-request, so each request gets a fresh repository bound to
    its own session.
    """
    return BrowseListings(listing_repository=repository)


def get_listing_filters_use_case(
    repository: ListingRepository = Depends(get_listing_repository),
) -> GetListingFilters:
    return GetListingFilters(listing_repository=repository)


def get_featured_listings_use_case(
    repository: ListingRepository = Depends(get_listing_repository),
) -> GetFeaturedListings:
    return GetFeaturedListings(listing_repository=repository)


def get_listing_by_id_use_case(
    repository: ListingRepository = Depends(get_listing_repository),
) -> GetListingById:
    return GetListingById(listing_repository=repository)


# ==============================================================================
# Admin use cases
# ==============================================================================


def get_search_admin_listings_use_case(
    repository: ListingRepository = Depends(get_listing_repository),
) -> SearchAdminListings:
    return SearchAdminListings(listing_repository=repository)


def get_create_listing_use_case(
    repository: ListingRepository = Depends(get_listing_repository),
) -> CreateListing:
    return CreateListing(listing_repository=repository)


def get_update_listing_use_case(
    repository: ListingRepository = Depends(get_listing_repository),
) -> UpdateListing:
    return UpdateListing(listing_repository=repository)


def get_update_listing_status_use_case(
    repository: ListingRepository = Depends(get_listing_repository),
) -> UpdateListingStatus:
    return UpdateListingStatus(listing_repository=repository)


def get_delete_listing_use_case(
    repository: ListingRepository = Depends(get_listing_repository),
    image_store: ImageStore = Depends(get_image_store),
) -> DeleteListing:
    return DeleteListing(listing_repository=repository, image_store=image_store)


def get_dashboard_stats_use_case(
    repository: ListingRepository = Depends(get_listing_repository),
) -> GetDashboardStats:
    return GetDashboardStats(listing_repository=repository)


def get_upload_listing_image_use_case(
    image_store: ImageStore = Depends(get_image_store),
) -> UploadListingImage:
    return UploadListingImage(image_store=image_store)
