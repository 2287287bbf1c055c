from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from vehiql.domain.listing import (
    DashboardStats,
    FacetSet,
    ListingChanges,
    ListingDraft,
    ListingQuery,
    SortBy,
)
from vehiql.entrypoints.http.dtos.admin import (
    DashboardStatsDTO,
    ListingCreateDTO,
    ListingUpdateDTO,
)
from vehiql.entrypoints.http.dtos.listings import (
    CatalogFailureDTO,
    CatalogPageDTO,
    ListingDTO,
    ListingFiltersDTO,
    ListingsQueryDTO,
    PaginationDTO,
    PriceRangeDTO,
)
from vehiql.use_cases.browse_listings import BrowseListingsResponse


class ListingMapper:
    """Maps between REST DTOs and domain models for listings."""

    @staticmethod
    def to_domain_query(dto: ListingsQueryDTO) -> ListingQuery:
        """
        Converts query params to a domain query.

        Blank prices mean "no bound"; a page below 1 is clamped to 1 and
        an unknown sort key resolves to newest.
        """
        return ListingQuery(
            page=max(dto.page, 1),
            limit=dto.limit,
            search=dto.search,
            make=dto.make,
            model=dto.model,
            body_type=dto.body_type,
            fuel_type=dto.fuel_type,
            transmission=dto.transmission,
            min_price=Decimal(dto.min_price) if dto.min_price else Decimal("0"),
            max_price=Decimal(dto.max_price) if dto.max_price else None,
            sort_by=SortBy.parse(dto.sort_by),
        )

    @staticmethod
    def to_listing_response(record: Mapping[str, Any]) -> ListingDTO:
        """
        Converts a normalized listing record to its response DTO.

        Handles Decimal → float conversion at the boundary.
        """
        return ListingDTO.model_validate(
            {
                **record,
                "id": str(record.get("id")),
                "price": float(record.get("price") or 0),
                "images": list(record.get("images") or []),
                "featured": bool(record.get("featured")),
            }
        )

    @staticmethod
    def to_catalog_response(result: BrowseListingsResponse) -> CatalogPageDTO | CatalogFailureDTO:
        if not result.success or result.pagination is None:
            return CatalogFailureDTO(error=result.error or "Catalog query failed")

        return CatalogPageDTO(
            data=[ListingMapper.to_listing_response(record) for record in result.listings],
            pagination=PaginationDTO(
                total=result.pagination.total,
                page=result.pagination.page,
                limit=result.pagination.limit,
                pages=result.pagination.pages,
            ),
        )

    @staticmethod
    def to_filters_response(facets: FacetSet) -> ListingFiltersDTO:
        """Facet sets are unordered; they are emitted sorted for stable responses."""
        return ListingFiltersDTO(
            makes=sorted(facets.makes),
            body_types=sorted(facets.body_types),
            fuel_types=sorted(facets.fuel_types),
            transmissions=sorted(facets.transmissions),
            price_range=PriceRangeDTO(
                min=float(facets.price_range.min),
                max=float(facets.price_range.max),
            ),
        )

    @staticmethod
    def to_draft(dto: ListingCreateDTO) -> ListingDraft:
        return ListingDraft(**dto.model_dump())

    @staticmethod
    def to_changes(dto: ListingUpdateDTO) -> ListingChanges:
        return ListingChanges(**dto.model_dump(exclude_unset=True))

    @staticmethod
    def to_dashboard_response(stats: DashboardStats) -> DashboardStatsDTO:
        return DashboardStatsDTO(
            total=stats.total,
            available=stats.available,
            sold=stats.sold,
            unavailable=stats.unavailable,
            featured=stats.featured,
            recent_listings=[ListingMapper.to_listing_response(row) for row in stats.recent],
        )
