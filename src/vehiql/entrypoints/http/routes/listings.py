from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from vehiql.entrypoints.http.dependencies import (
    get_browse_listings_use_case,
    get_featured_listings_use_case,
    get_listing_by_id_use_case,
    get_listing_filters_use_case,
)
from vehiql.entrypoints.http.dtos.listings import (
    CatalogFailureDTO,
    CatalogPageDTO,
    ListingDTO,
    ListingFiltersDTO,
    ListingsQueryDTO,
)
from vehiql.entrypoints.http.error_responses import ERROR_RESPONSES
from vehiql.entrypoints.http.mappers.listing_mapper import ListingMapper
from vehiql.use_cases.browse_listings import BrowseListings
from vehiql.use_cases.get_featured_listings import GetFeaturedListings
from vehiql.use_cases.get_listing_by_id import GetListingById
from vehiql.use_cases.get_listing_filters import GetListingFilters

router = APIRouter(prefix="/listings", tags=["Listings"])


@router.get(
    "",
    response_model=CatalogPageDTO,
    summary="Browse the catalog",
    description="""
    Page through AVAILABLE listings with optional filters.

    ## Filters
    - All filters use AND semantics; blank values are ignored
    - search: case-insensitive partial match on make OR model
    - make / model / body_type / fuel_type / transmission: exact, case-sensitive
    - min_price / max_price: inclusive

    ## Sorting
    newest (default), oldest, priceAsc, priceDesc. Unknown values sort by newest.

    ## Pagination
    `pages = ceil(total / limit)`; `total` counts the whole filtered set.

    ## Example
    ```
    GET /v1/listings?make=Honda&min_price=10000&sort_by=priceAsc&page=1&limit=6
    ```
    """,
    responses={
        503: {
            "model": CatalogFailureDTO,
            "description": "Listing store unavailable; render an empty state",
        },
        422: ERROR_RESPONSES[422],
    },
)
def browse_listings(
    query: Annotated[ListingsQueryDTO, Query()],
    use_case: BrowseListings = Depends(get_browse_listings_use_case),
) -> CatalogPageDTO | JSONResponse:
    """Browse endpoint following parse → execute → map → return pattern."""
    result = use_case.execute(ListingMapper.to_domain_query(query))

    response = ListingMapper.to_catalog_response(result)
    if isinstance(response, CatalogFailureDTO):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )
    return response


@router.get(
    "/filters",
    response_model=ListingFiltersDTO,
    summary="Available filter values",
    description="Distinct makes, body types, fuel types and transmissions "
    "plus the price range, computed over AVAILABLE listings.",
    responses={503: ERROR_RESPONSES[503]},
)
def get_listing_filters(
    use_case: GetListingFilters = Depends(get_listing_filters_use_case),
) -> ListingFiltersDTO:
    return ListingMapper.to_filters_response(use_case.execute())


@router.get(
    "/featured",
    response_model=list[ListingDTO],
    summary="Featured listings",
)
def get_featured_listings(
    limit: int = Query(default=3, ge=1, le=24),
    use_case: GetFeaturedListings = Depends(get_featured_listings_use_case),
) -> list[ListingDTO]:
    return [ListingMapper.to_listing_response(record) for record in use_case.execute(limit)]


@router.get(
    "/{listing_id}",
    response_model=ListingDTO,
    summary="Get listing by ID",
    responses={404: ERROR_RESPONSES[404], 422: ERROR_RESPONSES[422]},
)
def get_listing(
    listing_id: str,
    use_case: GetListingById = Depends(get_listing_by_id_use_case),
) -> ListingDTO:
    result = use_case.execute(listing_id)
    return ListingMapper.to_listing_response(result.listing)
