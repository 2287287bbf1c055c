from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status

from vehiql.entrypoints.http.dependencies import (
    get_create_listing_use_case,
    get_dashboard_stats_use_case,
    get_delete_listing_use_case,
    get_search_admin_listings_use_case,
    get_update_listing_status_use_case,
    get_update_listing_use_case,
    get_upload_listing_image_use_case,
    require_admin,
)
from vehiql.entrypoints.http.dtos.admin import (
    DashboardStatsDTO,
    ListingCreateDTO,
    ListingStatusUpdateDTO,
    ListingUpdateDTO,
    UploadResponseDTO,
)
from vehiql.entrypoints.http.dtos.listings import ListingDTO
from vehiql.entrypoints.http.error_responses import ERROR_RESPONSES
from vehiql.entrypoints.http.mappers.listing_mapper import ListingMapper
from vehiql.use_cases.get_dashboard_stats import GetDashboardStats
from vehiql.use_cases.manage_listings import (
    CreateListing,
    DeleteListing,
    UpdateListing,
    UpdateListingStatus,
    UpdateListingStatusRequest,
)
from vehiql.use_cases.search_admin_listings import SearchAdminListings
from vehiql.use_cases.upload_listing_image import UploadListingImage

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
    responses={401: ERROR_RESPONSES[401], 403: ERROR_RESPONSES[403]},
)


@router.get("/listings", response_model=list[ListingDTO], summary="Search inventory")
def search_listings(
    search: str = Query(default="", max_length=100, description="Matches make, model or color"),
    use_case: SearchAdminListings = Depends(get_search_admin_listings_use_case),
) -> list[ListingDTO]:
    return [ListingMapper.to_listing_response(record) for record in use_case.execute(search)]


@router.post(
    "/listings",
    response_model=ListingDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create listing",
    responses={422: ERROR_RESPONSES[422]},
)
def create_listing(
    body: ListingCreateDTO,
    use_case: CreateListing = Depends(get_create_listing_use_case),
) -> ListingDTO:
    record = use_case.execute(ListingMapper.to_draft(body))
    return ListingMapper.to_listing_response(record)


@router.patch(
    "/listings/{listing_id}",
    response_model=ListingDTO,
    summary="Update listing",
    responses={404: ERROR_RESPONSES[404], 422: ERROR_RESPONSES[422]},
)
def update_listing(
    listing_id: str,
    body: ListingUpdateDTO,
    use_case: UpdateListing = Depends(get_update_listing_use_case),
) -> ListingDTO:
    record = use_case.execute(listing_id, ListingMapper.to_changes(body))
    return ListingMapper.to_listing_response(record)


@router.patch(
    "/listings/{listing_id}/status",
    response_model=ListingDTO,
    summary="Change status or featured flag",
    responses={404: ERROR_RESPONSES[404], 422: ERROR_RESPONSES[422]},
)
def update_listing_status(
    listing_id: str,
    body: ListingStatusUpdateDTO,
    use_case: UpdateListingStatus = Depends(get_update_listing_status_use_case),
) -> ListingDTO:
    record = use_case.execute(
        listing_id, UpdateListingStatusRequest(status=body.status, featured=body.featured)
    )
    return ListingMapper.to_listing_response(record)


@router.delete(
    "/listings/{listing_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete listing and its images",
    responses={404: ERROR_RESPONSES[404]},
)
def delete_listing(
    listing_id: str,
    use_case: DeleteListing = Depends(get_delete_listing_use_case),
) -> Response:
    use_case.execute(listing_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/dashboard", response_model=DashboardStatsDTO, summary="Inventory counts")
def get_dashboard(
    use_case: GetDashboardStats = Depends(get_dashboard_stats_use_case),
) -> DashboardStatsDTO:
    return ListingMapper.to_dashboard_response(use_case.execute())


@router.post(
    "/uploads",
    response_model=UploadResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a listing image",
)
def upload_image(
    file: UploadFile = File(...),
    use_case: UploadListingImage = Depends(get_upload_listing_image_use_case),
) -> UploadResponseDTO:
    content = file.file.read()
    url = use_case.execute(content, file.filename or "upload")
    return UploadResponseDTO(url=url)
