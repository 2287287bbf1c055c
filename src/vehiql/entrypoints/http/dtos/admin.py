from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from vehiql.entrypoints.http.dtos.listings import CamelModel, ListingDTO


class ListingCreateDTO(CamelModel):
    make: str = Field(min_length=1, max_length=50, examples=["Hyundai"])
    model: str = Field(min_length=1, max_length=50, examples=["Creta"])
    year: int = Field(ge=1900, le=2100, examples=[2023])
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2, examples=["15000.00"])
    mileage: int = Field(default=0, ge=0, examples=[8000])
    color: str = Field(default="", max_length=30, examples=["Black"])
    fuel_type: str = Field(default="", max_length=20, examples=["Diesel"])
    transmission: str = Field(default="", max_length=20, examples=["Automatic"])
    body_type: str = Field(default="", max_length=30, examples=["SUV"])
    seats: int | None = Field(default=None, ge=1, examples=[5])
    description: str = ""
    images: list[str] = Field(
        default_factory=list,
        examples=[["https://res.cloudinary.com/demo/image/upload/v1/cars/creta.jpg"]],
    )
    status: str = Field(default="AVAILABLE", examples=["AVAILABLE"])
    featured: bool = False


class ListingUpdateDTO(CamelModel):
    make: str | None = Field(default=None, min_length=1, max_length=50)
    model: str | None = Field(default=None, min_length=1, max_length=50)
    year: int | None = Field(default=None, ge=1900, le=2100)
    price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    mileage: int | None = Field(default=None, ge=0)
    color: str | None = Field(default=None, max_length=30)
    fuel_type: str | None = Field(default=None, max_length=20)
    transmission: str | None = Field(default=None, max_length=20)
    body_type: str | None = Field(default=None, max_length=30)
    seats: int | None = Field(default=None, ge=1)
    description: str | None = None
    images: list[str] | None = None
    status: str | None = None
    featured: bool | None = None


class ListingStatusUpdateDTO(CamelModel):
    status: str | None = Field(default=None, examples=["SOLD"])
    featured: bool | None = Field(default=None, examples=[False])


class DashboardStatsDTO(CamelModel):
    total: int
    available: int
    sold: int
    unavailable: int
    featured: int
    recent_listings: list[ListingDTO] = Field(default_factory=list)


class UploadResponseDTO(BaseModel):
    url: str
