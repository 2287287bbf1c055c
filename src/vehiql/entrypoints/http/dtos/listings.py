from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PRICE_PATTERN = r"^\d+(\.\d{1,2})?$"


class CamelModel(BaseModel):
    """Response/body models are camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ListingDTO(CamelModel):
    id: str
    make: str | None = None
    model: str | None = None
    year: int | None = None
    price: float = 0
    mileage: int | None = None
    color: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    body_type: str | None = None
    seats: int | None = None
    description: str | None = None
    images: list[str] = Field(default_factory=list)
    status: str | None = None
    featured: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ListingsQueryDTO(BaseModel):
    """Query parameters for browsing the public catalog."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "page": 1,
                "limit": 6,
                "search": "cre",
                "make": "Hyundai",
                "body_type": "SUV",
                "min_price": "10000",
                "max_price": "20000",
                "sort_by": "priceAsc",
            }
        }
    )

    page: int = Field(
        default=1,
        description="1-based page number (values below 1 are treated as 1)",
        examples=[1],
        le=10_000,
    )
    limit: int = Field(
        default=6,
        description="Listings per page",
        examples=[6],
        ge=1,
        le=100,
    )
    search: str = Field(
        default="",
        description="Case-insensitive partial match on make or model",
        examples=["civic"],
        max_length=100,
    )
    make: str = Field(default="", description="Exact make", examples=["Honda"])
    model: str = Field(default="", description="Exact model", examples=["City"])
    body_type: str = Field(default="", description="Exact body type", examples=["Sedan"])
    fuel_type: str = Field(default="", description="Exact fuel type", examples=["Petrol"])
    transmission: str = Field(
        default="", description="Exact transmission", examples=["Automatic"]
    )
    min_price: str | None = Field(
        default=None,
        description="Minimum price (inclusive, decimal as string)",
        examples=["10000"],
        pattern=PRICE_PATTERN,
    )
    max_price: str | None = Field(
        default=None,
        description="Maximum price (inclusive, decimal as string)",
        examples=["20000.00"],
        pattern=PRICE_PATTERN,
    )
    sort_by: str = Field(
        default="newest",
        description="newest | oldest | priceAsc | priceDesc (unknown values mean newest)",
        examples=["priceAsc"],
    )


class PaginationDTO(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class CatalogPageDTO(BaseModel):
    success: Literal[True] = True
    data: list[ListingDTO]
    pagination: PaginationDTO


class CatalogFailureDTO(BaseModel):
    success: Literal[False] = False
    error: str


class PriceRangeDTO(BaseModel):
    min: float
    max: float


class ListingFiltersDTO(CamelModel):
    makes: list[str]
    body_types: list[str]
    fuel_types: list[str]
    transmissions: list[str]
    price_range: PriceRangeDTO
