from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from typing import Any

from vehiql.domain.errors import ValidationError
from vehiql.domain.images import filter_valid_image_urls


# ==============================================================================
# Domain Exceptions
# ==============================================================================


class PagingValidationError(ValidationError):
    """Raised when paging parameters are invalid."""

    pass


class FilterValidationError(ValidationError):
    """Raised when filter parameters are invalid."""

    pass


class ListingValidationError(ValidationError):
    """Raised when a listing cannot be created or updated as requested."""

    pass


# ==============================================================================
# Enumerations
# ==============================================================================


class ListingStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"
    SOLD = "SOLD"


class SortBy(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_ASC = "priceAsc"
    PRICE_DESC = "priceDesc"

    @classmethod
    def parse(cls, value: str | None) -> SortBy:
        """Resolve a caller-supplied sort key; unknown or empty values mean NEWEST."""
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST

    @property
    def column(self) -> str:
        if self in (SortBy.PRICE_ASC, SortBy.PRICE_DESC):
            return "price"
        return "created_at"

    @property
    def descending(self) -> bool:
        return self in (SortBy.NEWEST, SortBy.PRICE_DESC)


FACET_FIELDS = ("make", "body_type", "fuel_type", "transmission")


# ==============================================================================
# Catalog query
# ==============================================================================


@dataclass(frozen=True, slots=True)
class Window:
    """Offset + limit slice of a filtered, sorted result set."""

    offset: int = 0
    limit: int = 6


@dataclass(frozen=True, slots=True)
class ListingQuery:
    """
    Public catalog query.

    Empty strings, a zero min_price and a missing (or infinite) max_price
    all mean "no constraint".
    """

    page: int = 1
    limit: int = 6
    search: str = ""
    make: str = ""
    model: str = ""
    body_type: str = ""
    fuel_type: str = ""
    transmission: str = ""
    min_price: Decimal = Decimal("0")
    max_price: Decimal | None = None
    sort_by: SortBy = SortBy.NEWEST

    def validate(self) -> None:
        """
        Validate paging and price parameters.

        Raises:
            PagingValidationError: If page or limit are below 1
            FilterValidationError: If prices are not Decimal, min_price is not
                finite or max_price is NaN
        """
        if self.page < 1:
            raise PagingValidationError("page must be >= 1")
        if self.limit < 1:
            raise PagingValidationError("limit must be >= 1")

        # Guardrails: prevent float leakage past boundary
        if not isinstance(self.min_price, Decimal):
            raise FilterValidationError(
                "min_price must be Decimal (no floats past the boundary)"
            )
        if self.max_price is not None and not isinstance(self.max_price, Decimal):
            raise FilterValidationError(
                "max_price must be Decimal or None (no floats past the boundary)"
            )
        if not self.min_price.is_finite():
            raise FilterValidationError("min_price must be a finite number")
        if self.max_price is not None and self.max_price.is_nan():
            raise FilterValidationError("max_price must be a number")

    def window(self) -> Window:
        return Window(offset=(self.page - 1) * self.limit, limit=self.limit)


@dataclass(frozen=True, slots=True)
class Pagination:
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def compute(cls, total: int, page: int, limit: int) -> Pagination:
        """Build pagination metadata; pages = ceil(total / limit)."""
        return cls(total=total, page=page, limit=limit, pages=-(-total // limit))


# ==============================================================================
# Facets
# ==============================================================================


@dataclass(frozen=True, slots=True)
class PriceRange:
    min: Decimal = Decimal("0")
    max: Decimal = Decimal("0")


@dataclass(frozen=True, slots=True)
class FacetSet:
    makes: frozenset[str] = frozenset()
    body_types: frozenset[str] = frozenset()
    fuel_types: frozenset[str] = frozenset()
    transmissions: frozenset[str] = frozenset()
    price_range: PriceRange = field(default_factory=PriceRange)


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total: int = 0
    available: int = 0
    sold: int = 0
    unavailable: int = 0
    featured: int = 0
    recent: list[dict[str, Any]] = field(default_factory=list)


# ==============================================================================
# Administration
# ==============================================================================


def _require_images(images: list[str]) -> list[str]:
    if not images:
        raise ListingValidationError(
            errors=[{"field": "images", "message": "No images provided", "code": "REQUIRED"}]
        )
    valid = filter_valid_image_urls(images)
    if not valid:
        raise ListingValidationError(
            errors=[
                {
                    "field": "images",
                    "message": "No valid image URLs provided",
                    "code": "INVALID_URL",
                }
            ]
        )
    return valid


def parse_status(value: str) -> ListingStatus:
    try:
        return ListingStatus(value)
    except ValueError:
        raise ListingValidationError(
            errors=[
                {
                    "field": "status",
                    "message": f"Must be one of {[s.value for s in ListingStatus]}",
                    "code": "INVALID_STATUS",
                }
            ]
        )


@dataclass(frozen=True, slots=True)
class ListingDraft:
    """Everything an administrator supplies to publish a new listing."""

    make: str
    model: str
    year: int
    price: Decimal
    mileage: int
    images: list[str]
    color: str = ""
    fuel_type: str = ""
    transmission: str = ""
    body_type: str = ""
    seats: int | None = None
    description: str = ""
    status: str = ListingStatus.AVAILABLE.value
    featured: bool = False

    def validate(self) -> None:
        """
        Validate the draft.

        Raises:
            ListingValidationError: If a field breaks a listing invariant
        """
        errors = []
        if not self.make.strip():
            errors.append({"field": "make", "message": "Must not be empty", "code": "REQUIRED"})
        if not self.model.strip():
            errors.append({"field": "model", "message": "Must not be empty", "code": "REQUIRED"})
        if self.year < 0:
            errors.append({"field": "year", "message": "Must be >= 0", "code": "NEGATIVE"})
        if self.price < 0:
            errors.append({"field": "price", "message": "Must be >= 0", "code": "NEGATIVE"})
        if self.mileage < 0:
            errors.append({"field": "mileage", "message": "Must be >= 0", "code": "NEGATIVE"})
        if self.seats is not None and self.seats < 1:
            errors.append({"field": "seats", "message": "Must be >= 1", "code": "INVALID"})
        if errors:
            raise ListingValidationError(errors=errors)

        parse_status(self.status)
        _require_images(self.images)

    def to_record(self) -> dict[str, Any]:
        """Column values to store. Call ``validate`` first."""
        return {
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "price": self.price,
            "mileage": self.mileage,
            "color": self.color,
            "fuel_type": self.fuel_type,
            "transmission": self.transmission,
            "body_type": self.body_type,
            "seats": self.seats,
            "description": self.description,
            "images": filter_valid_image_urls(self.images),
            "status": parse_status(self.status).value,
            "featured": self.featured,
        }


@dataclass(frozen=True, slots=True)
class ListingChanges:
    """Partial update; None means "leave unchanged"."""

    make: str | None = None
    model: str | None = None
    year: int | None = None
    price: Decimal | None = None
    mileage: int | None = None
    color: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    body_type: str | None = None
    seats: int | None = None
    description: str | None = None
    images: list[str] | None = None
    status: str | None = None
    featured: bool | None = None

    def to_record(self) -> dict[str, Any]:
        """
        Column values to update.

        Raises:
            ListingValidationError: If a supplied value breaks a listing invariant
        """
        if self.price is not None and self.price < 0:
            raise ListingValidationError(
                errors=[{"field": "price", "message": "Must be >= 0", "code": "NEGATIVE"}]
            )
        if self.mileage is not None and self.mileage < 0:
            raise ListingValidationError(
                errors=[{"field": "mileage", "message": "Must be >= 0", "code": "NEGATIVE"}]
            )

        changes: dict[str, Any] = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
        if "status" in changes:
            changes["status"] = parse_status(changes["status"]).value
        # Images are only replaced when at least one valid URL survives
        if self.images:
            changes["images"] = _require_images(self.images)
        else:
            changes.pop("images", None)
        return changes
