"""Catalog filter predicates.

Filters never reach the store as text. Each active filter is a value
object; a query is the conjunction of a list of them, and every repository
adapter lowers them to its own native form (bound SQL parameters, Python
comparisons).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

from vehiql.domain.listing import ListingQuery, ListingStatus


@dataclass(frozen=True, slots=True)
class Equals:
    """Exact, case-sensitive equality."""

    field: str
    value: Any


@dataclass(frozen=True, slots=True)
class Contains:
    """Case-insensitive substring match against ANY of ``fields``."""

    fields: tuple[str, ...]
    substring: str

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("Contains needs at least one field")


@dataclass(frozen=True, slots=True)
class Range:
    """Inclusive numeric range; a None bound is open."""

    field: str
    minimum: Decimal | None = None
    maximum: Decimal | None = None

    def __post_init__(self) -> None:
        if self.minimum is None and self.maximum is None:
            raise ValueError("Range needs at least one bound")


Predicate = Union[Equals, Contains, Range]

SEARCH_FIELDS = ("make", "model")
ADMIN_SEARCH_FIELDS = ("make", "model", "color")
EXACT_FILTER_FIELDS = ("make", "model", "body_type", "fuel_type", "transmission")


def available_only() -> Equals:
    return Equals("status", ListingStatus.AVAILABLE.value)


def build_catalog_predicates(query: ListingQuery) -> list[Predicate]:
    """
    Translate a public catalog query into predicates (AND semantics).

    Only AVAILABLE listings are ever eligible. Every other filter is
    skipped when blank: an empty string, a min_price of 0 and a missing or
    infinite max_price all mean "no constraint".
    """
    predicates: list[Predicate] = [available_only()]

    # blank terms are skipped; others match as typed, surrounding spaces included
    if query.search.strip():
        predicates.append(Contains(SEARCH_FIELDS, query.search))

    for name in EXACT_FILTER_FIELDS:
        value = getattr(query, name)
        if value and value.strip():
            predicates.append(Equals(name, value))

    if query.min_price > 0:
        predicates.append(Range("price", minimum=query.min_price))
    if query.max_price is not None and query.max_price.is_finite():
        predicates.append(Range("price", maximum=query.max_price))

    return predicates
