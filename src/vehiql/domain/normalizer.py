"""Listing record normalization.

Stored rows come back with storage quirks: prices as NUMERIC, float or
decimal strings (or missing entirely), and timestamps that may be absent.
Everything leaving the read paths goes through ``normalize_listing`` so
callers always see the same shape.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

ZERO = Decimal("0")

TIMESTAMP_FIELDS = ("created_at", "updated_at")


def coerce_price(value: Any) -> Decimal:
    """
    Coerce a stored price to a Decimal.

    Falsy values (None, "", 0) become 0. Values that cannot be cast, or
    that are not finite, also become 0. Never raises.
    """
    if not value or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO

    if isinstance(value, (int, float, str)):
        try:
            # str() first so floats keep their short repr (0.1 -> "0.1")
            price = Decimal(str(value).strip())
        except InvalidOperation:
            return ZERO
        return price if price.is_finite() else ZERO

    return ZERO


def normalize_listing(record: Mapping[str, Any]) -> dict[str, Any]:
    """
    Produce the canonical form of a stored listing record.

    All fields are copied as-is except:
    - price: coerced with ``coerce_price``
    - created_at / updated_at: stored value, or None when absent

    normalize_listing(normalize_listing(x)) == normalize_listing(x)
    """
    normalized = dict(record)
    normalized["price"] = coerce_price(record.get("price"))
    for field in TIMESTAMP_FIELDS:
        normalized[field] = record.get(field)
    return normalized
