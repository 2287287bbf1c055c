from __future__ import annotations

import re
from typing import Iterable
from urllib.parse import urlsplit

_VERSION_PREFIX = re.compile(r"^v\d+/")
_EXTENSION = re.compile(r"\.[^/.]+$")


def is_valid_image_url(url: object) -> bool:
    """An image URL must be an absolute http(s) URL with a host."""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def filter_valid_image_urls(urls: Iterable[object]) -> list[str]:
    """Keep valid image URLs in their original order; drop everything else."""
    return [url.strip() for url in urls if is_valid_image_url(url)]  # type: ignore[union-attr]


def public_id_from_url(url: str) -> str | None:
    """
    Derive the image store public id from a delivery URL.

    https://res.cloudinary.com/<cloud>/image/upload/v1234567890/cars/abc.jpg
    -> "cars/abc"

    Returns None when the URL has no "upload" segment.
    """
    segments = url.split("/")
    try:
        upload_index = segments.index("upload")
    except ValueError:
        return None
    if upload_index == len(segments) - 1:
        return None

    path = "/".join(segments[upload_index + 1 :])
    path = _VERSION_PREFIX.sub("", path)
    return _EXTENSION.sub("", path) or None
