from __future__ import annotations

import os


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def pool_size() -> int:
    return _int_env("DB_POOL_SIZE", 10)


def max_overflow() -> int:
    return _int_env("DB_MAX_OVERFLOW", 20)


def pool_recycle_seconds() -> int:
    return _int_env("DB_POOL_RECYCLE_SECONDS", 3600)
