from __future__ import annotations

import os

from vehiql.domain.access import AdminPolicy

_TRUTHY = {"1", "true", "yes", "on"}


def admin_policy() -> AdminPolicy:
    """
    Build the admin policy from the environment.

    ADMIN_EMAILS: comma separated allowlist
    ADMIN_OVERRIDE: grant admin to every authenticated caller (local development only)
    ADMIN_ROLE: role name asserted by the identity provider (default ADMIN)
    """
    emails = os.getenv("ADMIN_EMAILS", "")
    return AdminPolicy(
        admin_emails=frozenset(e.strip() for e in emails.split(",") if e.strip()),
        override=os.getenv("ADMIN_OVERRIDE", "false").strip().lower() in _TRUTHY,
        admin_role=os.getenv("ADMIN_ROLE", "ADMIN"),
    )


def image_folder() -> str:
    return os.getenv("IMAGE_FOLDER", "cars")


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
