"""Who may administer listings.

The policy is plain configuration handed to the Authorizer at construction
time; nothing here is global.
"""

from __future__ import annotations

from dataclasses import dataclass

from vehiql.domain.errors import ForbiddenError, UnauthorizedError


@dataclass(frozen=True, slots=True)
class Principal:
    """Caller identity as asserted by the identity provider."""

    user_id: str
    email: str = ""
    role: str = ""


@dataclass(frozen=True, slots=True)
class AdminPolicy:
    admin_emails: frozenset[str] = frozenset()
    override: bool = False
    admin_role: str = "ADMIN"


class Authorizer:
    def __init__(self, policy: AdminPolicy) -> None:
        self._policy = policy
        self._admin_emails = frozenset(email.lower() for email in policy.admin_emails)

    @property
    def policy(self) -> AdminPolicy:
        return self._policy

    def is_admin(self, principal: Principal) -> bool:
        if self._policy.override:
            return True
        if principal.email and principal.email.lower() in self._admin_emails:
            return True
        return bool(principal.role) and principal.role == self._policy.admin_role

    def require_admin(self, principal: Principal | None) -> Principal:
        """
        Raises:
            UnauthorizedError: If there is no authenticated principal
            ForbiddenError: If the principal may not administer listings
        """
        if principal is None or not principal.user_id:
            raise UnauthorizedError("Authentication required")
        if not self.is_admin(principal):
            raise ForbiddenError("Admin access required", user_id=principal.user_id)
        return principal
