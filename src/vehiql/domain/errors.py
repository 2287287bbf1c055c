"""Failures raised by the listing domain and its collaborators.

Every error carries a stable ``error_code``; the HTTP layer picks the
status code from it, so nothing in here knows about transports.
"""

from typing import Any

FieldError = dict[str, str]


class DomainError(Exception):
    """Root of the hierarchy: a message plus free-form context."""

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Flat payload: message, code, then the context keys."""
        return {"message": self.message, "code": self.error_code, **self.context}


class ValidationError(DomainError):
    """
    Input that breaks a listing or query rule.

    Carries optional per-field errors, each a dict with ``field``,
    ``message`` and ``code`` (for example a draft whose images are all
    malformed, or an unknown status).
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[FieldError] | None = None,
        **context: Any,
    ) -> None:
        self.errors: list[FieldError] | None = errors or None
        default = "Validation failed" if self.errors else "Validation error"
        super().__init__(message or default, **context)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class NotFoundError(DomainError):
    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        message = (
            f"{resource} with identifier '{identifier}' not found"
            if identifier
            else f"{resource} not found"
        )
        super().__init__(message, resource=resource, identifier=identifier, **context)


class UnauthorizedError(DomainError):
    """No caller identity was presented."""

    error_code: str = "UNAUTHORIZED"


class ForbiddenError(DomainError):
    """The caller is known but may not administer listings."""

    error_code: str = "FORBIDDEN"


class InternalError(DomainError):
    """Unexpected server-side condition; always logged."""

    error_code: str = "INTERNAL_ERROR"


class RepositoryError(InternalError):
    """The listing store is unreachable or rejected a query."""

    error_code: str = "REPOSITORY_ERROR"


class ImageStoreError(InternalError):
    """The image host rejected an upload or a deletion."""

    error_code: str = "IMAGE_STORE_ERROR"
