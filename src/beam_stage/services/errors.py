"""Domain errors raised by the service layer.

Each error carries a stable ``code`` and the HTTP status the API layer uses
when rendering it.
"""

from __future__ import annotations

HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409
HTTP_BAD_GATEWAY = 502


class BeamError(RuntimeError):
    """Base exception for failures surfaced to API callers."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(BeamError):
    """Raised when an entity is absent or must look absent to the caller."""

    code = "NOT_FOUND"
    status_code = HTTP_NOT_FOUND
    default_message = "Not found"


class ForbiddenError(BeamError):
    """Raised when an authenticated caller lacks ownership or role."""

    code = "FORBIDDEN"
    status_code = HTTP_FORBIDDEN
    default_message = "Forbidden"


class StoreConflictError(BeamError):
    """Raised on uniqueness or referential violations in the data store."""

    code = "CONFLICT"
    status_code = HTTP_CONFLICT
    default_message = "Conflicting change"


class UpstreamError(BeamError):
    """Raised when an external collaborator is unreachable or erroring."""

    code = "UPSTREAM_FAILURE"
    status_code = HTTP_BAD_GATEWAY
    default_message = "Upstream service failure"


class UploadError(UpstreamError):
    """Raised when an image storage provider rejects or fails an upload."""


class NotificationError(UpstreamError):
    """Raised when the notification webhook cannot be delivered."""
