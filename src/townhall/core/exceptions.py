"""Domain exceptions raised by Townhall services.

Each exception carries the HTTP status it maps to at the API boundary and a
short public message. Handlers in ``townhall.main`` turn them into JSON
responses without leaking internal detail.
"""

from __future__ import annotations

from fastapi import status


class TownhallError(Exception):
    """Base class for all domain failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class AuthenticationFailure(TownhallError):
    """Missing, invalid or expired bearer credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"


class ValidationFailure(TownhallError):
    """Malformed request content, such as an empty body or a bad vote value."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class NotFound(TownhallError):
    """Unknown path-addressed resource, or one the caller may not touch."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class UpstreamFailure(TownhallError):
    """An external provider was unreachable or answered with garbage."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Upstream service unavailable"
