"""Error taxonomy surfaced to API callers.

Every error is an ``HTTPException`` so services can raise them directly
and FastAPI renders them as ``{"detail": ...}`` with the right status.
``BackendUnavailable`` is also produced by the application-level handler
for database connectivity failures (see ``goodeats.main``).
"""
from typing import Any

from fastapi import HTTPException, status


class AuthenticationRequired(HTTPException):
    def __init__(self, detail: Any = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    def __init__(self, detail: Any = "Forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} not found")


class Conflict(HTTPException):
    def __init__(self, detail: Any = "Conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class CapacityExceeded(Conflict):
    """The event cannot hold the requested party size."""

    def __init__(self, requested: int, available: int):
        super().__init__(detail={
            "message": "Event is full",
            "requested_guests": requested,
            "spots_remaining": available,
        })


class ValidationError(HTTPException):
    def __init__(self, detail: Any = "Invalid request"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class BackendUnavailable(HTTPException):
    def __init__(self, detail: Any = "Backend temporarily unavailable, please retry"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
