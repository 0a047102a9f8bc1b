# lms_api/core/exceptions.py
"""
Domain errors raised by the crud layer.

They carry an HTTP status so the handler registered in ``lms_api.main`` can
turn them into ``{"detail": ...}`` responses without the crud code knowing
about FastAPI.
"""
from typing import Any, Dict, Optional

from fastapi import status


class ServiceError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "SERVICE_ERROR"

    def __init__(self, detail: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(detail)
        self.detail = detail
        self.extra = extra or {}


class NotFoundError(ServiceError):
    """Referenced row does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class ConflictError(ServiceError):
    """Write would duplicate a row guarded by a unique key."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"
