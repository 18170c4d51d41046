"""
errors.py
Failures raised by the client collaborators and by workspace validation.
Every WorkspaceError message is shown to the user as-is.
"""

from __future__ import annotations

from typing import Any, Optional


class WorkspaceError(Exception):
    """A user action was rejected; str(exc) is the message for the error slot."""


class InputError(WorkspaceError):
    pass


class OutOfBoundsError(WorkspaceError):
    pass


class LocationNotFoundError(WorkspaceError):
    pass


class ServiceError(WorkspaceError):
    pass


class AreasApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class GeocodingError(Exception):
    pass


class GeolocationError(Exception):
    pass
