# backend/app/core/errors.py
from typing import Optional


class FakeApiError(Exception):
    """Base class for failures the service reports instead of a mock response."""

    http_status = 500
    code = "internal_error"

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class RegistrySnapshotError(FakeApiError):
    """The registry could not be read for the current request."""

    code = "registry_unavailable"


class RegistrySeedError(FakeApiError):
    code = "invalid_seed"


class DuplicateEndpointError(RegistrySeedError):
    code = "duplicate_endpoint"

    def __init__(self, project_name: str, method: str, path: str):
        super().__init__(
            "Duplicate endpoint detected",
            detail=f"Endpoint {method} {path} already exists in project '{project_name}'",
        )
        self.project_name = project_name
        self.method = method
        self.path = path
