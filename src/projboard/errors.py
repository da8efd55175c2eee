"""Error taxonomy for project store operations."""

from __future__ import annotations


class ProjectStoreError(Exception):
    """Base class for failures reported by a project store."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(ProjectStoreError):
    """The store could not be reached or failed internally (network, 5xx, database)."""


class NotFoundError(ProjectStoreError):
    """The targeted project no longer exists in the store."""

    def __init__(self, project_id: str, message: str = "") -> None:
        super().__init__(message or f"Project {project_id} not found")
        self.project_id = project_id


class ValidationError(ProjectStoreError):
    """Project fields were rejected as malformed."""
