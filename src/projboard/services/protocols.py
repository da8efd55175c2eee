"""Protocol definitions for services."""

from __future__ import annotations

from typing import Protocol

from result import Result

from projboard.errors import ProjectStoreError
from projboard.models.projects import Project, ProjectFields
from projboard.models.session import SessionContext


class ProjectServiceProtocol(Protocol):
    """Interface for project operations."""

    async def list_projects(self) -> Result[list[Project], ProjectStoreError]: ...

    async def delete_project(self, project_id: str) -> Result[None, ProjectStoreError]: ...

    async def create_project(self, fields: ProjectFields) -> Result[Project, ProjectStoreError]: ...

    async def update_project(
        self, project_id: str, fields: ProjectFields
    ) -> Result[Project, ProjectStoreError]: ...


class AuthServiceProtocol(Protocol):
    """Interface for session issuance."""

    async def sign_in(self, email: str, password: str) -> Result[SessionContext, str]: ...

    async def sign_out(self, session: SessionContext) -> None: ...
