"""Project store backed by the dashboard's HTTP API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import pydantic
import requests

from projboard.errors import NotFoundError, TransportError, ValidationError
from projboard.models.projects import Project, ProjectFields
from projboard.models.session import SessionContext

logger = logging.getLogger(__name__)


class RestProjectStore:
    """Implements the project store protocol over REST.

    ``requests`` is blocking, so every call runs in a worker thread to keep
    the event loop free while the request is outstanding.
    """

    def __init__(
        self,
        base_url: str,
        session: SessionContext | None = None,
        timeout: float = 20.0,
        http: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = timeout
        self._http = http or requests.Session()

    def bind_session(self, session: SessionContext | None) -> None:
        """Attach (or detach, on sign-out) the session used for auth headers."""
        self._session = session

    def get_endpoint(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def list_projects(self) -> list[Project]:
        payload = await self._request("GET", "/projects")
        if not isinstance(payload, list):
            raise TransportError("Unexpected response body for project list")
        try:
            return [Project.model_validate(item) for item in payload]
        except pydantic.ValidationError as exc:
            raise TransportError(f"Malformed project in response: {exc}") from exc

    async def delete_project(self, project_id: str) -> None:
        await self._request("DELETE", f"/projects/{project_id}", project_id=project_id)

    async def create_project(self, fields: ProjectFields) -> Project:
        payload = await self._request("POST", "/projects", json=fields.to_wire())
        return _parse_project(payload)

    async def update_project(self, project_id: str, fields: ProjectFields) -> Project:
        payload = await self._request(
            "PATCH", f"/projects/{project_id}", json=fields.to_wire(), project_id=project_id
        )
        return _parse_project(payload)

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        project_id: str = "",
    ) -> Any:
        return await asyncio.to_thread(self._send, method, path, json, project_id)

    def _send(
        self, method: str, path: str, json: dict[str, Any] | None, project_id: str
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        if self._session is not None:
            headers.update(self._session.auth_header)
        url = self.get_endpoint(path)
        try:
            response = self._http.request(
                method, url, json=json, headers=headers, timeout=self._timeout
            )
        except requests.Timeout as exc:
            raise TransportError(f"{method} {path} timed out") from exc
        except requests.RequestException as exc:
            # Never echo request details; they may carry the bearer token.
            raise TransportError(f"{method} {path} failed: {type(exc).__name__}") from exc

        status = response.status_code
        logger.debug("%s %s -> %s", method, path, status)
        if status == 404:
            raise NotFoundError(project_id or path)
        if status in (400, 422):
            raise ValidationError(_error_message(response) or "Invalid project fields")
        if status >= 400:
            raise TransportError(f"{method} {path} returned HTTP {status}")
        if status == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"{method} {path} returned invalid JSON") from exc


def _parse_project(payload: Any) -> Project:
    try:
        return Project.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise TransportError(f"Malformed project in response: {exc}") from exc


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        message = body.get("message", "")
        if isinstance(message, list):
            return "; ".join(str(m) for m in message)
        return str(message)
    return ""
