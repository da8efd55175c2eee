"""Signed-in session models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CurrentUser(BaseModel):
    """Descriptor of the signed-in user, used for display only."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str = ""


class SessionContext(BaseModel):
    """Explicit session handed to the dashboard on sign-in."""

    model_config = ConfigDict(frozen=True)

    user: CurrentUser
    token: str

    @property
    def auth_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}
