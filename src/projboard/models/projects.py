"""Project-level models."""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProjectStatus(StrEnum):
    """Lifecycle status of a project."""

    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"


class ProjectFields(BaseModel):
    """Editable attributes of a project, as sent on create/update."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    status: ProjectStatus = ProjectStatus.ACTIVE
    deadline: date
    assigned_team_member: str = ""
    budget: float = Field(default=0.0, ge=0)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "name must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("deadline", mode="before")
    @classmethod
    def _date_part(cls, value: object) -> object:
        # The API serializes deadlines as full ISO timestamps.
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        return value

    def to_wire(self) -> dict[str, object]:
        """Serialize with camelCase keys for the HTTP API."""
        return self.model_dump(mode="json", by_alias=True)


class Project(ProjectFields):
    """A project record as held in the client-side cache."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)

    def fields(self) -> ProjectFields:
        """Return the editable part of this project."""
        return ProjectFields.model_validate(self.model_dump(exclude={"id"}))
