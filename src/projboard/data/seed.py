"""Demo account and sample data provisioning."""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import TYPE_CHECKING

from result import Err, Ok, Result

from projboard.models.projects import ProjectFields, ProjectStatus
from projboard.models.session import CurrentUser

if TYPE_CHECKING:
    from projboard.data.protocols import ProjectStoreProtocol
    from projboard.services.auth_service import AuthService

logger = logging.getLogger(__name__)

DEMO_EMAIL = "admin@hr-pro.com"
DEMO_PASSWORD = "admin123"
DEMO_NAME = "Admin User"

_SAMPLE_NAMES = (
    "Website Redesign",
    "Mobile App Launch",
    "Data Warehouse Migration",
    "Customer Portal",
    "Payroll Integration",
    "Security Audit",
    "Onboarding Revamp",
    "Analytics Dashboard",
)
_SAMPLE_MEMBERS = ("Alice Johnson", "Bob Smith", "Carol White", "David Lee", "Eve Martinez")


async def ensure_demo_account(auth: AuthService) -> Result[CurrentUser, str]:
    """Create the demo account unless it already exists."""
    existing = await auth.find_user(DEMO_EMAIL)
    if existing is not None:
        return Ok(existing)
    result = await auth.sign_up(DEMO_EMAIL, DEMO_PASSWORD, DEMO_NAME)
    if isinstance(result, Err):
        return Err(result.err_value)
    session = result.ok_value
    await auth.sign_out(session)
    logger.info("Provisioned demo account %s", DEMO_EMAIL)
    return Ok(session.user)


def sample_projects(count: int, seed: int = 0) -> list[ProjectFields]:
    """Build ``count`` deterministic sample projects."""
    rng = random.Random(seed)
    statuses = list(ProjectStatus)
    start = date(2026, 1, 1)
    return [
        ProjectFields(
            name=f"{_SAMPLE_NAMES[i % len(_SAMPLE_NAMES)]} {i // len(_SAMPLE_NAMES) + 1}",
            status=statuses[i % len(statuses)],
            deadline=start + timedelta(days=rng.randint(7, 365)),
            assigned_team_member=rng.choice(_SAMPLE_MEMBERS),
            budget=float(rng.randrange(1_000, 500_000, 500)),
        )
        for i in range(count)
    ]


async def seed_projects(store: ProjectStoreProtocol, count: int) -> int:
    """Insert sample projects into the store; returns how many were created."""
    for fields in sample_projects(count):
        await store.create_project(fields)
    return count
