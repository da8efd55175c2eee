"""Unit tests for service wiring using fakes (no real DB files)."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from result import Err

from projboard.config import Config
from projboard.data.rest import RestProjectStore
from projboard.errors import TransportError
from projboard.models.session import CurrentUser, SessionContext
from projboard.services import protocols
from projboard.services.container import ServiceContainer
from projboard.services.project_service import ProjectService


def test_protocols_module_imports() -> None:
    assert hasattr(protocols, "ProjectServiceProtocol")
    assert hasattr(protocols, "AuthServiceProtocol")


def test_config_defaults() -> None:
    config = Config(cache_dir=Path("/tmp/pb"))
    assert config.db_path == Path("/tmp/pb/projects.db")
    assert config.items_per_page == 10
    assert not config.uses_remote_api
    assert Config(api_base_url="http://x").uses_remote_api


@pytest.mark.asyncio
async def test_project_service_wraps_unexpected_errors() -> None:
    store = SimpleNamespace(list_projects=AsyncMock(side_effect=OSError("disk")))
    result = await ProjectService(store).list_projects()  # type: ignore[arg-type]
    assert isinstance(result, Err)
    assert isinstance(result.err_value, TransportError)
    assert "disk" in result.err_value.message


@pytest.mark.asyncio
async def test_service_container_wiring_and_close(monkeypatch, tmp_path: Path) -> None:
    created: dict[str, object] = {}

    class FakeDatabase:
        def __init__(self, path: Path) -> None:
            created["db_path"] = path

        async def connect(self) -> None:
            created["connected"] = True

        async def close(self) -> None:
            created["closed"] = True

    monkeypatch.setattr("projboard.services.container.Database", FakeDatabase)

    config = Config(cache_dir=tmp_path / "cache")
    container = await ServiceContainer.create(config)
    assert created["connected"] is True
    assert created["db_path"] == config.db_path
    assert not isinstance(container.store, RestProjectStore)
    await container.close()
    assert created["closed"] is True


@pytest.mark.asyncio
async def test_service_container_uses_rest_store_for_api_url(tmp_path: Path) -> None:
    config = Config(cache_dir=tmp_path, api_base_url="https://api.example.test")
    container = await ServiceContainer.create(config)
    try:
        assert isinstance(container.store, RestProjectStore)
        session = SessionContext(user=CurrentUser(id="u", email="e"), token="t")
        container.bind_session(session)
        assert container.store._session == session
    finally:
        await container.close()
