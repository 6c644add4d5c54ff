"""Registry snapshot — bulk read ordering and conversion to frozen definitions."""

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError
from unittest.mock import AsyncMock

from app.core.errors import RegistrySnapshotError
from app.models.endpoint import Endpoint
from app.models.project import Project
from app.schemas.registry import AuthRequirement
from app.services.registry import fetch_registry_snapshot


async def test_snapshot_preserves_registration_order(session_factory, seed):
    await seed(
        {"name": "First", "endpoints": [{"path": "/b"}, {"path": "/a"}]},
        {"name": "Second", "endpoints": [{"path": "/c", "requiresAuth": True}]},
    )

    async with session_factory() as session:
        projects = await fetch_registry_snapshot(session)

    assert [p.name for p in projects] == ["First", "Second"]
    assert [e.path for e in projects[0].endpoints] == ["/b", "/a"]
    assert projects[1].endpoints[0].requires_auth is AuthRequirement.REQUIRE


async def test_snapshot_applies_authentication_defaults(session_factory):
    async with session_factory() as session:
        session.add(Project(name="Legacy", base_url="/v1"))
        await session.commit()

    async with session_factory() as session:
        (project,) = await fetch_registry_snapshot(session)

    assert project.authentication.enabled is False
    assert project.authentication.token is None
    assert project.authentication.header_name == "Authorization"
    assert project.authentication.token_prefix == "Bearer"


async def test_snapshot_is_immutable(session_factory, seed):
    await seed({"name": "Frozen", "endpoints": [{"path": "/x"}]})

    async with session_factory() as session:
        (project,) = await fetch_registry_snapshot(session)

    with pytest.raises(ValidationError):
        project.name = "Changed"


async def test_unroutable_endpoint_rows_are_skipped(session_factory, caplog):
    async with session_factory() as session:
        row = Project(name="Mixed", base_url="")
        session.add(row)
        await session.flush()
        session.add(Endpoint(project_id=row.id, path="/bad", method="TRACE"))
        session.add(Endpoint(project_id=row.id, path="/good", method="GET", position=1))
        await session.commit()

    async with session_factory() as session:
        (project,) = await fetch_registry_snapshot(session)

    assert [e.path for e in project.endpoints] == ["/good"]
    assert "Skipping endpoint" in caplog.text


async def test_database_errors_become_snapshot_errors():
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))

    with pytest.raises(RegistrySnapshotError) as exc_info:
        await fetch_registry_snapshot(session)

    assert "db down" in exc_info.value.detail


async def test_stored_informational_status_is_skipped(session_factory):
    async with session_factory() as session:
        row = Project(name="Switch", base_url="")
        session.add(row)
        await session.flush()
        session.add(Endpoint(project_id=row.id, path="/upgrade", method="GET", status_code=101))
        await session.commit()

    async with session_factory() as session:
        (project,) = await fetch_registry_snapshot(session)

    assert project.endpoints == ()
