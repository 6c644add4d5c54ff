"""Root conftest — shared test configuration and database fixtures."""

import os

# Keep tests off any real database configured in .env
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["FAKE_API_PREFIX"] = "/api/fake"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"
os.environ.pop("REGISTRY_SEED_FILE", None)

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.database import Base  # noqa: E402
from app.models import endpoint, project  # noqa: E402,F401
from app.schemas.registry import ProjectDefinition  # noqa: E402
from app.services.registry_seed import seed_registry  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(test_engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
def seed(session_factory):
    """Store projects through the same path the startup seeding uses."""
    async def _seed(*projects):
        definitions = [
            p if isinstance(p, ProjectDefinition) else ProjectDefinition.model_validate(p)
            for p in projects
        ]
        async with session_factory() as session:
            await seed_registry(session, definitions)

    return _seed
