"""API test fixtures — FastAPI app over the per-test SQLite database.

Invariants:
    - get_db dependency overridden so each request opens its own session
    - lifespan is not run; tables come from the root test_engine fixture
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.db.database import get_db
from app.main import app


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def blog_project():
    return {
        "name": "My Blog API",
        "baseUrl": "/api/v1",
        "authentication": {"enabled": False},
        "endpoints": [
            {"path": "/users", "method": "GET", "statusCode": 200, "responseBody": '{"users":[]}'},
        ],
    }


@pytest.fixture
def protected_blog_project(blog_project):
    return {
        **blog_project,
        "authentication": {
            "enabled": True,
            "token": "abcd-1234",
            "headerName": "Authorization",
            "tokenPrefix": "Bearer",
        },
    }
