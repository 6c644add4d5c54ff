# === backend/app/api/fake/dispatcher.py ===
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.config import settings
from app.core.errors import RegistrySnapshotError
from app.db.database import get_db
from app.schemas.registry import HttpMethod
from app.services.auth_gate import Denied, authorize
from app.services.registry import fetch_registry_snapshot
from app.services.responses import (
    endpoint_response,
    internal_error_response,
    invalid_path_response,
    not_found_response,
    preflight_response,
    unauthorized_response,
)
from app.services.route_resolver import resolve

logger = logging.getLogger(__name__)

router = APIRouter()

MOCK_METHODS = [method.value for method in HttpMethod]


def _request_path(request: Request, full_path: str) -> str:
    """Path below the mock prefix, still percent-encoded as the client sent it."""
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return "/" + full_path

    # some servers include the query string in raw_path
    raw = raw_path.decode("latin-1").split("?", 1)[0]
    prefix = settings.FAKE_API_PREFIX.rstrip("/")
    if not raw.startswith(prefix + "/"):
        return "/" + full_path
    return raw[len(prefix):]


#preflight never touches the registry
@router.options("/{full_path:path}", include_in_schema=False)
async def preflight(full_path: str) -> Response:
    return preflight_response()


@router.api_route("/{full_path:path}", methods=MOCK_METHODS, include_in_schema=False)
async def dispatch(full_path: str, request: Request, db: AsyncSession = Depends(get_db)) -> Response:
    request_path = _request_path(request, full_path)
    if request_path == "/":
        return invalid_path_response()

    method = request.method.upper()

    try:
        projects = await fetch_registry_snapshot(db)

        match = resolve(request_path, method, projects)
        if match is None:
            logger.info(f"No mock endpoint for {method} {request_path}")
            return not_found_response(request_path, method)

        decision = authorize(match.project, match.endpoint, request.headers)
        if isinstance(decision, Denied):
            return unauthorized_response(decision)

        return endpoint_response(match.endpoint)

    except RegistrySnapshotError as e:
        logger.error(f"{e.message}: {e.detail}")
        return internal_error_response()
    except Exception:
        logger.exception(f"Fake API error on {method} {request_path}")
        return internal_error_response()
