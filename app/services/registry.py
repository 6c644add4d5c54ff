# backend/app/services/registry.py
import logging
from typing import List

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.core.errors import RegistrySnapshotError
from app.models.endpoint import Endpoint
from app.models.project import Project
from app.schemas.registry import (
    AuthenticationSettings,
    AuthRequirement,
    EndpointDefinition,
    ProjectDefinition,
)

logger = logging.getLogger(__name__)


def to_endpoint_definition(row: Endpoint) -> EndpointDefinition:
    return EndpointDefinition(
        id=row.id,
        path=row.path,
        method=row.method,
        status_code=row.status_code,
        response_body=row.response_body if row.response_body is not None else "",
        requires_auth=AuthRequirement.from_flag(row.requires_auth),
        description=row.description,
    )


def to_project_definition(row: Project) -> ProjectDefinition:
    endpoints = []
    for ep in sorted(row.endpoints, key=lambda ep: (ep.position or 0, ep.id)):
        try:
            endpoints.append(to_endpoint_definition(ep))
        except ValidationError as e:
            # unroutable rows are skipped so the rest of the registry keeps working
            logger.warning(f"Skipping endpoint {ep.id} of project '{row.name}': {e.error_count()} invalid field(s)")

    return ProjectDefinition(
        id=row.id,
        name=row.name,
        base_url=row.base_url or "",
        authentication=AuthenticationSettings(
            enabled=bool(row.auth_enabled),
            token=row.auth_token,
            header_name=row.auth_header_name or "Authorization",
            token_prefix=row.auth_token_prefix or "Bearer",
        ),
        endpoints=tuple(endpoints),
    )


async def fetch_registry_snapshot(db: AsyncSession) -> List[ProjectDefinition]:
    """Read every project with its endpoints in registration order.

    Scoping by owner does not apply: the mock API is public.
    """
    try:
        result = await db.execute(
            select(Project)
            .options(selectinload(Project.endpoints))
            .order_by(Project.id)
        )
        rows = result.scalars().all()
    except SQLAlchemyError as e:
        raise RegistrySnapshotError("Failed to read project registry", detail=str(e)) from e

    return [to_project_definition(row) for row in rows]
