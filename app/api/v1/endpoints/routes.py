# === backend/app/api/v1/endpoints/routes.py ===
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import RegistrySnapshotError
from app.db.database import get_db
from app.schemas.registry import RouteDirectoryEntry
from app.services.auth_gate import effective_requirement
from app.services.registry import fetch_registry_snapshot
from app.services.route_resolver import build_endpoint_path, public_endpoint_url, slugify

router = APIRouter()

@router.get("/routes", response_model=List[RouteDirectoryEntry])
async def list_routes(db: AsyncSession = Depends(get_db)):
    """Every reachable mock endpoint with its public URL (tokens are never listed)"""
    try:
        projects = await fetch_registry_snapshot(db)
    except RegistrySnapshotError as e:
        raise HTTPException(status_code=500, detail=e.message)

    return [
        RouteDirectoryEntry(
            project=project.name,
            slug=slugify(project.name),
            method=endpoint.method,
            path=build_endpoint_path(project, endpoint),
            url=public_endpoint_url(project, endpoint),
            statusCode=endpoint.status_code,
            requiresAuth=effective_requirement(project, endpoint),
        )
        for project in projects
        for endpoint in project.endpoints
    ]
