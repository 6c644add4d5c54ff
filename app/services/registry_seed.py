# backend/app/services/registry_seed.py
"""Load project definitions from a YAML or JSON file into the registry.

Used at startup when ``REGISTRY_SEED_FILE`` is set, so a fresh database can
serve mock endpoints without the authoring UI. Expected document shape::

    projects:
      - name: My Blog API
        baseUrl: /api/v1
        authentication: {enabled: true, token: abcd-1234}
        endpoints:
          - path: /users
            method: GET
            statusCode: 200
            responseBody: '{"users": []}'
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.core.errors import DuplicateEndpointError, RegistrySeedError
from app.models.endpoint import Endpoint
from app.models.project import Project
from app.schemas.registry import ProjectDefinition
from app.services.tokens import generate_readable_token, validate_token_format

logger = logging.getLogger(__name__)


def _normalize_response_body(raw: Dict[str, Any]) -> Dict[str, Any]:
    # YAML authors may write the body as a mapping instead of a JSON string
    for key in ("responseBody", "response_body"):
        body = raw.get(key)
        if body is not None and not isinstance(body, str):
            raw = {**raw, key: json.dumps(body)}
    return raw


def parse_seed_document(document: Any) -> List[ProjectDefinition]:
    if not isinstance(document, dict) or not isinstance(document.get("projects"), list):
        raise RegistrySeedError("Seed document must contain a 'projects' list")

    projects = []
    for index, raw_project in enumerate(document["projects"]):
        if not isinstance(raw_project, dict):
            raise RegistrySeedError(f"Project #{index} must be a mapping")

        raw_project = {
            **raw_project,
            "endpoints": [
                _normalize_response_body(ep) if isinstance(ep, dict) else ep
                for ep in raw_project.get("endpoints") or []
            ],
        }
        try:
            project = ProjectDefinition.model_validate(raw_project)
        except ValidationError as e:
            raise RegistrySeedError(f"Project #{index} is invalid", detail=str(e)) from e

        seen = set()
        for endpoint in project.endpoints:
            key = (endpoint.method.value, endpoint.path)
            if key in seen:
                raise DuplicateEndpointError(project.name, *key)
            seen.add(key)

        projects.append(_ensure_token(project))

    return projects


def _ensure_token(project: ProjectDefinition) -> ProjectDefinition:
    auth = project.authentication
    if not auth.enabled:
        return project

    if not auth.token:
        token = generate_readable_token()
        logger.warning(f"Project '{project.name}' enables authentication without a token; generated {token}")
        return project.model_copy(update={"authentication": auth.model_copy(update={"token": token})})

    if not validate_token_format(auth.token):
        logger.warning(
            f"Token of project '{project.name}' should be at least 8 letters, digits or hyphens"
        )
    return project


def load_seed_file(path: Union[str, Path]) -> List[ProjectDefinition]:
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RegistrySeedError(f"Could not read seed file {path}", detail=str(e)) from e

    try:
        if path.suffix.lower() == ".json":
            document = json.loads(content)
        else:
            document = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RegistrySeedError(f"Could not parse seed file {path}", detail=str(e)) from e

    return parse_seed_document(document)


async def seed_registry(db: AsyncSession, projects: List[ProjectDefinition]) -> int:
    """Store the given projects, replacing existing ones with the same name."""
    names = [project.name for project in projects]
    result = await db.execute(select(Project).options(selectinload(Project.endpoints)).where(Project.name.in_(names)))
    for existing in result.scalars().all():
        await db.delete(existing)
    await db.flush()

    for project in projects:
        auth = project.authentication
        row = Project(
            name=project.name,
            base_url=project.base_url,
            auth_enabled=auth.enabled,
            auth_token=auth.token,
            auth_header_name=auth.header_name,
            auth_token_prefix=auth.token_prefix,
        )
        db.add(row)
        await db.flush()

        for position, endpoint in enumerate(project.endpoints):
            db.add(Endpoint(
                project_id=row.id,
                position=position,
                path=endpoint.path,
                method=endpoint.method.value,
                status_code=endpoint.status_code,
                response_body=endpoint.response_body,
                description=endpoint.description,
                requires_auth=endpoint.requires_auth.to_flag(),
            ))

    await db.commit()
    logger.info(f"Seeded {len(projects)} project(s) into the registry")
    return len(projects)
