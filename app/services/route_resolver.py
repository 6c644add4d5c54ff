# backend/app/services/route_resolver.py
"""Match an inbound mock request against the registered projects.

Public URLs have the shape ``/{slug}{base_url}{endpoint_path}`` below the mock
prefix. Matching is exact string equality on that path plus the HTTP method:
no trailing-slash or case normalization, no path parameters.
"""
import logging
import re
from typing import Iterable, NamedTuple, Optional, Set, Tuple

from app.core.config import settings
from app.schemas.registry import EndpointDefinition, ProjectDefinition

logger = logging.getLogger(__name__)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]")


class RouteMatch(NamedTuple):
    project: ProjectDefinition
    endpoint: EndpointDefinition


def slugify(name: str) -> str:
    """Lowercase the name and replace every char outside [a-z0-9] with '-'.

    Each character is substituted on its own: runs of hyphens are kept and
    nothing is trimmed, so "My  API!" becomes "my--api-".
    """
    return _NON_SLUG_CHARS.sub("-", name.lower())


def build_endpoint_path(project: ProjectDefinition, endpoint: EndpointDefinition) -> str:
    return f"/{slugify(project.name)}{project.base_url}{endpoint.path}"


def public_endpoint_url(project: ProjectDefinition, endpoint: EndpointDefinition) -> str:
    """Absolute URL that resolves to this endpoint, built exactly as matched."""
    public_base = settings.PUBLIC_BASE_URL.rstrip("/")
    prefix = settings.FAKE_API_PREFIX.rstrip("/")
    return f"{public_base}{prefix}{build_endpoint_path(project, endpoint)}"


def resolve(
    request_path: str,
    request_method: str,
    projects: Iterable[ProjectDefinition],
) -> Optional[RouteMatch]:
    """Return the first (project, endpoint) whose public path and method match.

    Projects are scanned in registration order, endpoints in insertion order.
    If a project holds two endpoints with the same method and path, the
    earlier one wins.
    """
    method = request_method.upper()

    for project in projects:
        slug_prefix = f"/{slugify(project.name)}{project.base_url}"
        if not request_path.startswith(slug_prefix):
            continue

        seen: Set[Tuple[str, str]] = set()
        for endpoint in project.endpoints:
            key = (endpoint.method.value, endpoint.path)
            if key in seen:
                logger.warning(
                    f"Project '{project.name}' has more than one {key[0]} {key[1]} endpoint; "
                    f"only the first one is reachable"
                )
                continue
            seen.add(key)

            if endpoint.method.value == method and slug_prefix + endpoint.path == request_path:
                return RouteMatch(project, endpoint)

    return None


def generate_endpoint_url(
    project_name: str,
    base_url: str,
    endpoint_path: str,
    public_base: Optional[str] = None,
    prefix: Optional[str] = None,
) -> str:
    """Absolute URL for loosely written paths (missing leading slashes are added)."""
    public_base = (public_base if public_base is not None else settings.PUBLIC_BASE_URL).rstrip("/")
    prefix = prefix if prefix is not None else settings.FAKE_API_PREFIX

    clean_base_url = base_url if base_url.startswith("/") else f"/{base_url}"
    clean_endpoint_path = endpoint_path if endpoint_path.startswith("/") else f"/{endpoint_path}"

    return f"{public_base}{prefix}/{slugify(project_name)}{clean_base_url}{clean_endpoint_path}"
