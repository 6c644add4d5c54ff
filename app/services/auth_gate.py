# backend/app/services/auth_gate.py
"""Decide whether a matched mock request may receive its canned response.

An endpoint either requires a token, is exempt, or inherits the project's
``authentication.enabled`` flag. Denials report the expected header and token
format so API consumers can fix their requests themselves; the token value is
never disclosed.
"""
import hmac
import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from app.schemas.registry import AuthRequirement, EndpointDefinition, ProjectDefinition
from app.services.tokens import format_auth_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Allowed:
    pass


@dataclass(frozen=True)
class Denied:
    reason: str
    required_header: str
    token_format: str


AuthDecision = Union[Allowed, Denied]


def effective_requirement(project: ProjectDefinition, endpoint: EndpointDefinition) -> bool:
    if endpoint.requires_auth is AuthRequirement.REQUIRE:
        return True
    if endpoint.requires_auth is AuthRequirement.EXEMPT:
        return False
    return project.authentication.enabled


def extract_token_from_header(header_value: Optional[str], prefix: str = "Bearer") -> Optional[str]:
    if not header_value:
        return None

    parts = header_value.split(" ")
    if len(parts) != 2 or parts[0] != prefix:
        return None

    return parts[1]


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    # starlette Headers is already case-insensitive; plain dicts are not
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def authorize(
    project: ProjectDefinition,
    endpoint: EndpointDefinition,
    headers: Mapping[str, str],
) -> AuthDecision:
    if not effective_requirement(project, endpoint):
        return Allowed()

    auth = project.authentication
    provided = extract_token_from_header(_get_header(headers, auth.header_name), auth.token_prefix)

    if provided and auth.token and hmac.compare_digest(provided.encode(), auth.token.encode()):
        return Allowed()

    reason = "missing token" if provided is None else "invalid token"
    logger.info(f"Rejected {endpoint.method.value} {endpoint.path} on '{project.name}': {reason}")
    return Denied(
        reason=reason,
        required_header=auth.header_name,
        token_format=format_auth_header("<token>", auth.token_prefix),
    )
