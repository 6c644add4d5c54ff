# === backend/app/schemas/registry.py ===
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class AuthRequirement(str, Enum):
    """Per-endpoint override of the project's authentication policy."""
    INHERIT = "inherit"
    REQUIRE = "require"
    EXEMPT = "exempt"

    @classmethod
    def from_flag(cls, flag: Optional[bool]) -> "AuthRequirement":
        if flag is None:
            return cls.INHERIT
        return cls.REQUIRE if flag else cls.EXEMPT

    def to_flag(self) -> Optional[bool]:
        if self is AuthRequirement.INHERIT:
            return None
        return self is AuthRequirement.REQUIRE


class AuthenticationSettings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = False
    token: Optional[str] = None
    header_name: str = Field("Authorization", alias="headerName")
    token_prefix: str = Field("Bearer", alias="tokenPrefix")


class EndpointDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[int] = None
    path: str
    method: HttpMethod = HttpMethod.GET
    status_code: int = Field(200, alias="statusCode", ge=200, le=599)
    response_body: str = Field('{"message": "Hello World"}', alias="responseBody")
    requires_auth: AuthRequirement = Field(AuthRequirement.INHERIT, alias="requiresAuth")
    description: Optional[str] = None

    @field_validator("requires_auth", mode="before")
    @classmethod
    def _coerce_auth_flag(cls, value):
        # stored and seeded definitions use a nullable boolean
        if value is None or isinstance(value, bool):
            return AuthRequirement.from_flag(value)
        return value


class ProjectDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[int] = None
    name: str
    base_url: str = Field("/api/v1", alias="baseUrl")
    authentication: AuthenticationSettings = AuthenticationSettings()
    endpoints: Tuple[EndpointDefinition, ...] = ()


class RouteDirectoryEntry(BaseModel):
    project: str
    slug: str
    method: HttpMethod
    path: str
    url: str
    statusCode: int
    requiresAuth: bool
