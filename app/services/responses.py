# backend/app/services/responses.py
import json
import logging
from typing import Dict

from fastapi.responses import JSONResponse, PlainTextResponse, Response

from app.schemas.registry import EndpointDefinition
from app.services.auth_gate import Denied

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"

# statuses that must not carry a body on the wire
BODYLESS_STATUSES = {204, 205, 304}


def cors_headers() -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": SUPPORTED_METHODS,
        "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Requested-With, Accept, Origin, X-API-Key",
        "Access-Control-Allow-Credentials": "false",
        "Access-Control-Max-Age": "86400",  # 24 hours
    }


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def endpoint_response(endpoint: EndpointDefinition) -> Response:
    """Emit the stored body as JSON when it parses, otherwise as plain text."""
    if endpoint.status_code in BODYLESS_STATUSES:
        return Response(status_code=endpoint.status_code, headers=cors_headers())

    try:
        body = json.loads(endpoint.response_body, parse_constant=_reject_constant)
        # ascii escapes keep lone surrogates encodable
        content = json.dumps(body, ensure_ascii=True, separators=(",", ":"))
    except (TypeError, ValueError):
        logger.debug(f"Response body of {endpoint.method.value} {endpoint.path} is not JSON, sending as text")
        return PlainTextResponse(
            endpoint.response_body,
            status_code=endpoint.status_code,
            headers=cors_headers(),
        )

    return Response(
        content,
        status_code=endpoint.status_code,
        media_type="application/json",
        headers=cors_headers(),
    )


def unauthorized_response(denied: Denied) -> JSONResponse:
    return JSONResponse(
        {
            "error": "Unauthorized",
            "message": "Valid authentication token required",
            "requiredHeader": denied.required_header,
            "tokenFormat": denied.token_format,
        },
        status_code=401,
        headers=cors_headers(),
    )


def not_found_response(path: str, method: str) -> JSONResponse:
    return JSONResponse(
        {"error": "Endpoint not found", "path": path, "method": method},
        status_code=404,
        headers=cors_headers(),
    )


def invalid_path_response() -> JSONResponse:
    return JSONResponse({"error": "Invalid API path"}, status_code=404, headers=cors_headers())


def internal_error_response() -> JSONResponse:
    return JSONResponse({"error": "Internal server error"}, status_code=500, headers=cors_headers())


def preflight_response() -> Response:
    return Response(status_code=200, headers=cors_headers())
