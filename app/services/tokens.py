# backend/app/services/tokens.py
import re
import secrets

_TOKEN_FORMAT = re.compile(r"^[a-zA-Z0-9\-]+$")


def generate_secure_token(length: int = 32) -> str:
    return secrets.token_hex(length)


def generate_readable_token() -> str:
    """Token in the form xxxx-xxxx-xxxx-xxxx (hex groups)."""
    return "-".join(secrets.token_hex(2) for _ in range(4))


def validate_token_format(token: str) -> bool:
    return bool(token) and len(token) >= 8 and _TOKEN_FORMAT.match(token) is not None


def format_auth_header(token: str, prefix: str = "Bearer") -> str:
    return f"{prefix} {token}"
