import re

from app.services.tokens import (
    format_auth_header,
    generate_readable_token,
    generate_secure_token,
    validate_token_format,
)


def test_secure_token_is_hex_of_requested_bytes():
    token = generate_secure_token(16)
    assert re.fullmatch(r"[0-9a-f]{32}", token)
    assert generate_secure_token() != generate_secure_token()


def test_readable_token_shape():
    token = generate_readable_token()
    assert re.fullmatch(r"[0-9a-f]{4}(-[0-9a-f]{4}){3}", token)
    assert validate_token_format(token)


def test_validate_token_format():
    assert validate_token_format("abcd-1234")
    assert not validate_token_format("short")
    assert not validate_token_format("has space 123")
    assert not validate_token_format("")


def test_format_auth_header():
    assert format_auth_header("abc") == "Bearer abc"
    assert format_auth_header("abc", "Token") == "Token abc"
