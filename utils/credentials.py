"""
Parsing of the Authorization header.

Two schemes are accepted, each by its own extractor:
    Authorization: Bearer <token>     (access and refresh tokens)
    Authorization: ApiKey <key>       (webhook caller)
"""
from __future__ import annotations

import hmac

from utils.exceptions import MalformedHeader, MissingHeader

BEARER_SCHEME = "bearer"
API_KEY_SCHEME = "apikey"


def _extract(header_value: str | None, scheme: str) -> str:
    if not header_value:
        raise MissingHeader("Authorization header missing")
    parts = header_value.split(" ")
    if len(parts) != 2 or parts[0].lower() != scheme:
        raise MalformedHeader(f"Authorization header format must be {scheme} <credential>")
    credential = parts[1]
    if not credential or credential != credential.strip():
        raise MalformedHeader("Authorization credential is empty")
    return credential


def extract_bearer(header_value: str | None) -> str:
    return _extract(header_value, BEARER_SCHEME)


def extract_api_key(header_value: str | None) -> str:
    return _extract(header_value, API_KEY_SCHEME)


def api_key_matches(presented: str, expected: str) -> bool:
    """Constant-time comparison; an unset key never matches."""
    if not expected:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))
