"""
security helpers:
- Argon2id password hashing via argon2-cffi
- Access token (JWT, HS256) issuing/verification via PyJWT
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher, Type
from argon2 import exceptions as argon2_exc

from utils.exceptions import (
    HashingError,
    InvalidSignature,
    MalformedToken,
    SigningError,
    TokenExpired,
)

logger = logging.getLogger(__name__)

# Cost parameters are fixed and encoded into every hash, so verification never
# needs them. Changing them only affects newly created hashes.
ARGON2_TIME_COST = 3
ARGON2_MEMORY_COST = 64 * 1024  # KiB
ARGON2_PARALLELISM = 4
ARGON2_HASH_LEN = 32
ARGON2_SALT_LEN = 16

JWT_ALGORITHM = "HS256"
DEFAULT_ISSUER = "chirpy-access"

ph = PasswordHasher(
    time_cost=ARGON2_TIME_COST,
    memory_cost=ARGON2_MEMORY_COST,
    parallelism=ARGON2_PARALLELISM,
    hash_len=ARGON2_HASH_LEN,
    salt_len=ARGON2_SALT_LEN,
    type=Type.ID,
)


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2id with a fresh random salt.
    """
    try:
        return ph.hash(password)
    except argon2_exc.HashingError as exc:
        raise HashingError(f"argon2 hashing failed: {exc}") from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a plaintext password against a stored argon2 hash.

    Returns False for a wrong password. A hash that cannot be parsed or
    verified at all raises HashingError.
    """
    try:
        return ph.verify(password_hash, password)
    except argon2_exc.VerifyMismatchError:
        return False
    except (argon2_exc.InvalidHashError, argon2_exc.VerificationError) as exc:
        raise HashingError(f"stored password hash is unusable: {exc}") from exc


def password_needs_rehash(password_hash: str) -> bool:
    return ph.check_needs_rehash(password_hash)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def issue_access_token(
    subject: uuid.UUID | str,
    secret: str,
    ttl: timedelta,
    issuer: str = DEFAULT_ISSUER,
    now: datetime | None = None,
) -> str:
    """
    Build and sign an access token for `subject`.
    iat = now, exp = now + ttl. `now` is injectable so expiry can be tested.

    JWT timestamps are whole seconds, so issuance is taken at whole-second
    granularity: `now` is truncated first, which keeps exp - iat == ttl.
    """
    if not secret:
        raise SigningError("JWT secret is not configured")
    issued = (now or _now()).replace(microsecond=0)
    payload = {
        "iss": issuer,
        "sub": str(subject),
        "iat": int(issued.timestamp()),
        "exp": int(issued.timestamp()) + int(ttl.total_seconds()),
    }
    try:
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)
    except jwt.PyJWTError as exc:
        raise SigningError(f"could not sign access token: {exc}") from exc


def verify_access_token(token: str, secret: str, issuer: str = DEFAULT_ISSUER) -> uuid.UUID:
    """
    Check signature, expiry (no leeway) and issuer, then return the subject.
    Raises InvalidSignature, TokenExpired or MalformedToken.
    """
    if not secret:
        raise SigningError("JWT secret is not configured")
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            issuer=issuer,
            options={"require": ["exp", "iat", "iss", "sub"]},
        )
    except jwt.InvalidSignatureError as exc:
        raise InvalidSignature(str(exc)) from exc
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpired(str(exc)) from exc
    except jwt.InvalidTokenError as exc:
        raise MalformedToken(f"Invalid token: {exc}") from exc

    try:
        return uuid.UUID(decoded["sub"])
    except (ValueError, TypeError, AttributeError) as exc:
        raise MalformedToken("subject is not a valid identity") from exc
