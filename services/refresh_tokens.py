"""
Refresh token manager.

Refresh tokens are opaque 256-bit random values, stored server side with a
fixed expiry and a nullable revocation timestamp. Expiry and revocation are
independent: either one alone denies resolution.
"""
from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Callable, Protocol

from models.base_model import as_utc, utcnow
from utils.exceptions import (
    ConstraintViolation,
    RecordNotFound,
    RefreshTokenExpired,
    RefreshTokenNotFound,
    RefreshTokenRevoked,
    TokenCollision,
)

logger = logging.getLogger(__name__)

REFRESH_TOKEN_BYTES = 32
DEFAULT_REFRESH_TOKEN_LIFETIME = timedelta(days=60)


class RefreshTokenStore(Protocol):
    def create_refresh_token(self, token: str, owner: uuid.UUID, expires_at: datetime): ...

    def get_refresh_token(self, token: str): ...

    def revoke_refresh_token(self, token: str, revoked_at: datetime) -> None: ...


def generate_refresh_token() -> str:
    """64 hex characters from the OS CSPRNG."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


class RefreshTokenManager:
    def __init__(
        self,
        store: RefreshTokenStore,
        lifetime: timedelta = DEFAULT_REFRESH_TOKEN_LIFETIME,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._store = store
        self._lifetime = lifetime
        self._clock = clock

    def issue(self, owner: uuid.UUID) -> str:
        """Create and persist a new token for `owner`.

        A uniqueness violation means the random source is broken or the store
        is misconfigured. It is not retried.
        """
        token = generate_refresh_token()
        expires_at = self._clock() + self._lifetime
        try:
            self._store.create_refresh_token(token, owner, expires_at)
        except ConstraintViolation as exc:
            logger.error("refresh token collision for user %s: %s", owner, exc)
            raise TokenCollision() from exc
        return token

    def resolve(self, token: str) -> uuid.UUID:
        try:
            row = self._store.get_refresh_token(token)
        except RecordNotFound as exc:
            raise RefreshTokenNotFound("refresh token not found") from exc

        now = self._clock()
        if now >= as_utc(row.expires_at):
            raise RefreshTokenExpired(f"refresh token expired at {row.expires_at}")
        if row.revoked_at is not None:
            raise RefreshTokenRevoked(f"refresh token revoked at {row.revoked_at}")
        return uuid.UUID(str(row.user_id))

    def revoke(self, token: str) -> None:
        """Tombstone the token. Revoking twice just moves the timestamp."""
        try:
            self._store.revoke_refresh_token(token, self._clock())
        except RecordNotFound as exc:
            raise RefreshTokenNotFound("refresh token not found") from exc
