"""
Session orchestration: login, refresh, revoke, the bearer gate for protected
actions and the API key gate for the webhook caller.

Every flow is a straight sequence (extract -> verify/resolve -> act). The only
state is the frozen AuthSettings and the store passed in at construction.

Refresh tokens are NOT rotated on use: the same value keeps minting access
tokens until it expires or is revoked. A leaked refresh token therefore stays
usable for its whole lifetime unless revoked; rotation would close that window
at the cost of breaking clients that refresh concurrently.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping, Optional, Protocol

from services.refresh_tokens import RefreshTokenManager, RefreshTokenStore
from utils.credentials import api_key_matches, extract_api_key, extract_bearer
from utils.exceptions import (
    CredentialHeaderError,
    RecordNotFound,
    RefreshTokenError,
    RefreshTokenNotFound,
    TokenError,
    Unauthenticated,
    UnknownRefreshToken,
)
from utils.security import (
    DEFAULT_ISSUER,
    hash_password,
    issue_access_token,
    password_needs_rehash,
    verify_access_token,
    verify_password,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSettings:
    jwt_secret: str
    polka_key: str
    platform: str = "prod"
    access_token_ttl: timedelta = timedelta(hours=1)
    refresh_token_ttl: timedelta = timedelta(days=60)
    issuer: str = DEFAULT_ISSUER

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AuthSettings":
        return cls(
            jwt_secret=config.get("JWT_SECRET", ""),
            polka_key=config.get("POLKA_KEY", ""),
            platform=config.get("PLATFORM", "prod"),
            access_token_ttl=config.get("ACCESS_TOKEN_EXPIRES", timedelta(hours=1)),
            refresh_token_ttl=config.get("REFRESH_TOKEN_EXPIRES", timedelta(days=60)),
            issuer=config.get("JWT_ISSUER", DEFAULT_ISSUER),
        )

    @property
    def is_dev(self) -> bool:
        return self.platform == "dev"


class SessionStore(RefreshTokenStore, Protocol):
    def get_user_by_email(self, email: str): ...

    def update_password_hash(self, user, password_hash: str) -> None: ...


@dataclass
class LoginResult:
    user: Any
    access_token: str
    refresh_token: str


class SessionService:
    def __init__(
        self,
        settings: AuthSettings,
        store: SessionStore,
        refresh_tokens: Optional[RefreshTokenManager] = None,
    ):
        self.settings = settings
        self._store = store
        self.refresh_tokens = refresh_tokens or RefreshTokenManager(store, lifetime=settings.refresh_token_ttl)

    def issue_access_token(self, subject: uuid.UUID) -> str:
        return issue_access_token(
            subject, self.settings.jwt_secret, self.settings.access_token_ttl, issuer=self.settings.issuer
        )

    def login(self, email: str, password: str) -> LoginResult:
        """
        Check the password and hand out an access token plus a refresh token.
        Unknown email and wrong password are indistinguishable to the caller.
        """
        try:
            user = self._store.get_user_by_email(email)
        except RecordNotFound:
            logger.info("login failed: unknown email")
            raise Unauthenticated("Incorrect email or password") from None

        if not verify_password(password, user.hashed_password):
            logger.info("login failed: wrong password for user %s", user.id)
            raise Unauthenticated("Incorrect email or password")

        if password_needs_rehash(user.hashed_password):
            # hash predates the current argon2 cost parameters
            self._store.update_password_hash(user, hash_password(password))
            logger.info("rehashed password for user %s", user.id)

        user_id = uuid.UUID(str(user.id))
        access_token = self.issue_access_token(user_id)
        refresh_token = self.refresh_tokens.issue(user_id)
        return LoginResult(user=user, access_token=access_token, refresh_token=refresh_token)

    def refresh(self, authorization: Optional[str]) -> str:
        try:
            token = extract_bearer(authorization)
            user_id = self.refresh_tokens.resolve(token)
        except CredentialHeaderError as exc:
            logger.info("refresh rejected: %s", exc)
            raise Unauthenticated("Missing or invalid Authorization header") from exc
        except RefreshTokenError as exc:
            logger.info("refresh rejected (%s): %s", exc.kind, exc)
            raise Unauthenticated("Couldn't validate refresh token") from exc
        return self.issue_access_token(user_id)

    def revoke(self, authorization: Optional[str]) -> None:
        try:
            token = extract_bearer(authorization)
        except CredentialHeaderError as exc:
            raise Unauthenticated("Missing or invalid Authorization header") from exc
        try:
            self.refresh_tokens.revoke(token)
        except RefreshTokenNotFound as exc:
            raise UnknownRefreshToken() from exc

    def authenticate(self, authorization: Optional[str]) -> uuid.UUID:
        """Gate for protected actions. Returns the caller's identity."""
        try:
            token = extract_bearer(authorization)
            return verify_access_token(token, self.settings.jwt_secret, issuer=self.settings.issuer)
        except CredentialHeaderError as exc:
            raise Unauthenticated("Missing or invalid Authorization header") from exc
        except TokenError as exc:
            logger.info("access token rejected (%s): %s", exc.__class__.__name__, exc)
            raise Unauthenticated("Couldn't validate JWT") from exc

    def check_api_key(self, authorization: Optional[str]) -> None:
        if not self.settings.polka_key:
            logger.error("POLKA_KEY is not configured; rejecting webhook call")
        try:
            key = extract_api_key(authorization)
        except CredentialHeaderError as exc:
            raise Unauthenticated("Missing or invalid API key") from exc
        if not api_key_matches(key, self.settings.polka_key):
            raise Unauthenticated("Missing or invalid API key")
