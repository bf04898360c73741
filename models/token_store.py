"""
SQLAlchemy-backed persistence for the session layer.

Every write is a single statement followed by a commit, so an interrupted
request leaves a refresh token row either fully written or absent.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from models.refresh_token import RefreshToken
from models.user import User
from utils.exceptions import ConstraintViolation, RecordNotFound


class SQLTokenStore:
    """Refresh token rows and user credential lookup."""

    def __init__(self, storage):
        self._storage = storage

    def create_refresh_token(self, token: str, owner: uuid.UUID, expires_at: datetime) -> RefreshToken:
        row = RefreshToken(token=token, user_id=str(owner), expires_at=expires_at, revoked_at=None)
        self._storage.new(row)
        try:
            self._storage.save()
        except IntegrityError as exc:
            raise ConstraintViolation(str(getattr(exc, "orig", exc))) from exc
        return row

    def get_refresh_token(self, token: str) -> RefreshToken:
        row = self._storage.get(RefreshToken, token)
        if row is None:
            raise RecordNotFound("refresh token not found")
        return row

    def revoke_refresh_token(self, token: str, revoked_at: datetime) -> None:
        session = self._storage.get_session()
        result = session.execute(
            update(RefreshToken)
            .where(RefreshToken.token == token)
            .values(revoked_at=revoked_at, updated_at=revoked_at)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount == 0:
            self._storage.rollback()
            raise RecordNotFound("refresh token not found")
        self._storage.save()

    def get_user_by_email(self, email: str) -> User:
        session = self._storage.get_session()
        user = session.query(User).filter(User.email == email).first()
        if user is None:
            raise RecordNotFound("user not found")
        return user

    def update_password_hash(self, user: User, password_hash: str) -> None:
        user.hashed_password = password_hash
        user.save()
