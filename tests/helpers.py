from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from api import create_app
from utils.exceptions import ConstraintViolation, RecordNotFound

PASSWORD = "04234-correct-horse"


def make_app(**overrides):
    return create_app("testing", overrides=overrides or None)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, email: str, password: str = PASSWORD) -> dict:
    res = client.post("/api/users", json={"email": email, "password": password})
    assert res.status_code == 201, res.get_data(as_text=True)
    return res.get_json()


def login(client, email: str, password: str = PASSWORD) -> dict:
    res = client.post("/api/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.get_data(as_text=True)
    return res.get_json()


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class InMemoryTokenStore:
    """Dict-backed stand-in for models.token_store.SQLTokenStore."""

    def __init__(self, users=()):
        self.rows = {}
        self.users = {u.email: u for u in users}

    def create_refresh_token(self, token, owner, expires_at):
        if token in self.rows:
            raise ConstraintViolation(token)
        row = SimpleNamespace(token=token, user_id=str(owner), expires_at=expires_at, revoked_at=None)
        self.rows[token] = row
        return row

    def get_refresh_token(self, token):
        try:
            return self.rows[token]
        except KeyError:
            raise RecordNotFound(token)

    def revoke_refresh_token(self, token, revoked_at):
        self.get_refresh_token(token).revoked_at = revoked_at

    def get_user_by_email(self, email):
        try:
            return self.users[email]
        except KeyError:
            raise RecordNotFound(email)

    def update_password_hash(self, user, password_hash):
        user.hashed_password = password_hash
