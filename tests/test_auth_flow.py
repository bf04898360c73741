from __future__ import annotations

import unittest
import uuid
from datetime import datetime, timedelta, timezone

from argon2 import PasswordHasher

from models import storage
from models.refresh_token import RefreshToken
from models.user import User
from tests.helpers import PASSWORD, bearer, login, make_app, register
from utils.security import password_needs_rehash, verify_access_token, verify_password


class AuthFlowTestCase(unittest.TestCase):
    def setUp(self):
        self.app = make_app()
        self.client = self.app.test_client()
        self.secret = self.app.config["JWT_SECRET"]
        self.user = register(self.client, "saul@bettercall.com")

    def test_login_refresh_revoke_cycle(self):
        body = login(self.client, "saul@bettercall.com")
        self.assertEqual(body["id"], self.user["id"])
        self.assertEqual(body["email"], "saul@bettercall.com")
        self.assertFalse(body["is_chirpy_red"])
        self.assertTrue(body["token"])
        self.assertTrue(body["refresh_token"])
        self.assertNotIn("hashed_password", body)

        res = self.client.post("/api/refresh", headers=bearer(body["refresh_token"]))
        self.assertEqual(res.status_code, 200)
        new_token = res.get_json()["token"]
        self.assertEqual(verify_access_token(new_token, self.secret), uuid.UUID(self.user["id"]))

        res = self.client.post("/api/revoke", headers=bearer(body["refresh_token"]))
        self.assertEqual(res.status_code, 204)
        self.assertEqual(res.get_data(), b"")

        res = self.client.post("/api/refresh", headers=bearer(body["refresh_token"]))
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.get_json()["error"], "UNAUTHORIZED")

    def test_wrong_password(self):
        res = self.client.post("/api/login", json={"email": "saul@bettercall.com", "password": "not-" + PASSWORD})
        self.assertEqual(res.status_code, 401)
        self.assertEqual(storage.count(RefreshToken), 0)

    def test_login_rehashes_outdated_password_hash(self):
        user = storage.get(User, self.user["id"])
        user.hashed_password = PasswordHasher(time_cost=1, memory_cost=8192, parallelism=1).hash(PASSWORD)
        storage.save()
        storage.close()

        login(self.client, "saul@bettercall.com")
        storage.close()
        stored = storage.get(User, self.user["id"]).hashed_password
        self.assertFalse(password_needs_rehash(stored))
        self.assertTrue(verify_password(PASSWORD, stored))
        login(self.client, "saul@bettercall.com")

    def test_unknown_email(self):
        res = self.client.post("/api/login", json={"email": "kim@bettercall.com", "password": PASSWORD})
        self.assertEqual(res.status_code, 401)

    def test_malformed_login_body(self):
        for kwargs in ({"data": "not json", "content_type": "application/json"}, {"json": ["a", "b"]}, {"json": {}}):
            with self.subTest(kwargs=kwargs):
                res = self.client.post("/api/login", **kwargs)
                self.assertEqual(res.status_code, 400)

    def test_refresh_without_header(self):
        res = self.client.post("/api/refresh")
        self.assertEqual(res.status_code, 401)

    def test_refresh_with_access_token(self):
        body = login(self.client, "saul@bettercall.com")
        res = self.client.post("/api/refresh", headers=bearer(body["token"]))
        self.assertEqual(res.status_code, 401)

    def test_refresh_with_expired_token(self):
        body = login(self.client, "saul@bettercall.com")
        row = storage.get(RefreshToken, body["refresh_token"])
        row.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)
        storage.save()
        storage.close()

        res = self.client.post("/api/refresh", headers=bearer(body["refresh_token"]))
        self.assertEqual(res.status_code, 401)

    def test_refresh_token_row(self):
        before = datetime.now(timezone.utc)
        body = login(self.client, "saul@bettercall.com")
        row = storage.get(RefreshToken, body["refresh_token"])
        self.assertEqual(row.user_id, self.user["id"])
        self.assertIsNone(row.revoked_at)
        expires_at = row.expires_at.replace(tzinfo=timezone.utc) if row.expires_at.tzinfo is None else row.expires_at
        self.assertGreaterEqual(expires_at, before + timedelta(days=60) - timedelta(seconds=1))

    def test_revoke_twice(self):
        body = login(self.client, "saul@bettercall.com")
        for _ in range(2):
            res = self.client.post("/api/revoke", headers=bearer(body["refresh_token"]))
            self.assertEqual(res.status_code, 204)

    def test_revoke_unknown_token(self):
        res = self.client.post("/api/revoke", headers=bearer("0" * 64))
        self.assertEqual(res.status_code, 500)

    def test_revoke_without_header(self):
        res = self.client.post("/api/revoke")
        self.assertEqual(res.status_code, 401)

    def test_each_login_gets_its_own_refresh_token(self):
        first = login(self.client, "saul@bettercall.com")
        second = login(self.client, "saul@bettercall.com")
        self.assertNotEqual(first["refresh_token"], second["refresh_token"])
        self.assertEqual(storage.count(RefreshToken), 2)


class MissingSecretTestCase(unittest.TestCase):
    def test_login_is_internal_error_without_secret(self):
        app = make_app(JWT_SECRET="")
        client = app.test_client()
        register(client, "gus@lospollos.com")
        res = client.post("/api/login", json={"email": "gus@lospollos.com", "password": PASSWORD})
        self.assertEqual(res.status_code, 500)
        self.assertEqual(storage.count(RefreshToken), 0)


if __name__ == "__main__":
    unittest.main()
