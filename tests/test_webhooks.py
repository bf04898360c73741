from __future__ import annotations

import unittest
import uuid

from models import storage
from models.user import User
from tests.helpers import bearer, login, make_app, register


class PolkaWebhookTestCase(unittest.TestCase):
    def setUp(self):
        self.app = make_app()
        self.client = self.app.test_client()
        self.key = self.app.config["POLKA_KEY"]
        self.user = register(self.client, "skyler@breakingbad.com")

    def _post(self, payload, key=None):
        headers = {"Authorization": f"ApiKey {key or self.key}"}
        return self.client.post("/api/polka/webhooks", json=payload, headers=headers)

    def _is_red(self) -> bool:
        storage.close()
        return storage.get(User, self.user["id"]).is_chirpy_red

    def test_upgrade(self):
        res = self._post({"event": "user.upgraded", "data": {"user_id": self.user["id"]}})
        self.assertEqual(res.status_code, 204)
        self.assertTrue(self._is_red())
        self.assertTrue(login(self.client, "skyler@breakingbad.com")["is_chirpy_red"])

    def test_wrong_key(self):
        res = self._post({"event": "user.upgraded", "data": {"user_id": self.user["id"]}}, key="wrong-key")
        self.assertEqual(res.status_code, 401)
        self.assertFalse(self._is_red())

    def test_missing_or_bearer_key(self):
        payload = {"event": "user.upgraded", "data": {"user_id": self.user["id"]}}
        res = self.client.post("/api/polka/webhooks", json=payload)
        self.assertEqual(res.status_code, 401)
        res = self.client.post("/api/polka/webhooks", json=payload, headers=bearer(self.key))
        self.assertEqual(res.status_code, 401)
        self.assertFalse(self._is_red())

    def test_other_event_is_ignored(self):
        res = self._post({"event": "user.payment_failed", "data": {"user_id": self.user["id"]}})
        self.assertEqual(res.status_code, 204)
        self.assertFalse(self._is_red())

    def test_other_event_ignores_data_shape(self):
        for data in ({"user_id": "nope"}, None, "unexpected", []):
            with self.subTest(data=data):
                res = self._post({"event": "user.payment_failed", "data": data})
                self.assertEqual(res.status_code, 204)
        self.assertEqual(self._post({"event": "user.payment_failed"}).status_code, 204)
        self.assertFalse(self._is_red())

    def test_unknown_user(self):
        res = self._post({"event": "user.upgraded", "data": {"user_id": str(uuid.uuid4())}})
        self.assertEqual(res.status_code, 404)

    def test_malformed_body(self):
        self.assertEqual(self._post({"data": {}}).status_code, 400)
        self.assertEqual(self._post({"event": "user.upgraded", "data": {"user_id": "nope"}}).status_code, 400)
        self.assertEqual(self._post({"event": "user.upgraded"}).status_code, 400)
        self.assertEqual(self._post({"event": "user.upgraded", "data": None}).status_code, 400)
        self.assertEqual(self._post({"event": "user.upgraded", "data": {}}).status_code, 400)


if __name__ == "__main__":
    unittest.main()
