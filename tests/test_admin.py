from __future__ import annotations

import os
import tempfile
import unittest

from models import storage
from models.chirp import Chirp
from models.refresh_token import RefreshToken
from models.user import User
from services.metrics import HitCounter
from tests.helpers import bearer, login, make_app, register


class HitCounterTestCase(unittest.TestCase):
    def test_increment_and_reset(self):
        counter = HitCounter()
        self.assertEqual(counter.increment(), 1)
        self.assertEqual(counter.increment(), 2)
        self.assertEqual(counter.value, 2)
        counter.reset()
        self.assertEqual(counter.value, 0)


class AdminAndFileServerTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        with open(os.path.join(self._tmp.name, "index.html"), "w") as fh:
            fh.write("<html><body><h1>Welcome to Chirpy</h1></body></html>")
        self.app = make_app(FILESERVER_ROOT=self._tmp.name)
        self.client = self.app.test_client()

    def tearDown(self):
        self._tmp.cleanup()

    def test_healthz(self):
        res = self.client.get("/api/healthz")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.get_data(as_text=True), "OK")
        self.assertTrue(res.content_type.startswith("text/plain"))

    def test_fileserver_counts_hits(self):
        for _ in range(3):
            res = self.client.get("/app/")
            self.assertEqual(res.status_code, 200)
            self.assertIn(b"Welcome to Chirpy", res.get_data())
            res.close()
        res = self.client.get("/admin/metrics")
        self.assertEqual(res.status_code, 200)
        self.assertIn("Chirpy has been visited 3 times!", res.get_data(as_text=True))

    def test_missing_file(self):
        self.assertEqual(self.client.get("/app/nope.png").status_code, 404)

    def test_reset(self):
        register(self.client, "mike@lospollos.com")
        session = login(self.client, "mike@lospollos.com")
        self.client.post("/api/chirps", json={"body": "half measures"}, headers=bearer(session["token"]))
        self.client.get("/app/").close()

        res = self.client.post("/admin/reset")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(storage.count(User), 0)
        self.assertEqual(storage.count(Chirp), 0)
        self.assertEqual(storage.count(RefreshToken), 0)
        self.assertIn("visited 0 times", self.client.get("/admin/metrics").get_data(as_text=True))

        res = self.client.post("/api/refresh", headers=bearer(session["refresh_token"]))
        self.assertEqual(res.status_code, 401)

    def test_reset_forbidden_outside_dev(self):
        app = make_app(PLATFORM="prod")
        client = app.test_client()
        register(client, "hank@dea.gov")
        res = client.post("/admin/reset")
        self.assertEqual(res.status_code, 403)
        self.assertEqual(storage.count(User), 1)


if __name__ == "__main__":
    unittest.main()
