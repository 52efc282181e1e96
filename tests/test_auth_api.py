"""API tests for /auth: register, login and /auth/me against an in-memory store."""

import unittest

import jwt
from fastapi.testclient import TestClient

from tasks_api.core.config import Settings
from tasks_api.core.database import InMemoryStore
from tasks_api.core.security import create_access_token, decode_access_token, verify_password
from tasks_api.main import create_app
from tasks_api.models import REQUIRED_TABLES

REGISTER_BODY = {"email": "a@x.com", "password": "secret1", "name": "A"}


def _provisioned_store() -> InMemoryStore:
    store = InMemoryStore()
    for descriptor in REQUIRED_TABLES:
        store.add_table(descriptor)
    return store


class AuthApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = _provisioned_store()
        self.client = TestClient(create_app(store=self.store))

    def _register(self, **overrides: str):
        return self.client.post("/auth/register", json={**REGISTER_BODY, **overrides})

    def _stored_users(self) -> list[dict]:
        return list(self.store.tables["Users"].items.values())


class TestRegister(AuthApiTestCase):
    def test_register_returns_user_and_token(self) -> None:
        response = self._register()
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["user"]["email"], "a@x.com")
        self.assertEqual(payload["user"]["name"], "A")
        self.assertNotIn("password", payload["user"])
        self.assertTrue(payload["token"])

        stored = self._stored_users()
        self.assertEqual(len(stored), 1)
        self.assertNotEqual(stored[0]["password"], "secret1")
        self.assertTrue(verify_password("secret1", stored[0]["password"]))
        self.assertIn("createdAt", stored[0])

    def test_duplicate_email_is_rejected_and_first_user_kept(self) -> None:
        first = self._register().json()["user"]
        response = self._register(password="another1", name="B")
        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

        stored = self._stored_users()
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0]["id"], first["id"])
        self.assertEqual(stored[0]["name"], "A")
        login = self.client.post(
            "/auth/login", json={"email": "a@x.com", "password": "secret1"}
        )
        self.assertEqual(login.status_code, 200)

    def test_short_password_is_rejected(self) -> None:
        response = self._register(password="12345")
        self.assertEqual(response.status_code, 400)
        self.assertIn("password", response.json()["error"])
        self.assertEqual(self._stored_users(), [])

    def test_invalid_email_is_rejected(self) -> None:
        response = self._register(email="not-an-email")
        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

    def test_missing_name_is_rejected(self) -> None:
        response = self.client.post(
            "/auth/register", json={"email": "a@x.com", "password": "secret1"}
        )
        self.assertEqual(response.status_code, 400)

    def test_store_failure_returns_500_without_details(self) -> None:
        self.store.reachable = False
        response = self._register()
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Error registering user"})


class TestLogin(AuthApiTestCase):
    def test_login_after_register(self) -> None:
        registered = self._register().json()
        response = self.client.post(
            "/auth/login", json={"email": "a@x.com", "password": "secret1"}
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["user"], registered["user"])

        me = self.client.get(
            "/auth/me", headers={"Authorization": f"Bearer {payload['token']}"}
        )
        self.assertEqual(me.status_code, 200)

    def test_wrong_password(self) -> None:
        self._register()
        response = self.client.post(
            "/auth/login", json={"email": "a@x.com", "password": "wrong-pass"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Invalid credentials"})

    def test_unknown_email(self) -> None:
        response = self.client.post(
            "/auth/login", json={"email": "nobody@x.com", "password": "secret1"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Invalid credentials"})

    def test_store_failure(self) -> None:
        self.store.reachable = False
        response = self.client.post(
            "/auth/login", json={"email": "a@x.com", "password": "secret1"}
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Error logging in"})


class TestMe(AuthApiTestCase):
    def test_returns_profile_without_password(self) -> None:
        token = self._register().json()["token"]
        response = self.client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["email"], "a@x.com")
        self.assertEqual(payload["name"], "A")
        self.assertIn("createdAt", payload)
        self.assertNotIn("password", payload)

    def test_missing_token(self) -> None:
        response = self.client.get("/auth/me")
        self.assertEqual(response.status_code, 401)
        self.assertIn("error", response.json())
        self.assertEqual(response.headers.get("www-authenticate"), "Bearer")

    def test_invalid_token(self) -> None:
        response = self.client.get("/auth/me", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Invalid or expired token"})

    def test_unknown_user(self) -> None:
        token = create_access_token(sub="no-such-user", email="ghost@x.com")
        response = self.client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "User not found"})


class TestAppSettings(unittest.TestCase):
    """Tokens are signed and checked with the settings the app was created with."""

    def setUp(self) -> None:
        self.settings = Settings(
            _env_file=None, JWT_SECRET="app-specific-secret-long-enough-for-hs256"
        )
        self.client = TestClient(create_app(self.settings, _provisioned_store()))

    def test_token_uses_app_secret(self) -> None:
        token = self.client.post("/auth/register", json=REGISTER_BODY).json()["token"]
        self.assertEqual(decode_access_token(token, self.settings)["email"], "a@x.com")
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token)
        response = self.client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 200)

    def test_process_default_token_is_rejected(self) -> None:
        token = create_access_token(sub="user-1", email="a@x.com")
        response = self.client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 401)


if __name__ == "__main__":
    unittest.main()
