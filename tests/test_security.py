"""Unit tests for tasks_api.core.security: bcrypt hashing and JWT tokens."""

import base64
import json
import unittest
from datetime import UTC, datetime, timedelta

import jwt

from tasks_api.core.config import get_settings
from tasks_api.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    """hash_password stores a salted hash that verify_password accepts."""

    def test_roundtrip(self) -> None:
        hashed = hash_password("secret1")
        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(verify_password("secret1", hashed))
        self.assertFalse(verify_password("secret2", hashed))

    def test_salted(self) -> None:
        self.assertNotEqual(hash_password("secret1"), hash_password("secret1"))

    def test_invalid_hash_is_rejected(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """Tokens carry the user id and email and are verified on decode."""

    def test_claims(self) -> None:
        token = create_access_token(sub="user-1", email="a@x.com")
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "user-1")
        self.assertEqual(payload["email"], "a@x.com")
        self.assertIn("exp", payload)

    def test_tampered_token_is_rejected(self) -> None:
        header, _, signature = create_access_token(sub="user-1", email="a@x.com").split(".")
        forged = base64.urlsafe_b64encode(
            json.dumps({"sub": "user-2", "email": "b@x.com", "exp": 4102444800}).encode()
        ).rstrip(b"=").decode()
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(".".join([header, forged, signature]))

    def test_wrong_secret_is_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "user-1", "email": "a@x.com", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            "another-secret-that-is-long-enough-for-hs256",
            algorithm="HS256",
        )
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token)

    def test_expired_token_is_rejected(self) -> None:
        settings = get_settings()
        token = jwt.encode(
            {"sub": "user-1", "email": "a@x.com", "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
