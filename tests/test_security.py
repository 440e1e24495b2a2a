"""Unit tests for app.core.security: bcrypt hashing and JWT issue/decode."""

import unittest
from datetime import timedelta

import jwt

from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    """hash_password is one-way; verify_password accepts only the original."""

    def test_hash_differs_from_plaintext(self) -> None:
        hashed = hash_password("pw123")
        self.assertNotEqual(hashed, "pw123")
        self.assertTrue(hashed.startswith("$2"))

    def test_verify_accepts_original(self) -> None:
        hashed = hash_password("pw123")
        self.assertTrue(verify_password("pw123", hashed))

    def test_verify_rejects_other_password(self) -> None:
        hashed = hash_password("pw123")
        self.assertFalse(verify_password("wrong", hashed))

    def test_same_password_gets_new_salt(self) -> None:
        self.assertNotEqual(hash_password("pw123"), hash_password("pw123"))

    def test_malformed_hash_is_mismatch(self) -> None:
        self.assertFalse(verify_password("pw123", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """create_access_token embeds the user id; decode enforces signature and expiry."""

    def test_round_trip_carries_sub(self) -> None:
        token = create_access_token(42)
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "42")
        self.assertIn("exp", payload)
        self.assertIn("iat", payload)

    def test_expired_token_rejected(self) -> None:
        token = create_access_token(42, expires_delta=timedelta(seconds=-1))
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_foreign_signature_rejected(self) -> None:
        token = jwt.encode({"sub": "42"}, "some-other-secret", algorithm="HS256")
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
