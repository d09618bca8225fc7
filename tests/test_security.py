"""Unit tests for password hashing and token issuing/verification."""

import unittest

from jose import jwt

from elearning.core.config import Settings
from elearning.core.security import (
    InvalidTokenError,
    PasswordHasher,
    TokenKind,
    TokenService,
)


def make_settings(**overrides) -> Settings:
    values = {"SECRET_KEY": "unit-test-secret", "BCRYPT_ROUNDS": 4}
    values.update(overrides)
    return Settings(**values)


class TestPasswordHasher(unittest.TestCase):
    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)

    def test_same_password_hashes_differently(self) -> None:
        first = self.hasher.hash("Abcdef1!")
        second = self.hasher.hash("Abcdef1!")
        self.assertNotEqual(first, second)
        self.assertNotIn("Abcdef1!", first)

    def test_verify_accepts_matching_password(self) -> None:
        digest = self.hasher.hash("Abcdef1!")
        self.assertTrue(self.hasher.verify("Abcdef1!", digest))

    def test_verify_rejects_wrong_password(self) -> None:
        digest = self.hasher.hash("Abcdef1!")
        self.assertFalse(self.hasher.verify("Abcdef1?", digest))
        self.assertFalse(self.hasher.verify("", digest))

    def test_verify_returns_false_for_malformed_digest(self) -> None:
        self.assertFalse(self.hasher.verify("Abcdef1!", "not-a-bcrypt-hash"))

    def test_cost_factor_comes_from_settings(self) -> None:
        hasher = PasswordHasher.from_settings(make_settings(BCRYPT_ROUNDS=5))
        self.assertTrue(hasher.hash("Abcdef1!").startswith("$2b$05$"))


class TestTokenService(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService(make_settings())

    def test_access_token_round_trip(self) -> None:
        claims = self.tokens.verify(self.tokens.issue_access(42), TokenKind.ACCESS)
        self.assertEqual(claims.user_id, 42)
        self.assertEqual(claims.kind, TokenKind.ACCESS)

    def test_refresh_and_reset_tokens_verify_as_their_own_kind(self) -> None:
        self.assertEqual(
            self.tokens.verify(self.tokens.issue_refresh(7), TokenKind.REFRESH).user_id, 7
        )
        self.assertEqual(
            self.tokens.verify(self.tokens.issue_reset(7), TokenKind.RESET).user_id, 7
        )

    def test_kind_mismatch_is_rejected(self) -> None:
        refresh = self.tokens.issue_refresh(1)
        access = self.tokens.issue_access(1)
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(refresh, TokenKind.ACCESS)
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(access, TokenKind.REFRESH)
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(access, TokenKind.RESET)

    def test_expired_token_is_rejected(self) -> None:
        expired = TokenService(make_settings(ACCESS_TOKEN_EXPIRE_MINUTES=-1))
        token = expired.issue_access(1)
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token, TokenKind.ACCESS)

    def test_token_signed_with_other_secret_is_rejected(self) -> None:
        other = TokenService(make_settings(SECRET_KEY="another-secret"))
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(other.issue_access(1), TokenKind.ACCESS)

    def test_malformed_input_raises_typed_error(self) -> None:
        for garbage in ("", "abc", "a.b.c", "Bearer xyz"):
            with self.subTest(token=garbage):
                with self.assertRaises(InvalidTokenError):
                    self.tokens.verify(garbage, TokenKind.ACCESS)

    def test_token_without_user_id_is_rejected(self) -> None:
        token = jwt.encode({"type": "access"}, "unit-test-secret", algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token, TokenKind.ACCESS)

    def test_token_without_expiry_is_rejected(self) -> None:
        token = jwt.encode(
            {"id": 1, "type": "access"}, "unit-test-secret", algorithm="HS256"
        )
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token, TokenKind.ACCESS)

    def test_lifetimes_are_independent(self) -> None:
        tokens = TokenService(
            make_settings(
                ACCESS_TOKEN_EXPIRE_MINUTES=5,
                REFRESH_TOKEN_EXPIRE_DAYS=7,
                RESET_TOKEN_EXPIRE_MINUTES=15,
            )
        )
        access = tokens.verify(tokens.issue_access(1), TokenKind.ACCESS)
        reset = tokens.verify(tokens.issue_reset(1), TokenKind.RESET)
        refresh = tokens.verify(tokens.issue_refresh(1), TokenKind.REFRESH)
        self.assertLess(access.expires_at, reset.expires_at)
        self.assertLess(reset.expires_at, refresh.expires_at)
