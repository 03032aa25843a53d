"""
ProfileDesk Backend — Credential Issuer & Password Hashing Tests
=================================================================

What we test:
    ✅ issue → verify round-trip returns the original subject
    ✅ expired, tampered, foreign-secret and malformed tokens fail
    ✅ tokens missing required claims fail
    ✅ duration strings ("1d", "30m", "3600") parse; bad ones raise
    ✅ password hashes verify only the original password
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from profiledesk.config import parse_duration
from profiledesk.security.passwords import burn_verify, hash_password, verify_password
from profiledesk.security.tokens import InvalidTokenError, TokenClaims, TokenIssuer

SECRET = "unit-test-secret"


class TestTokenIssuer:

    def setup_method(self):
        self.issuer = TokenIssuer(secret=SECRET, lifetime=timedelta(days=1))
        self.subject_id = uuid.uuid4()

    def test_round_trip(self):
        token = self.issuer.issue(self.subject_id, "ann@mail.com")
        claims = self.issuer.verify(token)

        assert isinstance(claims, TokenClaims)
        assert claims.subject_id == self.subject_id
        assert claims.subject_email == "ann@mail.com"
        assert claims.expires_at - claims.issued_at == timedelta(days=1)

    def test_expired_token_rejected(self):
        issued = datetime.now(timezone.utc) - timedelta(days=2)
        token = self.issuer.issue(self.subject_id, "ann@mail.com", now=issued)

        with pytest.raises(InvalidTokenError):
            self.issuer.verify(token)

    def test_tampered_signature_rejected(self):
        token = self.issuer.issue(self.subject_id, "ann@mail.com")
        header, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

        with pytest.raises(InvalidTokenError):
            self.issuer.verify(f"{header}.{payload}.{flipped}")

    def test_foreign_secret_rejected(self):
        other = TokenIssuer(secret="someone-else", lifetime=timedelta(days=1))
        token = other.issue(self.subject_id, "ann@mail.com")

        with pytest.raises(InvalidTokenError):
            self.issuer.verify(token)

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", "Bearer x.y.z"])
    def test_malformed_token_rejected(self, token):
        with pytest.raises(InvalidTokenError):
            self.issuer.verify(token)

    def test_missing_email_claim_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": str(self.subject_id), "iat": now, "exp": now + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            self.issuer.verify(token)

    def test_non_uuid_subject_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "42", "email": "ann@mail.com", "iat": now, "exp": now + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            self.issuer.verify(token)


class TestParseDuration:

    @pytest.mark.parametrize(
        "value, seconds",
        [("1d", 86400), ("12h", 43200), ("30m", 1800), ("45s", 45), ("2w", 1209600), ("3600", 3600)],
    )
    def test_valid_durations(self, value, seconds):
        assert parse_duration(value) == timedelta(seconds=seconds)

    @pytest.mark.parametrize("value", ["", "1y", "-5m", "0", "abc"])
    def test_invalid_durations(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret123")
        assert "secret123" not in hashed
        assert hashed.startswith("$pbkdf2-sha256$")

    def test_verify(self):
        hashed = hash_password("secret123")
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_garbage_hash_does_not_raise(self):
        assert verify_password("secret123", "not-a-hash") is False

    def test_burn_verify_always_fails(self):
        assert burn_verify("anything") is False
