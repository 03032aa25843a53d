"""
ProfileDesk Backend — Credential Issuer
========================================

What:  Issues and verifies signed, time-limited session tokens.
How:   HS256 JSON Web Tokens via PyJWT. The payload carries `sub` (account
       id), `email`, `iat` and `exp`; `verify()` decodes it into the closed
       `TokenClaims` type and rejects anything that does not fit it.

Tokens are stateless: nothing is persisted, so a token for a deleted account
still verifies. /me detects that case and answers 404.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

REQUIRED_CLAIMS = ["sub", "email", "iat", "exp"]


class InvalidTokenError(Exception):
    """Signature, structure, claims or expiry check failed."""


@dataclass(frozen=True)
class TokenClaims:
    subject_id: uuid.UUID
    subject_email: str
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """
    Signs and verifies session tokens with one shared secret.

    Verification is all-or-nothing: either every claim is present and valid
    and a TokenClaims comes back, or InvalidTokenError is raised.
    """

    def __init__(self, secret: str, lifetime: timedelta, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm
        self.lifetime = lifetime

    def issue(
        self,
        subject_id: uuid.UUID,
        subject_email: str,
        now: Optional[datetime] = None,
    ) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(subject_id),
            "email": subject_email,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e

        email = payload.get("email")
        if not isinstance(email, str) or not email:
            raise InvalidTokenError("Token email claim is missing or empty")

        try:
            subject_id = uuid.UUID(str(payload["sub"]))
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (TypeError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token claims: {e}") from e

        return TokenClaims(
            subject_id=subject_id,
            subject_email=email,
            issued_at=issued_at,
            expires_at=expires_at,
        )
