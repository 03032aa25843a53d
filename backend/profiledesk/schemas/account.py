"""
ProfileDesk Backend — Account Schemas
======================================

What:  Request bodies for signup/login and the outward account view.

`AccountPublic` is built explicitly from an Account record by
`from_record`. It has no password field, so there is nothing to strip.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from profiledesk.schemas.common import Envelope, ensure_utc

MIN_PASSWORD_LENGTH = 6


class SignupRequest(BaseModel):
    name: str = Field(description="Display name (required)")
    email: EmailStr = Field(description="Unique login email")
    password: str = Field(description=f"At least {MIN_PASSWORD_LENGTH} characters")

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Min {MIN_PASSWORD_LENGTH} chars password")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Password required")
        return v


class AccountPublic(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_in_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @classmethod
    def from_record(cls, account) -> "AccountPublic":
        return cls(
            id=account.id,
            name=account.name,
            email=account.email,
            created_at=account.created_at,
        )


class AuthResponse(Envelope):
    token: str = Field(description="Signed bearer token")
    user: AccountPublic


class AccountResponse(Envelope):
    user: AccountPublic
