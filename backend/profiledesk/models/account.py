"""
ProfileDesk Backend — Account SQLAlchemy Model
===============================================

What:  ORM model for the `accounts` table (signup / login / me).
How:   Email is stored lower-cased with a unique index; the password only
       ever exists here as a passlib hash string.

The outward representation is `AccountPublic` in schemas/account.py, which
is built field-by-field and has no password attribute at all.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from profiledesk.database import Base
from profiledesk.models.base import utcnow


class Account(Base):
    """
    A registered account.

    Lifecycle:
        Created on signup, read on login and /me. Never updated or deleted
        through the API.
    """

    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    # Uniqueness is enforced here; AccountService also pre-checks so the
    # common case gets a clean 409 instead of an IntegrityError
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email='{self.email}')>"
