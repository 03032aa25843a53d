"""
ProfileDesk Backend — Profile SQLAlchemy Model
===============================================

What:  ORM model for the `profiles` table: contact fields plus the uploaded
       image stored inline as bytes with its declared content type.
How:   `image_data` is deferred, so list and detail queries never load the
       bytes; only the image-serve path undefers it.

Invariants:
    - name, mobile and address are required at creation
    - image bytes are written once at creation and never updated
    - the image columns are nullable at the storage level; a row without
      bytes answers 404 on the image route
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, LargeBinary, String, Uuid
from sqlalchemy.orm import Mapped, deferred, mapped_column

from profiledesk.database import Base
from profiledesk.models.base import utcnow


class Profile(Base):
    """
    A contact profile with an embedded image payload.

    Query Patterns:
        - List: SELECT (no image_data) ORDER BY created_at DESC
        - Metadata by id: primary key lookup, image_data deferred
        - Image by id: primary key lookup with image_data undeferred
    """

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    mobile: Mapped[str] = mapped_column(String(40), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)

    image_data: Mapped[Optional[bytes]] = deferred(
        mapped_column(LargeBinary, nullable=True)
    )
    image_content_type: Mapped[Optional[str]] = mapped_column(String(127), nullable=True)

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

    __table_args__ = (
        Index("idx_profiles_created_at", created_at.desc()),
    )

    @property
    def has_image(self) -> bool:
        # content type is written together with the bytes, and reading it
        # does not trigger a load of the deferred column
        return self.image_content_type is not None

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, name='{self.name}', created_at='{self.created_at}')>"
