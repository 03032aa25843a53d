"""
ProfileDesk Backend — Profile Schemas
======================================

Metadata views of a Profile. None of them carry image bytes; clients fetch
those from GET /api/users/{id}/image.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, field_validator

from profiledesk.schemas.common import Envelope, ensure_utc


class ProfileMetadata(BaseModel):
    id: uuid.UUID = Field(description="Profile identifier (UUID)")
    name: str
    mobile: str
    address: str
    has_image: bool = Field(description="Whether image bytes are stored")
    image_content_type: str | None = Field(default=None, description="Declared MIME type")
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_in_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class ProfileResponse(Envelope):
    data: ProfileMetadata


class ProfileListResponse(Envelope):
    data: List[ProfileMetadata]
    count: int = Field(description="Number of profiles in `data`")
