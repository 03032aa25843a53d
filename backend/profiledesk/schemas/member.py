"""
ProfileDesk Backend — Member Directory Schemas
===============================================

Request/response models for the member CRUD routes. Keys the original
clients send in camelCase (isActive, savedUsers, searchParams, sendEmail)
are aliases; the Python side stays snake_case.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from profiledesk.schemas.common import Envelope, ensure_utc

SortField = Literal["name", "email", "age", "city", "created_at"]
SortOrder = Literal["asc", "desc"]

SORTABLE_FIELDS = get_args(SortField)


class MemberCreate(BaseModel):
    # Unknown keys are dropped, the way a schemaless ODM ignores them
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=200)
    city: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class MemberUpdate(MemberCreate):
    pass


class MemberOut(BaseModel):
    id: uuid.UUID
    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = None
    city: Optional[str] = None
    is_active: Optional[bool] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_in_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int


class MemberResponse(Envelope):
    user: MemberOut


class MemberListResponse(Envelope):
    users: List[MemberOut]
    pagination: Pagination


class BulkOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    notify: bool
    send_email: bool = Field(alias="sendEmail")


class BulkCreateResponse(Envelope):
    model_config = ConfigDict(populate_by_name=True)

    saved_users: List[MemberOut] = Field(alias="savedUsers")
    options: BulkOptions


class SearchResponse(Envelope):
    model_config = ConfigDict(populate_by_name=True)

    users: List[MemberOut]
    search_params: Dict[str, Any] = Field(alias="searchParams")
