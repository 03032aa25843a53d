"""
ProfileDesk Backend — Member Directory Route Handlers
======================================================

What:  JSON CRUD over members: /users, /users/bulk, /users/{id}, /search.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from profiledesk.database import get_db_session
from profiledesk.schemas.common import ErrorResponse
from profiledesk.schemas.member import (
    BulkCreateResponse,
    MemberCreate,
    MemberListResponse,
    MemberResponse,
    MemberUpdate,
    SearchResponse,
    SortField,
    SortOrder,
)
from profiledesk.services.member_service import member_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Members"])


@router.post("/users", status_code=201, response_model=MemberResponse, summary="Create a member")
async def create_member(
    body: MemberCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MemberResponse:
    return await member_service.create_member(db=db, data=body)


@router.get("/users", response_model=MemberListResponse, summary="Paginated member list")
async def list_members(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    sort_by: SortField = Query(default="name", alias="sortBy"),
    order: SortOrder = Query(default="asc"),
    db: AsyncSession = Depends(get_db_session),
) -> MemberListResponse:
    return await member_service.list_members(
        db=db, page=page, limit=limit, sort_by=sort_by, order=order
    )


@router.post(
    "/users/bulk",
    status_code=201,
    response_model=BulkCreateResponse,
    responses={400: {"description": "Empty or non-array body", "model": ErrorResponse}},
    summary="Insert an array of members",
)
async def bulk_create_members(
    payload: Any = Body(default=None),
    notify: bool = Query(default=False),
    send_email: bool = Query(default=True, alias="sendEmail"),
    db: AsyncSession = Depends(get_db_session),
) -> BulkCreateResponse:
    return await member_service.bulk_create(
        db=db, payload=payload, notify=notify, send_email=send_email
    )


@router.get(
    "/users/{member_id}",
    response_model=MemberResponse,
    responses={404: {"description": "Member not found", "model": ErrorResponse}},
)
async def get_member(
    member_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MemberResponse:
    return await member_service.get_member(db=db, raw_id=member_id)


@router.put(
    "/users/{member_id}",
    response_model=MemberResponse,
    responses={
        400: {"description": "Empty update", "model": ErrorResponse},
        404: {"description": "Member not found", "model": ErrorResponse},
    },
)
async def update_member(
    member_id: str,
    body: MemberUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MemberResponse:
    return await member_service.update_member(db=db, raw_id=member_id, data=body)


@router.get("/search", response_model=SearchResponse, summary="Search members")
async def search_members(
    name: Optional[str] = Query(default=None),
    age: Optional[int] = Query(default=None, ge=0),
    city: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> SearchResponse:
    return await member_service.search(db=db, name=name, age=age, city=city)
