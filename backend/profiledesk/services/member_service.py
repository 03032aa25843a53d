"""
ProfileDesk Backend — Member Directory Service
===============================================

What:  CRUD over the `members` table: create, paginated list with a
       single-field sort, lookup, partial update, bulk insert and search.

Search semantics:
    name, city → case-insensitive substring match (LIKE wildcards in the
                 input are escaped, so they match literally)
    age        → exact match
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import asc, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from profiledesk.exceptions import DatabaseError, NotFoundError, ValidationError
from profiledesk.models.member import Member
from profiledesk.schemas.member import (
    SORTABLE_FIELDS,
    BulkCreateResponse,
    BulkOptions,
    MemberCreate,
    MemberListResponse,
    MemberOut,
    MemberResponse,
    MemberUpdate,
    Pagination,
    SearchResponse,
)

logger = logging.getLogger(__name__)

_bulk_adapter = TypeAdapter(List[MemberCreate])


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, term: str):
    return column.ilike(f"%{_escape_like(term)}%", escape="\\")


class MemberService:

    async def create_member(self, db: AsyncSession, data: MemberCreate) -> MemberResponse:
        member = Member(**data.model_dump(exclude_unset=True))
        await self._flush(db, member, "create_member")
        return MemberResponse(message="User saved!", user=MemberOut.model_validate(member))

    async def list_members(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "name",
        order: str = "asc",
    ) -> MemberListResponse:
        """
        One page of members.

        `page` is 1-based; offset = (page - 1) * limit.
        """
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'",
                field="sortBy",
                context={"allowed": list(SORTABLE_FIELDS)},
            )

        column = getattr(Member, sort_by)
        direction = desc if order == "desc" else asc
        query = (
            select(Member)
            .order_by(direction(column), asc(Member.id))
            .offset((page - 1) * limit)
            .limit(limit)
        )

        try:
            result = await db.execute(query)
            members = result.scalars().all()
            total = (await db.execute(select(func.count(Member.id)))).scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error listing members: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_members"})

        return MemberListResponse(
            message="Users list",
            users=[MemberOut.model_validate(m) for m in members],
            pagination=Pagination(page=page, limit=limit, total=total),
        )

    async def get_member(self, db: AsyncSession, raw_id: str) -> MemberResponse:
        member = await self._get_or_404(db, raw_id)
        return MemberResponse(message="User found!", user=MemberOut.model_validate(member))

    async def update_member(self, db: AsyncSession, raw_id: str, data: MemberUpdate) -> MemberResponse:
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("Update data is required")

        member = await self._get_or_404(db, raw_id)
        for field, value in changes.items():
            setattr(member, field, value)
        await self._flush(db, member, "update_member")
        return MemberResponse(message="User updated!", user=MemberOut.model_validate(member))

    async def bulk_create(
        self,
        db: AsyncSession,
        payload: Any,
        notify: bool = False,
        send_email: bool = True,
    ) -> BulkCreateResponse:
        """
        Insert every record of a JSON array in one transaction.

        Raises:
            ValidationError: payload is not a non-empty array, or an item
                             does not fit the member schema
        """
        if not isinstance(payload, list) or not payload:
            raise ValidationError("Users array is required")

        try:
            items = _bulk_adapter.validate_python(payload)
        except PydanticValidationError as e:
            raise ValidationError(
                "Failed to create bulk users",
                context={"errors": e.errors(include_url=False, include_context=False)},
            )

        members = [Member(**item.model_dump(exclude_unset=True)) for item in items]
        try:
            db.add_all(members)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Bulk insert of %d members failed: %s", len(members), str(e))
            raise DatabaseError(context={"operation": "bulk_create", "count": len(members)})

        logger.info("Bulk inserted %d members", len(members))
        return BulkCreateResponse(
            message="Bulk users created!",
            saved_users=[MemberOut.model_validate(m) for m in members],
            options=BulkOptions(notify=notify, send_email=send_email),
        )

    async def search(
        self,
        db: AsyncSession,
        name: Optional[str] = None,
        age: Optional[int] = None,
        city: Optional[str] = None,
    ) -> SearchResponse:
        query = select(Member)
        params: Dict[str, Any] = {}
        if name:
            query = query.where(_contains(Member.name, name))
            params["name"] = name
        if age is not None:
            query = query.where(Member.age == age)
            params["age"] = age
        if city:
            query = query.where(_contains(Member.city, city))
            params["city"] = city

        try:
            result = await db.execute(query.order_by(asc(Member.name)))
            members = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error searching members: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "search"})

        return SearchResponse(
            message="Search results",
            users=[MemberOut.model_validate(m) for m in members],
            search_params=params,
        )

    async def _get_or_404(self, db: AsyncSession, raw_id: str) -> Member:
        try:
            member_id = uuid.UUID(str(raw_id))
        except ValueError:
            member_id = None

        member = None
        if member_id is not None:
            try:
                member = await db.get(Member, member_id)
            except SQLAlchemyError as e:
                logger.error("Database error fetching member %s: %s", raw_id, str(e))
                raise DatabaseError(context={"member_id": raw_id})

        if member is None:
            raise NotFoundError("User not found", resource="member", resource_id=raw_id)
        return member

    async def _flush(self, db: AsyncSession, member: Member, operation: str) -> None:
        try:
            db.add(member)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error in %s: %s", operation, str(e), exc_info=True)
            raise DatabaseError(context={"operation": operation, "error_type": type(e).__name__})


member_service = MemberService()
