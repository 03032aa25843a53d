"""
ProfileDesk Backend — Profile Service (Image Ingest & Serve)
=============================================================

What:  Creates profiles from a multipart upload and reads them back.
How:   Every check runs before the Profile row is added to the session, so
       a rejected upload never leaves a partial record.

Ingest check order (POST /api/users):
    0. At most one file part, named image    → 400 (checked in the route)
    1. Declared MIME type is image/*         → 415
    2. File size ≤ MAX_UPLOAD_SIZE           → 413
    3. name, mobile, address all present     → 400
    4. A file was supplied                   → 400

Reads:
    - list / metadata queries never load image_data (the column is deferred)
    - get_image undefers it for a single row
"""

import logging
import uuid
from typing import Optional, Tuple

from fastapi import UploadFile
from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from profiledesk.exceptions import DatabaseError, NotFoundError, ValidationError
from profiledesk.models.profile import Profile
from profiledesk.schemas.profile import (
    ProfileListResponse,
    ProfileMetadata,
    ProfileResponse,
)
from profiledesk.services.image_service import image_service, is_missing_upload

logger = logging.getLogger(__name__)


def parse_profile_id(raw_id: str) -> Optional[uuid.UUID]:
    """Return the UUID for a path id, or None when it is not well-formed."""
    try:
        return uuid.UUID(str(raw_id))
    except (TypeError, ValueError):
        return None


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class ProfileService:

    async def create_profile(
        self,
        db: AsyncSession,
        name: Optional[str],
        mobile: Optional[str],
        address: Optional[str],
        image: Optional[UploadFile],
        max_upload_size: int,
    ) -> ProfileResponse:
        """
        Validate an upload plus its text fields and persist them as one row.

        Raises:
            UnsupportedMediaTypeError, PayloadTooLargeError, ValidationError
            DatabaseError: the insert failed
        """
        payload = None
        if not is_missing_upload(image):
            payload = await image_service.read_image(image, max_upload_size)

        name, mobile, address = _clean(name), _clean(mobile), _clean(address)
        if not (name and mobile and address):
            missing = [
                field for field, value in
                (("name", name), ("mobile", mobile), ("address", address))
                if not value
            ]
            raise ValidationError(
                "Name, mobile, and address are required",
                context={"missing": missing},
            )

        if payload is None:
            raise ValidationError("Image is required", field="image")

        profile = Profile(
            name=name,
            mobile=mobile,
            address=address,
            image_data=payload.data,
            image_content_type=payload.content_type,
        )
        try:
            db.add(profile)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to store profile: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create_profile", "error_type": type(e).__name__})

        logger.info("Profile %s stored with %d-byte %s image", profile.id, payload.size, payload.content_type)
        return ProfileResponse(
            message="User created successfully",
            data=ProfileMetadata.model_validate(profile),
        )

    async def list_profiles(
        self,
        db: AsyncSession,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> ProfileListResponse:
        """All profiles, newest first, metadata only."""
        query = select(Profile).order_by(desc(Profile.created_at)).offset(skip)
        if limit is not None:
            query = query.limit(limit)

        try:
            result = await db.execute(query)
            profiles = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing profiles: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_profiles", "error_type": type(e).__name__})

        items = [ProfileMetadata.model_validate(p) for p in profiles]
        return ProfileListResponse(message="Users fetched successfully", data=items, count=len(items))

    async def get_profile(self, db: AsyncSession, raw_id: str) -> ProfileResponse:
        # A malformed id cannot name a stored profile, so it reads as missing
        profile_id = parse_profile_id(raw_id)
        profile = await self._get(db, profile_id) if profile_id else None
        if profile is None:
            raise NotFoundError("User not found", resource="profile", resource_id=raw_id)
        return ProfileResponse(message="User fetched successfully", data=ProfileMetadata.model_validate(profile))

    async def get_image(self, db: AsyncSession, raw_id: str) -> Tuple[bytes, str]:
        """
        Fetch the stored image bytes and content type.

        Raises:
            ValidationError: raw_id is not a well-formed identifier (→ 400)
            NotFoundError:   no such profile, or it has no image (→ 404)
        """
        profile_id = parse_profile_id(raw_id)
        if profile_id is None:
            raise ValidationError("Invalid user ID format", field="id")

        profile = await self._get(db, profile_id, with_image=True)
        if profile is None or not profile.image_data:
            raise NotFoundError("Image not found", resource="image", resource_id=raw_id)

        return profile.image_data, profile.image_content_type or "application/octet-stream"

    async def _get(
        self,
        db: AsyncSession,
        profile_id: uuid.UUID,
        with_image: bool = False,
    ) -> Optional[Profile]:
        query = select(Profile).where(Profile.id == profile_id)
        if with_image:
            query = query.options(undefer(Profile.image_data))
        try:
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching profile %s: %s", profile_id, str(e))
            raise DatabaseError(context={"profile_id": str(profile_id)})


profile_service = ProfileService()
