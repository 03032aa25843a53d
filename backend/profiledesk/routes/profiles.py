"""
ProfileDesk Backend — Profile Route Handlers
=============================================

What:  Image-profile ingest and reads under /api/users.

Request Flow (POST /api/users):
    1. Client sends multipart/form-data: name, mobile, address, image
       (one file part at most, and only under "image")
    2. All fields are optional at the FastAPI layer so ProfileService can
       apply its own check order and answer 400/413/415 with the envelope
    3. ProfileService validates, buffers and persists in one row
    4. 201 with metadata (no image bytes)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from profiledesk.config import Settings
from profiledesk.database import get_db_session
from profiledesk.routes.deps import get_settings
from profiledesk.schemas.common import ErrorResponse
from profiledesk.schemas.profile import ProfileListResponse, ProfileResponse
from profiledesk.services.image_service import image_service
from profiledesk.services.profile_service import profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Profiles"])


@router.post(
    "/users",
    status_code=201,
    response_model=ProfileResponse,
    responses={
        400: {"description": "Missing field, missing file or extra file parts", "model": ErrorResponse},
        413: {"description": "File too large", "model": ErrorResponse},
        415: {"description": "Not an image", "model": ErrorResponse},
    },
    summary="Create a profile with an image",
)
async def create_profile(
    request: Request,
    name: Optional[str] = Form(default=None),
    mobile: Optional[str] = Form(default=None),
    address: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None, description="Image file, max 5MB"),
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> ProfileResponse:
    try:
        # FastAPI binds only the last "image" part and ignores other file
        # fields, so the raw form decides which upload is used
        upload = image_service.single_file_part(await request.form())
        return await profile_service.create_profile(
            db=db,
            name=name,
            mobile=mobile,
            address=address,
            image=upload,
            max_upload_size=settings.max_upload_size,
        )
    finally:
        if image is not None:
            await image.close()


@router.get(
    "/users",
    response_model=ProfileListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List profiles, newest first (no image bytes)",
)
async def list_profiles(
    skip: int = Query(default=0, ge=0),
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileListResponse:
    return await profile_service.list_profiles(db=db, skip=skip, limit=limit)


@router.get(
    "/users/{profile_id}",
    response_model=ProfileResponse,
    responses={404: {"description": "Profile not found", "model": ErrorResponse}},
    summary="Profile metadata",
)
async def get_profile(
    profile_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.get_profile(db=db, raw_id=profile_id)


@router.get(
    "/users/{profile_id}/image",
    response_class=Response,
    responses={
        200: {"description": "Raw image bytes", "content": {"image/*": {}}},
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "No profile or no image", "model": ErrorResponse},
    },
    summary="Raw profile image",
)
async def get_profile_image(
    profile_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    data, content_type = await profile_service.get_image(db=db, raw_id=profile_id)
    return Response(content=data, media_type=content_type)
