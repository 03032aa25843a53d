"""
ProfileDesk Backend — Account Route Handlers
=============================================

What:  POST /signup, POST /login, GET /me.
How:   JSON bodies are validated by SignupRequest / LoginRequest; schema
       failures become 400 through the RequestValidationError handler.
       /me is guarded by the require_identity dependency.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from profiledesk.database import get_db_session
from profiledesk.routes.deps import get_token_issuer
from profiledesk.schemas.account import (
    AccountResponse,
    AuthResponse,
    LoginRequest,
    SignupRequest,
)
from profiledesk.schemas.common import ErrorResponse
from profiledesk.security.auth import require_identity
from profiledesk.security.tokens import TokenClaims, TokenIssuer
from profiledesk.services.account_service import account_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/signup",
    status_code=201,
    response_model=AuthResponse,
    responses={
        400: {"description": "Invalid name, email or password", "model": ErrorResponse},
        409: {"description": "Email already in use", "model": ErrorResponse},
    },
    summary="Register an account",
)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_db_session),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthResponse:
    return await account_service.signup(db=db, issuer=issuer, request=body)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Malformed credentials", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Exchange email and password for a token",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthResponse:
    return await account_service.login(db=db, issuer=issuer, request=body)


@router.get(
    "/me",
    response_model=AccountResponse,
    responses={
        401: {"description": "No token or invalid/expired token", "model": ErrorResponse},
        404: {"description": "Account no longer exists", "model": ErrorResponse},
    },
    summary="Current account",
)
async def me(
    identity: TokenClaims = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> AccountResponse:
    return await account_service.get_current(db=db, identity=identity)
