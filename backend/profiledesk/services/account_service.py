"""
ProfileDesk Backend — Account Service
======================================

What:  Signup, login and current-account lookup.
How:   Passwords are hashed and verified in the thread pool; tokens come
       from the TokenIssuer on the AppContext. Responses carry an
       AccountPublic built from the record, never the record itself.

Login failure is deliberately uniform: an unknown email and a wrong
password both raise UnauthorizedError("Invalid credentials"), and both run
one password verification.
"""

import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from profiledesk.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    UnauthorizedError,
)
from profiledesk.models.account import Account
from profiledesk.schemas.account import (
    AccountPublic,
    AccountResponse,
    AuthResponse,
    LoginRequest,
    SignupRequest,
)
from profiledesk.security.passwords import burn_verify, hash_password, verify_password
from profiledesk.security.tokens import TokenClaims, TokenIssuer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AccountService:

    async def _find_by_email(self, db: AsyncSession, email: str) -> Optional[Account]:
        result = await db.execute(select(Account).where(Account.email == email))
        return result.scalar_one_or_none()

    async def signup(
        self,
        db: AsyncSession,
        issuer: TokenIssuer,
        request: SignupRequest,
    ) -> AuthResponse:
        """
        Register a new account and issue its first token.

        Raises:
            ConflictError: the email is already registered (→ 409)
            DatabaseError: the insert failed for another reason (→ 500)
        """
        try:
            if await self._find_by_email(db, request.email) is not None:
                raise ConflictError("Email already in use", field="email")

            password_hash = await run_in_threadpool(hash_password, request.password)
            account = Account(
                name=request.name,
                email=request.email,
                password_hash=password_hash,
            )
            db.add(account)
            await db.flush()
        except IntegrityError:
            # lost a race with a concurrent signup for the same email
            raise ConflictError("Email already in use", field="email")
        except SQLAlchemyError as e:
            logger.error("Database error during signup: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "signup", "error_type": type(e).__name__})

        logger.info("Account created: %s", account.id)
        return AuthResponse(
            message="User created",
            token=issuer.issue(account.id, account.email),
            user=AccountPublic.from_record(account),
        )

    async def login(
        self,
        db: AsyncSession,
        issuer: TokenIssuer,
        request: LoginRequest,
    ) -> AuthResponse:
        try:
            account = await self._find_by_email(db, request.email)
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "login", "error_type": type(e).__name__})

        if account is None:
            await run_in_threadpool(burn_verify, request.password)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        ok = await run_in_threadpool(verify_password, request.password, account.password_hash)
        if not ok:
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return AuthResponse(
            message="Login success",
            token=issuer.issue(account.id, account.email),
            user=AccountPublic.from_record(account),
        )

    async def get_current(self, db: AsyncSession, identity: TokenClaims) -> AccountResponse:
        """
        Look up the account behind a verified token.

        Raises:
            NotFoundError: the account was removed after the token was issued
        """
        try:
            account = await db.get(Account, identity.subject_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching account %s: %s", identity.subject_id, str(e))
            raise DatabaseError(context={"account_id": str(identity.subject_id)})

        if account is None:
            raise NotFoundError(
                "User not found",
                resource="account",
                resource_id=str(identity.subject_id),
            )

        return AccountResponse(message="Current user", user=AccountPublic.from_record(account))


account_service = AccountService()
