"""
ProfileDesk Backend — Auth Gate
================================

What:  FastAPI dependency that guards protected routes.
How:   Reads the Authorization header, accepting "Bearer <token>" or the raw
       token, verifies it in the thread pool and stores the TokenClaims on
       `request.state.identity`.
When:  Resolved before the route body runs, so an unauthenticated request
       never reaches a protected handler.

Failures:
    header missing / empty      → UnauthorizedError("No token provided")
    verification fails          → UnauthorizedError("Invalid/Expired token")
"""

import logging
from typing import Optional

from fastapi import Header, Request
from fastapi.concurrency import run_in_threadpool

from profiledesk.exceptions import UnauthorizedError
from profiledesk.security.tokens import InvalidTokenError, TokenClaims

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_token(header_value: Optional[str]) -> str:
    """Return the token from an Authorization header value ("" when absent)."""
    header = (header_value or "").strip()
    if header.startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX):].strip()
    return header


async def require_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> TokenClaims:
    token = extract_token(authorization)
    if not token:
        raise UnauthorizedError("No token provided")

    issuer = request.app.state.context.token_issuer
    try:
        identity = await run_in_threadpool(issuer.verify, token)
    except InvalidTokenError as e:
        logger.info("Rejected token on %s: %s", request.url.path, e)
        raise UnauthorizedError("Invalid/Expired token")

    request.state.identity = identity
    return identity
