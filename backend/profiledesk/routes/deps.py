"""Request-scoped accessors for the AppContext."""

from fastapi import Request

from profiledesk.config import Settings
from profiledesk.context import AppContext
from profiledesk.security.tokens import TokenIssuer


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_settings(request: Request) -> Settings:
    return request.app.state.context.settings


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.context.token_issuer
