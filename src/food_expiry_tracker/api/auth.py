"""Session token endpoint and the authorization gate."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response

from food_expiry_tracker.api.models import TokenRequest  # noqa: TC001
from food_expiry_tracker.domain.auth import Identity
from food_expiry_tracker.domain.errors import Unauthenticated, ValidationError

if TYPE_CHECKING:
    from food_expiry_tracker.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

TOKEN_COOKIE = "token"


def extract_token(request: Request) -> str | None:
    """Return the session token from the cookie, else the Authorization header."""
    token = request.cookies.get(TOKEN_COOKIE)
    if token:
        return token
    header = request.headers.get("authorization")
    if not header:
        return None
    parts = header.split()
    if len(parts) < 2:  # noqa: PLR2004
        return None
    return parts[1]


async def require_identity(request: Request) -> Identity:
    """Verify the session token and attach the identity to the request."""
    token = extract_token(request)
    if not token:
        raise Unauthenticated("Unauthorized: No token provided")
    container: AppContainer = request.app.state.container
    email = container.token_service.verify_token(token)
    identity = Identity(email=email)
    request.state.identity = identity
    return identity


@router.post("/jwt")
async def issue_token(
    body: TokenRequest, request: Request, response: Response
) -> dict[str, object]:
    """Issue a session token and deliver it as an HTTP-only cookie."""
    if not body.email or not body.email.strip():
        raise ValidationError("Email is required")
    container: AppContainer = request.app.state.container
    issued = container.token_service.issue_token(body.email.strip())
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=issued.token,
        max_age=issued.max_age_seconds,
        httponly=True,
        secure=container.settings.cookie_secure,
        samesite=container.settings.cookie_samesite,
    )
    logger.info("Issued session token", extra={"expires_at": issued.expires_at})
    return {"success": True, "message": "JWT token set in cookie"}
