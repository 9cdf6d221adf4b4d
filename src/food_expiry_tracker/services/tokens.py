"""Signed session tokens binding an email to a validity window."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from food_expiry_tracker.domain.auth import IssuedToken
from food_expiry_tracker.domain.errors import ServerConfigError, Unauthenticated

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Unauthorized: Invalid token"


@dataclass
class TokenService:
    """Issues and verifies JWT session tokens.

    Tokens are signed, not encrypted, and there is no revocation: a token
    stays valid until it expires.
    """

    secret: str | None
    algorithm: str = "HS256"
    expiry: timedelta = timedelta(hours=1)

    def issue_token(self, email: str) -> IssuedToken:
        """Sign a token for the email, valid for the configured window."""
        if not self.secret:
            logger.error("JWT secret is not configured")
            raise ServerConfigError("Server config error")
        issued_at = datetime.now(tz=UTC).replace(microsecond=0)
        expires_at = issued_at + self.expiry
        claims = {
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self.secret, algorithm=self.algorithm)
        return IssuedToken(token=token, issued_at=issued_at, expires_at=expires_at)

    def verify_token(self, token: str) -> str:
        """Return the email bound to the token or raise Unauthenticated."""
        if not self.secret:
            logger.error("JWT secret is not configured; rejecting token")
            raise Unauthenticated(INVALID_TOKEN_MESSAGE)
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            logger.info("Rejected expired session token")
            raise Unauthenticated(INVALID_TOKEN_MESSAGE) from exc
        except JWTError as exc:
            logger.warning("Rejected invalid session token: %s", exc)
            raise Unauthenticated(INVALID_TOKEN_MESSAGE) from exc
        email = claims.get("email")
        if not isinstance(email, str) or not email:
            logger.warning("Session token has no email claim")
            raise Unauthenticated(INVALID_TOKEN_MESSAGE)
        return email
