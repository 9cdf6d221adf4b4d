"""Domain models for session identity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Identity:
    """The verified user bound to a request."""

    email: str


@dataclass(frozen=True)
class IssuedToken:
    """A signed session token and its validity window."""

    token: str
    issued_at: datetime
    expires_at: datetime

    @property
    def max_age_seconds(self) -> int:
        return int((self.expires_at - self.issued_at).total_seconds())
