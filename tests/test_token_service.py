"""Tests for session token issuance and verification."""

from datetime import timedelta

import pytest
from jose import jwt

from food_expiry_tracker.domain.errors import ServerConfigError, Unauthenticated
from food_expiry_tracker.services.tokens import TokenService


def test_issue_and_verify_round_trip() -> None:
    service = TokenService(secret="secret")

    issued = service.issue_token("owner@example.com")

    assert service.verify_token(issued.token) == "owner@example.com"
    assert issued.max_age_seconds == 3600
    claims = jwt.get_unverified_claims(issued.token)
    assert claims["exp"] - claims["iat"] == 3600


def test_expiry_window_is_configurable() -> None:
    service = TokenService(secret="secret", expiry=timedelta(hours=2))

    issued = service.issue_token("owner@example.com")

    assert issued.max_age_seconds == 7200


def test_expired_token_is_rejected() -> None:
    service = TokenService(secret="secret", expiry=timedelta(hours=-1))
    issued = service.issue_token("owner@example.com")

    with pytest.raises(Unauthenticated, match="Invalid token"):
        service.verify_token(issued.token)


def test_token_signed_with_other_secret_is_rejected() -> None:
    issued = TokenService(secret="other").issue_token("owner@example.com")

    with pytest.raises(Unauthenticated):
        TokenService(secret="secret").verify_token(issued.token)


def test_malformed_token_is_rejected() -> None:
    with pytest.raises(Unauthenticated):
        TokenService(secret="secret").verify_token("not-a-token")


def test_token_without_email_claim_is_rejected() -> None:
    token = jwt.encode({"sub": "someone"}, "secret", algorithm="HS256")

    with pytest.raises(Unauthenticated):
        TokenService(secret="secret").verify_token(token)


def test_missing_secret_is_a_server_config_error() -> None:
    service = TokenService(secret=None)

    with pytest.raises(ServerConfigError, match="Server config error"):
        service.issue_token("owner@example.com")
    with pytest.raises(Unauthenticated):
        service.verify_token("anything")
