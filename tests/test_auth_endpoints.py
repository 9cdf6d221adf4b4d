"""Tests for the session token endpoint and authorization gate."""

from fastapi.testclient import TestClient

from food_expiry_tracker.api.app import create_app
from food_expiry_tracker.api.auth import TOKEN_COOKIE
from food_expiry_tracker.containers import build_token_service

OWNER = "owner@example.com"


def test_jwt_sets_http_only_cookie(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/jwt", json={"email": OWNER})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "JWT token set in cookie"}
    set_cookie = response.headers["set-cookie"].lower()
    assert set_cookie.startswith(f"{TOKEN_COOKIE}=")
    assert "httponly" in set_cookie
    assert "secure" in set_cookie
    assert "samesite=none" in set_cookie
    assert "max-age=3600" in set_cookie
    token = response.cookies[TOKEN_COOKIE]
    assert container.token_service.verify_token(token) == OWNER


def test_jwt_requires_email(container) -> None:
    client = TestClient(create_app(container))

    missing = client.post("/jwt", json={})
    blank = client.post("/jwt", json={"email": "  "})

    assert missing.status_code == 400
    assert missing.json() == {"error": "Email is required"}
    assert blank.status_code == 400


def test_jwt_without_secret_is_a_server_error(container, settings) -> None:
    container.token_service = build_token_service(
        settings.model_copy(update={"jwt_secret": None})
    )
    client = TestClient(create_app(container))

    response = client.post("/jwt", json={"email": OWNER})

    assert response.status_code == 500
    assert response.json() == {"error": "Server config error"}


def test_cookie_issued_by_jwt_authenticates_requests(container) -> None:
    client = TestClient(create_app(container), base_url="https://testserver")

    client.post("/jwt", json={"email": OWNER})
    response = client.get("/myfoods", params={"email": OWNER})

    assert response.status_code == 200
    assert response.json() == []


def test_cookie_takes_precedence_over_header(container, auth_headers) -> None:
    client = TestClient(create_app(container))
    valid = container.token_service.issue_token(OWNER).token

    client.cookies.set(TOKEN_COOKIE, valid)
    with_bad_header = client.get(
        "/myfoods", params={"email": OWNER}, headers={"Authorization": "Bearer bad"}
    )
    client.cookies.set(TOKEN_COOKIE, "bad")
    with_good_header = client.get(
        "/myfoods", params={"email": OWNER}, headers=auth_headers(OWNER)
    )

    assert with_bad_header.status_code == 200
    assert with_good_header.status_code == 401


def test_authorization_header_without_token_segment(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        "/myfoods", params={"email": OWNER}, headers={"Authorization": "Bearer"}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized: No token provided"}
