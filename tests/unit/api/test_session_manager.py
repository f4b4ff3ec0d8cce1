"""
Unit tests for SessionManager
"""
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from fastapi import Response
from jose import jwt

from council_admin.api.utils.session import SESSION_COOKIE, SessionManager, SessionStatus

SECRET = "s" * 32


def test_new_token_is_valid():
    manager = SessionManager(SECRET)
    user_id = uuid4()

    check = manager.inspect(manager.create_token(user_id, "jane@acme.com", "ADMIN"))

    assert check.status == SessionStatus.VALID
    assert check.payload.user_id == str(user_id)
    assert check.payload.email == "jane@acme.com"
    assert check.payload.role == "ADMIN"


def test_missing_token():
    assert SessionManager(SECRET).inspect(None).status == SessionStatus.MISSING
    assert SessionManager(SECRET).inspect("").status == SessionStatus.MISSING


def test_token_from_eight_days_ago_is_expired():
    issued = datetime.now(UTC) - timedelta(days=8)
    old_manager = SessionManager(SECRET, clock=lambda: issued)
    token = old_manager.create_token(uuid4(), "jane@acme.com", "EDITOR")

    check = SessionManager(SECRET).inspect(token)

    assert check.status == SessionStatus.EXPIRED


def test_embedded_expiry_is_enforced():
    """A token whose exp is still valid but whose expires_at has passed is expired"""
    now = datetime.now(UTC)
    token = jwt.encode(
        {
            "user_id": str(uuid4()),
            "email": "jane@acme.com",
            "role": "EDITOR",
            "expires_at": (now - timedelta(minutes=1)).isoformat(),
            "exp": now + timedelta(days=1),
        },
        SECRET,
        algorithm="HS256",
    )

    assert SessionManager(SECRET).inspect(token).status == SessionStatus.EXPIRED


def test_wrong_signature_is_invalid():
    token = SessionManager("o" * 32).create_token(uuid4(), "jane@acme.com", "ADMIN")

    assert SessionManager(SECRET).inspect(token).status == SessionStatus.INVALID


def test_garbage_token_is_invalid():
    assert SessionManager(SECRET).inspect("not.a.jwt").status == SessionStatus.INVALID


def test_token_missing_claims_is_invalid():
    token = jwt.encode({"user_id": "abc"}, SECRET, algorithm="HS256")

    assert SessionManager(SECRET).inspect(token).status == SessionStatus.INVALID


@pytest.mark.parametrize("secret", [None, "", "short-secret"])
def test_short_secret_refused(secret):
    with pytest.raises(ValueError):
        SessionManager(secret)


def test_issue_sets_hardened_cookie():
    manager = SessionManager(SECRET, secure=True)
    response = Response()

    manager.issue(response, uuid4(), "jane@acme.com", "ADMIN")

    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"{SESSION_COOKIE}=")
    assert "HttpOnly" in cookie
    assert "Secure" in cookie
    assert "SameSite=lax" in cookie
    assert "Path=/" in cookie


def test_destroy_clears_cookie():
    response = Response()

    SessionManager(SECRET).destroy(response)

    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f'{SESSION_COOKIE}=""')
    assert "Max-Age=0" in cookie
