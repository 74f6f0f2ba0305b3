from fastapi.testclient import TestClient

from expense_assistant.models.constants import (
    SECURE_SESSION_COOKIE_NAME,
    SESSION_COOKIE_NAME,
)

EPOCH = "expires=Thu, 01 Jan 1970 00:00:00 GMT"


def _set_cookie_headers(response, name):
    return [
        h
        for h in response.headers.get_list("set-cookie")
        if h.startswith(f"{name}=")
    ]


def test_logout_returns_success(client: TestClient):
    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_logout_expires_both_session_cookies(client: TestClient):
    response = client.post("/api/auth/logout")

    for name in (SESSION_COOKIE_NAME, SECURE_SESSION_COOKIE_NAME):
        headers = _set_cookie_headers(response, name)
        assert len(headers) == 1, f"expected one Set-Cookie for {name}"
        header = headers[0]
        assert header.startswith(f'{name}="";') or header.startswith(f"{name}=;")
        assert EPOCH in header
        assert "Path=/" in header


def test_logout_with_active_session_still_succeeds(auth_client: TestClient):
    response = auth_client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert len(response.headers.get_list("set-cookie")) == 2


def test_logout_marks_cookies_secure_when_configured(app, settings):
    settings.secure_cookies = True
    with TestClient(app) as client:
        response = client.post("/api/auth/logout")

    for header in response.headers.get_list("set-cookie"):
        assert "Secure" in header


def test_logout_rejects_get(client: TestClient):
    response = client.get("/api/auth/logout")

    assert response.status_code == 405
    assert response.json()["error"] == "http_error"


def test_response_carries_request_id(client: TestClient):
    response = client.post("/api/auth/logout")

    assert response.headers.get("x-request-id")
