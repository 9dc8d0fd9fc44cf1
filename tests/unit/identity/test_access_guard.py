"""
Name: Access Guard Tests

Responsibilities:
  - Header shape is strictly `Bearer <token>`
  - The FastAPI dependency always answers the same 401 and never attaches
    an identity on failure
"""

from uuid import uuid4

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from taskvault.api.exception_handlers import register_exception_handlers
from taskvault.identity.access_guard import (
    authenticate,
    extract_bearer_token,
    require_identity,
)
from taskvault.identity.tokens import (
    TokenError,
    TokenErrorKind,
    TokenSettings,
    issue_token,
)
from taskvault.identity.users import Identity

pytestmark = pytest.mark.unit

SETTINGS = TokenSettings(
    jwt_secret="guard-test-secret-with-enough-length", jwt_access_ttl_minutes=120
)


def _build_guard_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/whoami")
    def whoami(request: Request, identity: Identity = Depends(require_identity())):
        return {
            "user_id": str(identity.user_id),
            "attached": str(request.state.identity.user_id),
        }

    return app


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header(header):
    with pytest.raises(TokenError) as exc:
        extract_bearer_token(header)
    assert exc.value.kind == TokenErrorKind.MISSING


@pytest.mark.parametrize(
    "header",
    [
        "Bearer",
        "Bearer ",
        "bearer abc",
        "Token abc",
        "Bearer  abc",
        "Bearer abc def",
        "abc",
    ],
)
def test_wrong_shape_is_malformed(header):
    with pytest.raises(TokenError) as exc:
        extract_bearer_token(header)
    assert exc.value.kind == TokenErrorKind.MALFORMED


def test_extract_returns_token():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"


def test_authenticate_returns_identity():
    user_id = uuid4()
    token = issue_token(user_id, settings=SETTINGS).token

    identity = authenticate(f"Bearer {token}", settings=SETTINGS)

    assert identity == Identity(user_id=user_id)


def test_dependency_attaches_identity_with_valid_token():
    user_id = uuid4()
    token = issue_token(user_id).token
    client = TestClient(_build_guard_app())

    response = client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"user_id": str(user_id), "attached": str(user_id)}


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer"},
        {"Authorization": "Basic dXNlcjpwYXNz"},
        {"Authorization": "Bearer not-a-jwt"},
    ],
    ids=["missing", "no-token", "wrong-scheme", "garbage"],
)
def test_dependency_rejects_with_identical_401(headers):
    client = TestClient(_build_guard_app())

    response = client.get("/whoami", headers=headers)

    assert response.status_code == 401
    body = response.json()
    assert body["detail"] == "Authentication required."
    assert body["code"] == "UNAUTHORIZED"
    assert response.headers["www-authenticate"] == "Bearer"


def test_dependency_rejects_token_signed_with_other_secret():
    token = issue_token(uuid4(), settings=SETTINGS).token
    client = TestClient(_build_guard_app())

    response = client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Authentication required."
