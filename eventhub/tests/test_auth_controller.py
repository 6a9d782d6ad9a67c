from __future__ import annotations

import io
from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from eventhub.application.services.session_tokens import JwtSessionTokenService
from eventhub.application.use_cases.users.register_user import RegisterUserUseCase
from eventhub.domain import ImageBlob
from eventhub.domain.users.entities import SessionToken, User
from eventhub.infrastructure.auth import install_session_tokens
from eventhub.interfaces.http.controllers.auth_controller import AuthController
from eventhub.interfaces.http.controllers.users_controller import UsersController
from eventhub.shared.middleware.error_handler import configure_error_handling

NOW = datetime(2030, 1, 1, tzinfo=UTC)
TOKENS = JwtSessionTokenService(secret="controller-test-secret-key-long-enough")


def _user(**overrides) -> User:
    fields = dict(
        id=1,
        username="alice",
        email="alice@example.com",
        password_hash="hash",
        has_profile_picture=False,
        created_at=NOW,
        updated_at=NOW,
    )
    fields.update(overrides)
    return User(**fields)


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    install_session_tokens(app, TOKENS)
    return app


def _controller(**overrides) -> AuthController:
    deps = dict(
        register_use_case=MagicMock(),
        login_use_case=MagicMock(),
        profile_use_case=MagicMock(),
    )
    deps.update(overrides)
    return AuthController(**deps)


def _bearer(user: User | None = None) -> dict[str, str]:
    return {"Authorization": f"Bearer {TOKENS.issue(user or _user()).token}"}


def test_register_endpoint_returns_token(flask_app: Flask) -> None:
    register_called: dict[str, tuple] = {}

    class StubRegister:
        def execute(self, username, email, password, profile_picture=None):
            register_called["args"] = (username, email, password, profile_picture)
            user = _user(username=username, email=email)
            return user, SessionToken(user_id=1, token="token123", expires_at=NOW)

    controller = _controller(register_use_case=cast(RegisterUserUseCase, StubRegister()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "alice@example.com", "password": "secret123"},
        )

    assert response.status_code == 201
    assert register_called["args"] == ("alice", "alice@example.com", "secret123", None)
    payload = response.get_json()
    assert payload["token"] == "token123"
    assert payload["userId"] == 1
    assert payload["hasProfilePicture"] is False


def test_register_accepts_multipart_with_avatar(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.return_value = (
        _user(has_profile_picture=True),
        SessionToken(user_id=1, token="t", expires_at=NOW),
    )
    flask_app.register_blueprint(_controller(register_use_case=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            data={
                "username": "alice",
                "email": "alice@example.com",
                "password": "secret123",
                "profilePicture": (io.BytesIO(b"\xff\xd8jpeg"), "me.jpg", "image/jpeg"),
            },
            content_type="multipart/form-data",
        )

    assert response.status_code == 201
    picture = register.execute.call_args.kwargs["profile_picture"]
    assert picture == ImageBlob(data=b"\xff\xd8jpeg", content_type="image/jpeg")


def test_register_rejects_unsupported_avatar_type(flask_app: Flask) -> None:
    register = MagicMock()
    flask_app.register_blueprint(_controller(register_use_case=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            data={
                "username": "alice",
                "email": "alice@example.com",
                "password": "secret123",
                "profilePicture": (io.BytesIO(b"GIF89a"), "me.gif", "image/gif"),
            },
            content_type="multipart/form-data",
        )

    assert response.status_code == 415
    assert response.get_json()["error"] == "unsupported_image_type"
    register.execute.assert_not_called()


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "alice@example.com", "password": "secret123"},
        {"username": "alice", "email": "not-an-email", "password": "secret123"},
        {"username": "alice", "email": "alice@example.com", "password": "short1"},
        {"username": "alice", "email": "alice@example.com", "password": "lettersonly"},
        {"username": "bad name!", "email": "alice@example.com", "password": "secret123"},
    ],
)
def test_register_invalid_payload_returns_422(flask_app: Flask, payload: dict) -> None:
    flask_app.register_blueprint(_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/register", json=payload)

    assert response.status_code == 422
    assert response.get_json()["error"] == "validation_error"


def test_login_invalid_payload_returns_422(flask_app: Flask) -> None:
    flask_app.register_blueprint(_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"emailOrUsername": "a"})

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "password" in payload["context"]["fields"]


def test_login_returns_identity_and_token(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = (_user(), SessionToken(user_id=1, token="tok", expires_at=NOW))
    flask_app.register_blueprint(_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"emailOrUsername": "alice", "password": "secret123"}
        )

    assert response.status_code == 200
    assert response.get_json()["token"] == "tok"
    assert response.get_json()["username"] == "alice"
    assert login.execute.call_args.args[:2] == ("alice", "secret123")


def test_me_requires_bearer_token(flask_app: Flask) -> None:
    flask_app.register_blueprint(_controller().as_blueprint())

    with flask_app.test_client() as client:
        missing = client.get("/api/auth/me")
        garbage = client.get("/api/auth/me", headers={"Authorization": "Bearer nope"})

    assert missing.status_code == 401
    assert missing.get_json()["error"] == "unauthorized"
    assert garbage.status_code == 401


def test_me_returns_profile(flask_app: Flask) -> None:
    profile = MagicMock()
    profile.get_user.return_value = _user()
    flask_app.register_blueprint(_controller(profile_use_case=profile).as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/auth/me", headers=_bearer())

    assert response.status_code == 200
    assert response.get_json()["email"] == "alice@example.com"
    profile.get_user.assert_called_with(1)


def test_put_profile_picture_requires_file(flask_app: Flask) -> None:
    profile = MagicMock()
    flask_app.register_blueprint(_controller(profile_use_case=profile).as_blueprint())

    with flask_app.test_client() as client:
        response = client.put(
            "/api/auth/me/profile-picture",
            data={"note": "no file"},
            content_type="multipart/form-data",
            headers=_bearer(),
        )

    assert response.status_code == 422
    assert response.get_json()["error"] == "image_required"
    profile.replace_picture.assert_not_called()


def test_public_user_lookup_hides_email(flask_app: Flask) -> None:
    profile = MagicMock()
    profile.get_user.return_value = _user(id=5)
    flask_app.register_blueprint(UsersController(profile_use_case=profile).as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/users/5")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["id"] == 5
    assert "email" not in payload
