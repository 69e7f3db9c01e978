from __future__ import annotations

from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from tracker.application.services.token_issuer import JwtTokenIssuer
from tracker.application.use_cases.users.current_user import GetCurrentUserUseCase
from tracker.application.use_cases.users.signin_user import SignInUserUseCase
from tracker.application.use_cases.users.signup_user import SignUpUserUseCase
from tracker.domain.users.entities import AuthResult, TokenClaims, User
from tracker.domain.users.exceptions import DuplicateEmailError, InvalidCredentialsError
from tracker.interfaces.http.controllers.auth_controller import AuthController
from tracker.shared.config import SecurityConfig
from tracker.shared.errors import StoreUnavailableError
from tracker.shared.middleware.error_handler import configure_error_handling

SECRET = "controller-test-secret-0123456789abcdef"


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


@pytest.fixture()
def issuer() -> JwtTokenIssuer:
    return JwtTokenIssuer(SECRET)


def _controller(
    issuer: JwtTokenIssuer,
    *,
    signup: object | None = None,
    signin: object | None = None,
    current_user: object | None = None,
    security: SecurityConfig | None = None,
) -> AuthController:
    return AuthController(
        signup_use_case=cast(SignUpUserUseCase, signup or MagicMock()),
        signin_use_case=cast(SignInUserUseCase, signin or MagicMock()),
        current_user_use_case=cast(GetCurrentUserUseCase, current_user or MagicMock()),
        tokens=issuer,
        security=security,
    )


def test_signup_endpoint_returns_camel_case_payload(flask_app: Flask, issuer) -> None:
    signup_called: dict[str, tuple[str, str, str]] = {}

    class StubSignUp:
        def execute(self, name: str, email: str, password: str) -> AuthResult:
            signup_called["args"] = (name, email, password)
            return AuthResult(token="token123", user_id=1, user_name=name, email_id=email)

    flask_app.register_blueprint(_controller(issuer, signup=StubSignUp()).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/signup",
            json={"name": "Alice", "email": "a@x.com", "password": "secret1"},
        )

    assert response.status_code == 200
    assert signup_called["args"] == ("Alice", "a@x.com", "secret1")
    assert response.get_json() == {
        "token": "token123",
        "userId": 1,
        "userName": "Alice",
        "emailId": "a@x.com",
    }


def test_signup_duplicate_email_is_forbidden(flask_app: Flask, issuer) -> None:
    signup = MagicMock()
    signup.execute.side_effect = DuplicateEmailError()
    flask_app.register_blueprint(_controller(issuer, signup=signup).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/signup",
            json={"name": "Alice", "email": "a@x.com", "password": "secret1"},
        )

    assert response.status_code == 403
    assert response.get_json() == {"error": "duplicate_email"}


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@x.com", "password": "secret1"},
        {"name": "Alice", "email": "not-an-email", "password": "secret1"},
        {"name": "Alice", "email": "a@x.com", "password": "123"},
        {"name": "   ", "email": "a@x.com", "password": "secret1"},
    ],
)
def test_signup_invalid_payload_returns_422(flask_app: Flask, issuer, payload) -> None:
    signup = MagicMock()
    flask_app.register_blueprint(_controller(issuer, signup=signup).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/signup", json=payload)

    assert response.status_code == 422
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert body["context"]["fields"]
    signup.execute.assert_not_called()


def test_signin_invalid_credentials_returns_401(flask_app: Flask, issuer) -> None:
    signin = MagicMock()
    signin.execute.side_effect = InvalidCredentialsError()
    flask_app.register_blueprint(_controller(issuer, signin=signin).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/signin", json={"email": "a@x.com", "password": "wrong"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_credentials"}


def test_signin_past_configured_limit_returns_429(flask_app: Flask, issuer) -> None:
    signin = MagicMock()
    signin.execute.side_effect = InvalidCredentialsError()
    security = SecurityConfig(enable_rate_limit=True, rate_limit_requests=2, rate_limit_window=60.0)
    flask_app.register_blueprint(_controller(issuer, signin=signin, security=security).as_blueprint())

    with flask_app.test_client() as client:
        statuses = [
            client.post("/api/auth/signin", json={"email": "a@x.com", "password": "wrong"}).status_code
            for _ in range(4)
        ]
        spoofed = client.post(
            "/api/auth/signin",
            json={"email": "a@x.com", "password": "wrong"},
            headers={"X-Forwarded-For": "203.0.113.9"},
        )

    assert statuses == [401, 401, 429, 429]
    assert spoofed.status_code == 429
    assert spoofed.get_json() == {"error": "rate_limited"}
    assert signin.execute.call_count == 2


def test_rate_limit_disabled_by_config(flask_app: Flask, issuer) -> None:
    signin = MagicMock()
    signin.execute.side_effect = InvalidCredentialsError()
    security = SecurityConfig(enable_rate_limit=False, rate_limit_requests=1)
    flask_app.register_blueprint(_controller(issuer, signin=signin, security=security).as_blueprint())

    with flask_app.test_client() as client:
        statuses = {
            client.post("/api/auth/signin", json={"email": "a@x.com", "password": "wrong"}).status_code
            for _ in range(3)
        }

    assert statuses == {401}

def test_signin_store_failure_returns_503(flask_app: Flask, issuer) -> None:
    signin = MagicMock()
    signin.execute.side_effect = StoreUnavailableError("find_by_email")
    flask_app.register_blueprint(_controller(issuer, signin=signin).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/signin", json={"email": "a@x.com", "password": "secret1"})

    assert response.status_code == 503
    assert response.get_json()["error"] == "store_unavailable"


def test_unexpected_error_returns_500(flask_app: Flask, issuer) -> None:
    signin = MagicMock()
    signin.execute.side_effect = RuntimeError("boom")
    flask_app.register_blueprint(_controller(issuer, signin=signin).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/signin", json={"email": "a@x.com", "password": "secret1"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}


def test_me_requires_bearer_token(flask_app: Flask, issuer) -> None:
    current_user = MagicMock()
    flask_app.register_blueprint(_controller(issuer, current_user=current_user).as_blueprint())

    with flask_app.test_client() as client:
        missing = client.get("/api/auth/me")
        garbage = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})

    assert missing.status_code == 401
    assert garbage.status_code == 401
    assert missing.get_json() == garbage.get_json() == {"error": "token_invalid"}
    current_user.execute.assert_not_called()


def test_me_returns_current_user(flask_app: Flask, issuer) -> None:
    alice = User(id=3, name="Alice", email="a@x.com", password_hash="hash")
    seen: dict[str, TokenClaims] = {}

    class StubCurrentUser:
        def execute(self, claims: TokenClaims) -> User:
            seen["claims"] = claims
            return alice

    flask_app.register_blueprint(
        _controller(issuer, current_user=StubCurrentUser()).as_blueprint()
    )
    token = issuer.issue(alice).token

    with flask_app.test_client() as client:
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.get_json() == {"userId": 3, "userName": "Alice", "emailId": "a@x.com"}
    assert seen["claims"].user_id == 3
