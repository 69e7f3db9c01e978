# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from tracker.application.use_cases.users.current_user import GetCurrentUserUseCase
from tracker.application.use_cases.users.signin_user import SignInUserUseCase
from tracker.application.use_cases.users.signup_user import SignUpUserUseCase
from tracker.domain.users.exceptions import DuplicateEmailError, InvalidCredentialsError
from tracker.domain.users.repositories import TokenIssuer
from tracker.infrastructure.observability import record_auth_event
from tracker.interfaces.http.auth import current_claims, make_auth_required
from tracker.interfaces.http.dto.auth import (AuthResponseDTO, CurrentUserDTO,
                                              SignInRequestDTO, SignUpRequestDTO)
from tracker.shared.config import SecurityConfig
from tracker.shared.errors.validation import raise_validation_error
from tracker.shared.logging import logger
from tracker.shared.middleware.rate_limit import limiter_from_config, rate_limit


class AuthController:
    def __init__(
        self,
        *,
        signup_use_case: SignUpUserUseCase,
        signin_use_case: SignInUserUseCase,
        current_user_use_case: GetCurrentUserUseCase,
        tokens: TokenIssuer,
        security: SecurityConfig | None = None,
    ) -> None:
        self._signup_use_case = signup_use_case
        self._signin_use_case = signin_use_case
        self._current_user_use_case = current_user_use_case
        self._auth_required = make_auth_required(tokens)
        self._security = security

    def signup(self) -> tuple[Response, int]:
        try:
            dto = SignUpRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            result = self._signup_use_case.execute(dto.name, dto.email, dto.password)
        except DuplicateEmailError:
            record_auth_event("signup", "duplicate_email")
            raise

        record_auth_event("signup", "ok")
        logger.info(f"auth.signup: ok user_id={result.user_id}")
        return jsonify(AuthResponseDTO.from_result(result).model_dump(by_alias=True)), 200

    def signin(self) -> tuple[Response, int]:
        try:
            dto = SignInRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            result = self._signin_use_case.execute(dto.email, dto.password)
        except InvalidCredentialsError:
            logger.warning("auth.signin: invalid credentials")
            record_auth_event("signin", "invalid_credentials")
            raise

        record_auth_event("signin", "ok")
        logger.info(f"auth.signin: ok user_id={result.user_id}")
        return jsonify(AuthResponseDTO.from_result(result).model_dump(by_alias=True)), 200

    def me(self) -> tuple[Response, int]:
        user = self._current_user_use_case.execute(current_claims())
        return jsonify(CurrentUserDTO.from_user(user).model_dump(by_alias=True)), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        # Limiter keys include the path, so each route keeps its own budget.
        limited = rate_limit(limiter_from_config(self._security))
        bp.add_url_rule("/signup", view_func=limited(self.signup), methods=["POST"])
        bp.add_url_rule("/signin", view_func=limited(self.signin), methods=["POST"])
        bp.add_url_rule("/me", view_func=self._auth_required(self.me), methods=["GET"])
        return bp
