# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from tracker.application.services.password_hashing import WerkzeugPasswordHasher
from tracker.application.services.token_issuer import JwtTokenIssuer
from tracker.application.use_cases.users.current_user import GetCurrentUserUseCase
from tracker.application.use_cases.users.signin_user import SignInUserUseCase
from tracker.application.use_cases.users.signup_user import SignUpUserUseCase
from tracker.infrastructure.db import build_engine, build_session_factory
from tracker.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from tracker.interfaces.http.controllers.auth_controller import AuthController
from tracker.interfaces.http.controllers.misc_controller import MiscController
from tracker.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.security.password_hash_method)

    @cached_property
    def token_issuer(self) -> JwtTokenIssuer:
        return JwtTokenIssuer(
            self.config.jwt.secret,
            expires_in=timedelta(seconds=self.config.jwt.expires_seconds),
            algorithm=self.config.jwt.algorithm,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def signup_user_use_case(self) -> SignUpUserUseCase:
        return SignUpUserUseCase(
            users=self.user_repository,
            tokens=self.token_issuer,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def signin_user_use_case(self) -> SignInUserUseCase:
        return SignInUserUseCase(
            users=self.user_repository,
            tokens=self.token_issuer,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(users=self.user_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            signup_use_case=self.signup_user_use_case,
            signin_use_case=self.signin_user_use_case,
            current_user_use_case=self.current_user_use_case,
            tokens=self.token_issuer,
            security=self.config.security,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
