# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from tracker.domain.users.entities import AuthResult
from tracker.domain.users.exceptions import InvalidCredentialsError
from tracker.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository


class SignInUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenIssuer,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._dummy_hash: str | None = None

    def _unknown_user_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash(secrets.token_urlsafe(16))
        return self._dummy_hash

    def execute(self, email: str, password: str) -> AuthResult:
        user = self._users.find_by_email(email)
        if user is None:
            # Pay the same verify cost as a known email, then report it identically.
            self._password_hasher.verify(password, self._unknown_user_hash())
            raise InvalidCredentialsError()
        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        token = self._tokens.issue(user)
        return AuthResult.for_user(user, token)
