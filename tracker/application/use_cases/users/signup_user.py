# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from tracker.domain.users.entities import AuthResult, User
from tracker.domain.users.exceptions import DuplicateEmailError
from tracker.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository


class SignUpUserUseCase:
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

    def execute(self, name: str, email: str, password: str) -> AuthResult:
        # Checked before hashing; the unique index on users.email covers races.
        if self._users.find_by_email(email) is not None:
            raise DuplicateEmailError()
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            name=name,
            email=email,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        token = self._tokens.issue(persisted)
        return AuthResult.for_user(persisted, token)
