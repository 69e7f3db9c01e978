# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class SessionToken:

    user_id: int
    token: str
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class TokenClaims:

    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class AuthResult:
    """Outcome of a successful sign-up or sign-in."""

    token: str
    user_id: int
    user_name: str
    email_id: str

    @classmethod
    def for_user(cls, user: User, token: SessionToken) -> AuthResult:
        return cls(token=token.token, user_id=user.id, user_name=user.name, email_id=user.email)
