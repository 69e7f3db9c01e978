"""Resolve the subject of a verified session token to a stored user."""

from __future__ import annotations

from tracker.domain.users.entities import TokenClaims, User
from tracker.domain.users.exceptions import TokenInvalidError
from tracker.domain.users.repositories import UserRepository


class GetCurrentUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, claims: TokenClaims) -> User:
        user = self._users.find_by_id(claims.user_id)
        if user is None or user.email != claims.email:
            raise TokenInvalidError()
        return user
