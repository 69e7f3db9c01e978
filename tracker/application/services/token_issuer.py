# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless JWT session tokens."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt

from tracker.domain.users.entities import SessionToken, TokenClaims, User
from tracker.domain.users.exceptions import TokenInvalidError
from tracker.domain.users.repositories import TokenIssuer
from tracker.shared.logging import logger

_REQUIRED_CLAIMS = ["sub", "user_id", "email", "iat", "exp"]


class JwtTokenIssuer(TokenIssuer):
    """Issue and verify signed session tokens.

    The subject (``sub``) is the user's email; ``user_id`` and ``email`` are
    carried as explicit claims. Validity depends only on the signature and
    ``exp``, so no server-side state is kept.
    """

    def __init__(
        self,
        secret: str,
        *,
        expires_in: timedelta = timedelta(days=1),
        algorithm: str = "HS256",
    ) -> None:
        if not secret:
            raise ValueError("JWT signing secret must not be empty")
        if expires_in <= timedelta(0):
            raise ValueError("Token lifetime must be positive")
        self._secret = secret
        self._expires_in = expires_in
        self._algorithm = algorithm

    def issue(self, user: User, *, now: datetime | None = None) -> SessionToken:
        issued_at = now or datetime.now(UTC)
        expires_at = issued_at + self._expires_in
        payload = {
            "sub": user.email,
            "user_id": user.id,
            "email": user.email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        logger.debug(f"token.issue: user={user.id} exp={expires_at.isoformat()}")
        return SessionToken(user_id=user.id, token=token, expires_at=expires_at)

    def verify(self, token: str) -> TokenClaims:
        if not token:
            raise TokenInvalidError()
        try:
            decoded = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            logger.debug("token.verify: expired")
            raise TokenInvalidError() from exc
        except jwt.InvalidTokenError as exc:
            logger.debug(f"token.verify: rejected ({type(exc).__name__})")
            raise TokenInvalidError() from exc

        user_id = decoded["user_id"]
        email = decoded["email"]
        if not isinstance(user_id, int) or isinstance(user_id, bool) or email != decoded["sub"]:
            logger.debug("token.verify: inconsistent claims")
            raise TokenInvalidError()

        return TokenClaims(
            user_id=user_id,
            email=email,
            issued_at=datetime.fromtimestamp(decoded["iat"], UTC),
            expires_at=datetime.fromtimestamp(decoded["exp"], UTC),
        )
