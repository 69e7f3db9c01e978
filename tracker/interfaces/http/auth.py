# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import g, request

from tracker.domain.users.entities import TokenClaims
from tracker.domain.users.exceptions import TokenInvalidError
from tracker.domain.users.repositories import TokenIssuer
from tracker.shared.logging import logger


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth[:7].lower() == "bearer ":
        return auth[7:].strip()
    return ""


def current_claims() -> TokenClaims:
    claims = getattr(g, "token_claims", None)
    if claims is None:
        raise TokenInvalidError()
    return claims


def make_auth_required(tokens: TokenIssuer) -> Callable[[Callable], Callable]:
    """Build a view decorator that admits only requests with a valid bearer token."""

    def auth_required(f: Callable) -> Callable:
        @wraps(f)
        def inner(*a, **kw):
            token = bearer_token()
            if not token:
                logger.warning(
                    f"No bearer token on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise TokenInvalidError()

            try:
                claims = tokens.verify(token)
            except TokenInvalidError:
                logger.warning(f"Auth failed (token invalid/expired) on {request.method} {request.path}")
                raise

            g.token_claims = claims
            g.user_id = claims.user_id
            logger.debug(f"Auth OK: user={claims.user_id} {request.method} {request.path}")
            return f(*a, **kw)

        return inner

    return auth_required
