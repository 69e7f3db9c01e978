# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import AuthResult, SessionToken, TokenClaims, User
from .exceptions import DuplicateEmailError, InvalidCredentialsError, TokenInvalidError
from .repositories import PasswordHasher, TokenIssuer, UserRepository

__all__ = [
    "AuthResult",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "PasswordHasher",
    "SessionToken",
    "TokenClaims",
    "TokenInvalidError",
    "TokenIssuer",
    "User",
    "UserRepository",
]
