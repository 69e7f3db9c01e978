# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    NAME_BLANK = "name_blank"
    EMAIL_INVALID = "email_invalid"
    PASSWORD_BLANK = "password_blank"


__all__ = ["ValidationErrorType"]
