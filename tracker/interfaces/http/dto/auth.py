from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from tracker.domain.users.entities import AuthResult, User
from tracker.shared.errors.validation_types import ValidationErrorType

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_email(value: str) -> str:
    if not _EMAIL_RE.match(value):
        raise PydanticCustomError(
            ValidationErrorType.EMAIL_INVALID,
            "Email must look like name@domain.tld",
            {},
        )
    return value


class SignUpRequestDTO(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=6, max_length=128)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError(
                ValidationErrorType.NAME_BLANK,
                "Name cannot be blank",
                {},
            )
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_BLANK,
                "Password cannot be blank",
                {},
            )
        return value


class SignInRequestDTO(BaseModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1, max_length=128)  # No strength check on sign-in

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)


class AuthResponseDTO(BaseModel):
    token: str
    user_id: int = Field(serialization_alias="userId")
    user_name: str = Field(serialization_alias="userName")
    email_id: str = Field(serialization_alias="emailId")

    @classmethod
    def from_result(cls, result: AuthResult) -> AuthResponseDTO:
        return cls(
            token=result.token,
            user_id=result.user_id,
            user_name=result.user_name,
            email_id=result.email_id,
        )


class CurrentUserDTO(BaseModel):
    user_id: int = Field(serialization_alias="userId")
    user_name: str = Field(serialization_alias="userName")
    email_id: str = Field(serialization_alias="emailId")

    @classmethod
    def from_user(cls, user: User) -> CurrentUserDTO:
        return cls(user_id=user.id, user_name=user.name, email_id=user.email)
