# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from eventhub.domain.users.entities import User
from eventhub.shared.errors.validation_types import ValidationErrorType

_USERNAME_RE = re.compile(r"^[a-zA-Z0-9_.-]+$")


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=3, max_length=32)
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Username cannot be empty",
                {}
            )

        if not _USERNAME_RE.match(value):
            raise PydanticCustomError(
                ValidationErrorType.USERNAME_INVALID_CHARS,
                "Username may contain only letters, digits, '_', '.' and '-'",
                {"pattern": _USERNAME_RE.pattern}
            )

        return value

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, value: str) -> str:
        if len(value) < 8:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_TOO_SHORT,
                "Password must be at least 8 characters long",
                {"min_length": 8}
            )

        if not re.search(r"[A-Za-z]", value):
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_NO_LETTER,
                "Password must contain at least one letter",
                {}
            )

        if not re.search(r"\d", value):
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_NO_DIGIT,
                "Password must contain at least one digit",
                {}
            )

        return value


class LoginRequestDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email_or_username: str = Field(alias="emailOrUsername", min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=128)  # No strength check on login


class RegisterResponseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "User created successfully"
    user_id: int = Field(serialization_alias="userId")
    username: str
    email: str
    has_profile_picture: bool = Field(serialization_alias="hasProfilePicture")
    token: str
    expires_at: datetime = Field(serialization_alias="expiresAt")


class LoginResponseDTO(BaseModel):
    token: str
    expires_at: datetime = Field(serialization_alias="expiresAt")
    user_id: int = Field(serialization_alias="userId")
    username: str
    email: str


class ProfileDTO(BaseModel):
    id: int
    username: str
    email: str
    has_profile_picture: bool = Field(serialization_alias="hasProfilePicture")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @classmethod
    def from_user(cls, user: User) -> ProfileDTO:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            has_profile_picture=user.has_profile_picture,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class PublicUserDTO(BaseModel):
    id: int
    username: str
    has_profile_picture: bool = Field(serialization_alias="hasProfilePicture")
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_user(cls, user: User) -> PublicUserDTO:
        return cls(
            id=user.id,
            username=user.username,
            has_profile_picture=user.has_profile_picture,
            created_at=user.created_at,
        )
