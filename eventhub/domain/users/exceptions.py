# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from eventhub.shared.errors.base import DomainError


class UsernameTakenError(DomainError):
    code = "username_taken"
    status = HTTPStatus.CONFLICT
    message = "Username already taken"


class EmailTakenError(DomainError):
    code = "email_taken"
    status = HTTPStatus.CONFLICT
    message = "Email already registered"


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT
    message = "Username or email already exists"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid email/username or password"


class InvalidTokenError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid or expired token"


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "User not found"


class ProfilePictureNotFoundError(DomainError):
    code = "profile_picture_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Profile picture not found"
