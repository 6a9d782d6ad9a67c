# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from eventhub.domain.users.entities import SessionToken, User, normalize_login
from eventhub.domain.users.exceptions import InvalidCredentialsError
from eventhub.domain.users.repositories import PasswordHasher, SessionTokenService, UserRepository
from eventhub.infrastructure.auth.login_attempts import LoginAttemptsTracker
from eventhub.shared.errors.base import AppError


class AccountLockedError(AppError):
    def __init__(self, lockout_remaining: float = 0) -> None:
        super().__init__(
            code="account_locked",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            message="Too many failed login attempts, try again later",
            context={"lockout_remaining_seconds": round(lockout_remaining, 1)},
        )


def _attempt_key(login: str, user: User | None) -> str:
    # Username and email of one account share a single failure budget.
    return f"user:{user.id}" if user is not None else f"login:{login}"


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: SessionTokenService,
        password_hasher: PasswordHasher,
        attempts: LoginAttemptsTracker,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._attempts = attempts

    def execute(
        self, email_or_username: str, password: str, ip_address: str | None = None
    ) -> tuple[User, SessionToken]:
        login = normalize_login(email_or_username)
        user = self._users.find_by_login(login)
        attempt_key = _attempt_key(login, user)
        if self._attempts.is_locked(attempt_key):
            raise AccountLockedError(
                lockout_remaining=self._attempts.get_lockout_remaining(attempt_key)
            )

        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash
        )

        if not password_valid:
            self._attempts.record_attempt(attempt_key, success=False, ip_address=ip_address)
            raise InvalidCredentialsError()

        self._attempts.record_attempt(attempt_key, success=True, ip_address=ip_address)
        return user, self._tokens.issue(user)
