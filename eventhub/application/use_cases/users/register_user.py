# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from eventhub.domain.entities import ImageBlob
from eventhub.domain.users.entities import SessionToken, User, normalize_login
from eventhub.domain.users.exceptions import EmailTakenError, UsernameTakenError
from eventhub.domain.users.repositories import PasswordHasher, SessionTokenService, UserRepository


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: SessionTokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(
        self,
        username: str,
        email: str,
        password: str,
        profile_picture: ImageBlob | None = None,
    ) -> tuple[User, SessionToken]:
        username = normalize_login(username)
        email = normalize_login(email)
        if self._users.find_by_email(email):
            raise EmailTakenError()
        if self._users.find_by_username(username):
            raise UsernameTakenError()

        now = datetime.now(UTC)
        user = User(
            id=0,
            username=username,
            email=email,
            password_hash=self._password_hasher.hash(password),
            has_profile_picture=profile_picture is not None,
            created_at=now,
            updated_at=now,
        )
        persisted = self._users.add(user, profile_picture)
        return persisted, self._tokens.issue(persisted)
