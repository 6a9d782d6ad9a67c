# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from eventhub.domain.entities import ImageBlob

from .entities import SessionToken, TokenClaims, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_login(self, email_or_username: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User, profile_picture: ImageBlob | None = None) -> User: ...
    def usernames_for(self, user_ids: Iterable[int]) -> dict[int, str]: ...
    def get_profile_picture(self, user_id: int) -> ImageBlob | None: ...
    def set_profile_picture(self, user_id: int, picture: ImageBlob | None) -> bool: ...


class SessionTokenService(Protocol):
    def issue(self, user: User) -> SessionToken: ...
    def verify(self, token: str) -> TokenClaims: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
