# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


def normalize_login(value: str) -> str:
    return value.strip().lower()


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str
    has_profile_picture: bool
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class SessionToken:

    user_id: int
    token: str
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Identity carried by a verified session token."""

    user_id: int
    username: str
    email: str
