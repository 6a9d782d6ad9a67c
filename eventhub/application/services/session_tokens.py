# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless bearer tokens signed with PyJWT."""

from __future__ import annotations

from datetime import timedelta

import jwt

from eventhub.application.interfaces import Clock, utc_now
from eventhub.domain.users.entities import SessionToken, TokenClaims, User
from eventhub.domain.users.exceptions import InvalidTokenError
from eventhub.domain.users.repositories import SessionTokenService
from eventhub.shared.logging import logger

_REQUIRED_CLAIMS = ["exp", "iat", "userId"]


class JwtSessionTokenService(SessionTokenService):
    def __init__(
        self,
        *,
        secret: str,
        ttl_seconds: int = 3600,
        algorithm: str = "HS256",
        clock: Clock = utc_now,
    ) -> None:
        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user: User) -> SessionToken:
        issued_at = self._clock()
        expires_at = issued_at + self._ttl
        claims = {
            "userId": user.id,
            "username": user.username,
            "email": user.email,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        return SessionToken(user_id=user.id, token=token, expires_at=expires_at)

    def verify(self, token: str) -> TokenClaims:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            logger.debug("session_tokens: expired token")
            raise InvalidTokenError() from exc
        except jwt.InvalidTokenError as exc:
            logger.debug(f"session_tokens: rejected token ({type(exc).__name__})")
            raise InvalidTokenError() from exc

        user_id = claims.get("userId")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError()
        return TokenClaims(
            user_id=user_id,
            username=str(claims.get("username", "")),
            email=str(claims.get("email", "")),
        )
