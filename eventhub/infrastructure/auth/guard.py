# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps

from flask import Flask, current_app, g, jsonify, request

from eventhub.domain.users.entities import TokenClaims
from eventhub.domain.users.exceptions import InvalidTokenError
from eventhub.domain.users.repositories import SessionTokenService
from eventhub.shared.logging import logger

_EXTENSION_KEY = "eventhub.session_tokens"


def install_session_tokens(app: Flask, service: SessionTokenService) -> None:
    app.extensions[_EXTENSION_KEY] = service


def _bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth[:7].lower() == "bearer ":
        return auth[7:].strip()
    return ""


def _unauthorized():
    return jsonify({"error": "unauthorized", "message": "Authentication required"}), 401


def auth_required(f):
    @wraps(f)
    def inner(*a, **kw):
        token = _bearer_token()
        if not token:
            logger.warning(
                f"No bearer token on {request.method} {request.path} "
                f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
            )
            return _unauthorized()

        service: SessionTokenService = current_app.extensions[_EXTENSION_KEY]
        try:
            claims = service.verify(token)
        except InvalidTokenError:
            logger.warning(f"Auth failed (token invalid/expired) on {request.method} {request.path}")
            return _unauthorized()

        g.user_id = claims.user_id
        g.token_claims = claims
        logger.debug(f"Auth OK: user={claims.user_id} {request.method} {request.path}")
        return f(*a, **kw)

    return inner


def current_user_id() -> int:
    return int(g.user_id)


def current_claims() -> TokenClaims:
    return g.token_claims


__all__ = ["auth_required", "current_claims", "current_user_id", "install_session_tokens"]
