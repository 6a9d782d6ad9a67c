# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from pydantic import ValidationError

from eventhub.application.use_cases.users.login_user import LoginUserUseCase
from eventhub.application.use_cases.users.profile import ProfileUseCase
from eventhub.application.use_cases.users.register_user import RegisterUserUseCase
from eventhub.infrastructure.audit import AuditAction, audit_log
from eventhub.infrastructure.auth import auth_required, current_user_id
from eventhub.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginResponseDTO,
    ProfileDTO,
    RegisterRequestDTO,
    RegisterResponseDTO,
)
from eventhub.interfaces.http.forms import client_ip, form_payload, read_image
from eventhub.interfaces.http.responses import image_response
from eventhub.shared.errors import ImageRequiredError
from eventhub.shared.errors.validation import raise_validation_error
from eventhub.shared.logging import logger
from eventhub.shared.middleware.rate_limit import rate_limit

PROFILE_PICTURE_FIELD = "profilePicture"


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        profile_use_case: ProfileUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._profile_use_case = profile_use_case

    @rate_limit(limit=5, window_seconds=60.0)
    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(form_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        picture = read_image(PROFILE_PICTURE_FIELD)
        user, session = self._register_use_case.execute(
            dto.username, dto.email, dto.password, profile_picture=picture
        )

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=client_ip(),
            details={"username": user.username, "profile_picture": picture is not None},
            success=True,
        )

        payload = RegisterResponseDTO(
            user_id=user.id,
            username=user.username,
            email=user.email,
            has_profile_picture=user.has_profile_picture,
            token=session.token,
            expires_at=session.expires_at,
        ).model_dump(mode="json", by_alias=True)
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(payload), 201

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(form_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()

        try:
            user, session = self._login_use_case.execute(
                dto.email_or_username, dto.password, ip_address
            )
        except Exception as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                user_id=None,
                ip_address=ip_address,
                details={"login": dto.email_or_username, "error": type(exc).__name__},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=user.id,
            ip_address=ip_address,
            details={"username": user.username},
            success=True,
        )

        payload = LoginResponseDTO(
            token=session.token,
            expires_at=session.expires_at,
            user_id=user.id,
            username=user.username,
            email=user.email,
        ).model_dump(mode="json", by_alias=True)
        logger.info(f"auth.login: ok user_id={user.id}")
        return jsonify(payload), 200

    @auth_required
    def me(self) -> tuple[Response, int]:
        user = self._profile_use_case.get_user(current_user_id())
        return jsonify(ProfileDTO.from_user(user).model_dump(mode="json", by_alias=True)), 200

    @auth_required
    def get_profile_picture(self) -> Response:
        picture = self._profile_use_case.get_picture(current_user_id())
        return image_response(picture, cache=False)

    @auth_required
    def put_profile_picture(self) -> tuple[Response, int]:
        picture = read_image(PROFILE_PICTURE_FIELD)
        if picture is None:
            raise ImageRequiredError(PROFILE_PICTURE_FIELD)

        user_id = current_user_id()
        self._profile_use_case.replace_picture(user_id, picture)
        audit_log(
            AuditAction.PROFILE_PICTURE_UPDATED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"content_type": picture.content_type, "size": picture.size},
        )
        user = self._profile_use_case.get_user(user_id)
        return jsonify(ProfileDTO.from_user(user).model_dump(mode="json", by_alias=True)), 200

    @auth_required
    def delete_profile_picture(self) -> tuple[Response, int]:
        user_id = current_user_id()
        self._profile_use_case.delete_picture(user_id)
        audit_log(
            AuditAction.PROFILE_PICTURE_DELETED,
            user_id=user_id,
            ip_address=client_ip(),
        )
        return jsonify({"message": "Profile picture deleted"}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule(
            "/me/profile-picture",
            endpoint="get_profile_picture",
            view_func=self.get_profile_picture,
            methods=["GET"],
        )
        bp.add_url_rule(
            "/me/profile-picture",
            endpoint="put_profile_picture",
            view_func=self.put_profile_picture,
            methods=["PUT"],
        )
        bp.add_url_rule(
            "/me/profile-picture",
            endpoint="delete_profile_picture",
            view_func=self.delete_profile_picture,
            methods=["DELETE"],
        )
        return bp
