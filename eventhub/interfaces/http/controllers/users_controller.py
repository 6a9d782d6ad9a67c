# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from eventhub.application.use_cases.users.profile import ProfileUseCase
from eventhub.interfaces.http.dto.auth import PublicUserDTO
from eventhub.interfaces.http.responses import image_response


class UsersController:
    """Public, unauthenticated account lookups."""

    def __init__(self, *, profile_use_case: ProfileUseCase) -> None:
        self._profile_use_case = profile_use_case

    def get_user(self, user_id: int) -> tuple[Response, int]:
        user = self._profile_use_case.get_user(user_id)
        return jsonify(PublicUserDTO.from_user(user).model_dump(mode="json", by_alias=True)), 200

    def get_profile_picture(self, user_id: int) -> Response:
        return image_response(self._profile_use_case.get_picture(user_id))

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/users")
        bp.add_url_rule("/<int:user_id>", view_func=self.get_user, methods=["GET"])
        bp.add_url_rule(
            "/<int:user_id>/profile-picture", view_func=self.get_profile_picture, methods=["GET"]
        )
        return bp
