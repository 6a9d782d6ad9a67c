# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from eventhub.domain.entities import ImageBlob
from eventhub.domain.users.entities import User
from eventhub.domain.users.exceptions import ProfilePictureNotFoundError, UserNotFoundError
from eventhub.domain.users.repositories import UserRepository
from eventhub.shared.logging import logger


class ProfileUseCase:
    """Account lookups and avatar management."""

    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def get_user(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(context={"user_id": user_id})
        return user

    def get_picture(self, user_id: int) -> ImageBlob:
        picture = self._users.get_profile_picture(user_id)
        if picture is None:
            raise ProfilePictureNotFoundError(context={"user_id": user_id})
        return picture

    def replace_picture(self, user_id: int, picture: ImageBlob) -> None:
        if not self._users.set_profile_picture(user_id, picture):
            raise UserNotFoundError(context={"user_id": user_id})
        logger.info(f"profile.picture: replaced user_id={user_id} size={picture.size}")

    def delete_picture(self, user_id: int) -> None:
        user = self.get_user(user_id)
        if not user.has_profile_picture:
            raise ProfilePictureNotFoundError(context={"user_id": user_id})
        self._users.set_profile_picture(user_id, None)
        logger.info(f"profile.picture: deleted user_id={user_id}")
