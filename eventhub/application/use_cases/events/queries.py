# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from eventhub.application.services.event_views import EventViewResolver
from eventhub.domain.entities import ImageBlob
from eventhub.domain.events.exceptions import (
    CreatorNotFoundError,
    EventNotFoundError,
    ImageNotFoundError,
)
from eventhub.domain.events.repositories import EventRepository
from eventhub.domain.users.entities import normalize_login
from eventhub.domain.users.repositories import UserRepository


class EventQueries:
    def __init__(
        self,
        *,
        events: EventRepository,
        users: UserRepository,
        views: EventViewResolver,
    ) -> None:
        self._events = events
        self._users = users
        self._views = views

    def list_all(self) -> list[dict[str, Any]]:
        return self._views.resolve_many(self._events.list_all())

    def list_mine(self, user_id: int) -> list[dict[str, Any]]:
        return self._views.resolve_many(self._events.list_by_creator(user_id))

    def list_by_creator(self, username: str) -> list[dict[str, Any]]:
        creator = self._users.find_by_username(normalize_login(username))
        if creator is None:
            raise CreatorNotFoundError(context={"username": username})
        return self._views.resolve_many(self._events.list_by_creator(creator.id))

    def get(self, event_id: int) -> dict[str, Any]:
        event = self._events.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return self._views.resolve(event)

    def get_image(self, event_id: int) -> ImageBlob:
        image = self._events.get_image(event_id)
        if image is None:
            raise ImageNotFoundError(context={"event_id": event_id})
        return image
