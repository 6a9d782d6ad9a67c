# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from eventhub.application.interfaces import EventNotifier, NotificationKind
from eventhub.application.services.event_views import EventViewResolver
from eventhub.domain.events.entities import EventChanges, NewEvent
from eventhub.domain.events.exceptions import EventNotFoundOrUnauthorizedError, NoImageError
from eventhub.domain.events.repositories import EventRepository
from eventhub.shared.logging import logger


class EventLifecycle:
    """Creator-scoped event writes, each followed by a broadcast."""

    def __init__(
        self,
        *,
        events: EventRepository,
        views: EventViewResolver,
        notifier: EventNotifier,
    ) -> None:
        self._events = events
        self._views = views
        self._notifier = notifier

    def create(self, draft: NewEvent) -> dict[str, Any]:
        event = self._events.add(draft)
        view = self._views.resolve(event)
        logger.info(
            f"events.create: ok event_id={event.id} creator_id={draft.creator_id} "
            f"image={draft.image is not None}"
        )
        self._notifier.publish(NotificationKind.EVENT_CREATED, view)
        return view

    def update(self, user_id: int, event_id: int, changes: EventChanges) -> dict[str, Any]:
        event = self._events.update(event_id, user_id, changes)
        if event is None:
            raise EventNotFoundOrUnauthorizedError(event_id)
        view = self._views.resolve(event)
        logger.info(
            f"events.update: ok event_id={event_id} fields={sorted(changes.field_values())} "
            f"delete_image={changes.delete_image} replace_image={changes.replaces_image}"
        )
        self._notifier.publish(NotificationKind.EVENT_UPDATED, view)
        return view

    def delete(self, user_id: int, event_id: int) -> None:
        if not self._events.delete(event_id, user_id):
            raise EventNotFoundOrUnauthorizedError(event_id)
        logger.info(f"events.delete: ok event_id={event_id}")
        self._notifier.publish(NotificationKind.EVENT_DELETED, {"id": event_id})

    def delete_image(self, user_id: int, event_id: int) -> dict[str, Any]:
        event = self._events.get(event_id)
        if event is None or not event.is_creator(user_id):
            raise EventNotFoundOrUnauthorizedError(event_id)
        if not event.has_image:
            raise NoImageError(context={"event_id": event_id})
        return self.update(user_id, event_id, EventChanges(delete_image=True))
