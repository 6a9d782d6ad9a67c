# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Participant registration for events.

Membership changes go through the store's atomic add-if-absent and
remove-if-present calls, so concurrent requests for the same account and
event cannot produce duplicates or lose each other's rows. The pre-checks on
the loaded snapshot only pick the error to report.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from eventhub.application.interfaces import Clock, EventNotifier, NotificationKind, utc_now
from eventhub.application.services.event_views import EventViewResolver
from eventhub.domain.events.entities import Event, RegistrationStatus
from eventhub.domain.events.exceptions import (
    AlreadyRegisteredError,
    EventNotFoundError,
    NotRegisteredError,
    RegistrationClosedError,
    SelfRegistrationForbiddenError,
)
from eventhub.domain.events.repositories import EventRepository
from eventhub.shared.logging import logger


@dataclass(slots=True, frozen=True)
class RegistrationState:
    status: RegistrationStatus

    @property
    def is_creator(self) -> bool:
        return self.status is RegistrationStatus.CREATOR

    @property
    def is_registered(self) -> bool:
        return self.status is RegistrationStatus.REGISTERED

    def to_dict(self) -> dict[str, Any]:
        return {
            "isRegistered": self.is_registered,
            "isCreator": self.is_creator,
            "status": self.status.value,
        }


class RegistrationEngine:
    def __init__(
        self,
        *,
        events: EventRepository,
        views: EventViewResolver,
        notifier: EventNotifier,
        clock: Clock = utc_now,
        closes_at_start: bool = True,
    ) -> None:
        self._events = events
        self._views = views
        self._notifier = notifier
        self._clock = clock
        self._closes_at_start = closes_at_start

    def register(self, user_id: int, event_id: int) -> dict[str, Any]:
        event = self._load(event_id)
        if event.is_participant(user_id):
            raise AlreadyRegisteredError()
        if event.is_creator(user_id):
            raise SelfRegistrationForbiddenError()
        self._ensure_open(event)

        if not self._events.add_participant(event_id, user_id):
            self._ensure_exists(event_id)
            raise AlreadyRegisteredError()

        logger.info(f"registration.register: ok user_id={user_id} event_id={event_id}")
        return self._publish_change(
            replace(event, participant_ids=event.participant_ids | {user_id})
        )

    def unregister(self, user_id: int, event_id: int) -> dict[str, Any]:
        event = self._load(event_id)
        if not event.is_participant(user_id):
            raise NotRegisteredError()
        self._ensure_open(event)

        if not self._events.remove_participant(event_id, user_id):
            self._ensure_exists(event_id)
            raise NotRegisteredError()

        logger.info(f"registration.unregister: ok user_id={user_id} event_id={event_id}")
        return self._publish_change(
            replace(event, participant_ids=event.participant_ids - {user_id})
        )

    def status(self, user_id: int, event_id: int) -> RegistrationState:
        return RegistrationState(self._load(event_id).status_for(user_id))

    def is_past(self, event: Event) -> bool:
        return event.is_past(self._clock())

    def _load(self, event_id: int) -> Event:
        event = self._events.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _ensure_open(self, event: Event) -> None:
        if self._closes_at_start and self.is_past(event):
            raise RegistrationClosedError(context={"event_id": event.id})

    def _ensure_exists(self, event_id: int) -> None:
        # A failed participant write on a vanished event is a missing event.
        self._load(event_id)

    def _publish_change(self, written: Event) -> dict[str, Any]:
        # Falls back to the written snapshot when the event was deleted since.
        current = self._events.get(written.id) or written
        view = self._views.resolve(current)
        self._notifier.publish(NotificationKind.REGISTRATION_CHANGED, view)
        return view
