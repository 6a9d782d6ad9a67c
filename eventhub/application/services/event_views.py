# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Display-ready event payloads.

Events keep creator and participants as bare account ids. This module is the
single place where those ids are turned into ``{id, username}`` pairs, using
one batched lookup per call.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from eventhub.application.interfaces import Clock, utc_now
from eventhub.domain.events.entities import Event
from eventhub.domain.users.repositories import UserRepository


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class EventViewResolver:
    def __init__(self, *, users: UserRepository, clock: Clock = utc_now) -> None:
        self._users = users
        self._clock = clock

    def resolve(self, event: Event) -> dict[str, Any]:
        return self.resolve_many([event])[0]

    def resolve_many(self, events: Sequence[Event]) -> list[dict[str, Any]]:
        if not events:
            return []
        names = self._users.usernames_for(_referenced_ids(events))
        now = self._clock()
        return [self._render(event, names, now) for event in events]

    @staticmethod
    def _render(event: Event, names: dict[int, str], now: datetime) -> dict[str, Any]:
        participants = [
            {"id": uid, "username": names[uid]}
            for uid in sorted(event.participant_ids)
            if uid in names
        ]
        creator = None
        if event.creator_id in names:
            creator = {"id": event.creator_id, "username": names[event.creator_id]}
        return {
            "id": event.id,
            "title": event.title,
            "description": event.description,
            "date": _iso(event.date),
            "location": event.location,
            "creator": creator,
            "participants": participants,
            "participantCount": len(event.participant_ids),
            "hasImage": event.has_image,
            "isPast": event.is_past(now),
            "createdAt": _iso(event.created_at),
            "updatedAt": _iso(event.updated_at),
        }


def _referenced_ids(events: Iterable[Event]) -> set[int]:
    ids: set[int] = set()
    for event in events:
        ids.add(event.creator_id)
        ids.update(event.participant_ids)
    return ids
