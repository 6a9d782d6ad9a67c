# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from eventhub.domain.entities import ImageBlob

from .entities import Event, EventChanges, NewEvent


class EventRepository(Protocol):
    def add(self, draft: NewEvent) -> Event: ...
    def get(self, event_id: int) -> Event | None: ...
    def list_all(self) -> Sequence[Event]: ...
    def list_by_creator(self, creator_id: int) -> Sequence[Event]: ...
    def get_image(self, event_id: int) -> ImageBlob | None: ...

    # Creator-scoped writes; ``None``/``False`` when no event matches both ids.
    def update(self, event_id: int, creator_id: int, changes: EventChanges) -> Event | None: ...
    def delete(self, event_id: int, creator_id: int) -> bool: ...

    # Atomic participant set mutations keyed by (event_id, user_id).
    def add_participant(self, event_id: int, user_id: int) -> bool: ...
    def remove_participant(self, event_id: int, user_id: int) -> bool: ...
