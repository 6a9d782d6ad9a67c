# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Protocol


class NotificationKind(str, Enum):
    EVENT_CREATED = "eventCreated"
    EVENT_UPDATED = "eventUpdated"
    EVENT_DELETED = "eventDeleted"
    REGISTRATION_CHANGED = "registrationChanged"


class EventNotifier(Protocol):
    """Broadcast port for event state changes.

    Implementations deliver best-effort and must not raise into the caller.
    """

    def publish(self, kind: NotificationKind, payload: Mapping[str, Any]) -> None: ...


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)
