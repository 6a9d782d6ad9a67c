# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Event records and the registration rules attached to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from eventhub.domain.entities import ImageBlob, as_utc
from eventhub.domain.exceptions import InvariantViolation


class RegistrationStatus(str, Enum):
    CREATOR = "creator"
    REGISTERED = "registered"
    NOT_REGISTERED = "not-registered"


def _require_text(value: str | None, name: str) -> str:
    text = (value or "").strip()
    if not text:
        raise InvariantViolation(f"{name} is required", field=name)
    return text


@dataclass(slots=True, frozen=True)
class NewEvent:
    """Fields of an event about to be created by ``creator_id``."""

    creator_id: int
    title: str
    date: datetime
    location: str
    description: str | None = None
    image: ImageBlob | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", _require_text(self.title, "title"))
        object.__setattr__(self, "location", _require_text(self.location, "location"))
        object.__setattr__(self, "date", as_utc(self.date))


@dataclass(slots=True, frozen=True)
class EventChanges:
    """Partial update; ``None`` leaves a field untouched.

    ``delete_image`` wins over ``image`` when both are set.
    """

    title: str | None = None
    description: str | None = None
    date: datetime | None = None
    location: str | None = None
    image: ImageBlob | None = None
    delete_image: bool = False

    def __post_init__(self) -> None:
        if self.title is not None:
            object.__setattr__(self, "title", _require_text(self.title, "title"))
        if self.location is not None:
            object.__setattr__(self, "location", _require_text(self.location, "location"))
        if self.date is not None:
            object.__setattr__(self, "date", as_utc(self.date))

    @property
    def replaces_image(self) -> bool:
        return self.image is not None and not self.delete_image

    def field_values(self) -> dict[str, object]:
        values: dict[str, object] = {}
        for name in ("title", "description", "date", "location"):
            value = getattr(self, name)
            if value is not None:
                values[name] = value
        return values


@dataclass(slots=True, frozen=True)
class Event:
    id: int
    creator_id: int
    title: str
    date: datetime
    location: str
    description: str | None = None
    has_image: bool = False
    participant_ids: frozenset[int] = field(default_factory=frozenset)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", as_utc(self.date))
        object.__setattr__(self, "participant_ids", frozenset(self.participant_ids))
        if self.creator_id in self.participant_ids:
            raise InvariantViolation(
                "creator cannot be a participant of its own event", field="participant_ids"
            )

    def is_creator(self, user_id: int) -> bool:
        return self.creator_id == user_id

    def is_participant(self, user_id: int) -> bool:
        return user_id in self.participant_ids

    def status_for(self, user_id: int) -> RegistrationStatus:
        if self.is_creator(user_id):
            return RegistrationStatus.CREATOR
        if self.is_participant(user_id):
            return RegistrationStatus.REGISTERED
        return RegistrationStatus.NOT_REGISTERED

    def is_past(self, now: datetime) -> bool:
        return as_utc(now) >= self.date
