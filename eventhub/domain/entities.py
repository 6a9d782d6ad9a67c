# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Value objects shared by account and event records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from .exceptions import InvariantViolation


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive input is read as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(slots=True, frozen=True)
class ImageBlob:
    """Binary image stored inline with its owning record."""

    data: bytes
    content_type: str

    def __post_init__(self) -> None:
        if not self.data:
            raise InvariantViolation("image data must not be empty", field="data")
        if not self.content_type:
            raise InvariantViolation("content type is required", field="content_type")

    @property
    def size(self) -> int:
        return len(self.data)
