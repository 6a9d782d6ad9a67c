# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import ImageBlob, as_utc
from .events.entities import Event, EventChanges, NewEvent, RegistrationStatus
from .exceptions import InvariantViolation
from .users.entities import SessionToken, TokenClaims, User

__all__ = [
    "Event",
    "EventChanges",
    "ImageBlob",
    "InvariantViolation",
    "NewEvent",
    "RegistrationStatus",
    "SessionToken",
    "TokenClaims",
    "User",
    "as_utc",
]
