# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import Clock, EventNotifier, NotificationKind, utc_now
from .services.event_views import EventViewResolver
from .use_cases.events.lifecycle import EventLifecycle
from .use_cases.events.queries import EventQueries
from .use_cases.events.registration import RegistrationEngine

__all__ = [
    "Clock",
    "EventLifecycle",
    "EventNotifier",
    "EventQueries",
    "EventViewResolver",
    "NotificationKind",
    "RegistrationEngine",
    "utc_now",
]
