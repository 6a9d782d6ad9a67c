# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from eventhub.shared.errors.base import DomainError


class EventNotFoundError(DomainError):
    code = "event_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Event not found"

    def __init__(self, event_id: int) -> None:
        super().__init__(context={"event_id": event_id})


class EventNotFoundOrUnauthorizedError(DomainError):
    code = "event_not_found_or_unauthorized"
    status = HTTPStatus.NOT_FOUND
    message = "Event not found or unauthorized"

    def __init__(self, event_id: int) -> None:
        super().__init__(context={"event_id": event_id})


class CreatorNotFoundError(DomainError):
    code = "creator_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Creator not found"


class AlreadyRegisteredError(DomainError):
    code = "already_registered"
    status = HTTPStatus.CONFLICT
    message = "User already registered for this event"


class NotRegisteredError(DomainError):
    code = "not_registered"
    status = HTTPStatus.CONFLICT
    message = "User is not registered for this event"


class SelfRegistrationForbiddenError(DomainError):
    code = "self_registration_forbidden"
    status = HTTPStatus.BAD_REQUEST
    message = "Event creator cannot register as participant"


class RegistrationClosedError(DomainError):
    code = "registration_closed"
    status = HTTPStatus.CONFLICT
    message = "Registration is closed because the event has already started"


class NoImageError(DomainError):
    code = "no_image"
    status = HTTPStatus.CONFLICT
    message = "No image exists for this event"


class ImageNotFoundError(DomainError):
    code = "image_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Image not found"
