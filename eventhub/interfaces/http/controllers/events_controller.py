# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from pydantic import ValidationError

from eventhub.application.use_cases.events.lifecycle import EventLifecycle
from eventhub.application.use_cases.events.queries import EventQueries
from eventhub.application.use_cases.events.registration import RegistrationEngine
from eventhub.domain import InvariantViolation
from eventhub.infrastructure.audit import AuditAction, audit_log
from eventhub.infrastructure.auth import auth_required, current_user_id
from eventhub.interfaces.http.dto.events import CreateEventRequestDTO, UpdateEventRequestDTO
from eventhub.interfaces.http.forms import client_ip, form_payload, read_image
from eventhub.interfaces.http.responses import image_response
from eventhub.shared.errors import ValidationError as RequestValidationError
from eventhub.shared.errors.validation import raise_validation_error
from eventhub.shared.logging import logger

IMAGE_FIELD = "image"


def _invariant_error(exc: InvariantViolation) -> RequestValidationError:
    return RequestValidationError(
        message=str(exc),
        context={"fields": [exc.field] if exc.field else []},
    )


class EventsController:
    def __init__(
        self,
        *,
        lifecycle: EventLifecycle,
        queries: EventQueries,
        registration: RegistrationEngine,
    ) -> None:
        self._lifecycle = lifecycle
        self._queries = queries
        self._registration = registration

    # Reads

    def list_events(self) -> tuple[Response, int]:
        return jsonify(self._queries.list_all()), 200

    @auth_required
    def my_events(self) -> tuple[Response, int]:
        return jsonify(self._queries.list_mine(current_user_id())), 200

    def creator_events(self, username: str) -> tuple[Response, int]:
        return jsonify(self._queries.list_by_creator(username)), 200

    def get_event(self, event_id: int) -> tuple[Response, int]:
        return jsonify(self._queries.get(event_id)), 200

    def get_image(self, event_id: int) -> Response:
        return image_response(self._queries.get_image(event_id))

    # Writes

    @auth_required
    def create_event(self) -> tuple[Response, int]:
        try:
            dto = CreateEventRequestDTO.model_validate(form_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        image = read_image(IMAGE_FIELD)
        user_id = current_user_id()
        try:
            draft = dto.to_domain(user_id, image)
        except InvariantViolation as exc:
            raise _invariant_error(exc) from exc

        view = self._lifecycle.create(draft)
        audit_log(
            AuditAction.EVENT_CREATED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"event_id": view["id"], "image": image is not None},
        )
        return jsonify(view), 201

    @auth_required
    def update_event(self, event_id: int) -> tuple[Response, int]:
        try:
            dto = UpdateEventRequestDTO.model_validate(form_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        image = read_image(IMAGE_FIELD)
        try:
            changes = dto.to_domain(image)
        except InvariantViolation as exc:
            raise _invariant_error(exc) from exc

        user_id = current_user_id()
        view = self._lifecycle.update(user_id, event_id, changes)
        audit_log(
            AuditAction.EVENT_UPDATED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"event_id": event_id, "delete_image": changes.delete_image},
        )
        return jsonify(view), 200

    @auth_required
    def delete_event(self, event_id: int) -> tuple[Response, int]:
        user_id = current_user_id()
        self._lifecycle.delete(user_id, event_id)
        audit_log(
            AuditAction.EVENT_DELETED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"event_id": event_id},
        )
        return jsonify({"message": "Event deleted successfully", "id": event_id}), 200

    @auth_required
    def delete_image(self, event_id: int) -> tuple[Response, int]:
        user_id = current_user_id()
        view = self._lifecycle.delete_image(user_id, event_id)
        audit_log(
            AuditAction.EVENT_IMAGE_DELETED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"event_id": event_id},
        )
        return jsonify(view), 200

    # Registration

    @auth_required
    def register(self, event_id: int) -> tuple[Response, int]:
        view = self._registration.register(current_user_id(), event_id)
        return jsonify({"message": "Successfully registered for event", "event": view}), 200

    @auth_required
    def unregister(self, event_id: int) -> tuple[Response, int]:
        view = self._registration.unregister(current_user_id(), event_id)
        return jsonify({"message": "Successfully unregistered from event", "event": view}), 200

    @auth_required
    def registration_status(self, event_id: int) -> tuple[Response, int]:
        state = self._registration.status(current_user_id(), event_id)
        logger.debug(f"events.registration_status: event_id={event_id} status={state.status.value}")
        return jsonify(state.to_dict()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("events", __name__, url_prefix="/api/events")
        bp.add_url_rule("", view_func=self.list_events, methods=["GET"])
        bp.add_url_rule("", view_func=self.create_event, methods=["POST"])
        bp.add_url_rule("/my-events", view_func=self.my_events, methods=["GET"])
        bp.add_url_rule(
            "/creator/<string:username>", view_func=self.creator_events, methods=["GET"]
        )
        bp.add_url_rule("/<int:event_id>", view_func=self.get_event, methods=["GET"])
        bp.add_url_rule("/<int:event_id>", view_func=self.update_event, methods=["PUT"])
        bp.add_url_rule("/<int:event_id>", view_func=self.delete_event, methods=["DELETE"])
        bp.add_url_rule("/<int:event_id>/image", view_func=self.get_image, methods=["GET"])
        bp.add_url_rule("/<int:event_id>/image", view_func=self.delete_image, methods=["DELETE"])
        bp.add_url_rule("/<int:event_id>/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/<int:event_id>/unregister", view_func=self.unregister, methods=["POST"])
        bp.add_url_rule(
            "/<int:event_id>/registration-status",
            view_func=self.registration_status,
            methods=["GET"],
        )
        return bp
