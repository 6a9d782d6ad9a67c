# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    """Base application exception carrying structured metadata."""

    code: str
    status: HTTPStatus
    message: str | None = None
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Business rule violation; subclasses set code, status and message."""

    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or cast(str | None, getattr(self, "message", None))
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=resolved_message,
            context=context,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            message=message or "Request validation failed",
            context=context,
        )


class UnauthorizedError(AppError):
    def __init__(self, code: str = "unauthorized", *, message: str | None = None) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNAUTHORIZED,
            message=message or "Authentication required",
        )


class ImageRequiredError(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(
            "image_required",
            message="No image provided",
            context={"field": field},
        )


class UnsupportedImageTypeError(AppError):
    def __init__(self, content_type: str, allowed: list[str]) -> None:
        super().__init__(
            code="unsupported_image_type",
            status=HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
            message="Invalid file type. Only JPEG, JPG and PNG are allowed.",
            context={"content_type": content_type, "allowed": allowed},
        )


class ImageTooLargeError(AppError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            code="image_too_large",
            status=HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
            message="Image exceeds the upload size limit",
            context={"size": size, "limit": limit},
        )
