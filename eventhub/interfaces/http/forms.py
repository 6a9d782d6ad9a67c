# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request body helpers shared by multipart and JSON endpoints."""

from __future__ import annotations

from typing import Any

from flask import request

from eventhub.domain.entities import ImageBlob
from eventhub.shared.config import load_config
from eventhub.shared.errors import ImageTooLargeError, UnsupportedImageTypeError


def form_payload() -> dict[str, Any]:
    """Return form fields for multipart/urlencoded bodies, else the JSON object."""

    if request.mimetype in ("multipart/form-data", "application/x-www-form-urlencoded"):
        return request.form.to_dict()
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def read_image(field: str) -> ImageBlob | None:
    storage = request.files.get(field)
    if storage is None or not storage.filename:
        return None

    uploads = load_config().uploads
    content_type = (storage.mimetype or "").lower()
    if content_type not in uploads.allowed_types:
        raise UnsupportedImageTypeError(content_type, uploads.allowed_types)

    data = storage.read()
    if len(data) > uploads.max_bytes:
        raise ImageTooLargeError(len(data), uploads.max_bytes)
    if not data:
        return None
    return ImageBlob(data=data, content_type=content_type)


def client_ip() -> str | None:
    return request.remote_addr
