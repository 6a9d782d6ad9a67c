# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response

from eventhub.domain.entities import ImageBlob

IMAGE_CACHE_CONTROL = "public, max-age=31557600"


def image_response(image: ImageBlob, *, cache: bool = True) -> Response:
    response = Response(image.data, mimetype=image.content_type)
    response.headers["Content-Length"] = str(image.size)
    if cache:
        response.headers["Cache-Control"] = IMAGE_CACHE_CONTROL
    else:
        response.headers["Cache-Control"] = "no-store"
    return response
