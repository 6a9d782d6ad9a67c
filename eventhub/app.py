# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import os

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from eventhub.infrastructure.auth import install_session_tokens
from eventhub.infrastructure.container import Container, container
from eventhub.infrastructure.db import init_db
from eventhub.infrastructure.realtime import socketio
from eventhub.shared.logging import logger, setup_logging
from eventhub.shared.middleware.error_handler import configure_error_handling
from eventhub.shared.middleware.request_logger import configure_request_logging

# Multipart envelope on top of the image itself
_MULTIPART_OVERHEAD = 64 * 1024


def create_app(app_container: Container | None = None) -> Flask:
    wiring = app_container or container
    config = wiring.config

    init_db()
    setup_logging(debug_mode=config.debug_logging)

    app = Flask(__name__)
    if config.security.trusted_proxy_count:
        proxies = config.security.trusted_proxy_count
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=proxies, x_proto=proxies)
    configure_error_handling(app)
    configure_request_logging(app)

    app.config.update(
        SECRET_KEY=config.secret_key,
        MAX_CONTENT_LENGTH=config.uploads.max_bytes + _MULTIPART_OVERHEAD,
    )
    app.json.sort_keys = False

    CORS(app, resources={r"/api/*": {"origins": config.security.allowed_origins}})

    install_session_tokens(app, wiring.session_tokens)
    app.register_blueprint(wiring.misc_controller.as_blueprint())
    app.register_blueprint(wiring.auth_controller.as_blueprint())
    app.register_blueprint(wiring.users_controller.as_blueprint())
    app.register_blueprint(wiring.events_controller.as_blueprint())

    socketio.init_app(app, cors_allowed_origins=config.realtime.cors_origins)

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault(
            "Permissions-Policy",
            "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
        )
        resp.headers.setdefault("X-Permitted-Cross-Domain-Policies", "none")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    app = create_app()
    socketio.run(
        app,
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "5000")),
        allow_unsafe_werkzeug=True,
    )
