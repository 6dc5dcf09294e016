# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response
from flask_cors import CORS

from authservice.container import Container, container
from authservice.infrastructure.db import init_db
from authservice.shared.config import load_config
from authservice.shared.logging import logger, setup_logging
from authservice.shared.middleware.error_handler import configure_error_handling
from authservice.shared.middleware.request_logger import configure_request_logging

_config = load_config()


def create_app(app_container: Container | None = None) -> Flask:
    setup_logging(debug_mode=_config.debug_logging)
    init_db()

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    app.config.update(SECRET_KEY=_config.secret_key)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/auth.*": {"origins": _config.security.allowed_origins}},
        "expose_headers": ["X-Request-ID"],
    }
    CORS(app, **cors_kwargs)
    app.register_blueprint((app_container or container).auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if _config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
