# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import click
from flask import Flask, current_app

from authgate.infrastructure.container import Container
from authgate.infrastructure.db import init_db
from authgate.shared.config import AppConfig, load_config
from authgate.shared.logging import logger, setup_logging
from authgate.shared.middleware.error_handler import configure_error_handling
from authgate.shared.middleware.request_logger import configure_request_logging

EXTENSION_KEY = "authgate"


def get_container() -> Container:
    return current_app.extensions[EXTENSION_KEY]


def _register_cli(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db_command() -> None:
        """Create the users and sessions tables."""
        init_db(get_container().engine)
        click.echo("Database schema ensured")

    @app.cli.command("sweep-sessions")
    def sweep_sessions_command() -> None:
        """Delete expired session rows."""
        removed = get_container().session_manager.sweep()
        click.echo(f"Removed {removed} expired session(s)")


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level)

    container = Container(config)
    init_db(container.engine)

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = container

    configure_error_handling(app, config)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.register_blueprint(container.auth_controller.as_blueprint())
    _register_cli(app)

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")
        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=8080, threaded=True)
