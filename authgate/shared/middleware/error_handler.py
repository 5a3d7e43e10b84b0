# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, redirect

from authgate.shared.config import AppConfig
from authgate.shared.errors import register_error_handler


def configure_error_handling(app: Flask, config: AppConfig) -> None:
    register_error_handler(
        app,
        login_url=config.security.login_url,
        debug_mode=config.debug_logging,
    )

    login_url = config.security.login_url

    # Unknown paths are denied by default and bounced to the login entry point.
    @app.errorhandler(404)
    def _redirect_unknown(_exc):
        return redirect(login_url, code=HTTPStatus.SEE_OTHER)
