# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, redirect, request
from werkzeug.exceptions import HTTPException

from authgate.shared.logging import logger

from .base import AppError, InfrastructureError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    return response, error.status


def register_error_handler(
    app: Flask,
    *,
    login_url: str,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    # Imported lazily: the domain package depends on this one.
    from authgate.domain.users.exceptions import UnauthenticatedError

    @app.errorhandler(UnauthenticatedError)
    def _handle_unauthenticated(exc: UnauthenticatedError):
        logger.info(f"Unauthenticated {request.method} {request.path}, redirecting to {login_url}")
        return redirect(login_url, code=HTTPStatus.SEE_OTHER)

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if isinstance(exc, InfrastructureError):
            # __cause__ holds the driver/primitive error; keep it in the log only.
            logger.opt(exception=exc).error(
                f"Infrastructure error {exc.code} on {request.method} {request.path}"
            )
            return jsonify({"error": "internal_error"}), exc.status
        logger.warning(f"Handled application error {exc.code} on {request.method} {request.path}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"query={dict(request.args)}, body_size={len(request.data)}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")

        response = jsonify({"error": "internal_error"})
        return response, default_status
