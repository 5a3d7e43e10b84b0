# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, Response, g, jsonify, redirect, request
from pydantic import ValidationError

from authgate.application.services.access_guard import AccessGuard
from authgate.application.services.session_manager import SessionManager
from authgate.application.use_cases.users.register_user import RegisterUserUseCase
from authgate.interfaces.http.carrier import CookieCredentialCarrier
from authgate.interfaces.http.dto.auth import (FormDescriptorDTO,
                                               LoginRequestDTO,
                                               RegisterRequestDTO, WelcomeDTO)
from authgate.shared.config import SecurityConfig
from authgate.shared.errors.validation import raise_validation_error
from authgate.shared.logging import logger


def _form_payload() -> dict[str, Any]:
    if request.form:
        return request.form.to_dict()
    return request.get_json(silent=True) or {}


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        session_manager: SessionManager,
        carrier: CookieCredentialCarrier,
        guard: AccessGuard,
        security: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._session_manager = session_manager
        self._carrier = carrier
        self._guard = guard
        self._security = security

    def signup_form(self) -> Response:
        return jsonify(FormDescriptorDTO(form="signup", action="/signup").model_dump())

    def signup(self) -> Response:
        try:
            dto = RegisterRequestDTO.model_validate(_form_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        self._register_use_case.execute(dto.username, dto.password)
        logger.info(f"auth.signup: ok username={dto.username}")
        return redirect(self._security.login_url, code=HTTPStatus.SEE_OTHER)

    def login_form(self) -> Response:
        return jsonify(FormDescriptorDTO(form="login", action="/login").model_dump())

    def login(self) -> Response:
        try:
            dto = LoginRequestDTO.model_validate(_form_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        session = self._session_manager.login(dto.username, dto.password)

        response = redirect(self._security.home_url, code=HTTPStatus.SEE_OTHER)
        self._carrier.attach(response, session)
        logger.info(f"auth.login: ok username={dto.username}")
        return response

    def logout(self) -> Response:
        token = self._carrier.read_token()
        response = redirect(self._security.login_url, code=HTTPStatus.SEE_OTHER)
        if token:
            self._session_manager.revoke(token)
            self._carrier.detach(response)
        logger.info("auth.logout: ok")
        return response

    def welcome(self, *, username: str) -> Response:
        g.username = username
        return jsonify(WelcomeDTO(username=username).model_dump())

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/signup", view_func=self.signup_form, methods=["GET"])
        bp.add_url_rule(
            "/signup", endpoint="signup_submit", view_func=self.signup, methods=["POST"]
        )
        bp.add_url_rule("/login", view_func=self.login_form, methods=["GET"])
        bp.add_url_rule(
            "/login", endpoint="login_submit", view_func=self.login, methods=["POST"]
        )
        bp.add_url_rule("/logout", view_func=self.logout, methods=["GET", "POST"])
        bp.add_url_rule(
            "/welcome",
            endpoint="welcome",
            view_func=self._guard.protect(self.welcome),
            methods=["GET"],
        )
        return bp
