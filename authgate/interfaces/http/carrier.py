# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Cookie-backed credential carrier."""

from __future__ import annotations

from flask import Response, request

from authgate.domain.users.entities import Session
from authgate.domain.users.repositories import CredentialCarrier
from authgate.shared.config import SecurityConfig


class CookieCredentialCarrier(CredentialCarrier):
    def __init__(self, config: SecurityConfig) -> None:
        self._config = config

    @property
    def cookie_name(self) -> str:
        return self._config.cookie_name

    def read_token(self) -> str | None:
        return request.cookies.get(self._config.cookie_name) or None

    def attach(self, response: Response, session: Session) -> None:
        response.set_cookie(
            self._config.cookie_name,
            session.token,
            path="/",
            expires=session.expires_at,
            httponly=True,
            secure=self._config.cookie_secure,
            samesite=self._config.cookie_samesite,
        )

    def detach(self, response: Response) -> None:
        response.delete_cookie(
            self._config.cookie_name,
            path="/",
            httponly=True,
            secure=self._config.cookie_secure,
            samesite=self._config.cookie_samesite,
        )
