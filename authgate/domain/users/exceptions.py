# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authgate.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    """Raised for an unknown user and for a wrong password alike."""

    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class UnauthenticatedError(DomainError):
    code = "unauthenticated"
    status = HTTPStatus.UNAUTHORIZED
