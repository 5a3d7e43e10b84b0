# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from authgate.application.services.session_manager import SessionManager
from authgate.domain.users.exceptions import UnauthenticatedError
from authgate.domain.users.repositories import CredentialCarrier
from authgate.shared.logging import logger

R = TypeVar("R")


class AccessGuard:
    """Gate for protected operations.

    The wrapped operation receives the resolved identity as the ``username``
    keyword argument. Callers without a live session get
    :class:`UnauthenticatedError` and the operation never runs.
    """

    def __init__(self, *, sessions: SessionManager, carrier: CredentialCarrier) -> None:
        self._sessions = sessions
        self._carrier = carrier

    def resolve(self) -> str:
        token = self._carrier.read_token()
        if not token:
            logger.debug("guard: no session token presented")
            raise UnauthenticatedError()

        username = self._sessions.validate(token)
        if not username:
            logger.info(f"guard: rejected token tok={token[:8]}…")
            raise UnauthenticatedError()
        return username

    def protect(self, op: Callable[..., R]) -> Callable[..., R]:
        @wraps(op)
        def inner(*args: Any, **kwargs: Any) -> R:
            kwargs["username"] = self.resolve()
            return op(*args, **kwargs)

        return inner
