# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session issuance, validation and revocation."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from authgate.domain.users.entities import Session
from authgate.domain.users.exceptions import InvalidCredentialsError
from authgate.domain.users.repositories import (PasswordHasher,
                                                SessionRepository,
                                                UserRepository)
from authgate.shared.logging import logger

DEFAULT_SESSION_TTL = timedelta(hours=24)
DEFAULT_TOKEN_BYTES = 32


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    """Owns the lifecycle of server-side sessions.

    A token moves from issued to valid until ``expires_at``, then to expired
    or revoked; neither terminal state ever validates again. Sessions live in
    the store rather than in a signed token so that :meth:`revoke` takes
    effect on the very next request.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        token_bytes: int = DEFAULT_TOKEN_BYTES,
        clock: Callable[[], datetime] = _utcnow,
        token_factory: Callable[[int], str] = secrets.token_urlsafe,
    ) -> None:
        if token_bytes < 16:
            raise ValueError("token_bytes must provide at least 128 bits of entropy")
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._ttl = ttl
        self._token_bytes = token_bytes
        self._clock = clock
        self._token_factory = token_factory
        # Hashed up front so the first unknown-user login costs the same as any other.
        self._dummy_digest = password_hasher.hash(secrets.token_urlsafe(16))

    def login(self, username: str, password: str) -> Session:
        digest = self._users.find_digest(username)
        if digest is None:
            # Burn a comparable amount of work so a missing user looks like a bad password.
            self._password_hasher.verify(password, self._dummy_digest)
            logger.info(f"session.login: rejected username={username}")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, digest):
            logger.info(f"session.login: rejected username={username}")
            raise InvalidCredentialsError()

        session = Session(
            token=self._token_factory(self._token_bytes),
            username=username,
            expires_at=self._clock() + self._ttl,
        )
        self._sessions.add(session)
        logger.info(
            f"session.login: issued username={username} "
            f"exp={session.expires_at.isoformat()} tok={session.token[:8]}…"
        )
        return session

    def validate(self, token: str | None) -> str | None:
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None:
            return None
        if not session.is_valid(self._clock()):
            logger.debug(f"session.validate: expired tok={token[:8]}…")
            return None
        return session.username

    def revoke(self, token: str | None) -> None:
        if not token:
            return
        self._sessions.delete(token)
        logger.info(f"session.revoke: tok={token[:8]}…")

    def sweep(self) -> int:
        """Delete every expired session row and return how many went."""
        removed = self._sessions.delete_expired(self._clock())
        logger.info(f"session.sweep: removed={removed}")
        return removed
