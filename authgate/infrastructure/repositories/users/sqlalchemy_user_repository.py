# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from authgate.domain.users.entities import Session as DomainSession
from authgate.domain.users.entities import User as DomainUser
from authgate.domain.users.exceptions import UserAlreadyExistsError
from authgate.domain.users.repositories import SessionRepository, UserRepository
from authgate.infrastructure.db.models import (USERNAME_NONEMPTY_CONSTRAINT,
                                              SessionRow, User)
from authgate.infrastructure.unit_of_work import unit_of_work_scope
from authgate.shared.errors import StorageError, ValidationError
from authgate.shared.logging import logger


def _as_utc(value: datetime) -> datetime:
    # SQLite hands DateTime(timezone=True) back naive
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def create(self, username: str, password_hash: str) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=username,
                    password_hash=password_hash,
                    created_at=datetime.now(UTC),
                )
                session.add(row)
                session.flush()
                return DomainUser(
                    id=row.id,
                    username=row.username,
                    password_hash=row.password_hash,
                    created_at=_as_utc(row.created_at),
                )
        except IntegrityError as exc:
            if USERNAME_NONEMPTY_CONSTRAINT in str(exc.orig):
                raise ValidationError(context={"fields": ["username"]}) from exc
            logger.info(f"users.create: duplicate username={username}")
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"users.create: storage failure {type(exc).__name__}")
            raise StorageError() from exc

    def find_digest(self, username: str) -> str | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                return session.scalar(
                    select(User.password_hash).where(User.username == username)
                )
        except SQLAlchemyError as exc:
            logger.error(f"users.find_digest: storage failure {type(exc).__name__}")
            raise StorageError() from exc


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, session: DomainSession) -> None:
        try:
            with unit_of_work_scope(self._session_factory) as db:
                db.add(
                    SessionRow(
                        session_id=session.token,
                        username=session.username,
                        expires=session.expires_at,
                    )
                )
        except SQLAlchemyError as exc:
            logger.error(f"sessions.add: storage failure {type(exc).__name__}")
            raise StorageError() from exc

    def get(self, token: str) -> DomainSession | None:
        try:
            with unit_of_work_scope(self._session_factory) as db:
                row = db.get(SessionRow, token)
                if row is None:
                    return None
                return DomainSession(
                    token=row.session_id,
                    username=row.username,
                    expires_at=_as_utc(row.expires),
                )
        except SQLAlchemyError as exc:
            logger.error(f"sessions.get: storage failure {type(exc).__name__}")
            raise StorageError() from exc

    def delete(self, token: str) -> None:
        try:
            with unit_of_work_scope(self._session_factory) as db:
                db.execute(delete(SessionRow).where(SessionRow.session_id == token))
        except SQLAlchemyError as exc:
            logger.error(f"sessions.delete: storage failure {type(exc).__name__}")
            raise StorageError() from exc

    def delete_expired(self, now: datetime) -> int:
        try:
            with unit_of_work_scope(self._session_factory) as db:
                result = db.execute(delete(SessionRow).where(SessionRow.expires <= now))
                return int(result.rowcount or 0)
        except SQLAlchemyError as exc:
            logger.error(f"sessions.delete_expired: storage failure {type(exc).__name__}")
            raise StorageError() from exc
