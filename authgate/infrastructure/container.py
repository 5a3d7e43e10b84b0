# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from authgate.application.services.access_guard import AccessGuard
from authgate.application.services.password_hashing import \
    WerkzeugPasswordHasher
from authgate.application.services.session_manager import SessionManager
from authgate.application.use_cases.users.register_user import \
    RegisterUserUseCase
from authgate.infrastructure.db import create_db_engine, create_session_factory
from authgate.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository, SqlAlchemyUserRepository)
from authgate.interfaces.http.carrier import CookieCredentialCarrier
from authgate.interfaces.http.controllers.auth_controller import AuthController
from authgate.shared.config import AppConfig


class Container:
    """Wires the object graph for one application instance.

    The engine and session factory are owned here and handed to every
    repository at construction.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return create_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.auth.password_hash_method)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(self.session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
            ttl=timedelta(seconds=self.config.auth.session_ttl_seconds),
            token_bytes=self.config.auth.token_bytes,
        )

    @cached_property
    def credential_carrier(self) -> CookieCredentialCarrier:
        return CookieCredentialCarrier(self.config.security)

    @cached_property
    def access_guard(self) -> AccessGuard:
        return AccessGuard(sessions=self.session_manager, carrier=self.credential_carrier)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            session_manager=self.session_manager,
            carrier=self.credential_carrier,
            guard=self.access_guard,
            security=self.config.security,
        )

    def dispose(self) -> None:
        if "engine" in self.__dict__:
            self.engine.dispose()
