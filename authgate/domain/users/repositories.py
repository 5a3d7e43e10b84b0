# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import Session, User


class UserRepository(Protocol):
    def create(self, username: str, password_hash: str) -> User: ...
    def find_digest(self, username: str) -> str | None: ...


class SessionRepository(Protocol):
    def add(self, session: Session) -> None: ...
    def get(self, token: str) -> Session | None: ...
    def delete(self, token: str) -> None: ...
    def delete_expired(self, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class CredentialCarrier(Protocol):
    def read_token(self) -> str | None: ...
