# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authgate.domain.users.entities import User
from authgate.domain.users.repositories import PasswordHasher, UserRepository
from authgate.shared.errors import ValidationError
from authgate.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> User:
        if not username or not username.strip():
            raise ValidationError(context={"fields": ["username"]})
        hashed = self._password_hasher.hash(password)
        # Duplicates surface from the store's unique constraint, no pre-check.
        user = self._users.create(username, hashed)
        logger.info(f"register: ok user_id={user.id} username={username}")
        return user
