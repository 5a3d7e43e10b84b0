# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.access_guard import AccessGuard
from .services.password_hashing import WerkzeugPasswordHasher
from .services.session_manager import SessionManager
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "AccessGuard",
    "RegisterUserUseCase",
    "SessionManager",
    "WerkzeugPasswordHasher",
]
