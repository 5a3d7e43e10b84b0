# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import Session, User
from .users.exceptions import (InvalidCredentialsError, UnauthenticatedError,
                               UserAlreadyExistsError)

__all__ = [
    "Session",
    "User",
    "InvalidCredentialsError",
    "UnauthenticatedError",
    "UserAlreadyExistsError",
]
