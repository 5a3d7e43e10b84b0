"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from authgate.domain.users.repositories import PasswordHasher
from authgate.shared.errors import HashingError


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted, adaptive-cost hashing via werkzeug.

    ``method`` is any werkzeug method string, e.g. ``scrypt`` or
    ``pbkdf2:sha256:600000``; its parameters are the cost factor. A fresh
    random salt is drawn on every call.
    """

    def __init__(self, method: str = "scrypt", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        try:
            return str(
                generate_password_hash(
                    password, method=self._method, salt_length=self._salt_length
                )
            )
        except (MemoryError, ValueError) as exc:
            raise HashingError() from exc

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError):
            # unknown method or garbled parameters inside the digest
            return False
