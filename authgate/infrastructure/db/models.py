# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from authgate.infrastructure.db.session import Base

USERNAME_NONEMPTY_CONSTRAINT = "ck_users_username_nonempty"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (CheckConstraint("length(username) > 0", name=USERNAME_NONEMPTY_CONSTRAINT),)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )


class SessionRow(Base):
    __tablename__ = "sessions"
    session_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    # no foreign key: a session may outlive its user row
    username: Mapped[str] = mapped_column(String(64), nullable=False)
    expires: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
