from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy import func, select

from authgate.app import EXTENSION_KEY
from authgate.application.services.session_manager import SessionManager
from authgate.domain.users.entities import Session
from authgate.domain.users.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from authgate.infrastructure.container import Container
from authgate.infrastructure.db.models import SessionRow, User
from authgate.shared.errors import ValidationError


def _count(container: Container, model: type) -> int:
    with container.session_factory() as db:
        return db.scalar(select(func.count()).select_from(model)) or 0


def test_register_login_welcome_logout_flow(app: Flask, client: FlaskClient) -> None:
    container: Container = app.extensions[EXTENSION_KEY]

    signup = client.post("/signup", data={"username": "alice", "password": "pw1"})
    assert signup.status_code == 303

    login = client.post("/login", data={"username": "alice", "password": "pw1"})
    assert login.status_code == 303
    assert login.headers["Location"] == "/welcome"
    cookie = client.get_cookie("session_id")
    assert cookie is not None

    welcome = client.get("/welcome")
    assert welcome.status_code == 200
    assert welcome.get_json() == {"username": "alice"}

    assert client.get("/logout").status_code == 303
    assert _count(container, SessionRow) == 0
    assert container.session_manager.validate(cookie.value) is None

    client.set_cookie("session_id", cookie.value)
    again = client.get("/welcome")
    assert again.status_code == 303
    assert again.headers["Location"] == "/login"

    assert client.get("/logout").status_code == 303
    assert _count(container, User) == 1


def test_duplicate_signup_returns_conflict(client: FlaskClient) -> None:
    assert client.post("/signup", data={"username": "alice", "password": "pw1"}).status_code == 303

    duplicate = client.post("/signup", data={"username": "alice", "password": "pw2"})

    assert duplicate.status_code == 409
    assert duplicate.get_json() == {"error": "user_already_exists"}


def test_bad_password_and_unknown_user_look_the_same(client: FlaskClient) -> None:
    client.post("/signup", data={"username": "alice", "password": "pw1"})

    wrong = client.post("/login", data={"username": "alice", "password": "nope"})
    missing = client.post("/login", data={"username": "mallory", "password": "nope"})

    assert wrong.status_code == missing.status_code == 401
    assert wrong.get_json() == missing.get_json() == {"error": "invalid_credentials"}


def test_credential_store_roundtrip(container: Container) -> None:
    register = container.register_user_use_case
    register.execute("alice", "pw1")
    original = container.user_repository.find_digest("alice")

    with pytest.raises(UserAlreadyExistsError):
        register.execute("alice", "pw2")

    assert container.user_repository.find_digest("alice") == original
    assert container.user_repository.find_digest("bob") is None
    assert container.password_hasher.verify("pw1", original)


def test_session_expiry_against_database(container: Container) -> None:
    container.register_user_use_case.execute("alice", "pw1")
    now = [datetime.now(UTC)]
    manager = SessionManager(
        users=container.user_repository,
        sessions=container.session_repository,
        password_hasher=container.password_hasher,
        clock=lambda: now[0],
    )

    session = manager.login("alice", "pw1")
    assert manager.validate(session.token) == "alice"

    stored = container.session_repository.get(session.token)
    assert stored is not None
    assert stored.expires_at == session.expires_at
    assert stored.expires_at.tzinfo is not None

    now[0] = session.expires_at
    assert manager.validate(session.token) is None
    # expired rows linger until revoked or swept
    assert _count(container, SessionRow) == 1

    assert manager.sweep() == 1
    assert _count(container, SessionRow) == 0


def test_login_failures_against_database(container: Container) -> None:
    container.register_user_use_case.execute("alice", "pw1")

    with pytest.raises(InvalidCredentialsError):
        container.session_manager.login("alice", "pw2")
    with pytest.raises(InvalidCredentialsError):
        container.session_manager.login("ALICE", "pw1")

    assert _count(container, SessionRow) == 0


def test_concurrent_signups_yield_single_winner(container: Container) -> None:
    register = container.register_user_use_case
    barrier = threading.Barrier(4)
    outcomes: list[str] = []
    lock = threading.Lock()

    def attempt(password: str) -> None:
        barrier.wait()
        try:
            register.execute("carol", password)
            result = "ok"
        except UserAlreadyExistsError:
            result = "duplicate"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt, args=(f"pw{i}",)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert sorted(outcomes) == ["duplicate", "duplicate", "duplicate", "ok"]
    assert _count(container, User) == 1


def test_sweep_sessions_cli(app: Flask) -> None:
    container: Container = app.extensions[EXTENSION_KEY]
    now = datetime.now(UTC)
    container.session_repository.add(Session("old", "alice", now - timedelta(hours=1)))
    container.session_repository.add(Session("live", "alice", now + timedelta(hours=1)))

    result = app.test_cli_runner().invoke(args=["sweep-sessions"])

    assert result.exit_code == 0
    assert "Removed 1 expired session(s)" in result.output
    assert container.session_repository.get("live") is not None
    assert container.session_repository.get("old") is None


def test_init_db_cli_is_repeatable(app: Flask) -> None:
    result = app.test_cli_runner().invoke(args=["init-db"])

    assert result.exit_code == 0
    assert "Database schema ensured" in result.output


def test_empty_username_never_registers_or_logs_in(container: Container) -> None:
    with pytest.raises(ValidationError):
        container.register_user_use_case.execute("", "pw")

    assert _count(container, User) == 0
    with pytest.raises(InvalidCredentialsError):
        container.session_manager.login("", "pw")
    assert _count(container, SessionRow) == 0


def test_users_table_rejects_empty_username(container: Container) -> None:
    with pytest.raises(ValidationError):
        container.user_repository.create("", "digest")

    assert _count(container, User) == 0


@pytest.mark.parametrize("username", ["", "   ", "a" * 200])
def test_login_odd_usernames_fail_as_bad_credentials(client: FlaskClient, username: str) -> None:
    response = client.post("/login", data={"username": username, "password": "pw"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_credentials"}


def test_login_without_password_is_rejected_as_invalid_payload(client: FlaskClient) -> None:
    response = client.post("/login", data={"username": "alice"})

    assert response.status_code == 422
    assert response.get_json()["error"] == "validation_error"
