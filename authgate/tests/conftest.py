from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from authgate.app import EXTENSION_KEY, create_app
from authgate.infrastructure.container import Container
from authgate.infrastructure.db import init_db
from authgate.shared.config import AppConfig, AuthConfig, DatabaseConfig

FAST_HASH = "pbkdf2:sha256:1000"


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'users.db'}"),
        auth=AuthConfig(PASSWORD_HASH_METHOD=FAST_HASH),
    )


@pytest.fixture()
def container(config: AppConfig) -> Iterator[Container]:
    container = Container(config)
    init_db(container.engine)
    yield container
    container.dispose()


@pytest.fixture()
def app(config: AppConfig) -> Iterator[Flask]:
    app = create_app(config)
    yield app
    app.extensions[EXTENSION_KEY].dispose()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()

