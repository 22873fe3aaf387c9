"""Global pytest fixtures for tinyrest.

The application is built once per session from :func:`tinyrest.create_app`
with the demo blueprint mounted; each database test gets a fresh schema in an
in-memory SQLite database.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from typing import Any

import pytest
from flask import Flask

from tinyrest import create_app
from tinyrest.core.extensions import db
from tests.factories import SQLAlchemySession


class TestConfig:
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Keeps log output quiet.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = "WARNING"
    TINYREST_DEFAULT_PAGE_SIZE = 10
    TINYREST_MAX_PAGE_SIZE = 50


@pytest.fixture(scope="session")
def app() -> Generator[Flask, None, None]:
    """Create a Flask application configured for testing."""

    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestConfig, instance_relative_config=False)

    from tests import models as _models  # noqa: F401
    from tests.views import bp

    application.register_blueprint(bp)
    with application.app_context():
        yield application


@pytest.fixture()
def session(app: Flask) -> Generator[Any, None, None]:
    """Provide a session over a freshly created schema for one test."""

    with app.app_context():
        db.create_all()
        SQLAlchemySession.set(db.session)
        try:
            yield db.session
        finally:
            SQLAlchemySession.set(None)
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""

    return app.test_client()


@pytest.fixture()
def request_context(app: Flask):
    """Factory pushing a request context for ``path`` (query string included)."""

    def _factory(path: str, **kwargs: Any):
        return app.test_request_context(path, **kwargs)

    return _factory
