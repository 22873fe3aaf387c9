"""Shared Flask-SQLAlchemy instance backing SQL and native-query providers."""

from __future__ import annotations

from typing import cast

from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import Session

db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False})


def init_app(app: Flask) -> None:
    """Bind :data:`db` to ``app`` unless the host registered its own instance."""
    if "sqlalchemy" not in app.extensions:
        db.init_app(app)


def get_session() -> Session:
    """Return the request-scoped session of the SQLAlchemy bound to the current app.

    Adapters use it when no session was injected, so host applications keep
    their own Flask-SQLAlchemy instance.
    """
    instance = current_app.extensions.get("sqlalchemy", db)
    return cast(Session, instance.session)
