"""Application wiring: register tinyrest services on a Flask app."""

from __future__ import annotations

from typing import Any, cast

from flask import Flask, current_app

from tinyrest.core.config import BaseConfig, get_config
from tinyrest.core.logger import configure_logging, init_app as init_logging
from tinyrest.handler import RequestHandler
from tinyrest.pagination.factory import PaginationFactory
from tinyrest.pagination.routing import FlaskRouter

EXTENSION_KEY = "tinyrest"


def init_app(app: Flask) -> None:
    """Register the request handler, pagination factory and error handlers.

    Host applications call this after loading their configuration; every
    ``TINYREST_*`` key falls back to :class:`~tinyrest.core.config.BaseConfig`.
    """

    for key in dir(BaseConfig):
        if key.startswith("TINYREST_"):
            app.config.setdefault(key, getattr(BaseConfig, key))

    from tinyrest.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from tinyrest.core import errors

    errors.init_app(app)

    app.extensions[EXTENSION_KEY] = {
        "request_handler": RequestHandler(
            validation_groups=app.config["TINYREST_VALIDATION_GROUPS"],
        ),
        "pagination_factory": PaginationFactory(
            FlaskRouter(absolute=app.config["TINYREST_ABSOLUTE_URLS"]),
            page_parameter=app.config["TINYREST_PAGE_PARAMETER"],
        ),
    }


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build a standalone Flask application with tinyrest wired in."""

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    init_app(app)

    return app


def _services() -> dict[str, Any]:
    try:
        return cast(dict[str, Any], current_app.extensions[EXTENSION_KEY])
    except KeyError:
        raise RuntimeError("tinyrest is not initialized. Call init_app() first.") from None


def get_request_handler() -> RequestHandler:
    """Return the request handler bound to the current application."""
    return cast(RequestHandler, _services()["request_handler"])


def get_pagination_factory() -> PaginationFactory:
    """Return the pagination factory bound to the current application."""
    return cast(PaginationFactory, _services()["pagination_factory"])
