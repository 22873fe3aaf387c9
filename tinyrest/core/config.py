"""Environment-driven configuration classes.

``APP_ENV`` selects one of :data:`CONFIG_MAP`; every value below can be
overridden through an environment variable of the same name (``DATABASE_URL``
for the database). A ``.env`` file next to the process is loaded first.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

APP_ENV: Final[str] = "APP_ENV"

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag such as ``TINYREST_ABSOLUTE_URLS=yes``.

    Parameters
    ----------
    name: str
        Variable name.
    default: bool, optional
        Returned when the variable is not set.

    Returns
    -------
    bool
        Whether the value is one of ``1/true/yes/y/on`` (any case).
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer, treating unset and blank values as ``default``."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Read a comma-separated list such as ``TINYREST_VALIDATION_GROUPS=Default,Api``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


class BaseConfig:
    """Settings shared by every environment.

    Attributes
    ----------
    SQLALCHEMY_DATABASE_URI: str
        Engine URL used by SQL and native-query providers.
    LOG_LEVEL: str
        Root level for the JSON log handler.
    TINYREST_DEFAULT_PAGE_SIZE: int
        Page size when the request carries none.
    TINYREST_MAX_PAGE_SIZE: int
        Ceiling for client supplied page sizes.
    TINYREST_PAGE_PARAMETER: str
        Query parameter holding the 1-based page number.
    TINYREST_PAGE_SIZE_PARAMETER: str
        Query parameter holding the page size.
    TINYREST_ABSOLUTE_URLS: bool
        Emit ``scheme://host/...`` page links instead of paths.
    TINYREST_VALIDATION_GROUPS: tuple[str, ...]
        Groups the shared request handler validates by default.
    """

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./tinyrest.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO")

    DEBUG = False
    TESTING = False
    PROPAGATE_EXCEPTIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    TINYREST_DEFAULT_PAGE_SIZE = env_int("TINYREST_DEFAULT_PAGE_SIZE", 20)
    TINYREST_MAX_PAGE_SIZE = env_int("TINYREST_MAX_PAGE_SIZE", 200)
    TINYREST_PAGE_PARAMETER = os.getenv("TINYREST_PAGE_PARAMETER", "page")
    TINYREST_PAGE_SIZE_PARAMETER = os.getenv("TINYREST_PAGE_SIZE_PARAMETER", "pageSize")
    TINYREST_ABSOLUTE_URLS = env_bool("TINYREST_ABSOLUTE_URLS")
    TINYREST_VALIDATION_GROUPS = env_list("TINYREST_VALIDATION_GROUPS", ("Default",))


class DevelopmentConfig(BaseConfig):
    """Local runs: debug on, SQL echo opt-in."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    """Test runs against in-memory SQLite (``TEST_DATABASE_URL`` overrides)."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Pick the configuration class named by ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        :class:`DevelopmentConfig` when the variable is unset or unknown.
    """
    name = os.getenv(APP_ENV, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
