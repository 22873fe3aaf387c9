"""JSON logging with a per-request correlation id.

Every tinyrest logger writes structured events (``binding.failed``,
``pagination.adapter_selected`` ...) and passes context through ``extra``.
:class:`JSONFormatter` lifts the known context keys into the JSON document
and :class:`RequestIdFilter` stamps each record with the correlation id of
the request being served.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import IO, Any
from uuid import uuid4

from flask import Flask, Response, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")
REQUEST_ID_ENVIRON_KEY = "tinyrest.request_id"

# Context keys tinyrest passes through ``extra``
EXTRA_KEYS = (
    "endpoint",
    "status",
    "elapsed_ms",
    "transfer_object",
    "field",
    "groups",
    "violations",
    "provider",
    "adapter",
    "page",
    "page_size",
    "nb_pages",
)


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line.

    :param extra_keys: Record attributes copied into the payload when set.
    :type extra_keys: Iterable[str]
    """

    def __init__(self, extra_keys: Iterable[str] = EXTRA_KEYS) -> None:
        super().__init__()
        self.extra_keys = tuple(extra_keys)

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(
            (key, getattr(record, key)) for key in self.extra_keys if hasattr(record, key)
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Attach ``request_id`` to every record (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def ensure_request_id() -> str:
    """Return the id correlating the current request, creating it once.

    Incoming ``X-Request-ID`` / ``X-Correlation-ID`` headers win over a fresh
    UUID4. The value is kept in the WSGI environ, which belongs to one
    request; ``flask.g`` lives on the app context and may outlive it.
    """

    if not has_request_context():
        return str(uuid4())
    request_id = request.environ.get(REQUEST_ID_ENVIRON_KEY)
    if request_id is None:
        incoming = next(
            (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)), None
        )
        request_id = request.environ[REQUEST_ID_ENVIRON_KEY] = incoming or str(uuid4())
    return str(request_id)


def configure_logging(level: str | int = "INFO", *, stream: IO[str] | None = None) -> None:
    """Send root logging to ``stream`` (stdout by default) as JSON lines.

    :param level: Level name (case-insensitive) or number.
    :param stream: Destination stream.
    """

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Seed request ids, echo them back and log request completion."""

    app.logger.addFilter(RequestIdFilter())
    log = logging.getLogger("tinyrest.request")

    @app.before_request
    def _start_request() -> None:
        ensure_request_id()
        request.environ["tinyrest.request_started"] = time.perf_counter()

    @app.after_request
    def _finish_request(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = request.environ.get("tinyrest.request_started")
        if started is not None:
            log.debug(
                "request.completed",
                extra={
                    "endpoint": request.endpoint,
                    "status": response.status_code,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        return response


__all__ = ["JSONFormatter", "RequestIdFilter", "configure_logging", "ensure_request_id", "init_app"]
