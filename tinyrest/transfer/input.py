"""Flatten Flask request input into the mapping the binder consumes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.datastructures import MultiDict

ARRAY_SUFFIX = "[]"


def _flatten(values: MultiDict[str, Any]) -> dict[str, Any]:
    """Collapse a multi-dict: ``key[]`` and repeated keys become lists."""

    flat: dict[str, Any] = {}
    for key, items in values.lists():
        if key.endswith(ARRAY_SUFFIX):
            flat[key[: -len(ARRAY_SUFFIX)]] = list(items)
        elif len(items) > 1:
            flat[key] = list(items)
        else:
            flat[key] = items[0]
    return flat


def request_data(request: Request | Mapping[str, Any]) -> dict[str, Any]:
    """Return the raw, string-keyed parameters of ``request``.

    Query arguments are read first, then form fields, then a top-level JSON
    object body; later sources override earlier ones. Plain mappings are
    returned as a shallow copy so callers can bind without a Flask request.

    :param request: Flask request or an already-flat mapping.
    :type request: flask.Request | Mapping[str, Any]
    :returns: Flat parameter mapping.
    :rtype: dict[str, Any]
    """
    if not isinstance(request, Request):
        if isinstance(request, MultiDict):
            return _flatten(request)
        return dict(request)

    data = _flatten(request.args)
    data.update(_flatten(request.form))
    body = request.get_json(silent=True) if request.is_json else None
    if isinstance(body, Mapping):
        data.update(body)
    return data
