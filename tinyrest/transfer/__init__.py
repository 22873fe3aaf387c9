"""Transfer objects, their field descriptors and the request binder."""

from __future__ import annotations

from .base import TransferObject
from .binder import Binder
from .input import request_data
from .property import Property, PropertyType

__all__ = [
    "Binder",
    "Property",
    "PropertyType",
    "TransferObject",
    "request_data",
]
