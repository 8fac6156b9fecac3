from __future__ import annotations

"""Project-specific exception hierarchy for jsonext."""

from enum import Enum


class JsonExtError(Exception):
    """Base exception for jsonext."""


class ShapeError(JsonExtError, ValueError):
    """Raised when a JSON value's top-level kind is not permitted."""


class SerializationError(ShapeError):
    """Raised when a raw fragment cannot be wrapped for output."""


class DeserializationError(ShapeError):
    """Raised when an incoming field value violates the extension shape."""


class ObjectMapError(ShapeError, TypeError):
    """Raised when a value does not convert to a JSON object (also a TypeError)."""


class FallbackReason(str, Enum):
    """Reason codes for lossy fallbacks during extension handling."""

    CANONICAL_REEMIT = "canonical_reemit"


ERR_MSG_EXPECTED_NULL_OR_OBJECT = "invalid value: expected null or object"
ERR_MSG_EXPECTED_OBJECT_MAP = "must pass a value convertible to an object map"
