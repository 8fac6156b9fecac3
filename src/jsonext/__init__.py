"""jsonext - shape-constrained JSON extension fields for pydantic documents."""

from __future__ import annotations

from .core.fragment import ShapedFragment
from .core.raw import RawValue, decode_members, decode_raw, loads_raw
from .core.shape import NULL_OR_OBJECT, ShapeKind, check_raw, classify
from .errors import (
    DeserializationError,
    JsonExtError,
    ObjectMapError,
    SerializationError,
    ShapeError,
)
from .io import DumpOptions, dumps, loads, save_as_json, to_raw_value
from .models import Ext, JsonObject, JsonValue, ObjectMap

__all__ = [
    "Ext",
    "ObjectMap",
    "ShapedFragment",
    "RawValue",
    "ShapeKind",
    "NULL_OR_OBJECT",
    "JsonObject",
    "JsonValue",
    "check_raw",
    "classify",
    "decode_raw",
    "decode_members",
    "loads_raw",
    "loads",
    "dumps",
    "to_raw_value",
    "save_as_json",
    "DumpOptions",
    "JsonExtError",
    "ShapeError",
    "SerializationError",
    "DeserializationError",
    "ObjectMapError",
]
