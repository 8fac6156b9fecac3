from __future__ import annotations

from ..core.raw import RawValue
from ..core.shape import ShapeKind
from .ext import Ext
from .object_map import ObjectMap
from .types import JsonObject, JsonPrimitive, JsonValue

__all__ = [
    "Ext",
    "ObjectMap",
    "RawValue",
    "ShapeKind",
    "JsonObject",
    "JsonPrimitive",
    "JsonValue",
]
