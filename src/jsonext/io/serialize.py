from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
from pydantic import BaseModel, Field

from ..core.fragment import ShapedFragment
from ..core.raw import RawValue
from ..models import ObjectMap


class DumpOptions(BaseModel):
    """Formatting options for JSON output.

    Examples:
        >>> DumpOptions(pretty=True, sort_keys=True).orjson_option() != 0
        True
    """

    pretty: bool = Field(default=False, description="Indent output by two spaces.")
    sort_keys: bool = Field(
        default=False,
        description=(
            "Sort object keys. Raw fragments are written verbatim and keep "
            "their own key order and spacing."
        ),
    )

    def orjson_option(self) -> int:
        """Translate the options into an orjson option bitmask."""
        option = 0
        if self.pretty:
            option |= orjson.OPT_INDENT_2
        if self.sort_keys:
            option |= orjson.OPT_SORT_KEYS
        return option


# orjson encodes integers natively only within this range.
_INT_MIN = -(2**63)
_INT_MAX = 2**64 - 1


def _encodable(value: Any) -> Any:
    """Replace integers outside orjson's native range with literal fragments."""
    if isinstance(value, int) and not _INT_MIN <= value <= _INT_MAX:
        return orjson.Fragment(str(int(value)))
    if isinstance(value, dict):
        return {key: _encodable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encodable(item) for item in value]
    return value


def _default(obj: Any) -> Any:
    """orjson hook for jsonext types and pydantic models."""
    if isinstance(obj, ShapedFragment):
        return orjson.Fragment(obj.get())
    if isinstance(obj, RawValue):
        return orjson.Fragment(obj.get())
    if isinstance(obj, ObjectMap):
        return _encodable(obj.to_map())
    if isinstance(obj, BaseModel):
        return _encodable(obj.model_dump(by_alias=True))
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def dumps(obj: Any, options: DumpOptions | None = None) -> str:
    """Serialize a value (host model, extension, plain JSON data) to JSON text.

    Extension fragments are emitted exactly as stored; everything else follows
    orjson's formatting. Integers beyond 64 bits are written as their decimal
    literal.

    Args:
        obj: Value to serialize.
        options: Output formatting options; compact when omitted.

    Returns:
        JSON text.

    Raises:
        orjson.JSONEncodeError: If a value cannot be encoded.
    """
    option = options.orjson_option() if options is not None else 0
    return orjson.dumps(_encodable(obj), default=_default, option=option).decode(
        "utf-8"
    )


def to_raw_value(obj: Any) -> RawValue:
    """Encode a value canonically and wrap the result as a RawValue."""
    return RawValue(dumps(obj))


def save_as_json(obj: Any, path: Path, options: DumpOptions | None = None) -> None:
    text = dumps(obj, options)
    path.write_text(text, encoding="utf-8")
