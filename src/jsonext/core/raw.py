from __future__ import annotations

import json
from json.decoder import WHITESPACE, JSONObject
import logging
from typing import Any

logger = logging.getLogger(__name__)

_DECODER = json.JSONDecoder()


class RawValue:
    """A span of JSON text holding exactly one value, left undecoded.

    The span never includes surrounding whitespace. The view keeps a reference
    to its source buffer, so it stays valid for as long as it is reachable.
    Constructing it directly trusts the caller's boundaries; use
    `RawValue.from_string` for untrusted text.
    """

    __slots__ = ("_source", "_start", "_end")

    def __init__(self, source: str, start: int = 0, end: int | None = None) -> None:
        self._source = source
        self._start = start
        self._end = len(source) if end is None else end

    @classmethod
    def from_string(cls, text: str | bytes | bytearray) -> RawValue:
        """Validate text holding one JSON value and wrap it.

        Args:
            text: JSON text; surrounding whitespace is allowed and dropped.

        Returns:
            RawValue spanning the value.

        Raises:
            json.JSONDecodeError: If the text is not exactly one JSON value.
        """
        return loads_raw(text)

    @property
    def source(self) -> str:
        return self._source

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    def get(self) -> str:
        """Return the raw JSON text of the span."""
        return self._source[self._start : self._end]

    def parse(self) -> Any:
        """Decode the span into plain Python JSON values."""
        return json.loads(self.get())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawValue):
            return NotImplemented
        return self.get() == other.get()

    def __hash__(self) -> int:
        return hash(self.get())

    def __str__(self) -> str:
        return self.get()

    def __repr__(self) -> str:
        return f"RawValue({self.get()!r})"


def _as_text(data: str | bytes | bytearray) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8")
    return data


def decode_raw(text: str, idx: int = 0) -> tuple[RawValue, int]:
    """Locate the boundaries of the JSON value starting at or after ``idx``.

    Args:
        text: Source JSON text.
        idx: Offset to start from; leading whitespace is skipped.

    Returns:
        Tuple of the located RawValue and the offset just past it.

    Raises:
        json.JSONDecodeError: If no valid JSON value starts there.
    """
    start = WHITESPACE.match(text, idx).end()
    _, end = _DECODER.raw_decode(text, start)
    return RawValue(text, start, end), end


def loads_raw(data: str | bytes | bytearray) -> RawValue:
    """Wrap a whole JSON document as a RawValue.

    Raises:
        json.JSONDecodeError: If the document is malformed or has trailing data.
    """
    text = _as_text(data)
    raw, end = decode_raw(text)
    end = WHITESPACE.match(text, end).end()
    if end != len(text):
        raise json.JSONDecodeError("Extra data", text, end)
    return raw


def _scan_raw(string: str, idx: int) -> tuple[RawValue, int]:
    """Object-member scanner that keeps values as raw spans."""
    _, end = _DECODER.scan_once(string, idx)
    return RawValue(string, idx, end), end


def _scan_object(text: str, idx: int) -> tuple[dict[str, RawValue], int]:
    """Parse the object body starting just after ``{`` at ``idx``.

    This is the only caller of the stdlib object scanner. It relies on the
    CPython signature ``JSONObject(s_and_end, strict, scan_once, object_hook,
    object_pairs_hook, memo)`` and on ``JSONDecoder.scan_once(string, idx)``
    returning ``(value, end)``.
    """
    return JSONObject((text, idx), _DECODER.strict, _scan_raw, None, None, {})


def decode_members(raw: RawValue) -> dict[str, RawValue]:
    """Split a JSON object into its members, keeping each value undecoded.

    Duplicate keys collapse with the last occurrence winning.

    Args:
        raw: RawValue spanning a JSON object.

    Returns:
        Member name to RawValue mapping in document order.

    Raises:
        json.JSONDecodeError: If the span is not a JSON object.
    """
    text = raw.source
    if text[raw.start : raw.start + 1] != "{":
        raise json.JSONDecodeError("Expecting object", text, raw.start)
    members, end = _scan_object(text, raw.start + 1)
    logger.debug("Split object into %d raw member(s) ending at %d.", len(members), end)
    return members
