from __future__ import annotations

from enum import Enum

from ..errors import ERR_MSG_EXPECTED_NULL_OR_OBJECT, ShapeError
from .raw import RawValue


class ShapeKind(str, Enum):
    """Top-level JSON kind as seen from the leading character."""

    OBJECT = "object"
    NULL = "null"
    OTHER = "other"


NULL_OR_OBJECT: frozenset[ShapeKind] = frozenset({ShapeKind.OBJECT, ShapeKind.NULL})


def classify(raw: RawValue) -> ShapeKind:
    """Classify a raw value by its leading character only.

    The interior is never parsed: ``n`` is taken as ``null`` and ``{`` as an
    object without checking what follows.
    """
    lead = raw.source[raw.start : raw.start + 1]
    if lead == "{":
        return ShapeKind.OBJECT
    if lead == "n":
        return ShapeKind.NULL
    return ShapeKind.OTHER


def expected_message(allowed: frozenset[ShapeKind]) -> str:
    """Build the shape violation message for a set of permitted kinds."""
    if allowed == NULL_OR_OBJECT:
        return ERR_MSG_EXPECTED_NULL_OR_OBJECT
    expected = " or ".join(sorted(kind.value for kind in allowed))
    return f"invalid value: expected {expected}"


def check_raw(
    raw: RawValue, allowed: frozenset[ShapeKind] = NULL_OR_OBJECT
) -> RawValue:
    """Return ``raw`` unchanged if its top-level kind is permitted.

    Args:
        raw: Raw value to inspect.
        allowed: Permitted top-level kinds.

    Returns:
        The same RawValue.

    Raises:
        ShapeError: If the leading character maps to a kind outside ``allowed``.
    """
    if classify(raw) in allowed:
        return raw
    raise ShapeError(expected_message(allowed))
