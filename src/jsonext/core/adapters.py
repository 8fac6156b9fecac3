from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter


@lru_cache(maxsize=256)
def _cached_adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def get_adapter(target: Any) -> TypeAdapter[Any]:
    """Return a TypeAdapter for ``target``, cached when the target is hashable.

    Args:
        target: Any type pydantic can validate (models, dataclasses, generics).

    Returns:
        TypeAdapter for the target.
    """
    try:
        return _cached_adapter(target)
    except TypeError:
        # unhashable annotation metadata
        return TypeAdapter(target)
