from __future__ import annotations

import logging
from types import NoneType, UnionType
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin

from pydantic import AliasChoices, AliasPath, BaseModel

from ..core.adapters import get_adapter
from ..core.fragment import ShapedFragment
from ..core.raw import RawValue, decode_members, loads_raw
from ..core.shape import ShapeKind, classify

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _candidates(annotation: Any) -> tuple[Any, ...]:
    """Flatten Annotated/Union layers into the member types."""
    origin = get_origin(annotation)
    if origin is Annotated:
        return _candidates(get_args(annotation)[0])
    if origin is Union or origin is UnionType:
        return tuple(c for arg in get_args(annotation) for c in _candidates(arg))
    return (annotation,)


def _is_fragment_type(candidate: Any) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, ShapedFragment)


def _wants_raw(annotation: Any) -> bool:
    """Return True when every non-None member type keeps raw fragments."""
    members = [c for c in _candidates(annotation) if c is not NoneType]
    return bool(members) and all(_is_fragment_type(c) for c in members)


def _nested_model(annotation: Any) -> type[BaseModel] | None:
    for candidate in _candidates(annotation):
        if isinstance(candidate, type) and issubclass(candidate, BaseModel):
            return candidate
    return None


class _Members(dict[str, Any]):
    """Member name to annotation map for an object reached through an alias path."""


def _alias_paths(
    alias: str | AliasPath | AliasChoices | None,
) -> list[list[str | int]]:
    """Expand an alias into the member paths it may be read from."""
    if alias is None:
        return []
    if isinstance(alias, str):
        return [[alias]]
    if isinstance(alias, AliasPath):
        return [list(alias.path)]
    return [path for choice in alias.choices for path in _alias_paths(choice)]


def _add_member(members: _Members, path: list[str | int], annotation: Any) -> None:
    head, *rest = path
    if not isinstance(head, str):
        return
    if not rest:
        members[head] = annotation
        return
    nested = members.setdefault(head, _Members())
    # A path through a member that is also a field keeps the field's decoding.
    if isinstance(nested, _Members):
        _add_member(nested, rest, annotation)


def _member_annotations(model: type[BaseModel]) -> _Members:
    """Map JSON member names (field names and aliases) to field annotations."""
    fields = _Members()
    for name, info in model.model_fields.items():
        fields[name] = info.annotation
        for path in _alias_paths(info.alias) + _alias_paths(info.validation_alias):
            _add_member(fields, path, info.annotation)
    return fields


def _collect(raw: RawValue, annotation: Any) -> Any:
    """Decode ``raw`` for validation, keeping extension members undecoded."""
    if _wants_raw(annotation):
        if classify(raw) is ShapeKind.NULL and NoneType in _candidates(annotation):
            return None
        return raw
    if isinstance(annotation, _Members):
        fields: _Members | None = annotation
    else:
        model = _nested_model(annotation)
        fields = _member_annotations(model) if model is not None else None
    if fields is None or classify(raw) is not ShapeKind.OBJECT:
        return raw.parse()
    return {
        key: _collect(value, fields.get(key))
        for key, value in decode_members(raw).items()
    }


def loads(data: str | bytes | bytearray, target: type[T]) -> T:
    """Deserialize JSON text into ``target`` without decoding extension fields.

    Members typed as `Ext` (or ``Ext | None``), at any depth of nested pydantic
    models and under any alias form (``AliasChoices``, ``AliasPath`` through
    objects), receive the exact span of the input text. Other members are decoded
    normally and validated by pydantic in python mode. Extensions under
    containers (lists, dicts) are decoded and re-emitted canonically.

    Args:
        data: JSON document.
        target: Host model or any type pydantic can validate.

    Returns:
        Validated value.

    Raises:
        json.JSONDecodeError: If the document is not valid JSON.
        pydantic.ValidationError: If validation fails, including shape
            violations of extension members (reported with the field location).
    """
    raw = loads_raw(data)
    value = _collect(raw, target)
    logger.debug("Decoded %d character document for %r.", len(raw.source), target)
    return get_adapter(target).validate_python(value)
