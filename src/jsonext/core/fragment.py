from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, ClassVar, Self, TypeVar, overload

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import CoreSchema, PydanticSerializationError, core_schema, to_json

from ..errors import DeserializationError, FallbackReason, SerializationError, ShapeError
from .adapters import get_adapter
from .logging_utils import log_fallback
from .raw import RawValue
from .shape import NULL_OR_OBJECT, ShapeKind, check_raw, classify

logger = logging.getLogger(__name__)

T = TypeVar("T")


def jsonable_fallback(obj: Any) -> Any:
    """Fallback for pydantic-core encoders on jsonext's own value types."""
    if isinstance(obj, ShapedFragment):
        return obj.try_into()
    if isinstance(obj, RawValue):
        return obj.parse()
    if isinstance(obj, Mapping):
        return dict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class ShapedFragment:
    """Undecoded JSON fragment whose top-level kind is restricted.

    Subclasses pick the permitted kinds through ``allowed_kinds``. Every
    construction path runs the shape check, so an instance never holds a
    fragment of another kind. Instances are immutable and compare by the
    literal fragment text, not by decoded JSON value.
    """

    __slots__ = ("_raw",)

    allowed_kinds: ClassVar[frozenset[ShapeKind]] = NULL_OR_OBJECT

    def __init__(self, raw: RawValue) -> None:
        self._raw = check_raw(raw, self.allowed_kinds)

    @classmethod
    def try_from(cls, raw: RawValue) -> Self:
        """Wrap a raw fragment after checking its shape.

        Args:
            raw: Raw JSON value to wrap.

        Returns:
            New wrapper around ``raw``.

        Raises:
            SerializationError: If the fragment's kind is not permitted.
        """
        try:
            return cls(raw)
        except ShapeError as e:
            raise SerializationError(str(e)) from e

    @classmethod
    def from_string(cls, text: str | bytes | bytearray) -> Self:
        """Validate JSON text and wrap it (see `try_from`)."""
        return cls.try_from(RawValue.from_string(text))

    @property
    def raw(self) -> RawValue:
        return self._raw

    @property
    def kind(self) -> ShapeKind:
        return classify(self._raw)

    def get(self) -> str:
        """Return the fragment text exactly as received."""
        return self._raw.get()

    def is_null(self) -> bool:
        return self.kind is ShapeKind.NULL

    @overload
    def try_into(self, target: None = None) -> Any: ...

    @overload
    def try_into(self, target: type[T]) -> T: ...

    def try_into(self, target: Any = None) -> Any:
        """Decode the fragment, optionally as a typed value.

        The fragment is left untouched, so this can be called repeatedly.

        Args:
            target: Type to validate into (model, dataclass, TypedDict,
                generic alias...). None returns plain JSON values.

        Returns:
            Decoded value.

        Raises:
            pydantic.ValidationError: If the fragment does not fit ``target``.
        """
        if target is None:
            return self._raw.parse()
        return get_adapter(target).validate_json(self._raw.get())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShapedFragment):
            return NotImplemented
        return self.get() == other.get()

    def __hash__(self) -> int:
        return hash(self.get())

    def __str__(self) -> str:
        return self.get()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get()!r})"

    @classmethod
    def _reemit(cls, value: Any) -> RawValue:
        """Encode an already decoded value back into canonical JSON text."""
        try:
            text = to_json(value, fallback=jsonable_fallback).decode("utf-8")
        except (PydanticSerializationError, TypeError) as e:
            raise DeserializationError(f"value is not JSON serializable: {e}") from e
        log_fallback(
            logger,
            FallbackReason.CANONICAL_REEMIT,
            f"{cls.__name__} built from decoded {type(value).__name__}; "
            "original formatting is not preserved.",
        )
        return RawValue(text)

    @classmethod
    def _validate(cls, value: Any) -> Self:
        if isinstance(value, cls):
            return value
        if isinstance(value, ShapedFragment):
            raw = value.raw
        elif isinstance(value, RawValue):
            raw = value
        else:
            raw = cls._reemit(value)
        try:
            return cls(raw)
        except ShapeError as e:
            raise DeserializationError(str(e)) from e

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda fragment: fragment.try_into(), when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        options: list[JsonSchemaValue] = [
            {"type": kind.value}
            for kind in (ShapeKind.OBJECT, ShapeKind.NULL)
            if kind in cls.allowed_kinds
        ]
        if len(options) == 1:
            return options[0]
        return {"anyOf": options}
