from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Self, TypeVar, overload

from pydantic import GetCoreSchemaHandler
from pydantic_core import (
    CoreSchema,
    PydanticSerializationError,
    core_schema,
    to_jsonable_python,
)

from ..core.adapters import get_adapter
from ..core.fragment import jsonable_fallback
from ..errors import ERR_MSG_EXPECTED_OBJECT_MAP, ObjectMapError
from .types import JsonValue

T = TypeVar("T")


class ObjectMap(Mapping[str, JsonValue]):
    """Owned extension slot: a decoded JSON object.

    Unlike `Ext`, there is no ``null`` case: an ObjectMap always comes from a
    JSON object. Key order follows insertion order for serialization, while
    equality is plain mapping equality. The map is read-only; build a new
    instance to change it.
    """

    __slots__ = ("_map",)

    def __init__(
        self, mapping: Mapping[str, Any] | Iterable[tuple[str, Any]] = ()
    ) -> None:
        if mapping is None:
            raise ObjectMapError(ERR_MSG_EXPECTED_OBJECT_MAP)
        self._map: dict[str, Any] = dict(mapping)

    @classmethod
    def from_map(cls, mapping: Mapping[str, Any]) -> Self:
        """Wrap a bare mapping without validation."""
        return cls(mapping)

    @classmethod
    def try_from(cls, value: Any) -> Self:
        """Convert any serializable value into an object map.

        Args:
            value: Model, dataclass, mapping or other value pydantic can encode.

        Returns:
            ObjectMap holding the encoded object.

        Raises:
            ObjectMapError: If ``value`` does not encode to a JSON object
                (``None``, scalars and sequences included).
        """
        try:
            converted = to_jsonable_python(value, fallback=jsonable_fallback)
        except (PydanticSerializationError, TypeError) as e:
            raise ObjectMapError(ERR_MSG_EXPECTED_OBJECT_MAP) from e
        if not isinstance(converted, dict):
            raise ObjectMapError(ERR_MSG_EXPECTED_OBJECT_MAP)
        return cls(converted)

    def to_map(self) -> dict[str, Any]:
        """Return the contents as a new plain dict."""
        return dict(self._map)

    @overload
    def try_into(self, target: None = None) -> dict[str, Any]: ...

    @overload
    def try_into(self, target: type[T]) -> T: ...

    def try_into(self, target: Any = None) -> Any:
        """Validate the map contents as ``target``.

        Raises:
            pydantic.ValidationError: If the contents do not fit ``target``.
        """
        if target is None:
            return self.to_map()
        return get_adapter(target).validate_python(self._map)

    def __getitem__(self, key: str) -> Any:
        return self._map[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        return f"ObjectMap({self._map!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        map_schema = core_schema.dict_schema(
            core_schema.str_schema(), core_schema.any_schema()
        )
        return core_schema.no_info_after_validator_function(
            cls,
            map_schema,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_map(), return_schema=map_schema
            ),
        )
