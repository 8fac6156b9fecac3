from collections.abc import Callable, Iterable, Sequence
from typing import ParamSpec, TypeVar, cast

from pydantic import AliasChoices, AliasPath, BaseModel, ConfigDict, Field
import pytest

from jsonext import Ext, ObjectMap

P = ParamSpec("P")
R = TypeVar("R")


def parametrize(
    argnames: str | Sequence[str],
    argvalues: Iterable[object],
    *,
    ids: Iterable[str | float | int | bool | None]
    | Callable[[object], object | None]
    | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Typed wrapper around ``pytest.mark.parametrize`` that keeps the signature."""
    return cast(
        Callable[[Callable[P, R]], Callable[P, R]],
        pytest.mark.parametrize(argnames, argvalues, ids=ids),
    )


class Document(BaseModel):
    """Host document with a required extension slot."""

    ext: Ext


class MapDocument(BaseModel):
    """Host document with an owned object map slot."""

    ext: ObjectMap


class Extension(BaseModel):
    """Typed view of an extension payload."""

    f1: str
    f2: int


class Flags(BaseModel):
    f1: bool
    f2: int


class Envelope(BaseModel):
    """Host document nesting another host and an optional extension."""

    id: int
    meta: Document
    extra: Ext | None = None


class Aliased(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    extension: Ext = Field(alias="x-ext")


class ChoiceAliased(BaseModel):
    ext: Ext = Field(validation_alias=AliasChoices("x-ext", "ext"))


class PathAliased(BaseModel):
    """Extension read from a member nested one object deep."""

    ext: Ext = Field(validation_alias=AliasPath("wrapper", "ext"))


class WithDefault(BaseModel):
    ext: Ext = Field(default_factory=Ext.null)
