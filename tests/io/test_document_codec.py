from __future__ import annotations

import json
from pathlib import Path

import orjson
from pydantic import ValidationError
import pytest

from jsonext import DumpOptions, Ext, ObjectMap, dumps, loads, save_as_json, to_raw_value
from tests.utils import (
    Aliased,
    ChoiceAliased,
    Document,
    Envelope,
    Flags,
    MapDocument,
    PathAliased,
    WithDefault,
    parametrize,
)


def test_null_extension_round_trip() -> None:
    doc = loads('{"ext": \t\nnull}', Document)
    assert doc.ext == Ext.try_from(to_raw_value(None))
    assert dumps(doc) == '{"ext":null}'


def test_empty_object_extension_round_trip() -> None:
    doc = loads('{"ext": \t\n{}\n \t}', Document)
    assert doc.ext == Ext.try_from(to_raw_value({}))
    assert dumps(doc) == '{"ext":{}}'


@parametrize("text", ['{"ext":true}', '{"ext":1}', '{"ext":"1"}', '{"ext":[1]}'])
def test_non_object_extension_fails_document(text: str) -> None:
    with pytest.raises(ValidationError, match="expected null or object") as excinfo:
        loads(text, Document)
    assert excinfo.value.errors()[0]["loc"] == ("ext",)


def test_fragment_is_passed_through_byte_for_byte() -> None:
    text = '{"ext":{"b":1.50,"a":[1, 2],"c":1e3,"big":123456789012345678901234567890}}'
    doc = loads(text, Document)
    assert doc.ext.get() == (
        '{"b":1.50,"a":[1, 2],"c":1e3,"big":123456789012345678901234567890}'
    )
    assert dumps(doc) == text


def test_canonical_input_is_byte_identical() -> None:
    text = dumps({"ext": {"z": 1, "a": {"nested": [True, None]}}})
    assert dumps(loads(text, Document)) == text


@parametrize(
    "text",
    [
        '{"ext":null}',
        '{"ext":{}}',
        '{"ext":{"f1":"abc","f2":123}}',
        '{"ext":{ "spaced" : [ 1 ,2 ] }}',
    ],
)
def test_deserialize_of_serialize_is_identity(text: str) -> None:
    doc = loads(text, Document)
    assert loads(dumps(doc), Document) == doc


def test_loads_bytes_input() -> None:
    doc = loads('{"ext": {"name": "é"}}'.encode(), Document)
    assert doc.ext.get() == '{"name": "é"}'


def test_object_map_round_trip() -> None:
    obj = loads('{"a":1}', ObjectMap)
    assert isinstance(obj, ObjectMap)
    assert dumps(obj) == '{"a":1}'


def test_object_map_is_reemitted_not_passed_through() -> None:
    doc = loads('{"ext": { "b" : 1.50, "a": 1, "a": 2 }}', MapDocument)
    assert doc.ext == {"b": 1.5, "a": 2}
    assert dumps(doc) == '{"ext":{"b":1.5,"a":2}}'
    assert loads(dumps(doc), MapDocument) == doc


def test_object_map_with_big_integers_round_trips() -> None:
    text = '{"ext":{"a":123456789012345678901234567890,"b":-18446744073709551617}}'
    doc = loads(text, MapDocument)
    assert dumps(doc) == text
    assert loads(dumps(doc), MapDocument) == doc
    assert dumps(ObjectMap.try_from({"a": 2**70})) == '{"a":1180591620717411303424}'


def test_dumps_plain_big_integers() -> None:
    assert dumps({"n": [2**64, 2**64 - 1]}) == (
        '{"n":[18446744073709551616,18446744073709551615]}'
    )
    assert dumps(loads('{"a": 18446744073709551616}', ObjectMap)) == (
        '{"a":18446744073709551616}'
    )


def test_object_map_rejects_null_member() -> None:
    with pytest.raises(ValidationError):
        loads('{"ext": null}', MapDocument)


def test_object_map_from_structured_value_materializes_back() -> None:
    value = Flags(f1=True, f2=123)
    obj = ObjectMap.try_from(value)
    assert obj == {"f1": True, "f2": 123}
    assert loads(dumps(obj), ObjectMap).try_into(Flags) == value


def test_top_level_extension() -> None:
    ext = loads(' {"k":  1} ', Ext)
    assert ext.get() == '{"k":  1}'
    with pytest.raises(ValidationError):
        loads("[]", Ext)


def test_nested_host_documents_keep_raw_spans() -> None:
    text = '{"id": 7, "meta": {"ext": {"k":  [1,2]}}, "extra": null}'
    env = loads(text, Envelope)
    assert env.meta.ext.get() == '{"k":  [1,2]}'
    assert env.extra is None
    assert dumps(env) == '{"id":7,"meta":{"ext":{"k":  [1,2]}},"extra":null}'


def test_optional_extension_with_object() -> None:
    env = loads('{"id": 1, "meta": {"ext": null}, "extra": {"x" :1}}', Envelope)
    assert env.meta.ext.is_null()
    assert env.extra is not None
    assert env.extra.get() == '{"x" :1}'


def test_nested_shape_violation_reports_location() -> None:
    with pytest.raises(ValidationError) as excinfo:
        loads('{"id": 1, "meta": {"ext": false}}', Envelope)
    assert excinfo.value.errors()[0]["loc"] == ("meta", "ext")


def test_aliased_extension_member() -> None:
    doc = loads('{"x-ext": {"a" : 1}}', Aliased)
    assert doc.extension.get() == '{"a" : 1}'
    assert dumps(doc) == '{"x-ext":{"a" : 1}}'


@parametrize("member", ["x-ext", "ext"])
def test_alias_choices_extension_member(member: str) -> None:
    doc = loads(f'{{"{member}": {{"b":1.50}}}}', ChoiceAliased)
    assert doc.ext.get() == '{"b":1.50}'
    assert dumps(doc) == '{"ext":{"b":1.50}}'


def test_alias_path_extension_member() -> None:
    doc = loads('{"wrapper": {"other": 2, "ext": {"b":1.50}}}', PathAliased)
    assert doc.ext.get() == '{"b":1.50}'


def test_alias_path_shape_violation_fails() -> None:
    with pytest.raises(ValidationError, match="expected null or object"):
        loads('{"wrapper": {"ext": [1]}}', PathAliased)


def test_missing_extension_uses_null_default() -> None:
    doc = loads("{}", WithDefault)
    assert doc.ext.is_null()
    assert dumps(doc) == '{"ext":null}'


def test_unknown_members_are_ignored() -> None:
    doc = loads('{"other": [1, 2], "ext": {}}', Document)
    assert doc.ext.get() == "{}"


@parametrize("text", ['{"ext": }', '{"ext": null', '{"ext": null} x', ""])
def test_malformed_documents_raise_decode_errors(text: str) -> None:
    with pytest.raises(json.JSONDecodeError):
        loads(text, Document)


def test_non_object_document_fails_validation() -> None:
    with pytest.raises(ValidationError):
        loads("[1]", Document)


def test_dumps_options() -> None:
    value = {"b": 1, "a": Ext.from_string('{"z":1,"y":2}')}
    assert dumps(value, DumpOptions(sort_keys=True)) == '{"a":{"z":1,"y":2},"b":1}'
    assert dumps({"a": 1}, DumpOptions(pretty=True)) == '{\n  "a": 1\n}'


def test_dumps_rejects_unknown_types() -> None:
    with pytest.raises(orjson.JSONEncodeError):
        dumps({"a": object()})


def test_save_as_json(tmp_path: Path) -> None:
    path = tmp_path / "out.json"
    save_as_json(loads('{"ext": {"a" :1}}', Document), path)
    assert path.read_text(encoding="utf-8") == '{"ext":{"a" :1}}'
