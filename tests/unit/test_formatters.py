# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from restclient.errors import DeserializationFailed, InvalidConfiguration
from restclient.formatters import (
    JSON_CONTENT_TYPE,
    PHP_CONTENT_TYPE,
    BaseFormatter,
    Format,
    Formatter,
)


@pytest.mark.parametrize(
    "value",
    [
        {"name": "widget", "tags": ["a", "b"], "nested": {"n": 1.5}},
        [1, "two", None, True],
        "plain",
        42,
        False,
        None,
    ],
)
def test_json_round_trip(value):
    formatter = BaseFormatter("json")
    encoded = formatter.serialize(value)
    assert isinstance(encoded, bytes)
    assert formatter.deserialize(encoded) == value


def test_json_unparsable_input_returns_none():
    formatter = BaseFormatter(Format.JSON)
    assert formatter.deserialize("{not json") is None
    assert formatter.deserialize(b"") is None
    assert formatter.deserialize("   ") is None


def test_php_canonical_false_is_not_an_error():
    formatter = BaseFormatter("php")
    assert formatter.serialize(False) == b"b:0;"
    assert formatter.deserialize("b:0;") is False
    assert formatter.deserialize(b"b:0;") is False


def test_php_round_trip_matches_php_wire_format():
    formatter = BaseFormatter()
    assert formatter.serialize("abc") == b's:3:"abc";'
    assert formatter.serialize(7) == b"i:7;"
    encoded = formatter.serialize({"a": 1, "b": "x"})
    assert encoded == b'a:2:{s:1:"a";i:1;s:1:"b";s:1:"x";}'
    assert formatter.deserialize(encoded) == {"a": 1, "b": "x"}


def test_php_lists_come_back_as_indexed_dicts():
    formatter = BaseFormatter("php")
    assert formatter.deserialize(formatter.serialize([1, 2])) == {0: 1, 1: 2}


def test_php_garbage_raises_deserialization_failed():
    formatter = BaseFormatter("php")
    with pytest.raises(DeserializationFailed) as excinfo:
        formatter.deserialize("not serialized")
    assert excinfo.value.data == "not serialized"


def test_php_empty_body_is_none():
    assert BaseFormatter("php").deserialize("") is None


def test_format_names_are_case_insensitive():
    assert BaseFormatter("PHP").format is Format.PHP
    assert BaseFormatter(" Json ").format is Format.JSON


def test_unknown_format_fails_at_construction():
    with pytest.raises(InvalidConfiguration):
        BaseFormatter("xml")
    with pytest.raises(ValueError):
        Format.parse("yaml")


def test_content_types_and_protocol_conformance():
    assert BaseFormatter("php").content_type == PHP_CONTENT_TYPE
    assert BaseFormatter("json").content_type == JSON_CONTENT_TYPE
    assert isinstance(BaseFormatter(), Formatter)
    assert repr(BaseFormatter("json")) == "BaseFormatter(format='json')"
