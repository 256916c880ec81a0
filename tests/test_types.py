"""
Tests for type descriptors, schemas and style overrides.

Tests cover:
1. Descriptor matching and representation
2. Schema compilation and extension
3. Style overrides and aliases
4. YAML 1.1 extras: timestamp, binary, set
5. Custom types, implicit and explicit
"""

import datetime
import re
from dataclasses import dataclass

import pytest
import yaml

from yamldump import (
    CORE_SCHEMA,
    DEFAULT_SCHEMA,
    EXTENDED_SCHEMA,
    FAILSAFE_SCHEMA,
    JSON_SCHEMA,
    UnresolvedTypeError,
    UnsupportedStyleError,
    YAMLType,
    serialize,
)
from yamldump.stypes import bool_type, float_type, int_type, null_type, str_type


@dataclass
class Point:
    x: int
    y: int


def tags(types):
    return [t.tag.rsplit(":", 1)[-1] for t in types]


# =============================================================================
# Descriptors
# =============================================================================


class TestYAMLType:
    """Tests for descriptor matching and lexical resolution."""

    def test_descriptor_without_matcher_never_matches(self):
        assert not str_type.matches("text")

    def test_bool_is_not_int(self):
        assert bool_type.matches(True)
        assert not int_type.matches(True)
        assert int_type.matches(3)

    def test_null_matches_only_none(self):
        assert null_type.matches(None)
        assert not null_type.matches(0)

    def test_predicate_and_instance_of_combined(self):
        positive = YAMLType(tag="!pos", instance_of=int, predicate=lambda v: v > 0)
        assert positive.matches(1)
        assert not positive.matches(-1)
        assert not positive.matches(1.5)

    @pytest.mark.parametrize("text", ["0", "-12", "+3", "0b101", "0o17", "017", "0x1F", "1_000", "190:20:30"])
    def test_int_resolves(self, text):
        assert int_type.resolves(text)

    @pytest.mark.parametrize("text", ["1_", "0x", "1.5", "abc", "0b2"])
    def test_int_does_not_resolve(self, text):
        assert not int_type.resolves(text)

    @pytest.mark.parametrize("text", ["1.5", "-1.5e10", ".5", "1e5", ".inf", "-.Inf", ".NaN", "190:20:30.15"])
    def test_float_resolves(self, text):
        assert float_type.resolves(text)

    @pytest.mark.parametrize("text", ["1.5_", "1.2.3", "inf", "-.nan", "e5"])
    def test_float_does_not_resolve(self, text):
        assert not float_type.resolves(text)

    def test_represent_with_unknown_style(self):
        with pytest.raises(UnsupportedStyleError, match="tag:yaml.org,2002:null"):
            null_type.represent_as(None, "bogus")


# =============================================================================
# Schemas
# =============================================================================


class TestSchema:
    """Tests for schema compilation."""

    def test_failsafe(self):
        assert FAILSAFE_SCHEMA.compiled_implicit == []
        assert tags(FAILSAFE_SCHEMA.compiled_explicit) == ["str", "seq", "map"]

    def test_json(self):
        assert tags(JSON_SCHEMA.compiled_implicit) == ["null", "bool", "int", "float"]

    def test_core_equals_json(self):
        assert CORE_SCHEMA.compiled_implicit == JSON_SCHEMA.compiled_implicit
        assert CORE_SCHEMA.compiled_explicit == JSON_SCHEMA.compiled_explicit

    def test_default(self):
        assert tags(DEFAULT_SCHEMA.compiled_implicit) == [
            "null", "bool", "int", "float", "timestamp", "merge",
        ]
        assert tags(DEFAULT_SCHEMA.compiled_explicit) == ["str", "seq", "map", "binary", "set"]

    def test_extended_adds_regexp(self):
        assert tags(EXTENDED_SCHEMA.compiled_explicit)[-1] == "python/regexp"

    def test_same_tag_and_kind_replaces(self):
        custom_int = YAMLType(
            tag="tag:yaml.org,2002:int",
            kind="scalar",
            predicate=lambda v: isinstance(v, int) and not isinstance(v, bool),
            represent=lambda v, style: f"{v:_}",
            resolve=int_type.resolve,
        )
        schema = CORE_SCHEMA.extend(implicit=[custom_int])
        assert tags(schema.compiled_implicit) == ["null", "bool", "float", "int"]
        assert schema.compiled_implicit[-1] is custom_int
        assert serialize(1000000, schema=schema) == "1_000_000\n"

    def test_type_for_tag(self):
        assert DEFAULT_SCHEMA.type_for_tag("tag:yaml.org,2002:int") is int_type
        assert DEFAULT_SCHEMA.type_for_tag("!missing") is None

    def test_compile_style_map(self):
        styles = DEFAULT_SCHEMA.compile_style_map({"!!int": 16, "!custom": "x"})
        assert styles == {"tag:yaml.org,2002:int": "hexadecimal", "!custom": "x"}

    def test_failsafe_rejects_numbers(self):
        with pytest.raises(UnresolvedTypeError):
            serialize(1, schema=FAILSAFE_SCHEMA)

    def test_failsafe_leaves_numeric_text_plain(self):
        assert serialize("1", schema=FAILSAFE_SCHEMA) == "1\n"

    def test_json_rejects_bytes(self):
        with pytest.raises(UnresolvedTypeError):
            serialize(b"data", schema=JSON_SCHEMA)


# =============================================================================
# Styles
# =============================================================================


class TestStyles:
    """Tests for the styles option."""

    def test_null_styles(self):
        assert serialize(None, styles={"!!null": "canonical"}) == "~\n"
        assert serialize(None, styles={"!!null": "uppercase"}) == "NULL\n"
        assert serialize(None, styles={"!!null": "camelcase"}) == "Null\n"

    def test_bool_styles(self):
        assert serialize(True, styles={"tag:yaml.org,2002:bool": "uppercase"}) == "TRUE\n"
        assert serialize(False, styles={"!!bool": "camelcase"}) == "False\n"

    @pytest.mark.parametrize(
        "style,expected",
        [
            ("binary", "0b101"),
            ("bin", "0b101"),
            (2, "0b101"),
            ("octal", "0o5"),
            ("decimal", "5"),
            ("hexadecimal", "0x5"),
        ],
    )
    def test_int_styles(self, style, expected):
        assert serialize(5, styles={"!!int": style}) == expected + "\n"

    def test_negative_int_styles(self):
        assert serialize(-255, styles={"!!int": "hex"}) == "-0xFF\n"
        assert serialize(-5, styles={"!!int": "binary"}) == "-0b101\n"

    def test_float_styles(self):
        assert serialize(float("nan"), styles={"!!float": "uppercase"}) == ".NAN\n"
        assert serialize(float("-inf"), styles={"!!float": "camelcase"}) == "-.Inf\n"

    def test_unknown_style_is_fatal(self):
        with pytest.raises(UnsupportedStyleError):
            serialize(None, styles={"!!null": "bogus"})

    def test_unknown_style_not_skipped(self):
        with pytest.raises(UnsupportedStyleError):
            serialize([None], styles={"!!null": "bogus"}, skip_invalid=True)

    def test_styles_apply_to_keys(self):
        assert serialize({None: 1}, styles={"!!null": "canonical"}) == "~: 1\n"


# =============================================================================
# YAML 1.1 Extras
# =============================================================================


class TestExtras:
    """Tests for timestamp, binary, set and regexp."""

    def test_date(self):
        out = serialize(datetime.date(2001, 12, 14))
        assert out == "2001-12-14\n"
        assert yaml.safe_load(out) == datetime.date(2001, 12, 14)

    def test_datetime(self):
        value = datetime.datetime(2001, 12, 14, 21, 59, 43)
        out = serialize(value)
        assert out == "2001-12-14T21:59:43\n"
        assert yaml.safe_load(out) == value

    def test_binary(self):
        out = serialize(b"\x00\x01\x02")
        assert out == "!<tag:yaml.org,2002:binary> AAEC\n"
        assert yaml.safe_load(out) == b"\x00\x01\x02"

    def test_empty_binary(self):
        assert serialize(b"") == "!<tag:yaml.org,2002:binary> ''\n"

    def test_set(self):
        out = serialize({"b", "a"})
        assert out == "!<tag:yaml.org,2002:set>\na: null\nb: null\n"
        assert yaml.safe_load(out) == {"a", "b"}

    def test_nested_set(self):
        out = serialize({"s": frozenset([2, 1])})
        assert out == "s: !<tag:yaml.org,2002:set>\n  1: null\n  2: null\n"

    def test_regexp(self):
        out = serialize(re.compile("a+b", re.I), schema=EXTENDED_SCHEMA)
        assert out == "!<tag:yaml.org,2002:python/regexp> /a+b/i\n"

    def test_regexp_needs_extended_schema(self):
        with pytest.raises(UnresolvedTypeError):
            serialize(re.compile("a"))


# =============================================================================
# Custom Types
# =============================================================================


class TestCustomTypes:
    """Tests for user-defined type descriptors."""

    def test_explicit_sequence_type(self):
        point_type = YAMLType(
            tag="!point",
            kind="sequence",
            instance_of=Point,
            represent=lambda p, style: [p.x, p.y],
        )
        schema = DEFAULT_SCHEMA.extend(explicit=[point_type])
        assert serialize(Point(1, 2), schema=schema) == "!<!point>\n- 1\n- 2\n"
        assert serialize([Point(1, 2)], schema=schema, flow_level=0) == "[!<!point> [1, 2]]\n"

    def test_explicit_mapping_type(self):
        point_type = YAMLType(
            tag="!point",
            kind="mapping",
            instance_of=Point,
            represent=lambda p, style: {"x": p.x, "y": p.y},
        )
        schema = DEFAULT_SCHEMA.extend(explicit=[point_type])
        assert serialize({"p": Point(1, 2)}, schema=schema) == "p: !<!point>\n  x: 1\n  'y': 2\n"

    def test_implicit_scalar_type_written_verbatim(self):
        point_type = YAMLType(
            tag="!point",
            kind="scalar",
            instance_of=Point,
            represent=lambda p, style: f"{p.x},{p.y}",
        )
        schema = DEFAULT_SCHEMA.extend(implicit=[point_type])
        assert serialize(Point(1, 2), schema=schema) == "1,2\n"

    def test_styled_custom_type(self):
        point_type = YAMLType(
            tag="!point",
            kind="scalar",
            predicate=lambda v: isinstance(v, Point),
            represent={
                "semicolon": lambda p, style: f"{p.x};{p.y}",
                "space": lambda p, style: f"{p.x} {p.y}",
            },
            default_style="semicolon",
        )
        schema = DEFAULT_SCHEMA.extend(explicit=[point_type])
        assert serialize(Point(1, 2), schema=schema) == "!<!point> 1;2\n"
        assert serialize(Point(1, 2), schema=schema, styles={"!point": "space"}) == "!<!point> 1 2\n"

    def test_custom_resolver_quotes_lookalikes(self):
        version_type = YAMLType(
            tag="!version",
            kind="scalar",
            resolve=lambda text: text.startswith("v") and text[1:].isdigit(),
        )
        schema = DEFAULT_SCHEMA.extend(implicit=[version_type])
        assert serialize("v1", schema=schema) == "'v1'\n"
        assert serialize("v1") == "v1\n"
