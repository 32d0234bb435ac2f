"""Tests for struct tag parsing and field tag lookup."""

from dataclasses import dataclass, field, fields

import pytest

from tagmap.errors import MalformedTagError
from tagmap.parsing import TagLexer, TagParser
from tagmap.tags import STRUCT_TAG_KEY, TAG_NAME, field_tag, parse_struct_tag, tagged


@dataclass
class Tagged:
    keyed: int = field(default=1, metadata={"config": "keyed_value"})
    struct: int = field(default=2, metadata={"tag": 'json:"s" config:"struct_value"'})
    both: int = field(default=3, metadata={"config": "from_key", "tag": 'config:"from_tag"'})
    other: int = field(default=4, metadata={"tag": 'json:"only_json"'})
    plain: int = 5
    helper: int = tagged("helper_value", default=6, metadata={"unit": "ms"})


def _field(name):
    return next(f for f in fields(Tagged) if f.name == name)


class TestTagLexer:
    """Tests for the tag lexer."""

    def test_tokenize_single_pair(self):
        """Test tokenizing one key/value pair."""
        lexer = TagLexer()
        lexer.build()

        tokens = lexer.tokenize('config:"name"')

        assert [t.type for t in tokens] == ["KEY", "COLON", "STRING"]
        assert tokens[0].value == "config"
        assert tokens[2].value == "name"

    def test_tokenize_multiple_pairs(self):
        """Test that whitespace separates pairs."""
        lexer = TagLexer()
        lexer.build()

        tokens = lexer.tokenize('config:"a"  json:"b,omitempty"')

        assert [t.type for t in tokens] == ["KEY", "COLON", "STRING"] * 2
        assert tokens[5].value == "b,omitempty"

    def test_escapes(self):
        """Test escapes inside quoted values."""
        lexer = TagLexer()
        lexer.build()

        tokens = lexer.tokenize(r'doc:"say \"hi\"\t\\"')

        assert tokens[2].value == 'say "hi"\t\\'

    def test_unknown_escape(self):
        """Test that an unknown escape is rejected."""
        lexer = TagLexer()
        lexer.build()

        with pytest.raises(MalformedTagError, match="Unknown escape"):
            lexer.tokenize(r'doc:"\q"')

    def test_unterminated_string(self):
        """Test that an unterminated value is rejected."""
        lexer = TagLexer()
        lexer.build()

        with pytest.raises(MalformedTagError, match="Illegal character"):
            lexer.tokenize('config:"name')


class TestTagParser:
    """Tests for the tag parser."""

    def test_parse_pairs(self):
        """Test parsing several pairs."""
        tag = TagParser().parse('config:"a" json:"b"')

        assert tag.pairs == (("config", "a"), ("json", "b"))
        assert tag.keys() == ["config", "json"]
        assert tag.raw == 'config:"a" json:"b"'

    def test_parse_empty(self):
        """Test that an empty string is a tag without entries."""
        tag = TagParser().parse("")

        assert tag.pairs == ()
        assert tag.get("config") == ""

    def test_missing_value(self):
        """Test that a key without a value is a syntax error."""
        with pytest.raises(MalformedTagError, match="Syntax error"):
            TagParser().parse('config:"a" json')

    def test_missing_colon(self):
        """Test that a key followed directly by a value is a syntax error."""
        with pytest.raises(MalformedTagError, match="Syntax error"):
            TagParser().parse('config"a"')


class TestStructTag:
    """Tests for StructTag lookups."""

    def test_get(self):
        tag = parse_struct_tag('config:"a" json:"b"')
        assert tag.get("config") == "a"
        assert tag.get("json") == "b"
        assert tag.get("yaml") == ""

    def test_lookup_distinguishes_empty_value(self):
        """Test that lookup tells an empty value from a missing key."""
        tag = parse_struct_tag('config:""')
        assert tag.lookup("config") == ("", True)
        assert tag.lookup("json") == ("", False)

    def test_first_occurrence_wins(self):
        tag = parse_struct_tag('config:"first" config:"second"')
        assert tag.get("config") == "first"

    def test_parse_is_cached(self):
        assert parse_struct_tag('config:"a"') is parse_struct_tag('config:"a"')


class TestFieldTag:
    """Tests for reading tags from dataclass fields."""

    def test_default_tag_name(self):
        assert TAG_NAME == "config"
        assert STRUCT_TAG_KEY == "tag"

    def test_keyed_form(self):
        assert field_tag(_field("keyed")) == "keyed_value"

    def test_struct_tag_form(self):
        assert field_tag(_field("struct")) == "struct_value"
        assert field_tag(_field("struct"), "json") == "s"

    def test_keyed_form_wins(self):
        """Test that the keyed form takes precedence over the struct tag."""
        assert field_tag(_field("both")) == "from_key"

    def test_untagged(self):
        assert field_tag(_field("other")) == ""
        assert field_tag(_field("plain")) == ""

    def test_tagged_helper(self):
        """Test the tagged() field helper."""
        helper = _field("helper")
        assert field_tag(helper) == "helper_value"
        assert helper.metadata["unit"] == "ms"
        assert Tagged().helper == 6

    def test_tagged_helper_custom_tag_name(self):
        @dataclass
        class Custom:
            value: int = tagged("v", tag_name="export", default=0)

        (value,) = fields(Custom)
        assert field_tag(value, "export") == "v"
        assert field_tag(value) == ""

    def test_non_string_keyed_value(self):
        @dataclass
        class Bad:
            value: int = field(default=0, metadata={"config": 42})

        (value,) = fields(Bad)
        with pytest.raises(MalformedTagError, match="must be a string") as exc_info:
            field_tag(value)
        assert exc_info.value.path == ["value"]
        assert str(exc_info.value) == "field value: Tag 'config' must be a string, got int"

    def test_non_string_struct_tag(self):
        @dataclass
        class Bad:
            value: int = field(default=0, metadata={"tag": 42})

        (value,) = fields(Bad)
        with pytest.raises(MalformedTagError) as exc_info:
            field_tag(value)
        assert exc_info.value.path == ["value"]
        assert str(exc_info.value) == "field value: Struct tag must be a string, got int"

    def test_malformed_struct_tag_names_field(self):
        """Test that a malformed struct tag reports the field it is on."""

        @dataclass
        class Bad:
            value: int = field(default=0, metadata={"tag": "config:"})

        (value,) = fields(Bad)
        with pytest.raises(MalformedTagError) as exc_info:
            field_tag(value)
        assert exc_info.value.path == ["value"]
        assert str(exc_info.value).startswith("field value: ")
