"""Tests for front matter splitting and field validation."""

from datetime import datetime, timezone

import pytest

from postmatter.errors import MalformedField, MissingMetadataBlock, MissingRequiredField
from postmatter.frontmatter import (
    DateField,
    DraftField,
    FrontmatterValidator,
    TitleField,
    load_metadata,
    parse_timestamp,
    split,
)
from postmatter.parser import parse, serialize
from postmatter.protocols import FieldParser


def test_split_returns_source_body_and_lines():
    block = split("---\ntitle: x\ndate: y\n---\n# Body\n")
    assert block.source == "title: x\ndate: y\n"
    assert block.body == "# Body\n"
    assert block.start_line == 1
    assert block.end_line == 4
    assert block.file_line(0) == 2


def test_split_stops_at_first_closing_delimiter():
    block = split("---\na: 1\n---\nbody\n---\nmore\n")
    assert block.source == "a: 1\n"
    assert block.body == "body\n---\nmore\n"


def test_split_empty_body():
    block = split("---\na: 1\n---")
    assert block.body == ""


def test_load_metadata_records_key_lines():
    block = split("---\ntitle: x\n\n# comment\ndate: 2023-02-01T16:00:00Z\nfoo: bar\n---\n")
    data, lines = load_metadata(block)
    assert data["title"] == "x"
    assert lines == {"title": 2, "date": 5, "foo": 6}


def test_load_metadata_empty_block():
    data, lines = load_metadata(split("---\n\n---\n"))
    assert data == {}
    assert lines == {}


def test_parse_timestamp():
    assert parse_timestamp("2023-02-01T16:00:00Z") == datetime(
        2023, 2, 1, 16, 0, tzinfo=timezone.utc
    )
    assert parse_timestamp(" 2023-02-01T16:00:00+00:00 ").tzinfo is not None
    assert parse_timestamp("2023-02-01T16:00:00").tzinfo is None
    with pytest.raises(ValueError):
        parse_timestamp("yesterday")


def test_field_parsers_follow_protocol():
    for field_parser in (TitleField(), DateField(), DraftField()):
        assert isinstance(field_parser, FieldParser)


def test_field_formatting():
    assert TitleField().format('A "quoted" title') == '"A \\"quoted\\" title"'
    assert DraftField().format(True) == "true"
    assert DraftField().format(False) == "false"
    stamp = datetime(2023, 2, 1, 16, 0, tzinfo=timezone.utc)
    assert DateField().format(stamp) == "2023-02-01T16:00:00+00:00"


def test_validator_splits_known_and_extra():
    validator = FrontmatterValidator()
    stamp = datetime(2023, 2, 1, 16, 0, tzinfo=timezone.utc)
    values, extra = validator.validate({"title": "T", "date": stamp, "foo": 1}, {})
    assert values == {"title": "T", "published_at": stamp, "draft": False}
    assert extra == {"foo": 1}


def test_validator_missing_field_uses_block_line():
    validator = FrontmatterValidator([TitleField()])
    with pytest.raises(MissingRequiredField) as excinfo:
        validator.validate({}, {}, block_line=7)
    assert excinfo.value.line == 7


class SummaryField:
    name = "summary"
    attribute = "summary"
    required = False
    default = None

    def parse(self, value, line):
        if not isinstance(value, str):
            raise MalformedField(self.name, "expected a string", line=line)
        return value.strip()

    def format(self, value):
        return f'"{value}"'


def test_custom_field_is_validated_and_round_trips():
    validator = FrontmatterValidator()
    validator.add_field(SummaryField())
    assert len(validator.fields) == 4

    text = "---\ntitle: T\ndate: 2023-02-01T16:00:00Z\nsummary: '  short  '\nfoo: bar\n---\nbody"
    document = parse(text, validator)
    assert document.extra == {"foo": "bar", "summary": "short"}
    assert parse(serialize(document, validator), validator) == document

    with pytest.raises(MalformedField) as excinfo:
        parse("---\ntitle: T\ndate: 2023-02-01T16:00:00Z\nsummary: 3\n---\n", validator)
    assert excinfo.value.line == 4

    plain = parse("---\ntitle: T\ndate: 2023-02-01T16:00:00Z\n---\n", validator)
    assert plain.extra == {}
    assert "summary" not in serialize(plain, validator)


def test_split_only_breaks_lines_on_newline():
    block = split("---\na: 1\x0b---\n---\nbody")
    assert block.source == "a: 1\x0b---\n"
    assert block.body == "body"
    assert block.end_line == 3

    block = split("---\ntitle: x\u2028---\nrest: 2\n---\nbody\x85---\n")
    assert block.source == "title: x\u2028---\nrest: 2\n"
    assert block.body == "body\x85---\n"

    with pytest.raises(MissingMetadataBlock):
        split("---\x0ctitle: x\n---\n")


def test_title_format_escapes_yaml_line_breaks():
    assert TitleField().format("a\x85b\u2028c\u2029d") == '"a\\u0085b\\u2028c\\u2029d"'
