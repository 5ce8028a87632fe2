"""Unit tests for whitespace and Turtle line parsers."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import ConfigError, MalformedRecordError, TripleParseError
from core.types import SourceLine, Triple
from transforms.triple_parsing import (
    parse_turtle_line,
    parse_whitespace_line,
    select_line_parser,
)


def _line(text: str) -> SourceLine:
    return SourceLine(source_uri="input.txt", line_number=7, text=text)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("alice knows bob", Triple("alice", "knows", "bob")),
        ("ex:s ex:p ex:o", Triple("ex:s", "ex:p", "ex:o")),
        ("a b c extra tokens", Triple("a", "b", "c")),
    ],
)
def test_parse_whitespace_line_maps_first_three_fields(text: str, expected: Triple) -> None:
    """Whitespace lines should yield exactly one triple from the first three fields."""
    assert parse_whitespace_line(_line(text)) == [expected]


def test_parse_whitespace_line_splits_on_single_spaces() -> None:
    """Consecutive spaces delimit an empty field."""
    assert parse_whitespace_line(_line("a  b")) == [Triple("a", "", "b")]


@pytest.mark.parametrize("text", ["", "   ", "# a comment"])
def test_parse_whitespace_line_skips_blank_and_comment_lines(text: str) -> None:
    """Blank and comment lines should yield no triples."""
    assert parse_whitespace_line(_line(text)) == []


def test_parse_whitespace_line_rejects_short_records() -> None:
    """Fewer than three fields should raise with the offending location."""
    with pytest.raises(MalformedRecordError) as error_info:
        parse_whitespace_line(_line("alice knows"))

    assert error_info.value.line_number == 7 and error_info.value.line == "alice knows"


def test_parse_turtle_line_strips_iri_brackets() -> None:
    """A bracketed statement should decode to bare IRI text."""
    assert parse_turtle_line(_line("<ex:a> <ex:b> <ex:c> .")) == [Triple("ex:a", "ex:b", "ex:c")]


def test_parse_turtle_line_keeps_relative_iris_as_written(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Relative IRIs should not pick up the working directory."""
    monkeypatch.chdir(tmp_path)

    triples = parse_turtle_line(_line("<a> <b> <#c> ."))

    assert triples == [Triple("a", "b", "#c")]


def test_parse_turtle_line_strips_literal_quotes() -> None:
    """Literal objects should be rendered by lexical form."""
    triples = parse_turtle_line(
        _line('<http://example.org/bob> <http://xmlns.com/foaf/0.1/name> "Bob"@en .')
    )

    assert triples == [
        Triple("http://example.org/bob", "http://xmlns.com/foaf/0.1/name", "Bob")
    ]


def test_parse_turtle_line_keeps_production_order() -> None:
    """Object and predicate lists should expand in statement order."""
    triples = parse_turtle_line(
        _line("<ex:s> <ex:p> <ex:o2>, <ex:o1> ; <ex:q> <ex:o0> .")
    )

    assert triples == [
        Triple("ex:s", "ex:p", "ex:o2"),
        Triple("ex:s", "ex:p", "ex:o1"),
        Triple("ex:s", "ex:q", "ex:o0"),
    ]


def test_parse_turtle_line_expands_prefixes_within_the_line() -> None:
    """A prefix declared on the same line should be expanded."""
    triples = parse_turtle_line(
        _line("@prefix ex: <http://example.org/> . ex:alice ex:knows ex:bob .")
    )

    assert triples == [
        Triple("http://example.org/alice", "http://example.org/knows", "http://example.org/bob")
    ]


@pytest.mark.parametrize("text", ["", "# comment", "@prefix ex: <http://example.org/> ."])
def test_parse_turtle_line_yields_nothing_for_statement_free_lines(text: str) -> None:
    """Blank, comment and prefix-only lines should yield no triples."""
    assert parse_turtle_line(_line(text)) == []


def test_parse_turtle_line_raises_with_offending_input() -> None:
    """Invalid Turtle should raise a parse error naming the line."""
    with pytest.raises(TripleParseError) as error_info:
        parse_turtle_line(_line("this is not turtle"))

    assert "input.txt:7" in str(error_info.value)
    assert not isinstance(error_info.value, MalformedRecordError)


def test_select_line_parser_resolves_modes() -> None:
    """Supported modes should map to their parser functions."""
    assert select_line_parser("turtle") is parse_turtle_line
    assert select_line_parser("whitespace") is parse_whitespace_line


def test_select_line_parser_rejects_unknown_mode() -> None:
    """Unsupported modes should raise a config error."""
    with pytest.raises(ConfigError):
        select_line_parser("ntriples")
