"""Line parsers that turn one input line into RDF triples.

Two notations are supported. The whitespace form reads three
space-separated fields per line. The Turtle form hands each line to
rdflib as an independent document, so one line may yield several
statements.
"""

from __future__ import annotations

from typing import Callable

from rdflib import Graph
from rdflib.term import Node, URIRef

from core.constants import (
    COMMENT_PREFIX,
    SUPPORTED_DECODE_MODES,
    TURTLE_BASE_IRI,
    TURTLE_DECODE_MODE,
    WHITESPACE_DECODE_MODE,
    WHITESPACE_FIELD_COUNT,
    WHITESPACE_FIELD_SEPARATOR,
)
from core.errors import ConfigError, MalformedRecordError, TripleParseError
from core.types import SourceLine, Triple

LineParser = Callable[[SourceLine], list[Triple]]


class _StatementRecordingGraph(Graph):
    """Graph that also keeps added statements in parser production order."""

    def __init__(self) -> None:
        super().__init__()
        self.statements: list[tuple[Node, Node, Node]] = []

    def add(self, triple):  # type: ignore[no-untyped-def, override]
        self.statements.append(triple)
        return super().add(triple)


def parse_whitespace_line(line: SourceLine) -> list[Triple]:
    """Parse a ``subject predicate object`` line split on single spaces.

    Tokens beyond the third are ignored. Blank and ``#`` comment lines
    yield no triples.

    Raises:
        MalformedRecordError: If the line has fewer than three fields.
    """
    if _is_blank_or_comment(line.text):
        return []
    fields = line.text.split(WHITESPACE_FIELD_SEPARATOR)
    if len(fields) < WHITESPACE_FIELD_COUNT:
        raise MalformedRecordError(
            f"expected {WHITESPACE_FIELD_COUNT} space-separated fields, got {len(fields)}",
            line.source_uri,
            line.line_number,
            line.text,
        )
    return [Triple(subject=fields[0], predicate=fields[1], object=fields[2])]


def parse_turtle_line(line: SourceLine) -> list[Triple]:
    """Parse one line as a standalone Turtle document.

    IRIs are rendered without angle brackets and literals without quotes.
    Relative IRIs are printed as written, independent of the working
    directory. Blank and ``#`` comment lines yield no triples. Prefix declarations
    apply to their own line only.

    Raises:
        TripleParseError: If rdflib rejects the line.
    """
    if _is_blank_or_comment(line.text):
        return []
    graph = _StatementRecordingGraph()
    try:
        graph.parse(data=line.text, format="turtle", publicID=TURTLE_BASE_IRI)
    except Exception as error:
        raise TripleParseError(
            f"invalid Turtle statement ({_first_error_line(error)})",
            line.source_uri,
            line.line_number,
            line.text,
        ) from error
    return [
        Triple(
            subject=_render_term(subject),
            predicate=_render_term(predicate),
            object=_render_term(obj),
        )
        for subject, predicate, obj in graph.statements
    ]


def _render_term(term: Node) -> str:
    # Relative IRIs resolve against the fixed base; print them relative again.
    text = str(term)
    if isinstance(term, URIRef) and text.startswith(TURTLE_BASE_IRI):
        return text[len(TURTLE_BASE_IRI) :]
    return text


def select_line_parser(decode_mode: str) -> LineParser:
    """Return the line parser for a decode mode.

    Raises:
        ConfigError: If the mode is not supported.
    """
    if decode_mode == TURTLE_DECODE_MODE:
        return parse_turtle_line
    if decode_mode == WHITESPACE_DECODE_MODE:
        return parse_whitespace_line
    raise ConfigError(
        f"Unsupported decode mode '{decode_mode}'. "
        f"Use one of: {', '.join(SUPPORTED_DECODE_MODES)}."
    )


def _is_blank_or_comment(text: str) -> bool:
    stripped_text = text.strip()
    return not stripped_text or stripped_text.startswith(COMMENT_PREFIX)


def _first_error_line(error: Exception) -> str:
    message = str(error).strip()
    return message.splitlines()[0] if message else type(error).__name__
