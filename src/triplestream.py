"""Public SDK surface for triplestream.

This module provides a stable import path for library users.
It re-exports the pipeline building blocks and typed models.
"""

from __future__ import annotations

from core.config import TripleStreamConfig
from core.logging_config import get_logger
from core.types import PipelineOptions, PipelineReport, SourceLine, StageOutcome, Triple
from flow.channel import Channel
from flow.runner import PipelineRunner, Stage
from flow.triple_pipeline import TriplePipeline, build_triple_pipeline, run_triple_pipeline
from ingest.feeder import Feeder
from ingest.line_source import LineSource
from sinks.triple_sink import TripleSink, render_triple
from transforms.triple_decoder import TripleDecoder
from transforms.triple_parsing import parse_turtle_line, parse_whitespace_line, select_line_parser

__all__ = [
    "Channel",
    "Feeder",
    "LineSource",
    "PipelineOptions",
    "PipelineReport",
    "PipelineRunner",
    "SourceLine",
    "Stage",
    "StageOutcome",
    "Triple",
    "TripleDecoder",
    "TriplePipeline",
    "TripleSink",
    "TripleStreamConfig",
    "build_triple_pipeline",
    "get_logger",
    "parse_turtle_line",
    "parse_whitespace_line",
    "render_triple",
    "run_triple_pipeline",
    "select_line_parser",
]
