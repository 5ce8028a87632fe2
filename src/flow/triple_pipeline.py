"""Wiring for the line-to-triple pipeline.

This module connects Feeder, LineSource, TripleDecoder and TripleSink
with bounded channels and registers them on one runner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TextIO

from core.config import TripleStreamConfig
from core.logging_config import get_logger
from core.types import PipelineOptions, PipelineReport, SourceLine, Triple
from flow.channel import Channel
from flow.runner import PipelineRunner
from ingest.feeder import Feeder
from ingest.line_source import LineSource
from sinks.triple_sink import TripleSink
from transforms.triple_decoder import TripleDecoder
from transforms.triple_parsing import select_line_parser


@dataclass(frozen=True)
class TriplePipeline:
    """Wired stages and the runner that owns them."""

    runner: PipelineRunner
    feeder: Feeder
    line_source: LineSource
    triple_decoder: TripleDecoder
    triple_sink: TripleSink


def build_triple_pipeline(
    options: PipelineOptions,
    config: TripleStreamConfig,
    output: TextIO | None = None,
    logger: Any | None = None,
) -> TriplePipeline:
    """Create channels and stages for one input resource.

    Args:
        options: Input resource and decoding options.
        config: Runtime configuration providing channel capacity.
        output: Stream receiving rendered triples, stdout when omitted.
        logger: Logger shared by the runner and every stage.

    Returns:
        Wired pipeline ready to run.

    Raises:
        ConfigError: If decode mode or malformed policy is unsupported.
    """
    pipeline_logger = logger if logger is not None else get_logger(__name__, config.log_level)
    source_uris: Channel[str] = Channel("source_uris", config.channel_capacity)
    lines: Channel[SourceLine] = Channel("lines", config.channel_capacity)
    triples: Channel[Triple] = Channel("triples", config.channel_capacity)
    feeder = Feeder((options.source_uri,), source_uris, logger=pipeline_logger)
    line_source = LineSource(source_uris, lines, logger=pipeline_logger)
    triple_decoder = TripleDecoder(
        lines,
        triples,
        parser=select_line_parser(options.decode_mode),
        malformed_policy=options.malformed_policy,
        logger=pipeline_logger,
    )
    triple_sink = TripleSink(triples, output=output, logger=pipeline_logger)
    runner = PipelineRunner(logger=pipeline_logger)
    for stage in (feeder, line_source, triple_decoder, triple_sink):
        runner.add_stage(stage)
    return TriplePipeline(
        runner=runner,
        feeder=feeder,
        line_source=line_source,
        triple_decoder=triple_decoder,
        triple_sink=triple_sink,
    )


def run_triple_pipeline(
    options: PipelineOptions,
    config: TripleStreamConfig,
    output: TextIO | None = None,
    logger: Any | None = None,
) -> PipelineReport:
    """Run the pipeline for one input resource and wait for completion.

    Returns:
        Stage outcomes in wiring order.

    Raises:
        ConfigError: If options are invalid.
        PipelineRunError: If any stage failed.
    """
    pipeline = build_triple_pipeline(options, config, output=output, logger=logger)
    return pipeline.runner.run()
