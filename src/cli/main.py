"""triplestream CLI entry point.

This module parses command-line flags, merges them with an optional
YAML run file and environment config, and runs the triple pipeline.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Sequence

from core.config import TripleStreamConfig, parse_log_level
from core.constants import (
    RUN_FILE_VERSION,
    SUPPORTED_DECODE_MODES,
    SUPPORTED_LOG_LEVELS,
    SUPPORTED_MALFORMED_POLICIES,
    TRIPLE_SINK_STAGE_NAME,
)
from core.errors import ConfigError, PipelineRunError
from core.logging_config import get_logger
from core.run_file import RunFile, load_run_file
from core.types import PipelineOptions
from flow.triple_pipeline import run_triple_pipeline


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="triplestream",
        description="Stream RDF triples from a line-oriented file to stdout",
    )
    parser.add_argument("--infile", help="The input file name")
    parser.add_argument("--config", help="Optional YAML run file with pipeline settings")
    parser.add_argument(
        "--mode",
        choices=SUPPORTED_DECODE_MODES,
        help="Line notation: one Turtle statement or three space-separated fields per line",
    )
    parser.add_argument(
        "--on-malformed",
        choices=SUPPORTED_MALFORMED_POLICIES,
        help="Whitespace mode handling of lines with fewer than three fields",
    )
    parser.add_argument(
        "--buffer-size",
        type=int,
        help="Override TRIPLESTREAM_CHANNEL_CAPACITY for this run",
    )
    parser.add_argument(
        "--log-level",
        choices=SUPPORTED_LOG_LEVELS,
        help="Override TRIPLESTREAM_LOG_LEVEL for this run",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the triplestream CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        run_file = load_run_file(args.config) if args.config else None
        config = _build_config(args, run_file)
    except ConfigError as error:
        parser.error(str(error))
    options = _build_options(args, run_file)
    if options is None:
        parser.error("No filename specified to --infile")
    logger = get_logger("triplestream", config.log_level)
    try:
        report = run_triple_pipeline(options, config, logger=logger)
    except ConfigError as error:
        parser.error(str(error))
    except PipelineRunError as error:
        logger.error("pipeline_failed", source_uri=options.source_uri, error=str(error))
        return 1
    logger.info(
        "run_completed",
        source_uri=options.source_uri,
        triple_count=report.processed_count(TRIPLE_SINK_STAGE_NAME),
    )
    return 0


def _build_config(args: argparse.Namespace, run_file: RunFile | None) -> TripleStreamConfig:
    """Build runtime config with run-file and flag overrides.

    Args:
        args: Parsed CLI args.
        run_file: Optional loaded run file.

    Returns:
        Validated config.

    Raises:
        ConfigError: If environment or override values are invalid.
    """
    config = TripleStreamConfig.from_env()
    if run_file is not None and run_file.buffer_size is not None:
        config = replace(config, channel_capacity=run_file.buffer_size)
    if args.buffer_size is not None:
        if args.buffer_size < 1:
            raise ConfigError(f"--buffer-size must be at least 1, got {args.buffer_size}.")
        config = replace(config, channel_capacity=args.buffer_size)
    if args.log_level is not None:
        config = replace(config, log_level=parse_log_level(args.log_level))
    return config


def _build_options(args: argparse.Namespace, run_file: RunFile | None) -> PipelineOptions | None:
    """Merge flags over run-file values; return None when no input is named."""
    file_values = run_file if run_file is not None else RunFile(version=RUN_FILE_VERSION)
    source_uri = args.infile or file_values.infile
    if not source_uri:
        return None
    options = PipelineOptions(source_uri=source_uri)
    decode_mode = args.mode or file_values.mode
    if decode_mode is not None:
        options = replace(options, decode_mode=decode_mode)
    malformed_policy = args.on_malformed or file_values.on_malformed
    if malformed_policy is not None:
        options = replace(options, malformed_policy=malformed_policy)
    return options
