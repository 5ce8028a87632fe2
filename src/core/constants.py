"""Core constants used across triplestream modules.

This module centralizes defaults and supported option values.
Keeping values here avoids magic literals in pipeline logic.
"""

from __future__ import annotations

DEFAULT_CHANNEL_CAPACITY = 16
DEFAULT_LOG_LEVEL = "info"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
SOURCE_ENCODING = "utf-8"
TURTLE_DECODE_MODE = "turtle"
TURTLE_BASE_IRI = "http://triplestream.invalid/base/"
WHITESPACE_DECODE_MODE = "whitespace"
DEFAULT_DECODE_MODE = TURTLE_DECODE_MODE
SUPPORTED_DECODE_MODES = (TURTLE_DECODE_MODE, WHITESPACE_DECODE_MODE)
FAIL_MALFORMED_POLICY = "fail"
SKIP_MALFORMED_POLICY = "skip"
DEFAULT_MALFORMED_POLICY = FAIL_MALFORMED_POLICY
SUPPORTED_MALFORMED_POLICIES = (FAIL_MALFORMED_POLICY, SKIP_MALFORMED_POLICY)
WHITESPACE_FIELD_SEPARATOR = " "
WHITESPACE_FIELD_COUNT = 3
COMMENT_PREFIX = "#"
RUN_FILE_VERSION = 1
FEEDER_STAGE_NAME = "feeder"
LINE_SOURCE_STAGE_NAME = "line_source"
TRIPLE_DECODER_STAGE_NAME = "triple_decoder"
TRIPLE_SINK_STAGE_NAME = "triple_sink"
