"""Typed YAML run-file parsing.

This module loads and validates declarative run files used by the CLI.
A run file names the input resource and optional pipeline settings so a
run can be repeated without retyping flags.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.constants import (
    RUN_FILE_VERSION,
    SUPPORTED_DECODE_MODES,
    SUPPORTED_MALFORMED_POLICIES,
)
from core.errors import RunFileError

_ALLOWED_KEYS = {"version", "infile", "mode", "on_malformed", "buffer_size"}


@dataclass(frozen=True)
class RunFile:
    """Validated run-file settings; ``None`` means not set."""

    version: int
    infile: str | None = None
    mode: str | None = None
    on_malformed: str | None = None
    buffer_size: int | None = None


def load_run_file(run_file_path: str) -> RunFile:
    """Load and validate a YAML run file from disk.

    Args:
        run_file_path: File path to the YAML run file.

    Returns:
        Fully validated run-file object.

    Raises:
        RunFileError: If the file is missing, unreadable, or schema checks fail.
    """
    payload = _load_yaml_payload(run_file_path)
    root_mapping = _expect_mapping(payload)
    _validate_root_keys(root_mapping)
    return RunFile(
        version=_parse_version(root_mapping),
        infile=_optional_string(root_mapping, "infile"),
        mode=_optional_choice(root_mapping, "mode", SUPPORTED_DECODE_MODES),
        on_malformed=_optional_choice(root_mapping, "on_malformed", SUPPORTED_MALFORMED_POLICIES),
        buffer_size=_optional_buffer_size(root_mapping),
    )


def _load_yaml_payload(run_file_path: str) -> object:
    run_file = Path(run_file_path).expanduser().resolve()
    if not run_file.exists():
        raise RunFileError(
            f"Run file does not exist at {run_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(run_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise RunFileError(
            f"Failed to read run file at {run_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise RunFileError(
            f"Failed to parse YAML run file at {run_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise RunFileError(f"Run file at {run_file} is empty. Define at least 'version'.")
    return payload


def _expect_mapping(value: object) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise RunFileError(
            f"Invalid run file root: expected object mapping, got {type(value).__name__}."
        )
    normalized_mapping = {}
    for key, payload in value.items():
        if not isinstance(key, str):
            raise RunFileError(
                f"Invalid run file root: expected string keys, got {type(key).__name__}."
            )
        normalized_mapping[key] = payload
    return normalized_mapping


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    # bool is an int subclass; reject `version: true`.
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise RunFileError(
            f"Run file field 'version' must be an integer. Set version: {RUN_FILE_VERSION}."
        )
    if raw_version != RUN_FILE_VERSION:
        raise RunFileError(
            f"Unsupported run file version {raw_version}. Use version: {RUN_FILE_VERSION}."
        )
    return raw_version


def _optional_string(mapping: Mapping[str, object], field_name: str) -> str | None:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return None
    if isinstance(raw_value, str):
        normalized_value = raw_value.strip()
        return normalized_value if normalized_value else None
    raise RunFileError(f"Run file field '{field_name}' must be a string when provided.")


def _optional_choice(
    mapping: Mapping[str, object],
    field_name: str,
    choices: tuple[str, ...],
) -> str | None:
    value = _optional_string(mapping, field_name)
    if value is None or value in choices:
        return value
    raise RunFileError(
        f"Unsupported value '{value}' for run file field '{field_name}'. "
        f"Use one of: {', '.join(choices)}."
    )


def _optional_buffer_size(mapping: Mapping[str, object]) -> int | None:
    raw_value = mapping.get("buffer_size")
    if raw_value is None:
        return None
    if not isinstance(raw_value, int) or isinstance(raw_value, bool) or raw_value < 1:
        raise RunFileError("Run file field 'buffer_size' must be a positive integer.")
    return raw_value


def _validate_root_keys(root_mapping: Mapping[str, object]) -> None:
    unknown_keys = sorted(set(root_mapping) - _ALLOWED_KEYS)
    if unknown_keys:
        raise RunFileError(f"Run file contains unknown fields: {', '.join(unknown_keys)}.")
