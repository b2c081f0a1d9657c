# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Formatter settings and the YAML loader for them."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from sdlang.errors import SDLError

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

# Date patterns used by the formatter, in date-pattern notation.
DATE_FORMAT = "y/M/d"
DATE_TIME_FORMAT = "y/M/d H:m:s.SSS"


class FormatterConfigError(SDLError):
    """Raised when a formatter configuration file is invalid or cannot be loaded."""


class FormatterConfig(BaseModel):
    """Settings that affect layout only, never the values written.

    Attributes:
        indent: Whitespace emitted once per nesting level in pretty-print mode.
        sort_attributes: Write attributes sorted by (namespace, name) instead of
            insertion order.
        comment_prefix: Line-comment marker used for tag comments in
            pretty-print mode.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    indent: str = "\t"
    sort_attributes: bool = False
    comment_prefix: Literal["//", "#"] = "//"

    @field_validator("indent")
    @classmethod
    def _check_indent(cls, v: str) -> str:
        if v.strip(" \t"):
            raise ValueError("indent may only contain spaces and tabs")
        return v


DEFAULT_CONFIG = FormatterConfig()


def load_formatter_config(path: Path) -> FormatterConfig:
    """Load formatter settings from a YAML file.

    Recognized keys are ``indent``, ``sort-attributes``, and ``comment-prefix``;
    all are optional.

    Args:
        path: Path to the YAML file.

    Returns:
        A FormatterConfig populated from the file.

    Raises:
        FormatterConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FormatterConfigError(f"Formatter config file not found: {path}") from None
    except OSError as exc:
        raise FormatterConfigError(f"Cannot read formatter config file: {exc}") from exc

    config = _parse_formatter_config(text, source_label=str(path))
    logger.debug(f"Loaded formatter config from {path}: {config!r}")
    return config


# ################
# Implementation
# ################

_KEYS: dict[str, str] = {
    "indent": "indent",
    "sort-attributes": "sort_attributes",
    "comment-prefix": "comment_prefix",
}


def _parse_formatter_config(text: str, source_label: str = "<string>") -> FormatterConfig:
    """Parse formatter config YAML text into a FormatterConfig.

    An empty document yields the defaults.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise FormatterConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise FormatterConfigError(f"{source_label}: formatter config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KEYS)
    if unknown:
        raise FormatterConfigError(f"{source_label}: unknown key(s): {', '.join(unknown)}")

    fields: dict[str, object] = {}
    if "indent" in data:
        fields["indent"] = _require_type(data, "indent", str, source_label)
    if "sort-attributes" in data:
        fields["sort_attributes"] = _require_type(data, "sort-attributes", bool, source_label)
    if "comment-prefix" in data:
        fields["comment_prefix"] = _require_type(data, "comment-prefix", str, source_label)

    try:
        return FormatterConfig(**fields)
    except ValidationError as exc:
        problems = "; ".join(f"'{_yaml_key(err['loc'])}': {err['msg']}" for err in exc.errors())
        raise FormatterConfigError(f"{source_label}: {problems}") from exc


def _require_type(mapping: dict[str, object], key: str, expected: type, source_label: str) -> object:
    """Extract a field of the expected type, raising FormatterConfigError otherwise."""
    value = mapping[key]
    if not isinstance(value, expected):
        raise FormatterConfigError(f"{source_label}: '{key}' must be a {expected.__name__}")
    return value


def _yaml_key(loc: tuple[int | str, ...]) -> str:
    field_name = str(loc[0]) if loc else ""
    return next((key for key, name in _KEYS.items() if name == field_name), field_name)
