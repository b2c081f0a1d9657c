# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of tags and values back to SDL text."""

from sdlang.formatter.config import (
    DATE_FORMAT,
    DATE_TIME_FORMAT,
    DEFAULT_CONFIG,
    FormatterConfig,
    FormatterConfigError,
    load_formatter_config,
)
from sdlang.formatter.formatter import format_tag, format_tags, format_value

__all__ = [
    "DATE_FORMAT",
    "DATE_TIME_FORMAT",
    "DEFAULT_CONFIG",
    "FormatterConfig",
    "FormatterConfigError",
    "format_tag",
    "format_tags",
    "format_value",
    "load_formatter_config",
]
