# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer, parser, and tree builder for SDL documents."""

from sdlang.parser.interpreter import build_tags, parse, parse_attributes, parse_values
from sdlang.parser.lexer import Token, TokenType, iter_tokens, tokenize
from sdlang.parser.parser import parse_tree

__all__ = [
    "Token",
    "TokenType",
    "build_tags",
    "iter_tokens",
    "parse",
    "parse_attributes",
    "parse_tree",
    "parse_values",
    "tokenize",
]
