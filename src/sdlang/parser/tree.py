# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parse tree produced by the SDL parser.

The tree mirrors the grammar. Literal tokens are carried unresolved; turning
them into typed values is the job of the tree builder in
``sdlang.parser.interpreter``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sdlang.parser.lexer import Token

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class NsNameNode:
    """An optionally namespaced name, as in ``name`` or ``ns:name``."""

    namespace: str
    name: str
    line: int
    column: int


@dataclass(frozen=True)
class LiteralNode:
    """A single literal token in value position."""

    token: Token

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column


@dataclass(frozen=True)
class ListNode:
    """A parenthesized list of values: ``( v1 v2 ... )``."""

    items: list[ValueNode]
    line: int
    column: int


@dataclass(frozen=True)
class MapNode:
    """A parenthesized map of key/value pairs: ``( k1: v1 k2: v2 ... )``."""

    entries: list[tuple[ValueNode, ValueNode]]
    line: int
    column: int


ValueNode = LiteralNode | ListNode | MapNode


@dataclass(frozen=True)
class AttributeNode:
    """A ``name=value`` or ``ns:name=value`` pair."""

    ns_name: NsNameNode
    value: ValueNode


@dataclass(frozen=True)
class TagNode:
    """One tag line: optional name, values, attributes, and an optional child block.

    ``ns_name`` is None for an anonymous tag. ``children`` is None when the tag
    has no ``{ ... }`` block, and an empty list for an empty block.
    """

    ns_name: NsNameNode | None
    values: list[ValueNode] = field(default_factory=list)
    attributes: list[AttributeNode] = field(default_factory=list)
    children: list[TagNode] | None = None
    comment: str | None = None
    line: int = 1
    column: int = 1


@dataclass(frozen=True)
class TagListNode:
    """The top-level sequence of tags in a document."""

    tags: list[TagNode] = field(default_factory=list)
