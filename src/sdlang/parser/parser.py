# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for SDL documents.

Converts a token stream produced by the lexer into a parse tree.
"""

from sdlang.errors import SDLSyntaxError
from sdlang.parser.lexer import LITERAL_TOKEN_TYPES, Token, TokenType, tokenize
from sdlang.parser.tree import (
    AttributeNode,
    ListNode,
    LiteralNode,
    MapNode,
    NsNameNode,
    TagListNode,
    TagNode,
    ValueNode,
)

# ###############
# Public Interface
# ###############


def parse_tree(source: str) -> TagListNode:
    """Parse SDL source text into a parse tree.

    Args:
        source: The full text of an SDL document.

    Returns:
        The top-level tag list.

    Raises:
        LexError: If the source contains invalid characters or unterminated literals.
        SDLSyntaxError: If the token stream violates the grammar.
    """
    return _Parser(tokenize(source)).parse()


def parse_value_fragment(source: str) -> list[ValueNode]:
    """Parse a single line holding only values, e.g. ``1 "two" 3.0``."""
    return _Parser(tokenize(source)).parse_values_only()


def parse_attribute_fragment(source: str) -> list[AttributeNode]:
    """Parse a single line holding only attributes, e.g. ``a=1 ns:b="x"``."""
    return _Parser(tokenize(source)).parse_attributes_only()


# ################
# Implementation
# ################

# Tokens whose text can serve as an attribute name or namespace.
_NAME_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.TRUE,
        TokenType.FALSE,
        TokenType.NULL,
    }
)

_TAG_TERMINATORS: frozenset[TokenType] = frozenset(
    {
        TokenType.NEWLINE,
        TokenType.SEMICOLON,
        TokenType.RBRACE,
        TokenType.EOF,
    }
)


def _describe(tok: Token) -> str:
    if tok.type == TokenType.EOF:
        return "end of input"
    if tok.type == TokenType.NEWLINE:
        return "newline"
    return repr(tok.value)


class _Parser:
    """Recursive-descent parser for SDL token streams."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> TagListNode:
        """Parse the full token stream and return the top-level tag list."""
        tags = self._parse_tag_list()
        self._expect(TokenType.EOF)
        return TagListNode(tags=tags)

    def parse_values_only(self) -> list[ValueNode]:
        """Parse a token stream that must consist of values and nothing else."""
        self._skip_newlines()
        values: list[ValueNode] = []
        while self._at_value():
            values.append(self._parse_value())
        self._skip_newlines()
        self._expect(TokenType.EOF)
        return values

    def parse_attributes_only(self) -> list[AttributeNode]:
        """Parse a token stream that must consist of attributes and nothing else."""
        self._skip_newlines()
        attributes: list[AttributeNode] = []
        while self._at_attribute():
            attributes.append(self._parse_attribute())
        self._skip_newlines()
        self._expect(TokenType.EOF)
        return attributes

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current (un-consumed) token."""
        return self._tokens[self._pos]

    def _peek(self, offset: int) -> Token:
        """Return the token *offset* positions ahead, clamped to EOF."""
        return self._tokens[min(self._pos + offset, len(self._tokens) - 1)]

    def _peek_type(self) -> TokenType:
        """Return the token type of the current token."""
        return self._tokens[self._pos].type

    def _at_end(self) -> bool:
        """Return True if the current token is the EOF token."""
        return self._peek_type() == TokenType.EOF

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _expect(self, *types: TokenType) -> Token:
        """Consume the current token if it matches any of the given types.

        Raises SDLSyntaxError if the current token does not match.
        """
        tok = self._current()
        if tok.type not in types:
            expected = ", ".join("end of input" if t == TokenType.EOF else repr(t.value) for t in types)
            raise SDLSyntaxError(
                f"Expected {expected}, got {_describe(tok)}",
                tok.line,
                tok.column,
                expected=expected,
            )
        return self._advance()

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types (without
        consuming).
        """
        return self._peek_type() in types

    def _skip_newlines(self) -> None:
        while self._check(TokenType.NEWLINE, TokenType.COMMENT):
            self._advance()

    # ------------------------------------------------------------------
    # Lookahead predicates
    # ------------------------------------------------------------------

    def _at_attribute(self) -> bool:
        """Return True if the upcoming tokens read ``name=`` or ``ns:name=``."""
        if self._current().type not in _NAME_TYPES:
            return False
        if self._peek(1).type == TokenType.EQUALS:
            return True
        return (
            self._peek(1).type == TokenType.COLON
            and self._peek(2).type in _NAME_TYPES
            and self._peek(3).type == TokenType.EQUALS
        )

    def _at_value(self) -> bool:
        return self._peek_type() in LITERAL_TOKEN_TYPES or self._check(TokenType.LPAREN)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def _parse_tag_list(self) -> list[TagNode]:
        """Parse tags separated by newlines or semicolons, up to EOF or '}'."""
        tags: list[TagNode] = []
        comment: Token | None = None
        while True:
            tok = self._current()
            if tok.type in (TokenType.NEWLINE, TokenType.SEMICOLON):
                self._advance()
                continue
            if tok.type == TokenType.COMMENT:
                comment = self._advance()
                continue
            if tok.type in (TokenType.EOF, TokenType.RBRACE):
                return tags
            # Only a comment on the line directly above a tag belongs to it.
            text = comment.value if comment is not None and comment.line == tok.line - 1 else None
            comment = None
            tags.append(self._parse_tag(text))
            end = self._current()
            if end.type not in _TAG_TERMINATORS:
                raise SDLSyntaxError(
                    f"Expected end of tag, got {_describe(end)}",
                    end.line,
                    end.column,
                    expected="newline, ';' or '}'",
                )

    def _parse_tag(self, comment: str | None) -> TagNode:
        """Parse: [ns_name] value* attribute* ['{' tag_list '}']"""
        start = self._current()
        ns_name: NsNameNode | None = None
        if start.type == TokenType.IDENTIFIER and not self._at_attribute():
            ns_name = self._parse_tag_name()

        values: list[ValueNode] = []
        while self._at_value() and not self._at_attribute():
            values.append(self._parse_value())

        attributes: list[AttributeNode] = []
        while self._at_attribute():
            attributes.append(self._parse_attribute())

        if self._at_value():
            tok = self._current()
            raise SDLSyntaxError(
                f"Values must come before attributes, got value {_describe(tok)} after an attribute",
                tok.line,
                tok.column,
                expected="attribute, '{' or end of tag",
            )

        children: list[TagNode] | None = None
        if self._check(TokenType.LBRACE):
            self._advance()
            children = self._parse_tag_list()
            self._expect(TokenType.RBRACE)

        if ns_name is None and not values:
            if not attributes and children is None:
                raise SDLSyntaxError(
                    f"Unexpected token {_describe(start)}",
                    start.line,
                    start.column,
                    expected="tag name or value",
                )
            raise SDLSyntaxError(
                "Anonymous tag must have at least one value",
                start.line,
                start.column,
                expected="value",
            )

        return TagNode(
            ns_name=ns_name,
            values=values,
            attributes=attributes,
            children=children,
            comment=comment,
            line=start.line,
            column=start.column,
        )

    def _parse_tag_name(self) -> NsNameNode:
        """Parse: IDENTIFIER [':' IDENTIFIER]"""
        first = self._expect(TokenType.IDENTIFIER)
        if not self._check(TokenType.COLON):
            return NsNameNode(namespace="", name=first.value, line=first.line, column=first.column)
        self._advance()  # consume ':'
        second = self._expect(TokenType.IDENTIFIER)
        return NsNameNode(namespace=first.value, name=second.value, line=first.line, column=first.column)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def _parse_attribute(self) -> AttributeNode:
        """Parse: name '=' value | ns ':' name '=' value"""
        first = self._expect(*_NAME_TYPES)
        namespace = ""
        name = first.value
        if self._check(TokenType.COLON):
            self._advance()  # consume ':'
            namespace = name
            name = self._expect(*_NAME_TYPES).value
        self._expect(TokenType.EQUALS)
        if not self._at_value():
            tok = self._current()
            raise SDLSyntaxError(
                f"Expected attribute value, got {_describe(tok)}",
                tok.line,
                tok.column,
                expected="value",
            )
        value = self._parse_value()
        return AttributeNode(
            ns_name=NsNameNode(namespace=namespace, name=name, line=first.line, column=first.column),
            value=value,
        )

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _parse_value(self) -> ValueNode:
        """Parse a literal, list, or map."""
        if self._check(TokenType.LPAREN):
            return self._parse_collection()
        return LiteralNode(token=self._advance())

    def _parse_collection(self) -> ValueNode:
        """Parse: '(' value* ')' | '(' value ':' value (value ':' value)* ')'"""
        open_tok = self._expect(TokenType.LPAREN)
        self._skip_newlines()
        if self._check(TokenType.RPAREN):
            self._advance()
            return ListNode(items=[], line=open_tok.line, column=open_tok.column)

        first = self._parse_collection_item()
        self._skip_newlines()
        if not self._check(TokenType.COLON):
            items = [first]
            while not self._check(TokenType.RPAREN):
                items.append(self._parse_collection_item())
                self._skip_newlines()
            self._advance()  # consume ')'
            return ListNode(items=items, line=open_tok.line, column=open_tok.column)

        entries: list[tuple[ValueNode, ValueNode]] = []
        key = first
        while True:
            self._expect(TokenType.COLON)
            self._skip_newlines()
            entries.append((key, self._parse_collection_item()))
            self._skip_newlines()
            if self._check(TokenType.RPAREN):
                self._advance()  # consume ')'
                return MapNode(entries=entries, line=open_tok.line, column=open_tok.column)
            key = self._parse_collection_item()
            self._skip_newlines()

    def _parse_collection_item(self) -> ValueNode:
        if not self._at_value():
            tok = self._current()
            raise SDLSyntaxError(
                f"Expected value or ')', got {_describe(tok)}",
                tok.line,
                tok.column,
                expected="value or ')'",
            )
        return self._parse_value()
