# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error types raised while reading, building, and validating SDL documents."""

# ###############
# Public Interface
# ###############


class SDLError(Exception):
    """Base exception for all sdlang errors."""


class SDLParseError(SDLError):
    """Raised when a document cannot be turned into a tag tree.

    Every parse-time error carries the 1-based position of the offending
    character or token. No partial tree is ever returned alongside it.

    Attributes:
        message: Human-readable description without the position prefix.
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.message = message
        self.line = line
        self.column = column


class LexError(SDLParseError):
    """Raised on an illegal character or an unterminated literal.

    Attributes:
        character: The offending character ('' at end of input).
    """

    def __init__(self, message: str, line: int, column: int, character: str = "") -> None:
        super().__init__(message, line, column)
        self.character = character


class SDLSyntaxError(SDLParseError):
    """Raised when the token stream violates the grammar.

    Attributes:
        expected: Description of what the parser expected at this position.
    """

    def __init__(self, message: str, line: int, column: int, expected: str = "") -> None:
        super().__init__(message, line, column)
        self.expected = expected


class SemanticError(SDLParseError):
    """Raised when a lexically valid literal cannot be resolved to a value."""


class IllegalIdentifierError(SDLError):
    """Raised when a tag name, namespace, or attribute name is not a legal identifier.

    Attributes:
        identifier: The rejected text.
    """

    def __init__(self, message: str, identifier: str) -> None:
        super().__init__(message)
        self.identifier = identifier
