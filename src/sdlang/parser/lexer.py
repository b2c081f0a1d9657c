# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for SDL documents.

Converts raw source text into a stream of tokens for subsequent parsing.
"""

import enum
import re
from collections.abc import Iterator
from dataclasses import dataclass

from sdlang.errors import LexError
from sdlang.model.identifiers import is_identifier_part, is_identifier_start

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the SDL lexer."""

    # Keywords (``on``/``off`` lex as TRUE/FALSE)
    TRUE = "true"
    FALSE = "false"
    NULL = "null"

    # Symbols
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    COLON = ":"
    EQUALS = "="
    SEMICOLON = ";"

    # Layout
    NEWLINE = "NEWLINE"
    COMMENT = "COMMENT"

    # Literals
    STRING = "STRING"
    RAW_STRING = "RAW_STRING"
    CHARACTER = "CHARACTER"
    INTEGER = "INTEGER"
    LONG = "LONG"
    REAL = "REAL"
    DATE = "DATE"
    DATETIME = "DATETIME"
    DURATION = "DURATION"
    BINARY = "BINARY"
    HEX = "HEX"
    BIN = "BIN"
    URL = "URL"
    VERSION = "VERSION"

    # Identifiers (also naked strings in value position)
    IDENTIFIER = "IDENTIFIER"

    # End of file
    EOF = "EOF"


# Token types that can stand for a value.
LITERAL_TOKEN_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.TRUE,
        TokenType.FALSE,
        TokenType.NULL,
        TokenType.STRING,
        TokenType.RAW_STRING,
        TokenType.CHARACTER,
        TokenType.INTEGER,
        TokenType.LONG,
        TokenType.REAL,
        TokenType.DATE,
        TokenType.DATETIME,
        TokenType.DURATION,
        TokenType.BINARY,
        TokenType.HEX,
        TokenType.BIN,
        TokenType.URL,
        TokenType.VERSION,
        TokenType.IDENTIFIER,
    }
)


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token. For STRING, RAW_STRING and CHARACTER
            tokens this is the decoded content; for BINARY it is the text
            between the brackets; for COMMENT it is the comment text.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


def tokenize(source: str) -> list[Token]:
    """Tokenize SDL source text into a list of tokens.

    The final token is always an EOF token. Whitespace, block comments, and
    trailing line comments are dropped; a line comment standing alone on its
    line is kept as a COMMENT token so the parser can attach it to the tag
    that follows.

    Raises:
        LexError: On unexpected characters, invalid escapes, or unterminated
            literals and block comments.
    """
    return list(iter_tokens(source))


def iter_tokens(source: str) -> Iterator[Token]:
    """Lazily yield the tokens of *source*, ending with EOF."""
    return _Lexer(source).tokens()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "true": TokenType.TRUE,
    "on": TokenType.TRUE,
    "false": TokenType.FALSE,
    "off": TokenType.FALSE,
    "null": TokenType.NULL,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ":": TokenType.COLON,
    "=": TokenType.EQUALS,
    ";": TokenType.SEMICOLON,
}

_STRING_ESCAPES: dict[str, str] = {
    "\\": "\\",
    '"': '"',
    "'": "'",
    "t": "\t",
    "r": "\r",
    "n": "\n",
}

_DATE = r"\d+/\d+/\d+"
_TIME = r"\d+:\d+(?::\d+(?:\.\d+)?)?(?:-[A-Za-z+\-][A-Za-z0-9_/+\-:]*)?"

# Tried in order; the first pattern that matches and ends on a delimiter wins.
_NUMERIC_PATTERNS: tuple[tuple[TokenType, re.Pattern[str]], ...] = (
    (TokenType.DATETIME, re.compile(_DATE + r"[ \t]+" + _TIME)),
    (TokenType.DATE, re.compile(_DATE)),
    (TokenType.DURATION, re.compile(r"-?(?:\d+d:)?\d+:\d+:\d+(?:\.\d+)?")),
    (TokenType.VERSION, re.compile(r"\d+\.\d+\.\d+(?:[.\-][A-Za-z0-9_]+)?")),
    (TokenType.HEX, re.compile(r"[-+]?0[xX][0-9a-fA-F]+")),
    (TokenType.BIN, re.compile(r"[-+]?0[bB][01]+")),
    (TokenType.REAL, re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?(?:BD|bd|[LlFfDdMm])?")),
)

_DELIMITERS = " \t\r\n;{}()=:#\\\"`'["


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        # True once a token has been produced on the current line.
        self._line_has_token = False

    def tokens(self) -> Iterator[Token]:
        """Run the scanner, yielding every token including the terminal EOF."""
        while True:
            self._skip_blanks()
            if self._pos >= len(self._source):
                break
            tok = self._scan_token()
            if tok is None:
                continue
            self._line_has_token = tok.type != TokenType.NEWLINE
            yield tok
        yield Token(TokenType.EOF, "", self._line, self._column)

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character *offset* positions ahead, or '' past end of input."""
        if self._pos + offset < len(self._source):
            return self._source[self._pos + offset]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _advance_by(self, count: int) -> str:
        """Consume *count* characters and return them."""
        return "".join(self._advance() for _ in range(count))

    def _error(self, message: str, line: int | None = None, column: int | None = None) -> LexError:
        return LexError(
            message,
            self._line if line is None else line,
            self._column if column is None else column,
            self._current(),
        )

    # ------------------------------------------------------------------
    # Whitespace, continuation, and comment skipping
    # ------------------------------------------------------------------

    def _skip_blanks(self) -> None:
        """Skip spaces, tabs, carriage returns, block comments, and line continuations."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch in " \t\r":
                self._advance()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            elif ch == "\\":
                self._skip_line_continuation()
            else:
                break

    def _skip_line_continuation(self) -> None:
        """Consume a backslash that joins the current line to the next."""
        line, col = self._line, self._column
        offset = 1
        while self._peek(offset) in (" ", "\t", "\r"):
            offset += 1
        if self._peek(offset) != "\n":
            raise self._error("Unexpected character: '\\'", line, col)
        self._advance_by(offset + 1)

    def _skip_block_comment(self) -> None:
        """Consume from '/*' through the first '*/'. Block comments do not nest."""
        start_line = self._line
        start_col = self._column
        self._advance_by(2)
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance_by(2)
                return
            self._advance()
        raise self._error("Unterminated block comment", start_line, start_col)

    def _scan_line_comment(self, line: int, col: int) -> Token | None:
        """Consume a '//' or '#' comment up to (not including) the newline.

        Returns a COMMENT token only when the comment is alone on its line.
        """
        self._advance_by(2 if self._current() == "/" else 1)
        start = self._pos
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()
        if self._line_has_token:
            return None
        text = self._source[start : self._pos].strip()
        return Token(TokenType.COMMENT, text, line, col)

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> Token | None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column

        if ch == "\n":
            self._advance()
            return Token(TokenType.NEWLINE, "\n", line, col)
        if ch == "#" or (ch == "/" and self._peek() == "/"):
            return self._scan_line_comment(line, col)
        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(_SINGLE_CHAR_TOKENS[ch], ch, line, col)
        if ch == '"':
            if self._peek() == '"' and self._peek(2) == '"':
                return self._scan_triple_quoted(line, col)
            return self._scan_string(line, col)
        if ch == "`":
            return self._scan_backtick(line, col)
        if ch == "'":
            return self._scan_character(line, col)
        if ch == "[":
            return self._scan_binary(line, col)
        if ch.isdigit() or (ch in "-+." and (self._peek().isdigit() or self._peek() == ".")):
            return self._scan_numeric(line, col)
        if is_identifier_start(ch):
            return self._scan_identifier_or_keyword(line, col)
        raise LexError(f"Unexpected character: {ch!r}", line, col, ch)

    # ------------------------------------------------------------------
    # String and character literals
    # ------------------------------------------------------------------

    def _scan_string(self, line: int, col: int) -> Token:
        """Scan a double-quoted string with escapes and backslash-newline folding."""
        self._advance()  # opening "
        chars: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                self._advance()  # closing "
                return Token(TokenType.STRING, "".join(chars), line, col)
            if ch == "\n":
                raise self._error("Unterminated string literal", line, col)
            if ch == "\\":
                self._scan_string_escape(chars, line, col)
            else:
                chars.append(ch)
                self._advance()
        raise self._error("Unterminated string literal", line, col)

    def _scan_string_escape(self, chars: list[str], line: int, col: int) -> None:
        """Consume one escape sequence inside a double-quoted string."""
        self._advance()  # backslash
        esc = self._current()
        if esc == "":
            raise self._error("Unterminated string literal", line, col)
        if esc == "\n" or (esc == "\r" and self._peek() == "\n"):
            # Line continuation: drop the newline and the next line's indentation.
            self._advance_by(2 if esc == "\r" else 1)
            while self._current() in (" ", "\t"):
                self._advance()
            return
        if esc not in _STRING_ESCAPES:
            raise self._error(f"Invalid escape sequence: '\\{esc}'")
        chars.append(_STRING_ESCAPES[esc])
        self._advance()

    def _scan_triple_quoted(self, line: int, col: int) -> Token:
        """Scan a \"\"\"...\"\"\" string verbatim, dropping one leading newline."""
        self._advance_by(3)
        end = self._source.find('"""', self._pos)
        if end < 0:
            raise LexError("Unterminated triple-quoted string", line, col, '"')
        text = self._advance_by(end - self._pos)
        self._advance_by(3)
        if text.startswith("\r\n"):
            text = text[2:]
        elif text.startswith("\n"):
            text = text[1:]
        return Token(TokenType.RAW_STRING, text, line, col)

    def _scan_backtick(self, line: int, col: int) -> Token:
        """Scan a backtick string verbatim; no escape processing at all."""
        self._advance()  # opening `
        end = self._source.find("`", self._pos)
        if end < 0:
            raise LexError("Unterminated raw string literal", line, col, "`")
        text = self._advance_by(end - self._pos)
        self._advance()  # closing `
        return Token(TokenType.RAW_STRING, text, line, col)

    def _scan_character(self, line: int, col: int) -> Token:
        """Scan a single-quoted character literal."""
        self._advance()  # opening '
        ch = self._current()
        if ch in ("", "\n", "'"):
            raise self._error("Malformed character literal", line, col)
        if ch == "\\":
            self._advance()
            esc = self._current()
            if esc not in _STRING_ESCAPES:
                raise self._error(f"Invalid escape sequence: '\\{esc}'")
            ch = _STRING_ESCAPES[esc]
        self._advance()
        if self._current() != "'":
            raise self._error("Unterminated character literal", line, col)
        self._advance()  # closing '
        return Token(TokenType.CHARACTER, ch, line, col)

    def _scan_binary(self, line: int, col: int) -> Token:
        """Scan a bracketed base64 block; whitespace and newlines may appear inside."""
        self._advance()  # [
        end = self._source.find("]", self._pos)
        if end < 0:
            raise LexError("Unterminated binary literal", line, col, "[")
        text = self._advance_by(end - self._pos)
        self._advance()  # ]
        return Token(TokenType.BINARY, text, line, col)

    # ------------------------------------------------------------------
    # Numbers, dates, times, and durations
    # ------------------------------------------------------------------

    def _scan_numeric(self, line: int, col: int) -> Token:
        """Scan a literal that starts with a digit, a sign, or a dot."""
        for token_type, pattern in _NUMERIC_PATTERNS:
            match = pattern.match(self._source, self._pos)
            if match is None or not self._is_delimiter_at(match.end()):
                continue
            text = match.group(0)
            if token_type == TokenType.REAL:
                token_type = _classify_number(text)
            self._advance_by(len(text))
            return Token(token_type, text, line, col)
        raise self._error(f"Malformed numeric literal starting with {self._current()!r}")

    def _is_delimiter_at(self, pos: int) -> bool:
        """Return True if a literal may end right before *pos*."""
        if pos >= len(self._source):
            return True
        ch = self._source[pos]
        if ch in _DELIMITERS:
            return True
        return ch == "/" and self._source[pos + 1 : pos + 2] in ("/", "*")

    # ------------------------------------------------------------------
    # Identifiers, keywords, and URLs
    # ------------------------------------------------------------------

    def _scan_identifier_or_keyword(self, line: int, col: int) -> Token:
        """Scan an identifier, mapping it to a keyword or URL token if applicable."""
        start = self._pos
        self._advance()
        while self._pos < len(self._source) and is_identifier_part(self._current()):
            self._advance()
        value = self._source[start : self._pos]
        if self._source.startswith("://", self._pos):
            while self._pos < len(self._source) and self._current() not in " \t\r\n;{}":
                self._advance()
            return Token(TokenType.URL, self._source[start : self._pos], line, col)
        token_type = _KEYWORDS.get(value, TokenType.IDENTIFIER)
        return Token(token_type, value, line, col)


def _classify_number(text: str) -> TokenType:
    """Split plain numbers into INTEGER, LONG, or REAL by suffix and shape."""
    if text[-1] in "Ll":
        return TokenType.LONG
    if any(c in text for c in ".eE") or text[-1].isalpha():
        return TokenType.REAL
    return TokenType.INTEGER
