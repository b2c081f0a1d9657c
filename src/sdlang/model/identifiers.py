# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Identifier legality rules shared by tags, namespaces, and attributes."""

from sdlang.errors import IllegalIdentifierError

# ###############
# Public Interface
# ###############

# Words the lexer reads as literals. A tag named like this would re-read as a value.
RESERVED_WORDS: frozenset[str] = frozenset({"true", "false", "on", "off", "null"})


def is_identifier_start(ch: str) -> bool:
    """Return True if *ch* may begin an identifier (a Unicode letter or underscore)."""
    return ch.isalpha() or ch == "_"


def is_identifier_part(ch: str) -> bool:
    """Return True if *ch* may follow the first character of an identifier."""
    return ch.isalpha() or ch.isdecimal() or ch in "_-.$"


def identifier_is_legal(text: str) -> bool:
    """Return True if *text* is a legal SDL identifier."""
    if not text or not is_identifier_start(text[0]):
        return False
    return all(is_identifier_part(ch) for ch in text[1:])


def validate_identifier(text: str) -> None:
    """Raise IllegalIdentifierError unless *text* is a legal SDL identifier.

    Identifiers start with a Unicode letter or underscore and continue with
    Unicode letters, digits, underscores, dashes, dots, or dollar signs.
    """
    if not text:
        raise IllegalIdentifierError("SDL identifiers cannot be empty", text)
    if not is_identifier_start(text[0]):
        raise IllegalIdentifierError(
            f"{text[0]!r} is not a legal first character for an SDL identifier; "
            "identifiers must start with a unicode letter or an underscore (_)",
            text,
        )
    for ch in text[1:]:
        if not is_identifier_part(ch):
            raise IllegalIdentifierError(
                f"{ch!r} is not a legal character for an SDL identifier; "
                "identifiers may contain unicode letters, digits, and the characters _ - . $",
                text,
            )


def validate_tag_identifier(text: str) -> None:
    """Validate a tag name or tag namespace.

    On top of the identifier rules, literal keywords are rejected because the
    parser reads a keyword at the start of a line as an anonymous tag's value.
    """
    validate_identifier(text)
    if text in RESERVED_WORDS:
        raise IllegalIdentifierError(f"{text!r} is a reserved word and cannot name a tag", text)
