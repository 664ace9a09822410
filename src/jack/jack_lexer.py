"""
Tokenizer for the Jack programming language.

This module turns tagged source lines into a flat, ordered list of tokens:

Classes:
    Token: A single lexical unit with kind, value, and originating line.

Functions:
    token_type: Classifies one lexical segment into one of the six token kinds.
    tokenize_line: Tokenizes a single tagged line record.
    tokenize: Tokenizes a whole file's worth of tagged line records.

Input records are produced upstream (see `jack.jack_source`) and take one of
three shapes, positionally 1-indexed for line numbering:

    ("comment", text)
    ("nocomment", text)
    ("nocomment", (text, trailing_comment_text))

Features:
    - Double-quoted string literals stay atomic and have their quotes stripped.
    - Everything else is split on non-word characters, keeping the delimiters.
    - Comments are kept as ordinary `comment` tokens, in source order.
    - Classification is total: every segment becomes exactly one token.

Raises:
    JackSyntaxError: If a line contains an unterminated string literal.
    ValueError: If a record carries an unknown tag.

Example:
    >>> tokenize([("nocomment", "let x = 42;")])
    [Token(keyword, let), Token(identifier, x), Token(symbol, =), Token(integer_constant, 42), Token(symbol, ;)]
"""

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Any

from jack.jack_constants import (
    CODE_LINE,
    COMMENT,
    COMMENT_LINE,
    IDENTIFIER,
    INTEGER_CONSTANT,
    KEYWORD,
    KEYWORDS,
    STRING_CONSTANT,
    SYMBOL,
    SYMBOLS,
    Keyword,
)
from jack.jack_errors import JackSyntaxError

logger = logging.getLogger(__name__)

STRING_LITERAL = re.compile(r'(".*?")')
NON_WORD = re.compile(r"(\W)")
DIGITS = re.compile(r"[0-9]+")

LineRecord = tuple[str, Any]


class Token:
    """Represents a single lexical token of a Jack source file.

    Attributes:
        kind (str): One of the six token kinds (e.g. 'keyword', 'identifier').
        value (Keyword | str | int): The classified value. Keywords hold a
            `Keyword` member, integer constants an `int`, string constants the
            text without quotes, everything else the raw text.
        line (int): The 1-based line number the token came from.

    Tokens are read-only once built; assigning to an attribute raises
    `AttributeError`.
    """

    __slots__ = ("kind", "value", "line")

    def __init__(self, kind: str, value: Keyword | str | int, line: int = 0):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "line", line)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is read-only; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Token is read-only; cannot delete {name!r}")

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.line))

    def is_symbol(self, value: str) -> bool:
        """Returns True if this token is the symbol `value`."""
        return self.kind == SYMBOL and self.value == value

    def is_keyword(self, *keywords: Keyword) -> bool:
        """Returns True if this token is one of the given keywords."""
        return self.kind == KEYWORD and self.value in keywords

    def to_dict(self) -> dict[str, Any]:
        value = self.value.value if isinstance(self.value, Keyword) else self.value
        return {"kind": self.kind, "value": value, "line": self.line}


def token_type(segment: str) -> str:
    """Classifies a lexical segment.

    The checks run in a fixed order: keyword, symbol, string literal, integer,
    and finally identifier as the catch-all, so every segment has exactly one
    kind.

    Args:
        segment (str): A non-empty segment produced by line splitting.

    Returns:
        str: The token kind.
    """
    if segment in KEYWORDS:
        return KEYWORD
    if segment in SYMBOLS:
        return SYMBOL
    if segment.startswith('"'):
        return STRING_CONSTANT
    if DIGITS.fullmatch(segment):
        return INTEGER_CONSTANT
    return IDENTIFIER


def make_token(segment: str, lineno: int) -> Token:
    kind = token_type(segment)
    if kind == KEYWORD:
        return Token(kind, KEYWORDS[segment], lineno)
    if kind == STRING_CONSTANT:
        return Token(kind, segment[1:-1], lineno)
    if kind == INTEGER_CONSTANT:
        return Token(kind, int(segment), lineno)
    return Token(kind, segment, lineno)


def split_code(line: str, lineno: int = 0) -> list[str]:
    """Splits a line of code into lexical segments.

    Quoted strings are kept whole; the remaining text is split on every
    non-word character with the delimiter kept as its own segment. Empty and
    whitespace-only segments are dropped.

    Raises:
        JackSyntaxError: If a double quote is left unmatched.
    """
    segments: list[str] = []
    for chunk in STRING_LITERAL.split(line):
        if STRING_LITERAL.fullmatch(chunk):
            segments.append(chunk)
            continue
        if '"' in chunk:
            raise JackSyntaxError("Unterminated string literal", lineno)
        segments.extend(
            part for part in NON_WORD.split(chunk) if part and not part.isspace()
        )
    return segments


def tokenize_line(record: LineRecord, lineno: int) -> list[Token]:
    """Tokenizes one tagged line record.

    Args:
        record (tuple[str, Any]): `("comment", text)`, `("nocomment", text)` or
            `("nocomment", (text, trailing_comment))`.
        lineno (int): The 1-based line number assigned to every token.

    Returns:
        list[Token]: The tokens of the line, in source order.

    Raises:
        ValueError: If the record tag is unknown.
    """
    tag, payload = record
    if tag == COMMENT_LINE:
        return [Token(COMMENT, payload, lineno)]
    if tag != CODE_LINE:
        raise ValueError(f"Unknown line tag: {tag!r}")

    if isinstance(payload, Sequence) and not isinstance(payload, str):
        code, inline_comment = payload
        return tokenize_line((CODE_LINE, code), lineno) + [
            Token(COMMENT, inline_comment, lineno)
        ]

    return [make_token(segment, lineno) for segment in split_code(payload, lineno)]


def tokenize(lines: Iterable[LineRecord]) -> list[Token]:
    """Tokenizes a sequence of tagged line records into one flat token list.

    Line numbers are assigned positionally, starting at 1.
    """
    tokens: list[Token] = []
    count = 0
    for count, record in enumerate(lines, start=1):
        tokens.extend(tokenize_line(record, count))
    logger.debug("Tokenized %d lines into %d tokens", count, len(tokens))
    return tokens


__all__ = ["Token", "make_token", "split_code", "token_type", "tokenize", "tokenize_line"]
