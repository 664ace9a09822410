"""
Shared lexical and grammar tables for the Jack front end.

Exports:
    Keyword: Enum of the reserved words of the Jack language.
    KEYWORDS: Mapping from keyword text to its `Keyword` member.
    SYMBOLS: The single-character symbol set.
    TOKEN_KINDS: The six token kinds produced by the tokenizer.
    ELEMENT_KINDS: The grammar nonterminals a parse-tree element may represent.
    CLOSING_SYMBOLS: Delimiters that halt a bounded scan.
"""

from enum import Enum


class Keyword(str, Enum):
    """Reserved words. Members compare equal to their source text."""

    CLASS = "class"
    CONSTRUCTOR = "constructor"
    FUNCTION = "function"
    METHOD = "method"
    FIELD = "field"
    STATIC = "static"
    VAR = "var"
    INT = "int"
    CHAR = "char"
    BOOLEAN = "boolean"
    VOID = "void"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    THIS = "this"
    LET = "let"
    DO = "do"
    IF = "if"
    ELSE = "else"
    WHILE = "while"
    RETURN = "return"

    def __str__(self) -> str:
        return self.value


KEYWORDS: dict[str, Keyword] = {kw.value: kw for kw in Keyword}

SYMBOLS: frozenset[str] = frozenset("{}()[].,;+-*/&|<>=~")

# Token kinds
KEYWORD = "keyword"
SYMBOL = "symbol"
IDENTIFIER = "identifier"
INTEGER_CONSTANT = "integer_constant"
STRING_CONSTANT = "string_constant"
COMMENT = "comment"

TOKEN_KINDS: tuple[str, ...] = (
    KEYWORD,
    SYMBOL,
    IDENTIFIER,
    INTEGER_CONSTANT,
    STRING_CONSTANT,
    COMMENT,
)

# Line record tags
COMMENT_LINE = "comment"
CODE_LINE = "nocomment"

ELEMENT_KINDS: frozenset[str] = frozenset(
    {
        "class",
        "class_var_dec",
        "subroutine_dec",
        "parameter_list",
        "subroutine_body",
        "var_dec",
        "statements",
        "if_statement",
        "while_statement",
        "let_statement",
        "do_statement",
        "return_statement",
        "expression",
        "term",
        "expression_list",
    }
)

CLOSING_SYMBOLS: frozenset[str] = frozenset({"}", ";", ")", "]"})

SUBROUTINE_KEYWORDS: frozenset[Keyword] = frozenset(
    {Keyword.CONSTRUCTOR, Keyword.FUNCTION, Keyword.METHOD}
)

CLASS_VAR_KEYWORDS: frozenset[Keyword] = frozenset({Keyword.STATIC, Keyword.FIELD})

__all__ = [
    "CLASS_VAR_KEYWORDS",
    "CLOSING_SYMBOLS",
    "CODE_LINE",
    "COMMENT",
    "COMMENT_LINE",
    "ELEMENT_KINDS",
    "IDENTIFIER",
    "INTEGER_CONSTANT",
    "KEYWORD",
    "KEYWORDS",
    "Keyword",
    "STRING_CONSTANT",
    "SUBROUTINE_KEYWORDS",
    "SYMBOL",
    "SYMBOLS",
    "TOKEN_KINDS",
]
