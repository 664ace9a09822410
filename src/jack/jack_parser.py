"""
Jack Language Parser

Parses a flat Jack token list into a structured parse tree.

This module implements the recursive-descent engine of the Jack front end. It
consumes the tokens of exactly one class (comments included) and produces a
single `class` element whose descendants mirror the nonterminals of the Jack
grammar: class, class_var_dec, subroutine_dec, parameter_list,
subroutine_body, var_dec, statements, the five statement kinds, expression,
term and expression_list.

Dispatch
--------
Every step inspects a fixed window of up to four tokens at the head of the
stream and selects exactly one `Rule` (see `select_rule`). Each rule has a
dedicated recognizer method on `Engine`. The Jack grammar is designed so
that this window is always enough; there is no backtracking.

Bounded scans
-------------
- `Engine.greedy_until(value)`: run steps until the symbol `value` is at the
  head, then consume it as the last item.
- `Engine.non_greedy_until(value)`: the same, but leave the terminator at the
  head so the caller can branch on it.

A step never returns with an unresolved `(`, `[` or `{` group: nested groups
are always folded into a child element first, so the only closing delimiter
a scan ever sees at its head is its own.

Expressions
-----------
Expressions stay flat. `build_expression` wraps every plain operand token, and
every comment, in a singleton `term` and leaves operator symbols as
siblings; precedence is resolved by a later stage.

Raises
------
JackSyntaxError
    When the head of the stream matches no grammar shape, an expected token
    is missing, or a scan reaches the end of input before its terminator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum, auto

from jack.jack_ast import Child, StructuredElement
from jack.jack_constants import (
    CLASS_VAR_KEYWORDS,
    CLOSING_SYMBOLS,
    COMMENT,
    IDENTIFIER,
    KEYWORD,
    SUBROUTINE_KEYWORDS,
    SYMBOL,
    Keyword,
)
from jack.jack_errors import JackSyntaxError
from jack.jack_lexer import Token

logger = logging.getLogger(__name__)

WINDOW_SIZE = 4


class Rule(Enum):
    """The grammar shapes the engine can recognize at the head of the stream."""

    CLASS = auto()
    CLASS_VAR_DEC = auto()
    SUBROUTINE_DEC = auto()
    VAR_DEC = auto()
    LET = auto()
    IF = auto()
    WHILE = auto()
    DO = auto()
    RETURN = auto()
    PAREN_TERM = auto()
    SUBSCRIPT_TERM = auto()
    CALL_TERM = auto()
    COMMA = auto()
    CLOSE = auto()
    TERMINAL = auto()


STATEMENT_RULES: dict[Keyword, Rule] = {
    Keyword.VAR: Rule.VAR_DEC,
    Keyword.LET: Rule.LET,
    Keyword.IF: Rule.IF,
    Keyword.WHILE: Rule.WHILE,
    Keyword.DO: Rule.DO,
    Keyword.RETURN: Rule.RETURN,
}


def _is_symbol(tok: Token | None, value: str) -> bool:
    return tok is not None and tok.is_symbol(value)


def _is_kind(tok: Token | None, *kinds: str) -> bool:
    return tok is not None and tok.kind in kinds


def select_rule(window: Sequence[Token]) -> Rule:
    """Selects the grammar rule for the head of the stream.

    Args:
        window (Sequence[Token]): The first few remaining tokens (the head
            first).

    Returns:
        Rule: The rule whose recognizer should handle the head.

    Raises:
        JackSyntaxError: If the window is empty, or the head is a declaration
            keyword whose shape does not match its rule.
    """
    padded: list[Token | None] = list(window[:WINDOW_SIZE])
    padded += [None] * (WINDOW_SIZE - len(padded))
    head, second, third, fourth = padded
    if head is None:
        raise JackSyntaxError("Unexpected end of input")

    if head.kind == KEYWORD:
        if head.value == Keyword.CLASS:
            if _is_kind(second, IDENTIFIER) and _is_symbol(third, "{"):
                return Rule.CLASS
            raise JackSyntaxError("Malformed class declaration", head.line)
        if head.value in CLASS_VAR_KEYWORDS:
            return Rule.CLASS_VAR_DEC
        if head.value in SUBROUTINE_KEYWORDS:
            if (
                _is_kind(second, KEYWORD, IDENTIFIER)
                and _is_kind(third, IDENTIFIER)
                and _is_symbol(fourth, "(")
            ):
                return Rule.SUBROUTINE_DEC
            raise JackSyntaxError(
                f"Malformed {head.value} declaration", head.line
            )
        if head.value in STATEMENT_RULES:
            return STATEMENT_RULES[head.value]  # type: ignore[index]
        return Rule.TERMINAL

    if head.kind == SYMBOL:
        if head.value == "(":
            return Rule.PAREN_TERM
        if head.value == ",":
            return Rule.COMMA
        if head.value in CLOSING_SYMBOLS:
            return Rule.CLOSE
        if head.value in ("[", "{"):
            raise JackSyntaxError(f"Unexpected '{head.value}'", head.line)
        return Rule.TERMINAL

    if head.kind == IDENTIFIER:
        if _is_symbol(second, "["):
            return Rule.SUBSCRIPT_TERM
        if _is_symbol(second, "("):
            return Rule.CALL_TERM
        if (
            _is_symbol(second, ".")
            and _is_kind(third, IDENTIFIER)
            and _is_symbol(fourth, "(")
        ):
            return Rule.CALL_TERM

    return Rule.TERMINAL


def build_expression(items: Sequence[Child]) -> list[StructuredElement]:
    """Wraps a scanned run of items into a flat `expression` element.

    Operand tokens and comments become singleton `term` elements. Symbols
    and elements that were already built (parenthesized, subscript and call
    terms) are kept as direct children.

    Returns:
        list[StructuredElement]: `[expression]`, or `[]` for an empty run.
    """
    if not items:
        return []
    children: list[Child] = []
    for item in items:
        if isinstance(item, StructuredElement) or item.kind == SYMBOL:
            children.append(item)
        else:
            children.append(StructuredElement("term", [item]))
    return [StructuredElement("expression", children)]


def build_expression_list(items: Sequence[Child]) -> StructuredElement:
    """Splits a scanned argument run on its top-level commas.

    Each comma-delimited chunk is wrapped with `build_expression`; the commas
    are put back between the expressions in their original positions.
    """
    children: list[Child] = []
    chunk: list[Child] = []
    for item in items:
        if isinstance(item, Token) and item.is_symbol(","):
            children.extend(build_expression(chunk))
            children.append(item)
            chunk = []
        else:
            chunk.append(item)
    children.extend(build_expression(chunk))
    return StructuredElement("expression_list", children)


class Engine:
    """
    Jack parsing engine.

    Holds the token stream of one compilation unit and a read position. The
    `compile_*` recognizers each consume exactly one construct and return the
    element they built; `step` dispatches to them through `select_rule`.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream.
    position : int
        Index of the head of the remaining stream.

    Methods
    -------
    compile() -> tuple[list[Token], StructuredElement]
        Parse the whole class; returns the remaining tokens and the tree.
    step(acc) -> bool
        Recognize one construct at the head and append it to `acc`.
    greedy_until(value) -> list
        Scan up to and including the symbol `value`.
    non_greedy_until(value) -> list
        Scan up to, but not including, the symbol `value`.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens: list[Token] = list(tokens)
        self.position: int = 0
        self.recognizers: dict[Rule, Callable[[], StructuredElement]] = {
            Rule.CLASS: self.compile_class,
            Rule.CLASS_VAR_DEC: self.compile_class_var_dec,
            Rule.SUBROUTINE_DEC: self.compile_subroutine_dec,
            Rule.VAR_DEC: self.compile_var_dec,
            Rule.LET: self.compile_let,
            Rule.IF: self.compile_if,
            Rule.WHILE: self.compile_while,
            Rule.DO: self.compile_do,
            Rule.RETURN: self.compile_return,
            Rule.PAREN_TERM: self.compile_paren_term,
            Rule.SUBSCRIPT_TERM: self.compile_subscript_term,
            Rule.CALL_TERM: self.compile_call_term,
        }

    # Stream access

    def current(self) -> Token | None:
        return self.tokens[self.position] if self.position < len(self.tokens) else None

    def window(self) -> list[Token]:
        return self.tokens[self.position : self.position + WINDOW_SIZE]

    def last_line(self) -> int | None:
        return self.tokens[-1].line if self.tokens else None

    def advance(self) -> Token:
        tok = self.current()
        if tok is None:
            raise JackSyntaxError("Unexpected end of input", self.last_line())
        self.position += 1
        return tok

    def expect_symbol(self, value: str) -> Token:
        tok = self.current()
        if tok is None or not tok.is_symbol(value):
            found = "end of input" if tok is None else f"'{tok.value}'"
            line = self.last_line() if tok is None else tok.line
            raise JackSyntaxError(f"Expected '{value}', got {found}", line)
        return self.advance()

    def expect_kind(self, *kinds: str) -> Token:
        tok = self.current()
        if tok is None or tok.kind not in kinds:
            found = "end of input" if tok is None else f"{tok.kind} '{tok.value}'"
            line = self.last_line() if tok is None else tok.line
            raise JackSyntaxError(f"Expected {' or '.join(kinds)}, got {found}", line)
        return self.advance()

    # Dispatch and bounded scans

    def step(self, acc: list[Child]) -> bool:
        """Recognizes one construct at the head of the stream.

        Closing delimiters halt the step without being consumed; commas and
        plain terminals are appended unchanged; everything else is built into
        an element by its recognizer.

        Returns:
            bool: False if the head is a closing delimiter, True otherwise.
        """
        rule = select_rule(self.window())
        if rule is Rule.CLOSE:
            return False
        if rule in (Rule.COMMA, Rule.TERMINAL):
            acc.append(self.advance())
        else:
            acc.append(self.recognizers[rule]())
        return True

    def non_greedy_until(self, value: str) -> list[Child]:
        """Steps until the symbol `value` is at the head; leaves it there."""
        acc: list[Child] = []
        while True:
            tok = self.current()
            if tok is None:
                raise JackSyntaxError(
                    f"Expected '{value}' before end of input", self.last_line()
                )
            if tok.is_symbol(value):
                return acc
            if not self.step(acc):
                raise JackSyntaxError(f"Expected '{value}', got '{tok.value}'", tok.line)

    def greedy_until(self, value: str) -> list[Child]:
        """Steps until the symbol `value` is at the head, then consumes it too."""
        acc = self.non_greedy_until(value)
        acc.append(self.advance())
        return acc

    # Program structure

    def compile(self) -> tuple[list[Token], StructuredElement]:
        """Parses the compilation unit.

        Comments before the class keyword become the first children of the
        class element, comments after its closing brace the last ones.

        Returns:
            tuple[list[Token], StructuredElement]: The remaining tokens (always
            empty on success) and the root `class` element.
        """
        leading = self._comments()
        tok = self.current()
        if tok is None:
            raise JackSyntaxError("Expected class declaration", self.last_line())
        if select_rule(self.window()) is not Rule.CLASS:
            raise JackSyntaxError(
                f"Expected class declaration, got '{tok.value}'", tok.line
            )
        tree = self.compile_class()
        trailing = self._comments()
        tok = self.current()
        if tok is not None:
            raise JackSyntaxError(f"Unexpected '{tok.value}' after class body", tok.line)
        if leading or trailing:
            tree = StructuredElement("class", leading + list(tree.children) + trailing)
        return self.tokens[self.position :], tree

    def _comments(self) -> list[Token]:
        comments: list[Token] = []
        while (tok := self.current()) is not None and tok.kind == COMMENT:
            comments.append(self.advance())
        return comments

    def _next_code(self) -> Token | None:
        # first token at or after the head that is not a comment
        for tok in self.tokens[self.position :]:
            if tok.kind != COMMENT:
                return tok
        return None

    def compile_class(self) -> StructuredElement:
        # 'class' className '{' classVarDec* subroutineDec* '}'
        head = [self.advance(), self.advance(), self.advance()]
        members = self.greedy_until("}")
        logger.debug("Parsed class %s with %d members", head[1].value, len(members) - 1)
        return StructuredElement("class", head + members)

    def _declaration(self, kind: str) -> StructuredElement:
        # ('static' | 'field' | 'var') type varName (',' varName)* ';'
        head = [
            self.advance(),
            self.expect_kind(KEYWORD, IDENTIFIER),
            self.expect_kind(IDENTIFIER),
        ]
        return StructuredElement(kind, head + self.greedy_until(";"))

    def compile_class_var_dec(self) -> StructuredElement:
        return self._declaration("class_var_dec")

    def compile_var_dec(self) -> StructuredElement:
        return self._declaration("var_dec")

    def compile_subroutine_dec(self) -> StructuredElement:
        # ('constructor' | 'function' | 'method') ('void' | type) subroutineName
        # '(' parameterList ')' subroutineBody
        head = [self.advance() for _ in range(4)]
        parameters = StructuredElement("parameter_list", self.non_greedy_until(")"))
        close_paren = self.expect_symbol(")")
        body = self.compile_subroutine_body()
        logger.debug("Parsed %s %s", head[0].value, head[2].value)
        return StructuredElement("subroutine_dec", head + [parameters, close_paren, body])

    def compile_subroutine_body(self) -> StructuredElement:
        # '{' varDec* statements '}'
        leading = self._comments()
        open_brace = self.expect_symbol("{")
        items = self.non_greedy_until("}")
        close_brace = self.advance()

        split = 0
        for item in items:
            if isinstance(item, StructuredElement) and item.kind == "var_dec":
                split += 1
            elif isinstance(item, Token) and item.kind == COMMENT:
                split += 1
            else:
                break
        statements = StructuredElement("statements", items[split:])
        return StructuredElement(
            "subroutine_body",
            [*leading, open_brace, *items[:split], statements, close_brace],
        )

    # Statements

    def _block(self) -> list[Child]:
        # '{' statements '}'
        leading: list[Child] = list(self._comments())
        open_brace = self.expect_symbol("{")
        statements = StructuredElement("statements", self.non_greedy_until("}"))
        return [*leading, open_brace, statements, self.advance()]

    def _condition(self) -> list[Child]:
        # '(' expression ')'
        leading: list[Child] = list(self._comments())
        open_paren = self.expect_symbol("(")
        expression = build_expression(self.non_greedy_until(")"))
        return [*leading, open_paren, *expression, self.advance()]

    def compile_let(self) -> StructuredElement:
        # 'let' varName ('[' expression ']')? '=' expression ';'
        children: list[Child] = [self.advance(), self.expect_kind(IDENTIFIER)]
        if _is_symbol(self.current(), "["):
            children.append(self.advance())
            children.extend(build_expression(self.non_greedy_until("]")))
            children.append(self.advance())
        children.append(self.expect_symbol("="))
        children.extend(build_expression(self.non_greedy_until(";")))
        children.append(self.advance())
        return StructuredElement("let_statement", children)

    def compile_if(self) -> StructuredElement:
        # 'if' '(' expression ')' '{' statements '}' ('else' '{' statements '}')?
        children: list[Child] = [self.advance(), *self._condition(), *self._block()]
        tok = self._next_code()
        if tok is not None and tok.is_keyword(Keyword.ELSE):
            children.extend(self._comments())
            children.append(self.advance())
            children.extend(self._block())
        return StructuredElement("if_statement", children)

    def compile_while(self) -> StructuredElement:
        # 'while' '(' expression ')' '{' statements '}'
        children: list[Child] = [self.advance(), *self._condition(), *self._block()]
        return StructuredElement("while_statement", children)

    def _call(self) -> list[Child]:
        # (className | varName) '.' subroutineName '(' expressionList ')'
        # | subroutineName '(' expressionList ')'
        children: list[Child] = [self.expect_kind(IDENTIFIER)]
        if _is_symbol(self.current(), "."):
            children.append(self.advance())
            children.append(self.expect_kind(IDENTIFIER))
        children.append(self.expect_symbol("("))
        children.append(build_expression_list(self.non_greedy_until(")")))
        children.append(self.advance())
        return children

    def compile_do(self) -> StructuredElement:
        # 'do' subroutineCall ';'
        children: list[Child] = [self.advance(), *self._call(), self.expect_symbol(";")]
        return StructuredElement("do_statement", children)

    def compile_return(self) -> StructuredElement:
        # 'return' expression? ';'
        children: list[Child] = [self.advance()]
        if not _is_symbol(self.current(), ";"):
            children.extend(build_expression(self.non_greedy_until(";")))
        children.append(self.expect_symbol(";"))
        return StructuredElement("return_statement", children)

    # Terms

    def compile_paren_term(self) -> StructuredElement:
        return StructuredElement("term", self._condition())

    def compile_subscript_term(self) -> StructuredElement:
        # varName '[' expression ']'
        children: list[Child] = [self.advance(), self.advance()]
        children.extend(build_expression(self.non_greedy_until("]")))
        children.append(self.advance())
        return StructuredElement("term", children)

    def compile_call_term(self) -> StructuredElement:
        return StructuredElement("term", self._call())


def parse(tokens: Sequence[Token]) -> StructuredElement:
    """Parses the tokens of one Jack class and returns the root element."""
    _, tree = Engine(tokens).compile()
    return tree


__all__ = [
    "Engine",
    "Rule",
    "build_expression",
    "build_expression_list",
    "parse",
    "select_rule",
]
