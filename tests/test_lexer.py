import pytest
from hypothesis import given
from hypothesis import strategies as st

from jack.jack_constants import KEYWORDS, TOKEN_KINDS, Keyword
from jack.jack_errors import JackSyntaxError
from jack.jack_lexer import Token, split_code, token_type, tokenize, tokenize_line


def code(line: str) -> list[Token]:
    return tokenize_line(("nocomment", line), 1)


@pytest.mark.parametrize(
    "segment,expected",
    [
        ("class", "keyword"),
        ("while", "keyword"),
        ("this", "keyword"),
        ("{", "symbol"),
        ("~", "symbol"),
        ('"hello"', "string_constant"),
        ("42", "integer_constant"),
        ("0", "integer_constant"),
        ("foo", "identifier"),
        ("Class", "identifier"),
        ("_tmp1", "identifier"),
        ("12abc", "identifier"),
        ("!", "identifier"),
    ],
)  # type: ignore[misc]
def test_token_type(segment: str, expected: str) -> None:
    assert token_type(segment) == expected


def test_literal_values() -> None:
    tokens = code('let s = "hello"; let n = 42; let b = foo;')
    by_kind = {tok.kind: tok.value for tok in tokens if tok.kind != "symbol"}
    assert by_kind["string_constant"] == "hello"
    assert by_kind["integer_constant"] == 42
    assert isinstance(by_kind["integer_constant"], int)
    assert tokens[0] == Token("keyword", Keyword.LET, 1)


def test_keyword_value_is_enum() -> None:
    (tok,) = code("class")
    assert tok.value is Keyword.CLASS
    assert tok.value == "class"
    assert str(tok.value) == "class"


def test_statement_tokens() -> None:
    tokens = code("let x[i] = -y;")
    assert [(t.kind, t.value) for t in tokens] == [
        ("keyword", "let"),
        ("identifier", "x"),
        ("symbol", "["),
        ("identifier", "i"),
        ("symbol", "]"),
        ("symbol", "="),
        ("symbol", "-"),
        ("identifier", "y"),
        ("symbol", ";"),
    ]


def test_string_literal_stays_atomic() -> None:
    tokens = code('do Output.printString("a, (b) ; c");')
    strings = [t for t in tokens if t.kind == "string_constant"]
    assert strings == [Token("string_constant", "a, (b) ; c", 1)]
    assert [t.value for t in tokens][-3:] == ["a, (b) ; c", ")", ";"]


def test_string_literals_are_non_greedy() -> None:
    tokens = code('f("a", "b")')
    assert [t.value for t in tokens if t.kind == "string_constant"] == ["a", "b"]


def test_empty_string_literal() -> None:
    (tok,) = code('""')
    assert tok == Token("string_constant", "", 1)


def test_whitespace_is_discarded() -> None:
    tokens = code("\tlet  x\t=   1 ;  ")
    assert [str(t.value) for t in tokens] == ["let", "x", "=", "1", ";"]


def test_comment_line() -> None:
    tokens = tokenize_line(("comment", "// a comment"), 7)
    assert tokens == [Token("comment", "// a comment", 7)]


def test_inline_comment_is_appended() -> None:
    tokens = tokenize_line(("nocomment", ("return;", "// done")), 3)
    assert tokens == [
        Token("keyword", Keyword.RETURN, 3),
        Token("symbol", ";", 3),
        Token("comment", "// done", 3),
    ]


def test_empty_input() -> None:
    assert tokenize([]) == []


def test_blank_line_yields_nothing() -> None:
    assert tokenize([("nocomment", "")]) == []


def test_line_numbers_are_positional() -> None:
    lines = [
        ("comment", "/** header */"),
        ("nocomment", ""),
        ("nocomment", ("var int x;", "// x")),
        ("nocomment", "let x = 1;"),
    ]
    tokens = tokenize(lines)
    assert {t.line for t in tokens if t.kind == "comment"} == {1, 3}
    assert [t.line for t in tokens if t.value == "x"] == [3, 4]
    assert tokens[-1].line == 4


def test_unterminated_string_raises() -> None:
    with pytest.raises(JackSyntaxError) as exc:
        tokenize([("nocomment", "let x = 1;"), ("nocomment", 'let s = "oops;')])
    assert exc.value.line == 2
    assert "line 2" in str(exc.value)


def test_unknown_tag_raises() -> None:
    with pytest.raises(ValueError):
        tokenize_line(("code", "let x = 1;"), 1)


def test_token_repr_eq_hash() -> None:
    t1 = Token("integer_constant", 42, 1)
    t2 = Token("integer_constant", 42, 1)
    t3 = Token("integer_constant", 42, 2)
    assert repr(t1) == "Token(integer_constant, 42)"
    assert t1 == t2
    assert t1 != t3
    assert t1 != "42"
    assert len({t1, t2, t3}) == 2


def test_token_is_read_only() -> None:
    t = Token("identifier", "x", 1)
    with pytest.raises(AttributeError):
        t.value = "y"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        del t.line
    assert t == Token("identifier", "x", 1)


def test_token_to_dict() -> None:
    assert Token("keyword", Keyword.VOID, 4).to_dict() == {
        "kind": "keyword",
        "value": "void",
        "line": 4,
    }
    assert Token("integer_constant", 7, 1).to_dict()["value"] == 7


@given(
    name=st.from_regex(r"[a-zA-Z_][a-zA-Z0-9_]{0,10}", fullmatch=True).filter(
        lambda x: x not in KEYWORDS
    )
)  # type: ignore[misc]
def test_identifiers_classify_as_identifier(name: str) -> None:
    assert code(name) == [Token("identifier", name, 1)]


@given(num=st.integers(min_value=0, max_value=32767))  # type: ignore[misc]
def test_integers_classify_as_integer(num: int) -> None:
    assert code(str(num)) == [Token("integer_constant", num, 1)]


@given(text=st.from_regex(r'[^"\r\n]*', fullmatch=True))  # type: ignore[misc]
def test_string_constants_strip_quotes(text: str) -> None:
    tokens = code(f'"{text}"')
    assert tokens == [Token("string_constant", text, 1)]


@given(text=st.text().filter(lambda s: '"' not in s))  # type: ignore[misc]
def test_classification_is_total(text: str) -> None:
    for segment in split_code(text):
        assert segment and not segment.isspace()
        assert token_type(segment) in TOKEN_KINDS


@given(
    lines=st.lists(
        st.sampled_from(
            [
                ("comment", "// note"),
                ("nocomment", ""),
                ("nocomment", "let a[i] = b + 1;"),
                ("nocomment", ('do f("x");', "/* inline */")),
                ("nocomment", "}"),
            ]
        ),
        max_size=12,
    )
)  # type: ignore[misc]
def test_every_token_keeps_its_line(lines: list[tuple[str, object]]) -> None:
    tokens = tokenize(lines)
    expected = [
        lineno
        for lineno, record in enumerate(lines, start=1)
        for _ in tokenize_line(record, lineno)
    ]
    assert [t.line for t in tokens] == expected
