import pytest

from netlabs.lexer import (
    Token,
    TokenKind,
    format_token,
    is_delimiter,
    is_integer,
    is_keyword,
    is_operator,
    is_valid_identifier,
    main,
    tokenize,
)

K, I, N, O, U = (
    TokenKind.KEYWORD,
    TokenKind.IDENTIFIER,
    TokenKind.INTEGER,
    TokenKind.OPERATOR,
    TokenKind.UNIDENTIFIED,
)


@pytest.mark.parametrize("char", list(" +-*/,;%><=()[]{}"))
def test_delimiters(char):
    assert is_delimiter(char)


@pytest.mark.parametrize("char", ["a", "0", "_", "\0", ""])
def test_non_delimiters(char):
    assert not is_delimiter(char)


def test_operators_are_a_subset_of_delimiters():
    assert is_operator("=") and is_operator("+")
    assert not is_operator(";") and not is_operator("(")


def test_keywords():
    assert is_keyword("while") and is_keyword("int")
    assert not is_keyword("main")


def test_integers():
    assert is_integer("123")
    assert not is_integer("")
    assert not is_integer("12a")


def test_valid_identifier():
    assert is_valid_identifier("x9")
    assert not is_valid_identifier("9x")


def test_first_example():
    tokens = list(tokenize("int a = b + c"))
    assert tokens == [
        Token(K, "int"), Token(I, "a"), Token(O, "="),
        Token(I, "b"), Token(O, "+"), Token(I, "c"),
    ]


def test_second_example():
    tokens = list(tokenize("int x=ab+bc+30+switch+ 0y "))
    assert tokens == [
        Token(K, "int"), Token(I, "x"), Token(O, "="), Token(I, "ab"),
        Token(O, "+"), Token(I, "bc"), Token(O, "+"), Token(N, "30"),
        Token(O, "+"), Token(K, "switch"), Token(O, "+"), Token(U, "0y"),
    ]


def test_non_operator_delimiters_make_no_tokens():
    assert list(tokenize("a;(b)")) == [Token(I, "a"), Token(I, "b")]


def test_empty_input():
    assert list(tokenize("")) == []


def test_nul_ends_input():
    assert list(tokenize("a\0b")) == [Token(I, "a")]


def test_format_token():
    assert format_token(Token(K, "int")) == "Token: Keyword, Value: int"


def test_main_uses_examples(capsys):
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == 'For Expression "int a = b + c":'
    assert 'For Expression "int x=ab+bc+30+switch+ 0y ":' in lines
    assert lines[-1] == "Token: Unidentified, Value: 0y"


def test_main_with_argument(capsys):
    assert main(["y=1"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        'For Expression "y=1":',
        "Token: Identifier, Value: y",
        "Token: Operator, Value: =",
        "Token: Integer, Value: 1",
    ]