import pytest

from lox.errors import ErrorKind, LoxScanError
from lox.scanner import Scanner
from lox.tokens import Token, TokenType


def types(source):
    return [token.type for token in Scanner(source).scan_tokens()]


def test_var_declaration_tokens():
    tokens = Scanner('var foo = "two";').scan_tokens()
    assert tokens == [
        Token(TokenType.VAR, "var", None, 1),
        Token(TokenType.IDENTIFIER, "foo", None, 1),
        Token(TokenType.EQUAL, "=", None, 1),
        Token(TokenType.STRING, '"two"', "two", 1),
        Token(TokenType.SEMICOLON, ";", None, 1),
        Token(TokenType.EOF, "", None, 1),
    ]


@pytest.mark.parametrize("source,expected", [
    ("!", [TokenType.BANG]),
    ("!=", [TokenType.BANG_EQUAL]),
    ("= ==", [TokenType.EQUAL, TokenType.EQUAL_EQUAL]),
    ("<<=", [TokenType.LESS, TokenType.LESS_EQUAL]),
    (">=>", [TokenType.GREATER_EQUAL, TokenType.GREATER]),
    ("(){},.-+;*/", [
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE,
        TokenType.RIGHT_BRACE, TokenType.COMMA, TokenType.DOT, TokenType.MINUS,
        TokenType.PLUS, TokenType.SEMICOLON, TokenType.STAR, TokenType.SLASH]),
])
def test_operators_use_maximal_munch(source, expected):
    assert types(source) == expected + [TokenType.EOF]


def test_keywords_and_identifiers():
    source = "and class else false fun for if nil or print return super this true var while break continue"
    assert types(source)[:-1] == [
        TokenType.AND, TokenType.CLASS, TokenType.ELSE, TokenType.FALSE,
        TokenType.FUN, TokenType.FOR, TokenType.IF, TokenType.NIL, TokenType.OR,
        TokenType.PRINT, TokenType.RETURN, TokenType.SUPER, TokenType.THIS,
        TokenType.TRUE, TokenType.VAR, TokenType.WHILE, TokenType.BREAK,
        TokenType.CONTINUE]
    assert types("classy _under score9 orchid") == [TokenType.IDENTIFIER] * 4 + [TokenType.EOF]


def test_numbers_are_floats():
    tokens = Scanner("12 3.25").scan_tokens()
    assert [token.literal for token in tokens[:2]] == [12.0, 3.25]
    assert all(isinstance(token.literal, float) for token in tokens[:2])


def test_trailing_dot_is_not_part_of_number():
    tokens = Scanner("1.foo").scan_tokens()
    assert [token.type for token in tokens] == [
        TokenType.NUMBER, TokenType.DOT, TokenType.IDENTIFIER, TokenType.EOF]
    assert tokens[0].lexeme == "1"


def test_minus_is_a_separate_token():
    assert types("-5") == [TokenType.MINUS, TokenType.NUMBER, TokenType.EOF]


def test_comment_runs_to_end_of_line():
    tokens = Scanner("// nothing here\nprint").scan_tokens()
    assert [(token.type, token.line) for token in tokens] == [
        (TokenType.PRINT, 2), (TokenType.EOF, 2)]


def test_comment_at_end_of_input():
    assert types("1 // trailing") == [TokenType.NUMBER, TokenType.EOF]


def test_multiline_string_advances_line():
    scanner = Scanner('"a\nb" x')
    tokens = scanner.scan_tokens()
    assert tokens[0].literal == "a\nb"
    assert tokens[1].line == 2


def test_strings_have_no_escapes():
    token = Scanner(r'"a\nb"').scan_tokens()[0]
    assert token.literal == "a\\nb"


def test_unterminated_string_is_an_error():
    scanner = Scanner('"foo')
    tokens = scanner.scan_tokens()
    assert scanner.errors == [LoxScanError(1, "Unterminated string.")]
    assert [token.type for token in tokens] == [TokenType.EOF]


def test_unexpected_characters_are_collected_and_skipped():
    scanner = Scanner("var @ a = 1;\n#")
    tokens = scanner.scan_tokens()
    assert [(error.line, error.message) for error in scanner.errors] == [
        (1, "Unexpected character."), (2, "Unexpected character.")]
    assert all(error.kind == ErrorKind.SCAN for error in scanner.errors)
    assert [token.lexeme for token in tokens] == ["var", "a", "=", "1", ";", ""]


def test_single_eof_token():
    tokens = Scanner("").scan_tokens()
    assert tokens == [Token(TokenType.EOF, "", None, 1)]
