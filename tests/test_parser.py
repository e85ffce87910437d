import pytest
from hypothesis import given
from hypothesis import strategies as st

from ferret.ferret_ast import (
    BinaryOp,
    Check,
    Ident,
    Literal,
    Pop,
    Print,
    Push,
    Set,
    UnaryOp,
)
from ferret.ferret_constants import INT_MAX, TokenKind
from ferret.ferret_errors import ParseError, UnexpectedEndOfInput
from ferret.ferret_lexer import CharacterStream, Lexer, tokenize
from ferret.ferret_parser import Parser, parse_source, unescape_string


def parse_expr(source: str) -> str:
    return str(Parser(tokenize(source), source).parse_expression())


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2 * 3", "(+ 1 (* 2 3))"),
        ("(1 + 2) * 3", "(* (+ 1 2) 3)"),
        ("10 - 3 - 2", "(- (- 10 3) 2)"),
        ("8 / 4 / 2", "(/ (/ 8 4) 2)"),
        ("not true and false", "(and (not true) false)"),
        ("not (true and false)", "(not (and true false))"),
        ("-x * 2", "(* (- x) 2)"),
        ("- - 1", "(- (- 1))"),
        ("a or b and c", "(or a (and b c))"),
        ("a and b or c", "(or (and a b) c)"),
        ("1 < 2 == true", "(== (< 1 2) true)"),
        ("1 + 2 <= 3 * 4", "(<= (+ 1 2) (* 3 4))"),
        ("x != y >= z", "(!= x (>= y z))"),
        ("pop == pop", "(== pop pop)"),
        ('"a" or ""', '(or "a" "")'),
        ("((7))", "7"),
    ],
)
def test_expression_precedence(source: str, expected: str) -> None:
    assert parse_expr(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("set x 1 + 2\n", "(set x (+ 1 2))"),
        ("push 5\n", "(push 5)"),
        ("check pop == pop\n", "(check (== pop pop))"),
        ("pop\n", "(pop)"),
        ('print "hi"\n', '(print "hi")'),
        ("print not x\n", "(print (not x))"),
    ],
)
def test_statement_round_trip(source: str, expected: str) -> None:
    (stmt,) = parse_source(source)
    assert str(stmt) == expected


def test_program_structure() -> None:
    program = parse_source("set x 5\npush x\ncheck x > 1\npop\nprint x * x\n")
    assert program == [
        Set("x", Literal(5)),
        Push(Ident("x")),
        Check(BinaryOp(TokenKind.GREATER, Ident("x"), Literal(1))),
        Pop(),
        Print(BinaryOp(TokenKind.STAR, Ident("x"), Ident("x"))),
    ]


def test_statement_positions() -> None:
    program = parse_source("set x 1\n  print -x\n")
    assert (program[0].line, program[0].col) == (1, 1)
    assert (program[1].line, program[1].col) == (2, 3)
    unary = program[1].expr  # type: ignore[union-attr]
    assert isinstance(unary, UnaryOp)
    assert (unary.line, unary.col) == (2, 9)


def test_literals() -> None:
    (stmt,) = parse_source('push "a \\"quoted\\" \\\\ word"\n')
    assert stmt == Push(Literal('a "quoted" \\ word'))
    assert parse_source("push true\n") == [Push(Literal(True))]
    assert parse_source("push false\n") == [Push(Literal(False))]


def test_unescape_string() -> None:
    assert unescape_string('""') == ""
    assert unescape_string(r'"\\\""') == '\\"'


def test_set_pop_parses_for_runtime_rejection() -> None:
    assert parse_source("set pop 5\n") == [Set("pop", Literal(5))]


def test_empty_program() -> None:
    assert parse_source("") == []


@pytest.mark.parametrize(
    "source,message",
    [
        ("\n", "Error at 1:1 = Expected statement, got newline"),
        ("push 1\n\npop\n", "Error at 2:1 = Expected statement, got newline"),
    ],
)
def test_blank_lines_are_rejected(source: str, message: str) -> None:
    with pytest.raises(ParseError) as exc:
        parse_source(source)
    assert str(exc.value) == message


def test_final_statement_needs_newline() -> None:
    with pytest.raises(ParseError) as exc:
        parse_source("push 1\nprint 2")
    assert str(exc.value) == "Error at 2:8 = Expected newline, got EOF"
    assert not isinstance(exc.value, UnexpectedEndOfInput)


def test_parser_accepts_lexer_directly() -> None:
    source = "push 1\n"
    assert Parser(Lexer(CharacterStream(source)), source).parse() == [Push(Literal(1))]


def test_parse_statement_at_eof_raises_unexpected_end() -> None:
    parser = Parser(tokenize(""))
    with pytest.raises(UnexpectedEndOfInput):
        parser.parse_statement()


def test_parse_expression_at_eof_raises_unexpected_end() -> None:
    with pytest.raises(UnexpectedEndOfInput):
        Parser(tokenize("")).parse_expression()


@pytest.mark.parametrize(
    "source,message",
    [
        ("x 5\n", "Error at 1:1 = Expected statement, got identifier 'x'"),
        ("push 1\n  5\n", "Error at 2:3 = Expected statement, got integer literal '5'"),
        ("set 5 5\n", "Error at 1:5 = Expected identifier, got integer literal '5'"),
        ("push\n", "Error at 1:5 = Expected expression, got newline"),
        ("push 1 2\n", "Error at 1:8 = Expected operator or terminator, got integer literal '2'"),
        ("print 1 not 2\n", "Error at 1:9 = Expected newline, got not"),
        ("push (1 + 2\n", "Error at 1:12 = Expected ), got newline"),
        ("push $\n", "Error at 1:6 = Expected expression, got error '$'"),
        ("pop 1\n", "Error at 1:5 = Expected newline, got integer literal '1'"),
        ("push +\n", "Error at 1:6 = Expected expression, got +"),
        ("push 1)\n", "Error at 1:7 = Expected newline, got )"),
        (
            "push 9223372036854775808\n",
            "Error at 1:6 = '9223372036854775808' is not a valid integer literal",
        ),
    ],
)
def test_syntax_errors(source: str, message: str) -> None:
    with pytest.raises(ParseError) as exc:
        parse_source(source)
    assert str(exc.value) == message
    assert not isinstance(exc.value, UnexpectedEndOfInput)


@pytest.mark.parametrize("tail", ["set x", "push 1 +", "print -", "check not", "push 1 + (2 *"])
def test_end_of_input_where_expression_starts_ends_program(tail: str) -> None:
    assert parse_source(f"print 1\n{tail}") == [Print(Literal(1))]


@pytest.mark.parametrize(
    "source,message",
    [
        ("set", "Error at 1:4 = Expected identifier, got EOF"),
        ("print (1", "Error at 1:9 = Expected ), got EOF"),
        ("pop", "Error at 1:4 = Expected newline, got EOF"),
    ],
)
def test_end_of_input_where_a_token_is_required_is_an_error(
    source: str, message: str
) -> None:
    with pytest.raises(ParseError) as exc:
        parse_source(source)
    assert str(exc.value) == message
    assert not isinstance(exc.value, UnexpectedEndOfInput)


def test_syntax_error_is_a_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        parse_source("oops\n")


def test_largest_integer_literal() -> None:
    assert parse_source(f"push {INT_MAX}\n") == [Push(Literal(INT_MAX))]


@given(st.integers(min_value=0, max_value=INT_MAX))
def test_integer_literals_parse_exactly(n: int) -> None:
    assert parse_source(f"push {n}\n") == [Push(Literal(n))]
