"""
Shared tables for the Ferret language front end.

Defines the closed set of token kinds together with the lookup tables the
lexer and parser are driven by:

    - token_hashmap: keyword and operator text -> TokenKind
    - keyword_tokens / operator_tokens: the two halves of token_hashmap
    - prefix_binding_power / infix_binding_power: Pratt parser precedence
    - INT_MIN / INT_MAX: bounds of the signed 64-bit integer value domain
"""

import enum


class TokenKind(enum.Enum):
    """Every kind of token the lexer can produce.

    Member values are the display names used in error messages.
    """

    # Statement keywords
    SET = "set"
    PUSH = "push"
    POP = "pop"
    CHECK = "check"
    PRINT = "print"

    # Literal classes
    IDENT = "identifier"
    INT_LIT = "integer literal"
    STRING_LIT = "string literal"
    TRUE = "true"
    FALSE = "false"

    # Logical keywords
    AND = "and"
    OR = "or"
    NOT = "not"

    # Arithmetic
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"

    # Comparison
    EQUALS = "=="
    NOT_EQUALS = "!="
    LESS = "<"
    LESS_EQ = "<="
    GREATER = ">"
    GREATER_EQ = ">="

    # Punctuation
    LPAREN = "("
    RPAREN = ")"

    # Layout
    NEWLINE = "newline"
    WHITESPACE = "whitespace"

    ERROR = "error"
    EOF = "EOF"

    def __str__(self) -> str:
        return self.value


keyword_tokens: dict[str, TokenKind] = {
    "set": TokenKind.SET,
    "push": TokenKind.PUSH,
    "pop": TokenKind.POP,
    "check": TokenKind.CHECK,
    "print": TokenKind.PRINT,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "not": TokenKind.NOT,
}

operator_tokens: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "==": TokenKind.EQUALS,
    "!=": TokenKind.NOT_EQUALS,
    "<": TokenKind.LESS,
    "<=": TokenKind.LESS_EQ,
    ">": TokenKind.GREATER,
    ">=": TokenKind.GREATER_EQ,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

token_hashmap: dict[str, TokenKind] = {**keyword_tokens, **operator_tokens}

MAX_OPERATOR_LEN = max(len(op) for op in operator_tokens)

IDENT_START = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_"
DIGITS = "0123456789"
IDENT_CHARS = IDENT_START + DIGITS
WHITESPACE_CHARS = " \t\f"

# Higher binds tighter. Prefix operators bind tighter than every infix one.
prefix_binding_power: dict[TokenKind, int] = {
    TokenKind.MINUS: 51,
    TokenKind.NOT: 101,
}

infix_binding_power: dict[TokenKind, tuple[int, int]] = {
    TokenKind.OR: (1, 2),
    TokenKind.AND: (3, 4),
    TokenKind.EQUALS: (5, 6),
    TokenKind.NOT_EQUALS: (5, 6),
    TokenKind.LESS: (7, 8),
    TokenKind.GREATER: (7, 8),
    TokenKind.LESS_EQ: (7, 8),
    TokenKind.GREATER_EQ: (7, 8),
    TokenKind.PLUS: (9, 10),
    TokenKind.MINUS: (9, 10),
    TokenKind.STAR: (11, 12),
    TokenKind.SLASH: (11, 12),
}

expression_terminators: frozenset[TokenKind] = frozenset(
    {TokenKind.EOF, TokenKind.RPAREN, TokenKind.NEWLINE}
)

arith_ops: frozenset[TokenKind] = frozenset(
    {TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH}
)

comparison_ops: frozenset[TokenKind] = frozenset(
    {
        TokenKind.EQUALS,
        TokenKind.NOT_EQUALS,
        TokenKind.LESS,
        TokenKind.LESS_EQ,
        TokenKind.GREATER,
        TokenKind.GREATER_EQ,
    }
)

bool_ops: frozenset[TokenKind] = frozenset({TokenKind.AND, TokenKind.OR})

RESERVED_STACK_IDENT = "pop"

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1
