"""Token definitions for the AL object-language tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from altestkit.diagnostics.location import TextSpan


class TokenKind(Enum):
    """All token types recognized by the tokenizer."""

    # === Object keywords ===
    TABLE = auto()
    TABLEEXTENSION = auto()
    PAGE = auto()
    CODEUNIT = auto()
    REPORT = auto()
    ENUM = auto()
    FIELDS = auto()
    FIELD = auto()
    KEYS = auto()
    KEY = auto()

    # Code keywords
    PROCEDURE = auto()
    TRIGGER = auto()
    VAR = auto()
    BEGIN = auto()
    END = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    EXIT = auto()
    LOCAL = auto()
    TRUE = auto()
    FALSE = auto()

    # Operators
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /
    ASSIGN = auto()  # :=
    EQUALS = auto()  # =
    LANGLE = auto()  # <
    RANGLE = auto()  # >

    # Delimiters
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    COLON = auto()  # :
    SEMICOLON = auto()  # ;
    COMMA = auto()  # ,
    DOT = auto()  # .
    DOTDOT = auto()  # ..

    # Literals
    INT_LIT = auto()
    STRING_LIT = auto()  # 'text'
    QUOTED_IDENT = auto()  # "Name With Spaces"
    IDENT = auto()

    # Trivia kept for analyzers that inspect comments
    COMMENT = auto()
    DIRECTIVE = auto()  # #pragma, #if, #endif ...

    # Special
    EOF = auto()


# AL keywords are case-insensitive; lookups use the lower-cased lexeme.
KEYWORDS: dict[str, TokenKind] = {
    "table": TokenKind.TABLE,
    "tableextension": TokenKind.TABLEEXTENSION,
    "page": TokenKind.PAGE,
    "codeunit": TokenKind.CODEUNIT,
    "report": TokenKind.REPORT,
    "enum": TokenKind.ENUM,
    "fields": TokenKind.FIELDS,
    "field": TokenKind.FIELD,
    "keys": TokenKind.KEYS,
    "key": TokenKind.KEY,
    "procedure": TokenKind.PROCEDURE,
    "trigger": TokenKind.TRIGGER,
    "var": TokenKind.VAR,
    "begin": TokenKind.BEGIN,
    "end": TokenKind.END,
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
    "else": TokenKind.ELSE,
    "exit": TokenKind.EXIT,
    "local": TokenKind.LOCAL,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}


@dataclass(frozen=True)
class Token:
    """A single token with its span in the clean text."""

    kind: TokenKind
    lexeme: str
    span: TextSpan

    def is_keyword(self) -> bool:
        return self.kind in KEYWORDS.values()
