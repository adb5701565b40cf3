"""Syntax subpackage (Layer 1 -- depends on diagnostics)."""

from altestkit.syntax.lexer import LEXICAL_ERROR_ID, Lexer
from altestkit.syntax.tokens import KEYWORDS, Token, TokenKind

__all__ = ["TokenKind", "Token", "KEYWORDS", "Lexer", "LEXICAL_ERROR_ID"]
