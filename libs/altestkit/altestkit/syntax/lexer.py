"""Lexer (tokenizer) for AL object-language source text."""

from __future__ import annotations

from altestkit.diagnostics.collector import DiagnosticCollector
from altestkit.diagnostics.location import TextSpan
from altestkit.syntax.tokens import KEYWORDS, Token, TokenKind

# Id used for lexical errors in the compiled document.
LEXICAL_ERROR_ID = "AL0000"


class Lexer:
    """Tokenize AL source into a flat token stream.

    Whitespace is skipped; ``//`` and ``/* */`` comments are kept as COMMENT
    tokens, and a ``#`` opening a line starts a DIRECTIVE token running to
    the end of that line.  Unknown characters and unterminated literals are
    reported as ``AL0000`` error diagnostics and skipped.
    """

    # Single-character tokens that need no lookahead.
    _SINGLE_CHAR: dict[str, TokenKind] = {
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.STAR,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "[": TokenKind.LBRACKET,
        "]": TokenKind.RBRACKET,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
        ";": TokenKind.SEMICOLON,
        ",": TokenKind.COMMA,
        "=": TokenKind.EQUALS,
        "<": TokenKind.LANGLE,
        ">": TokenKind.RANGLE,
    }

    def __init__(self, source: str, diagnostics: DiagnosticCollector | None = None) -> None:
        self._source = source
        self._diag = diagnostics or DiagnosticCollector()
        self._pos = 0

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        """Return character at current position + offset, or '' at EOF."""
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _token(self, kind: TokenKind, begin: int) -> Token:
        return Token(kind, self._source[begin : self._pos], TextSpan.from_bounds(begin, self._pos))

    # ------------------------------------------------------------------
    # Scanning helpers
    # ------------------------------------------------------------------

    def _scan_line_comment(self, begin: int) -> Token:
        """Scan from '//' to end of line (the terminator is NOT consumed)."""
        while not self._at_end() and self._peek() not in ("\n", "\r"):
            self._pos += 1
        return self._token(TokenKind.COMMENT, begin)

    def _at_line_start(self) -> bool:
        """True if only whitespace precedes the current position on its line."""
        idx = self._pos - 1
        while idx >= 0 and self._source[idx] not in ("\n", "\r"):
            if not self._source[idx].isspace():
                return False
            idx -= 1
        return True

    def _scan_directive(self, begin: int) -> Token:
        """Scan a preprocessor directive to end of line."""
        while not self._at_end() and self._peek() not in ("\n", "\r"):
            self._pos += 1
        return self._token(TokenKind.DIRECTIVE, begin)

    def _scan_block_comment(self, begin: int) -> Token:
        """Scan a '/* ... */' comment. Opening '/*' already consumed."""
        end = self._source.find("*/", self._pos)
        if end < 0:
            self._pos = len(self._source)
            self._diag.error(
                LEXICAL_ERROR_ID,
                "Unterminated block comment",
                TextSpan.from_bounds(begin, self._pos),
            )
        else:
            self._pos = end + 2
        return self._token(TokenKind.COMMENT, begin)

    def _scan_quoted(self, quote: str, kind: TokenKind, begin: int) -> Token:
        """Scan a quoted literal. Opening quote already consumed.

        A doubled quote inside the literal stands for the quote character.
        """
        while not self._at_end():
            ch = self._peek()
            if ch == quote:
                if self._peek(1) == quote:
                    self._pos += 2
                    continue
                self._pos += 1
                return self._token(kind, begin)
            if ch in ("\n", "\r"):
                break
            self._pos += 1
        what = "string literal" if kind == TokenKind.STRING_LIT else "quoted identifier"
        self._diag.error(
            LEXICAL_ERROR_ID,
            f"Unterminated {what}",
            TextSpan.from_bounds(begin, self._pos),
        )
        return self._token(kind, begin)

    def _scan_number(self, begin: int) -> Token:
        """Scan an integer literal. First digit already consumed."""
        while not self._at_end() and self._peek().isdigit():
            self._pos += 1
        return self._token(TokenKind.INT_LIT, begin)

    def _scan_identifier_or_keyword(self, begin: int) -> Token:
        """Scan an identifier or keyword. First char already consumed."""
        while not self._at_end() and (self._peek().isalnum() or self._peek() == "_"):
            self._pos += 1
        lexeme = self._source[begin : self._pos]
        kind = KEYWORDS.get(lexeme.lower(), TokenKind.IDENT)
        return Token(kind, lexeme, TextSpan.from_bounds(begin, self._pos))

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source. Returns list ending with an EOF token."""
        tokens: list[Token] = []

        while not self._at_end():
            ch = self._peek()
            begin = self._pos

            # --- Whitespace ---
            if ch.isspace():
                self._pos += 1
                continue

            # --- Comments ---
            if ch == "/" and self._peek(1) == "/":
                tokens.append(self._scan_line_comment(begin))
                continue
            if ch == "/" and self._peek(1) == "*":
                self._pos += 2
                tokens.append(self._scan_block_comment(begin))
                continue

            # --- Preprocessor directives ---
            if ch == "#" and self._at_line_start():
                tokens.append(self._scan_directive(begin))
                continue

            # --- Quoted literals ---
            if ch == "'":
                self._pos += 1
                tokens.append(self._scan_quoted("'", TokenKind.STRING_LIT, begin))
                continue
            if ch == '"':
                self._pos += 1
                tokens.append(self._scan_quoted('"', TokenKind.QUOTED_IDENT, begin))
                continue

            # --- Number literal ---
            if ch.isdigit():
                self._pos += 1
                tokens.append(self._scan_number(begin))
                continue

            # --- Identifier / keyword ---
            if ch.isalpha() or ch == "_":
                self._pos += 1
                tokens.append(self._scan_identifier_or_keyword(begin))
                continue

            # --- Two-character operators ---
            if ch == ":":
                self._pos += 1
                if self._peek() == "=":
                    self._pos += 1
                    tokens.append(self._token(TokenKind.ASSIGN, begin))
                else:
                    tokens.append(self._token(TokenKind.COLON, begin))
                continue
            if ch == ".":
                self._pos += 1
                if self._peek() == ".":
                    self._pos += 1
                    tokens.append(self._token(TokenKind.DOTDOT, begin))
                else:
                    tokens.append(self._token(TokenKind.DOT, begin))
                continue
            if ch == "/":
                self._pos += 1
                tokens.append(self._token(TokenKind.SLASH, begin))
                continue

            # --- Single-character tokens ---
            if ch in self._SINGLE_CHAR:
                self._pos += 1
                tokens.append(self._token(self._SINGLE_CHAR[ch], begin))
                continue

            # --- Unknown character ---
            self._pos += 1
            self._diag.error(
                LEXICAL_ERROR_ID,
                f"Unexpected character: {ch!r}",
                TextSpan(begin, 1),
            )

        tokens.append(Token(TokenKind.EOF, "", TextSpan(self._pos, 0)))
        return tokens
