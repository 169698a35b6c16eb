"""Recursive-descent parser for legacy (HWP) equation tokens."""

from __future__ import annotations

from eqnconv.core.ast import EMPTY, Environment, Expr, Literal
from eqnconv.core.notation import (
    DECORATION_BY_LEGACY,
    ENVIRONMENT_BY_LEGACY,
    LINE_BREAK,
    NAMED_SYMBOLS,
    OPENING_DELIMITERS,
    RELATION_OPERATORS,
)
from eqnconv.core.tokens import Token, TokenKind
from eqnconv.parser.base import BaseParser, ParseResult


class HwpParser(BaseParser):
    row_separator = "#"

    def _is_row_separator(self, tok: Token) -> bool:
        return tok.is_symbol(self.row_separator, LINE_BREAK)

    def _parse_script_arg(self) -> Expr:
        """One atom: a number, a name, a bracket, or a keyword form.

        Function application is not tried here, so ``x^a (b)`` keeps ``(b)``
        outside the exponent.
        """

        tok = self._peek()
        if tok.is_symbol("{"):
            return self._unwrap(self._parse_bracket())
        if (
            self._at_boundary()
            or self._term_operator(tok) is not None
            or tok.is_symbol(*RELATION_OPERATORS)
        ):
            self._note("an argument", tok)
            return EMPTY
        if tok.kind is TokenKind.IDENTIFIER:
            self._pop()
            return Literal(value=self._identifier_value(tok))
        if tok.kind is TokenKind.NUMBER:
            self._pop()
            return Literal(value=tok.text)
        if tok.kind is TokenKind.KEYWORD:
            return self._parse_keyword_form()
        if tok.text in OPENING_DELIMITERS:
            return self._parse_bracket()
        if tok.is_symbol("^", "_"):
            return EMPTY
        return self._parse_symbol_literal()

    def _read_sized_delimiter(self, allowed: frozenset[str]) -> str:
        tok, nxt = self._peek(), self._peek(1)
        if tok.is_symbol("|") and nxt.is_symbol("|") and nxt.offset == tok.offset + 1:
            self._pop()
            self._pop()
            return "\\|"
        return super()._read_sized_delimiter(allowed)

    def _parse_keyword_argument(self) -> Expr:
        return self._unwrap(self._parse_factor())

    def _identifier_value(self, tok: Token) -> str:
        if tok.text.startswith('"'):
            # quoted text is taken verbatim, never as a keyword or symbol name
            return tok.text[1:-1] if len(tok.text) > 1 and tok.text.endswith('"') else tok.text[1:]
        return NAMED_SYMBOLS.from_legacy(tok.text) or tok.text

    def _decoration(self, tok: Token) -> str | None:
        if tok.kind is not TokenKind.KEYWORD:
            return None
        spec = DECORATION_BY_LEGACY.get(tok.text)
        return spec.name if spec is not None else None

    def _parse_notation_keyword(self, tok: Token) -> Expr | None:
        spec = ENVIRONMENT_BY_LEGACY.get(tok.text) if tok.kind is TokenKind.KEYWORD else None
        if spec is None:
            return None
        self._pop()
        if not self._peek().is_symbol("{"):
            self._note(f"'{{' after {tok.text}")
            return Literal(value=tok.text)
        self._pop()
        rows = self._parse_rows(lambda: self._peek().is_symbol("}"))
        self._expect_symbol("}")
        return Environment(env_name=spec.name, rows=rows)


def parse_hwp_with_report(tokens: list[Token], *, strict: bool = False) -> ParseResult:
    """Parse legacy tokens, returning the AST together with its diagnostics."""

    return HwpParser(tokens).run(strict=strict)


def parse_hwp(tokens: list[Token], *, strict: bool = False) -> Expr:
    """Parse legacy equation tokens into one AST root."""

    return parse_hwp_with_report(tokens, strict=strict).ast
