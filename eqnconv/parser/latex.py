"""Recursive-descent parser for LaTeX math tokens."""

from __future__ import annotations

from eqnconv.core.ast import EMPTY, Environment, Expr, Fraction, Literal
from eqnconv.core.notation import DECORATION_BY_LATEX, LINE_BREAK, RELATION_OPERATORS
from eqnconv.core.tokens import Token, TokenKind
from eqnconv.parser.base import BaseParser, ParseResult

_ESCAPED_DELIMITERS = {"\\{": "{", "\\}": "}"}
_FRACTION_KEYWORDS = ("frac", "dfrac", "tfrac")


class LatexParser(BaseParser):
    row_separator = LINE_BREAK

    def _parse_group_or_token(self) -> Expr:
        """Brace group (unwrapped) or exactly one token."""

        tok = self._peek()
        if tok.is_symbol("{"):
            self._pop()
            content = self._parse_sequence()
            self._expect_symbol("}")
            return self._unwrap(content)
        if (
            self._at_boundary()
            or self._term_operator(tok) is not None
            or tok.is_symbol(*RELATION_OPERATORS)
        ):
            self._note("an argument", tok)
            return EMPTY
        if tok.kind is TokenKind.KEYWORD:
            return self._parse_keyword_form()
        self._pop()
        return Literal(value=tok.text)

    _parse_script_arg = _parse_group_or_token
    _parse_keyword_argument = _parse_group_or_token

    def _keyword_literal(self, tok: Token) -> str:
        return "\\" + tok.text

    def _decoration(self, tok: Token) -> str | None:
        if tok.kind is not TokenKind.KEYWORD:
            return None
        spec = DECORATION_BY_LATEX.get(tok.text)
        return spec.name if spec is not None else None

    def _delimiter_glyph(self, tok: Token) -> str | None:
        if tok.kind is not TokenKind.SYMBOL:
            return None
        return _ESCAPED_DELIMITERS.get(tok.text, tok.text)

    def _parse_notation_keyword(self, tok: Token) -> Expr | None:
        kw = self._keyword(tok)
        if kw in _FRACTION_KEYWORDS:
            self._pop()
            numerator = self._parse_group_or_token()
            denominator = self._parse_group_or_token()
            return Fraction(numerator=numerator, denominator=denominator, with_bar=True)
        if kw == "begin":
            return self._parse_environment()
        return None

    # \begin{name} ... \end{name}

    def _parse_environment(self) -> Expr:
        begin = self._pop()
        if not self._peek().is_symbol("{"):
            self._note("'{' after \\begin")
            return Literal(value=self._keyword_literal(begin))
        self._pop()
        name = self._read_environment_name()
        rows = self._parse_rows(lambda: self._at_environment_end(name))
        if self._at_environment_end(name):
            self._consume_end()
        else:
            self._note(f"\\end{{{name}}}")
        return Environment(env_name=name, rows=rows)

    def _read_environment_name(self) -> str:
        parts: list[str] = []
        while not self._peek().is_symbol("}") and self._peek().kind is not TokenKind.END:
            parts.append(self._pop().text)
        self._expect_symbol("}")
        return "".join(parts)

    def _peek_environment_name(self, start: int) -> str | None:
        parts: list[str] = []
        k = start
        while True:
            tok = self._peek(k)
            if tok.kind is TokenKind.END:
                return None
            if tok.is_symbol("}"):
                return "".join(parts)
            parts.append(tok.text)
            k += 1

    def _at_environment_end(self, name: str) -> bool:
        if self._keyword(self._peek()) != "end" or not self._peek(1).is_symbol("{"):
            return False
        return self._peek_environment_name(2) == name

    def _consume_end(self) -> None:
        self._pop()
        if self._peek().is_symbol("{"):
            self._pop()
            self._read_environment_name()

    def _skip_stray(self) -> None:
        if self._keyword(self._peek()) == "end":
            self._note("a matching \\begin")
            self._consume_end()
            return
        super()._skip_stray()


def parse_latex_with_report(tokens: list[Token], *, strict: bool = False) -> ParseResult:
    """Parse LaTeX tokens, returning the AST together with its diagnostics."""

    return LatexParser(tokens).run(strict=strict)


def parse_latex(tokens: list[Token], *, strict: bool = False) -> Expr:
    """Parse LaTeX tokens into one AST root."""

    return parse_latex_with_report(tokens, strict=strict).ast
