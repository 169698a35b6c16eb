"""Notation dispatch: tokenize, parse, render and convert in one place."""

from __future__ import annotations

from dataclasses import dataclass, field

from eqnconv.core.ast import Expr
from eqnconv.core.diagnostics import Diagnostic
from eqnconv.core.notation import Notation
from eqnconv.core.tokens import Token
from eqnconv.lexer import tokenize_hwp, tokenize_latex
from eqnconv.parser import ParseResult, parse_hwp_with_report, parse_latex_with_report
from eqnconv.render import render_hwp, render_latex


@dataclass(frozen=True)
class ConversionResult:
    status: str
    source_text: str
    output: str
    ast: Expr
    diagnostics: list[Diagnostic] = field(default_factory=list)


def tokenize(text: str, notation: Notation | str) -> list[Token]:
    """Tokenize ``text`` in the given notation."""

    if Notation.coerce(notation) is Notation.LATEX:
        return tokenize_latex(text)
    return tokenize_hwp(text)


def parse_with_report(
    tokens: list[Token], notation: Notation | str, *, strict: bool = False
) -> ParseResult:
    if Notation.coerce(notation) is Notation.LATEX:
        return parse_latex_with_report(tokens, strict=strict)
    return parse_hwp_with_report(tokens, strict=strict)


def parse(tokens: list[Token], notation: Notation | str, *, strict: bool = False) -> Expr:
    """Parse tokens of the given notation into an AST."""

    return parse_with_report(tokens, notation, strict=strict).ast


def render(expr: Expr, notation: Notation | str) -> str:
    """Render an AST in the given notation."""

    if Notation.coerce(notation) is Notation.LATEX:
        return render_latex(expr)
    return render_hwp(expr)


def convert_with_report(
    text: str,
    source: Notation | str,
    target: Notation | str,
    *,
    strict: bool = False,
) -> ConversionResult:
    """Convert ``text`` and keep the AST and parse diagnostics alongside the output.

    Notations are resolved before any parsing, so an unknown notation raises
    ``ValueError`` even for empty input. With ``strict=True`` a parse that
    needed any recovery raises ``EquationSyntaxError`` instead.
    """

    source_notation = Notation.coerce(source)
    target_notation = Notation.coerce(target)
    parsed = parse_with_report(tokenize(text, source_notation), source_notation, strict=strict)
    return ConversionResult(
        status=parsed.status,
        source_text=text,
        output=render(parsed.ast, target_notation),
        ast=parsed.ast,
        diagnostics=list(parsed.diagnostics),
    )


def convert(
    text: str,
    source: Notation | str,
    target: Notation | str,
    *,
    strict: bool = False,
) -> str:
    """Convert equation markup from ``source`` notation to ``target`` notation."""

    return convert_with_report(text, source, target, strict=strict).output
