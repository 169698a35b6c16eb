"""Compact S-expression dump of an AST for debugging output."""

from __future__ import annotations

from eqnconv.core.ast import (
    BinaryOp,
    Bracket,
    Decorated,
    Environment,
    Expr,
    Fraction,
    Integral,
    Literal,
    Root,
    Subscript,
    Summation,
    Superscript,
)


def _optional(expr: Expr | None) -> str:
    return "nil" if expr is None else render_sexpr(expr)


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def render_sexpr(expr: Expr) -> str:
    """Render an AST as a one-line S-expression."""

    if isinstance(expr, Literal):
        return _quote(expr.value)
    if isinstance(expr, BinaryOp):
        return f"({expr.operator} {render_sexpr(expr.left)} {render_sexpr(expr.right)})"
    if isinstance(expr, Fraction):
        head = "frac" if expr.with_bar else "atop"
        return f"({head} {render_sexpr(expr.numerator)} {render_sexpr(expr.denominator)})"
    if isinstance(expr, Root):
        return f"(sqrt {render_sexpr(expr.radicand)})"
    if isinstance(expr, Superscript):
        return f"(^ {render_sexpr(expr.base)} {render_sexpr(expr.exponent)})"
    if isinstance(expr, Subscript):
        return f"(_ {render_sexpr(expr.base)} {render_sexpr(expr.sub)})"
    if isinstance(expr, (Integral, Summation)):
        head = expr.variant if isinstance(expr, Integral) else "sum"
        parts = (_optional(expr.lower), _optional(expr.upper), _optional(expr.body))
        return f"({head} {' '.join(parts)})"
    if isinstance(expr, Decorated):
        return f"({expr.deco_type} {render_sexpr(expr.child)})"
    if isinstance(expr, Environment):
        rows = " ".join(
            "(row" + "".join(" " + render_sexpr(cell) for cell in row) + ")"
            for row in expr.rows
        )
        return f"(env {_quote(expr.env_name)}{' ' + rows if rows else ''})"
    if isinstance(expr, Bracket):
        head = "sized" if expr.sized else "bracket"
        return (
            f"({head} {_quote(expr.left_delim)} {_quote(expr.right_delim)} "
            f"{render_sexpr(expr.content)})"
        )
    return "nil"
