"""Precedence levels and row helpers shared by both renderers."""

from __future__ import annotations

from eqnconv.core.ast import BinaryOp, Expr, Fraction, Literal, is_empty

SEQUENCE = 0
RELATION = 1
SUM = 2
TERM = 3
FACTOR = 4

_OPERATOR_LEVELS = {
    "concat": SEQUENCE,
    "=": RELATION,
    "<": RELATION,
    ">": RELATION,
    "+": SUM,
    "-": SUM,
    "times": TERM,
    "/": TERM,
    "*": TERM,
    "apply": FACTOR,
}


def is_unary(expr: Expr) -> bool:
    return isinstance(expr, BinaryOp) and expr.operator in ("+", "-") and is_empty(expr.left)


def operator_level(operator: str) -> int:
    return _OPERATOR_LEVELS.get(operator, RELATION)


def level(expr: Expr, *, infix_bar_fraction: bool) -> int:
    """Grammar level an expression re-parses at without extra grouping."""

    if isinstance(expr, BinaryOp):
        if is_unary(expr):
            return FACTOR
        return operator_level(expr.operator)
    if isinstance(expr, Fraction):
        if expr.with_bar and not infix_bar_fraction:
            return FACTOR
        return TERM
    return FACTOR


def join_infix(*parts: str) -> str:
    """Join operator pieces with single spaces, skipping empty operands."""

    return " ".join(part for part in parts if part)


def unify_row(row: tuple[Expr, ...], cells: list[str]) -> list[str]:
    """Collapse a three-cell ``lhs & = & rhs`` row into one ``lhs = rhs`` cell.

    Equality lines are usually authored as a single run; this only triggers
    on exactly three cells whose middle cell is the literal ``=``.
    """

    if len(row) == 3 and isinstance(row[1], Literal) and row[1].value == "=":
        return [f"{cells[0]} = {cells[2]}"]
    return cells
