"""Deterministic LaTeX rendering of equation ASTs."""

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
    is_empty,
)
from eqnconv.core.notation import DECORATION_BY_NAME, EMPTY_DELIMITER, PUNCTUATION
from eqnconv.render.common import (
    FACTOR,
    RELATION,
    SEQUENCE,
    TERM,
    is_unary,
    join_infix,
    level,
    operator_level,
    unify_row,
)

_DELIMITER_ESCAPES = {"{": "\\{", "}": "\\}"}


def _operand(expr: Expr, min_level: int) -> str:
    if is_empty(expr):
        return ""
    text = render_latex(expr)
    if level(expr, infix_bar_fraction=False) >= min_level:
        return text
    return f"{{{text}}}"


def _group(expr: Expr) -> str:
    return f"{{{render_latex(expr)}}}"


def _render_base(expr: Expr) -> str:
    if is_empty(expr):
        return ""
    text = render_latex(expr)
    if isinstance(
        expr,
        (Literal, Bracket, Environment, Root, Decorated, Superscript, Subscript),
    ):
        return text
    if isinstance(expr, Fraction) and expr.with_bar:
        return text
    if isinstance(expr, BinaryOp) and expr.operator == "apply":
        return text
    return f"{{{text}}}"


def _render_binary(expr: BinaryOp) -> str:
    op = expr.operator
    if op == "apply":
        sep = "" if isinstance(expr.right, Bracket) and not expr.right.sized else " "
        return render_latex(expr.left) + sep + render_latex(expr.right)
    if is_unary(expr):
        return op + _operand(expr.right, FACTOR)
    if op == "concat":
        left = _operand(expr.left, SEQUENCE)
        right = _group(expr.right) if is_unary(expr.right) else _operand(expr.right, RELATION)
        if isinstance(expr.right, Literal) and expr.right.value in PUNCTUATION:
            return left + right
        return join_infix(left, right)
    spelled = "\\times" if op == "times" else op
    prec = operator_level(op)
    return join_infix(_operand(expr.left, prec), spelled, _operand(expr.right, prec + 1))


def _render_big_operator(
    keyword: str, lower: Expr | None, upper: Expr | None, body: Expr | None
) -> str:
    text = keyword
    if lower is not None:
        text += "_" + _group(lower)
    if upper is not None:
        text += "^" + _group(upper)
    if body is not None:
        text += " " + _group(body)
    return text


def _render_environment(expr: Environment) -> str:
    rows = []
    for row in expr.rows:
        cells = unify_row(row, [render_latex(cell) for cell in row])
        rows.append(" & ".join(cells).strip())
    return join_infix(
        f"\\begin{{{expr.env_name}}}",
        " \\\\ ".join(rows),
        f"\\end{{{expr.env_name}}}",
    )


def _render_bracket(expr: Bracket) -> str:
    content = render_latex(expr.content)
    if not expr.sized:
        return f"{expr.left_delim}{content}{expr.right_delim}"
    left = _DELIMITER_ESCAPES.get(expr.left_delim, expr.left_delim or EMPTY_DELIMITER)
    right = _DELIMITER_ESCAPES.get(expr.right_delim, expr.right_delim or EMPTY_DELIMITER)
    return join_infix(f"\\left{left}", content, f"\\right{right}")


def render_latex(expr: Expr) -> str:
    """Render an AST as LaTeX math markup; unknown objects render as ''."""

    if isinstance(expr, Literal):
        return expr.value
    if isinstance(expr, BinaryOp):
        return _render_binary(expr)
    if isinstance(expr, Fraction):
        if expr.with_bar:
            return f"\\frac{_group(expr.numerator)}{_group(expr.denominator)}"
        return join_infix(
            _operand(expr.numerator, TERM), "\\atop", _operand(expr.denominator, FACTOR)
        )
    if isinstance(expr, Root):
        return "\\sqrt" + _group(expr.radicand)
    if isinstance(expr, Superscript):
        return f"{_render_base(expr.base)}^{_group(expr.exponent)}"
    if isinstance(expr, Subscript):
        return f"{_render_base(expr.base)}_{_group(expr.sub)}"
    if isinstance(expr, Integral):
        return _render_big_operator("\\" + expr.variant, expr.lower, expr.upper, expr.body)
    if isinstance(expr, Summation):
        return _render_big_operator("\\sum", expr.lower, expr.upper, expr.body)
    if isinstance(expr, Decorated):
        spec = DECORATION_BY_NAME.get(expr.deco_type)
        if spec is None:
            return render_latex(expr.child)
        return f"\\{spec.latex}{_group(expr.child)}"
    if isinstance(expr, Environment):
        return _render_environment(expr)
    if isinstance(expr, Bracket):
        return _render_bracket(expr)
    return ""
