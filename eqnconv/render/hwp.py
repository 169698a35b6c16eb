"""Deterministic legacy (HWP) equation rendering of ASTs."""

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
from eqnconv.core.notation import (
    DECORATION_BY_NAME,
    DEFAULT_LEGACY_ENVIRONMENT,
    EMPTY_DELIMITER,
    ENVIRONMENT_BY_NAME,
    LEGACY_KEYWORDS,
    LINE_BREAK,
    NAMED_SYMBOLS,
    PUNCTUATION,
)
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


def _render_literal(value: str) -> str:
    if value == LINE_BREAK:
        return "#"
    if value.startswith("\\"):
        word = NAMED_SYMBOLS.to_legacy(value)
        if word.isalpha() and word.upper() in LEGACY_KEYWORDS:
            return f'"{word}"'
        return word
    # plain words that the legacy parser would read as keywords or symbol names
    if value.isalpha() and (
        value.upper() in LEGACY_KEYWORDS or NAMED_SYMBOLS.from_legacy(value) is not None
    ):
        return f'"{value}"'
    return value


def _operand(expr: Expr, min_level: int) -> str:
    if is_empty(expr):
        return ""
    text = render_hwp(expr)
    if level(expr, infix_bar_fraction=True) >= min_level:
        return text
    return f"{{{text}}}"


def _argument(expr: Expr) -> str:
    """One factor for SQRT and decorations; an empty argument stays explicit."""

    if is_empty(expr):
        return "{}"
    return _operand(expr, FACTOR)


def _is_atom(expr: Expr) -> bool:
    if isinstance(expr, Literal):
        return not is_empty(expr)
    if isinstance(expr, Bracket):
        return not expr.is_implicit
    return isinstance(expr, Environment)


def _script(expr: Expr) -> str:
    text = render_hwp(expr)
    return text if _is_atom(expr) else f"{{{text}}}"


def _render_base(expr: Expr) -> str:
    if is_empty(expr):
        return ""
    text = render_hwp(expr)
    if isinstance(expr, (Literal, Bracket, Environment, Superscript, Subscript)):
        return text
    if isinstance(expr, BinaryOp) and expr.operator == "apply":
        return text
    return f"{{{text}}}"


def _render_binary(expr: BinaryOp) -> str:
    op = expr.operator
    if op == "apply":
        sep = "" if isinstance(expr.right, Bracket) and not expr.right.sized else " "
        return render_hwp(expr.left) + sep + render_hwp(expr.right)
    if is_unary(expr):
        return op + _operand(expr.right, FACTOR)
    if op == "concat":
        left = _operand(expr.left, SEQUENCE)
        if is_unary(expr.right):
            right = f"{{{render_hwp(expr.right)}}}"
        else:
            right = _operand(expr.right, RELATION)
        if isinstance(expr.right, Literal) and expr.right.value in PUNCTUATION:
            return left + right
        return join_infix(left, right)
    prec = operator_level(op)
    return join_infix(_operand(expr.left, prec), op, _operand(expr.right, prec + 1))


def _render_big_operator(
    keyword: str, lower: Expr | None, upper: Expr | None, body: Expr | None
) -> str:
    text = keyword
    if lower is not None:
        text += "_" + _script(lower)
    if upper is not None:
        text += "^" + _script(upper)
    if body is not None:
        text += " {" + render_hwp(body) + "}"
    return text


def _render_environment(expr: Environment) -> str:
    spec = ENVIRONMENT_BY_NAME.get(expr.env_name)
    keyword = (spec.legacy if spec is not None else DEFAULT_LEGACY_ENVIRONMENT).lower()
    rows = []
    for row in expr.rows:
        cells = unify_row(row, [render_hwp(cell) for cell in row])
        rows.append(" & ".join(cells).strip())
    return f"{keyword}{{{' # '.join(rows)}}}"


def _sized_delimiter(delim: str) -> str:
    if not delim:
        return EMPTY_DELIMITER
    return "||" if delim == "\\|" else delim


def _render_bracket(expr: Bracket) -> str:
    content = render_hwp(expr.content)
    if not expr.sized:
        return f"{expr.left_delim}{content}{expr.right_delim}"
    return join_infix(
        f"LEFT{_sized_delimiter(expr.left_delim)}",
        content,
        f"RIGHT{_sized_delimiter(expr.right_delim)}",
    )


def render_hwp(expr: Expr) -> str:
    """Render an AST as legacy equation markup; unknown objects render as ''."""

    if isinstance(expr, Literal):
        return _render_literal(expr.value)
    if isinstance(expr, BinaryOp):
        return _render_binary(expr)
    if isinstance(expr, Fraction):
        return join_infix(
            _operand(expr.numerator, TERM),
            "over" if expr.with_bar else "atop",
            _operand(expr.denominator, FACTOR),
        )
    if isinstance(expr, Root):
        return "sqrt " + _argument(expr.radicand)
    if isinstance(expr, Superscript):
        return f"{_render_base(expr.base)}^{_script(expr.exponent)}"
    if isinstance(expr, Subscript):
        return f"{_render_base(expr.base)}_{_script(expr.sub)}"
    if isinstance(expr, Integral):
        return _render_big_operator(expr.variant, expr.lower, expr.upper, expr.body)
    if isinstance(expr, Summation):
        return _render_big_operator("sum", expr.lower, expr.upper, expr.body)
    if isinstance(expr, Decorated):
        spec = DECORATION_BY_NAME.get(expr.deco_type)
        if spec is None:
            return render_hwp(expr.child)
        return f"{spec.legacy.lower()} {_argument(expr.child)}"
    if isinstance(expr, Environment):
        return _render_environment(expr)
    if isinstance(expr, Bracket):
        return _render_bracket(expr)
    return ""
