"""Core equation model: tokens, AST, notation tables."""

from eqnconv.core.ast import Expr, expr_to_dict, parse_expr
from eqnconv.core.diagnostics import Diagnostic, EquationSyntaxError
from eqnconv.core.notation import Notation
from eqnconv.core.tokens import Token, TokenKind

__all__ = [
    "Diagnostic",
    "EquationSyntaxError",
    "Expr",
    "Notation",
    "Token",
    "TokenKind",
    "expr_to_dict",
    "parse_expr",
]
