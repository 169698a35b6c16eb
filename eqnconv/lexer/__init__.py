"""Notation-specific tokenizers."""

from eqnconv.lexer.hwp import tokenize_hwp
from eqnconv.lexer.latex import tokenize_latex

__all__ = ["tokenize_hwp", "tokenize_latex"]
