"""Renderers from the shared AST to each notation."""

from eqnconv.render.hwp import render_hwp
from eqnconv.render.latex import render_latex
from eqnconv.render.sexpr import render_sexpr

__all__ = ["render_hwp", "render_latex", "render_sexpr"]
