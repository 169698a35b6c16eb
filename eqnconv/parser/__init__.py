"""Notation-specific parsers producing the shared AST."""

from eqnconv.parser.base import ParseResult
from eqnconv.parser.hwp import parse_hwp, parse_hwp_with_report
from eqnconv.parser.latex import parse_latex, parse_latex_with_report

__all__ = [
    "ParseResult",
    "parse_hwp",
    "parse_hwp_with_report",
    "parse_latex",
    "parse_latex_with_report",
]
