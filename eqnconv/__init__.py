"""LaTeX <-> legacy word-processor equation converter."""

from eqnconv.convert import (
    ConversionResult,
    convert,
    convert_with_report,
    parse,
    render,
    tokenize,
)
from eqnconv.core import Diagnostic, EquationSyntaxError, Notation

__all__ = [
    "ConversionResult",
    "Diagnostic",
    "EquationSyntaxError",
    "Notation",
    "convert",
    "convert_with_report",
    "parse",
    "render",
    "tokenize",
]
