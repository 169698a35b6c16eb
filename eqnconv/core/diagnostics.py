"""Parse diagnostics and the strict-mode error."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A place where the parser degraded instead of matching a rule."""

    offset: int
    expected: str
    found: str

    @property
    def message(self) -> str:
        found = repr(self.found) if self.found else "end of input"
        return f"expected {self.expected} near offset {self.offset}, found {found}"

    def to_dict(self) -> dict:
        return {"offset": self.offset, "expected": self.expected, "found": self.found}


class EquationSyntaxError(ValueError):
    """Raised in strict mode when parsing produced diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = list(diagnostics)
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if not self.diagnostics:
            return "EquationSyntaxError"
        first = self.diagnostics[0]
        more = len(self.diagnostics) - 1
        suffix = f" (+{more} more)" if more else ""
        return f"EquationSyntaxError: {first.message}{suffix}"
