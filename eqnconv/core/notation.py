"""Notation tags and the static lookup tables behind both notations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Notation(str, Enum):
    """Surface syntax of an equation."""

    LATEX = "latex"
    LEGACY = "legacy"

    @classmethod
    def coerce(cls, value: "Notation | str") -> "Notation":
        """Resolve a notation tag or one of its aliases."""

        if isinstance(value, Notation):
            return value
        key = str(value).strip().lower()
        resolved = _NOTATION_ALIASES.get(key)
        if resolved is None:
            choices = ", ".join(sorted(_NOTATION_ALIASES))
            raise ValueError(f"Unsupported notation: {value!r} (expected one of: {choices})")
        return resolved


_NOTATION_ALIASES = {
    "latex": Notation.LATEX,
    "tex": Notation.LATEX,
    "legacy": Notation.LEGACY,
    "hwp": Notation.LEGACY,
    "hwpeqn": Notation.LEGACY,
    "hwp-eqn": Notation.LEGACY,
}


@dataclass(frozen=True, slots=True)
class DecorationSpec:
    """Diacritic wrapper spelled per notation."""

    name: str
    latex: str
    legacy: str


@dataclass(frozen=True, slots=True)
class EnvironmentSpec:
    """Row/column block whose legacy spelling is a keyword."""

    name: str
    legacy: str


DECORATIONS: tuple[DecorationSpec, ...] = (
    DecorationSpec("acute", "acute", "ACUTE"),
    DecorationSpec("grave", "grave", "GRAVE"),
    DecorationSpec("dot", "dot", "DOT"),
    DecorationSpec("ddot", "ddot", "DDOT"),
    DecorationSpec("bar", "bar", "BAR"),
    DecorationSpec("vec", "vec", "VEC"),
    DecorationSpec("hat", "hat", "HAT"),
    DecorationSpec("tilde", "tilde", "TILDE"),
    DecorationSpec("check", "check", "CHECK"),
    DecorationSpec("dyad", "overleftrightarrow", "DYAD"),
    DecorationSpec("under", "underline", "UNDER"),
    DecorationSpec("arch", "overparen", "ARCH"),
)

ENVIRONMENTS: tuple[EnvironmentSpec, ...] = (
    EnvironmentSpec("matrix", "MATRIX"),
    EnvironmentSpec("pmatrix", "PMATRIX"),
    EnvironmentSpec("bmatrix", "BMATRIX"),
    EnvironmentSpec("vmatrix", "DMATRIX"),
    EnvironmentSpec("cases", "CASES"),
    EnvironmentSpec("aligned", "EQALIGN"),
)

DECORATION_BY_LATEX = {spec.latex: spec for spec in DECORATIONS}
DECORATION_BY_LEGACY = {spec.legacy: spec for spec in DECORATIONS}
DECORATION_BY_NAME = {spec.name: spec for spec in DECORATIONS}

ENVIRONMENT_BY_LEGACY = {spec.legacy: spec for spec in ENVIRONMENTS}
ENVIRONMENT_BY_NAME = {spec.name: spec for spec in ENVIRONMENTS}
DEFAULT_LEGACY_ENVIRONMENT = "MATRIX"

LATEX_KEYWORDS = frozenset(
    {
        "times",
        "over",
        "atop",
        "frac",
        "dfrac",
        "tfrac",
        "sqrt",
        "int",
        "oint",
        "sum",
        "left",
        "right",
        "begin",
        "end",
    }
    | set(DECORATION_BY_LATEX)
)

LEGACY_KEYWORDS = frozenset(
    {
        "TIMES",
        "OVER",
        "ATOP",
        "SQRT",
        "INT",
        "OINT",
        "SUM",
        "LEFT",
        "RIGHT",
    }
    | set(DECORATION_BY_LEGACY)
    | set(ENVIRONMENT_BY_LEGACY)
)

LATEX_SYMBOLS = frozenset("^_{}()[]#&~'/,.-+=*|<>!:;`")
LEGACY_SYMBOLS = frozenset("^_{}()[]#&~'/,.-+=*|<>!:;\\`")

# Two-character LaTeX escapes that stay one symbol token.
LATEX_ESCAPED_SYMBOLS = frozenset({"\\{", "\\}", "\\|"})
# TeX spacing commands; lexed as whitespace.
LATEX_SPACING_ESCAPES = frozenset({"\\,", "\\;", "\\:", "\\!", "\\ "})

OPENING_DELIMITERS = {"(": ")", "[": "]", "{": "}"}
CLOSING_DELIMITERS = frozenset(OPENING_DELIMITERS.values())
# \| is the double bar; legacy markup spells it ||.
SIZED_LEFT_DELIMITERS = frozenset({"(", "[", "{", "|", "\\|", "."})
SIZED_RIGHT_DELIMITERS = frozenset({")", "]", "}", "|", "\\|", "."})
# Placeholder spelled for a missing sized delimiter.
EMPTY_DELIMITER = "."
# Row separator; also the literal value of a line break.
LINE_BREAK = "\\\\"
RELATION_OPERATORS = frozenset({"=", "<", ">"})
PUNCTUATION = frozenset({",", ".", ";", ":", "!", "'"})


_GREEK_LOWER = (
    "alpha beta gamma delta epsilon zeta eta theta iota kappa lambda mu nu xi "
    "omicron pi rho sigma tau upsilon phi chi psi omega"
).split()
_GREEK_UPPER = "Gamma Delta Theta Lambda Xi Pi Sigma Upsilon Phi Psi Omega".split()
_FUNCTION_WORDS = (
    "sin cos tan cot sec csc arcsin arccos arctan sinh cosh tanh "
    "log ln exp lim max min det"
).split()
# LaTeX control word -> legacy word, where the spellings differ.
_RENAMED_SYMBOLS = {
    "infty": "inf",
    "le": "leq",
    "ge": "geq",
    "ne": "neq",
    "neq": "neq",
    "leq": "leq",
    "geq": "geq",
    "cdot": "cdot",
    "cdots": "cdots",
    "ldots": "ldots",
    "partial": "partial",
    "nabla": "nabla",
    "approx": "approx",
    "forall": "forall",
    "exists": "exist",
    "in": "in",
    "{": "lbrace",
    "}": "rbrace",
}


class NamedSymbolTable:
    """Bidirectional lookup between LaTeX control words and legacy words."""

    def __init__(self, pairs: list[tuple[str, str]]) -> None:
        self._to_legacy: dict[str, str] = {}
        self._to_latex: dict[str, str] = {}
        for control_word, legacy_word in pairs:
            latex = "\\" + control_word
            self._to_legacy.setdefault(latex, legacy_word)
            self._to_latex.setdefault(legacy_word, latex)

    def to_legacy(self, value: str) -> str:
        """Return the legacy spelling of a literal value."""

        known = self._to_legacy.get(value)
        if known is not None:
            return known
        if value.startswith("\\") and len(value) > 1 and value[1:].isalpha():
            return value[1:]
        return value

    def from_legacy(self, word: str) -> str | None:
        """Return the control word for a legacy identifier, if it names a symbol."""

        return self._to_latex.get(word)


def _named_symbol_pairs() -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = [(name, name) for name in _GREEK_LOWER]
    pairs += [(name, name.upper()) for name in _GREEK_UPPER]
    for name in _FUNCTION_WORDS:
        pairs.append((name, name))
        pairs.append((name, name.upper()))
    pairs += list(_RENAMED_SYMBOLS.items())
    return pairs


NAMED_SYMBOLS = NamedSymbolTable(_named_symbol_pairs())
