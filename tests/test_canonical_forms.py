"""Fixed-point properties of canonical forms across both notations."""

from __future__ import annotations

import json

import pytest

from eqnconv.convert import parse, tokenize
from eqnconv.utils.canonicalize import (
    canonicalize,
    cross_round_trip,
    expr_to_stable_json,
    is_canonical,
)

CANONICAL_LATEX = [
    r"x \times 3 + \frac{y^{2}}{z}",
    r"\sqrt{x + 1}",
    r"\begin{pmatrix} a & b \\ c & d \end{pmatrix}",
    r"f(x) = \sin \left( x \right)",
    r"\int_{0}^{1} {x^{2}} dx",
    r"\hat{a} + \vec{b}",
    r"\alpha^{2} + \beta_{i}",
    r"-x^{2} + 2 x - 1",
    r"\left\{ x \right.",
    r"a \atop b",
    r"\begin{cases} x & x > 0 \\ -x & x < 0 \end{cases}",
    r"\left\| x \right\|",
]

CANONICAL_LEGACY = [
    "x times 3 + y^2 over z",
    "LEFT( a over b RIGHT)",
    "matrix{1 & 0 # 0 & 1}",
    "sqrt {b^2 - 4 a c}",
    '"over" + alpha',
    "a # b",
    "bar x_1",
    "int_0^1 {x^2} dx",
    "LEFT|| x RIGHT||",
]

NON_CANONICAL_LATEX = [
    r"\sum_{i=1}^{n} i^{2}",
    r"\begin{aligned} y & = & 2 \end{aligned}",
    "x^2_3",
    r"{a \over b}^2",
    "a)b",
    r"\frac12",
    "f (x)",
    r"\left( x",
    "^2",
    "x +",
    "2x",
    r"\begin{matrix} & a \end{matrix}",
]

NON_CANONICAL_LEGACY = [
    "x   over   y",
    "{a+b} over c",
    "LEFT( x",
    "Sqrt{x}",
    "x^{2}",
    "pmatrix",
    r"matrix{a & b \\ c & d}",
]


@pytest.mark.parametrize("text", CANONICAL_LATEX)
def test_latex_samples_are_fixed_points(text: str) -> None:
    assert is_canonical(text, "latex")
    canonical, back = cross_round_trip(text, "latex", "legacy")
    assert back == canonical == text


@pytest.mark.parametrize("text", CANONICAL_LEGACY)
def test_legacy_samples_are_fixed_points(text: str) -> None:
    assert is_canonical(text, "legacy")
    canonical, back = cross_round_trip(text, "legacy", "latex")
    assert back == canonical == text


@pytest.mark.parametrize(
    ("text", "notation"),
    [(t, "latex") for t in NON_CANONICAL_LATEX] + [(t, "legacy") for t in NON_CANONICAL_LEGACY],
)
def test_canonicalization_is_idempotent(text: str, notation: str) -> None:
    once = canonicalize(text, notation)

    assert canonicalize(once, notation) == once


def test_specific_canonical_spellings() -> None:
    assert canonicalize(r"\sum_{i=1}^{n} i^{2}", "latex") == r"\sum_{i = 1}^{n} {i^{2}}"
    assert canonicalize(r"\begin{aligned} y & = & 2 \end{aligned}", "latex") == (
        r"\begin{aligned} y = 2 \end{aligned}"
    )
    assert canonicalize(r"{a \over b}^2", "latex") == r"\frac{a}{b}^{2}"
    assert canonicalize(r"\begin{matrix} & a \end{matrix}", "latex") == (
        r"\begin{matrix} & a \end{matrix}"
    )
    assert canonicalize("Sqrt{x}", "legacy") == "sqrt x"


def test_stable_json_is_sorted() -> None:
    text = expr_to_stable_json(parse(tokenize("x^2", "latex"), "latex"))

    assert list(json.loads(text)) == ["base", "exponent", "node"]
    assert '"node": "Superscript"' in text
