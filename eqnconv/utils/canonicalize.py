"""Canonical forms and fixed-point checks for equation markup."""

from __future__ import annotations

import json

from eqnconv.convert import parse, render, tokenize
from eqnconv.core.ast import Expr, expr_to_dict
from eqnconv.core.notation import Notation


def canonicalize(text: str, notation: Notation | str) -> str:
    """Return the renderer's spelling of ``text`` in its own notation."""

    return render(parse(tokenize(text, notation), notation), notation)


def is_canonical(text: str, notation: Notation | str) -> bool:
    """True when ``text`` already is its own canonical form."""

    return canonicalize(text, notation) == text


def cross_round_trip(text: str, source: Notation | str, target: Notation | str) -> tuple[str, str]:
    """Canonicalize in ``source``, convert to ``target``, then convert back.

    Returns ``(canonical_source, converted_back)``; the two are equal when the
    expression survives the trip between notations unchanged.
    """

    canonical = canonicalize(text, source)
    forward = render(parse(tokenize(canonical, source), source), target)
    back = render(parse(tokenize(forward, target), target), source)
    return canonical, back


def expr_to_stable_json(expr: Expr) -> str:
    """Serialize an AST to JSON with sorted keys and indentation."""

    return json.dumps(expr_to_dict(expr), ensure_ascii=False, sort_keys=True, indent=2)
