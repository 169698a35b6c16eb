"""Tests for the equation AST model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from eqnconv.core.ast import (
    EMPTY,
    Bracket,
    Fraction,
    Literal,
    expr_to_dict,
    is_empty,
    parse_expr,
)


def _round_trip(payload: dict) -> None:
    expr = parse_expr(payload)
    assert expr_to_dict(expr) == payload


def test_round_trip_nodes() -> None:
    x = {"node": "Literal", "value": "x"}
    cases = [
        x,
        {"node": "BinaryOp", "operator": "apply", "left": x, "right": x},
        {"node": "Fraction", "numerator": x, "denominator": x, "with_bar": False},
        {"node": "Root", "radicand": x},
        {"node": "Superscript", "base": x, "exponent": x},
        {"node": "Subscript", "base": x, "sub": x},
        {"node": "Integral", "variant": "oint", "lower": x},
        {"node": "Summation", "body": x},
        {"node": "Decorated", "deco_type": "vec", "child": x},
        {"node": "Environment", "env_name": "cases", "rows": ((x, x), (x,))},
        {"node": "Bracket", "left_delim": "(", "right_delim": ")", "content": x, "sized": True},
    ]
    for payload in cases:
        _round_trip(payload)


def test_unknown_node_is_rejected() -> None:
    with pytest.raises(ValidationError):
        parse_expr({"node": "Matrix", "rows": []})


def test_empty_operator_is_rejected() -> None:
    with pytest.raises(ValidationError):
        parse_expr(
            {
                "node": "BinaryOp",
                "operator": "",
                "left": {"node": "Literal", "value": "a"},
                "right": {"node": "Literal", "value": "b"},
            }
        )


def test_nodes_are_frozen_and_compare_structurally() -> None:
    a = Fraction(numerator=Literal(value="1"), denominator=Literal(value="2"))
    b = Fraction(numerator=Literal(value="1"), denominator=Literal(value="2"), with_bar=True)

    assert a == b
    with pytest.raises(ValidationError):
        a.with_bar = False


def test_implicit_bracket() -> None:
    assert Bracket(left_delim="{", right_delim="}", content=EMPTY).is_implicit
    assert not Bracket(left_delim="{", right_delim="}", content=EMPTY, sized=True).is_implicit
    assert not Bracket(left_delim="(", right_delim=")", content=EMPTY).is_implicit


def test_is_empty() -> None:
    assert is_empty(EMPTY)
    assert not is_empty(Literal(value="0"))
    assert not is_empty(None)
