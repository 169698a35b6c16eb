from __future__ import annotations

from eqnconv.core.ast import (
    EMPTY,
    BinaryOp,
    Bracket,
    Decorated,
    Environment,
    Fraction,
    Literal,
    Root,
    Subscript,
    Summation,
    Superscript,
)
from eqnconv.core.notation import LINE_BREAK
from eqnconv.lexer import tokenize_hwp
from eqnconv.parser import parse_hwp, parse_hwp_with_report


def _lit(value: str) -> Literal:
    return Literal(value=value)


def _parse(text: str):
    return parse_hwp(tokenize_hwp(text))


def test_worked_example() -> None:
    assert _parse("x times 3 + y^2 over z") == BinaryOp(
        operator="+",
        left=BinaryOp(operator="times", left=_lit("x"), right=_lit("3")),
        right=Fraction(
            numerator=Superscript(base=_lit("y"), exponent=_lit("2")),
            denominator=_lit("z"),
            with_bar=True,
        ),
    )


def test_group_operands_are_unwrapped() -> None:
    assert _parse("{a+b} over c") == Fraction(
        numerator=BinaryOp(operator="+", left=_lit("a"), right=_lit("b")),
        denominator=_lit("c"),
    )
    assert _parse("sqrt {x+1}") == Root(
        radicand=BinaryOp(operator="+", left=_lit("x"), right=_lit("1"))
    )


def test_decoration_takes_one_factor() -> None:
    assert _parse("bar x_1") == Decorated(
        deco_type="bar", child=Subscript(base=_lit("x"), sub=_lit("1"))
    )
    assert _parse("Hat a") == Decorated(deco_type="hat", child=_lit("a"))


def test_environment() -> None:
    assert _parse("pmatrix{a & b # c & d}") == Environment(
        env_name="pmatrix",
        rows=((_lit("a"), _lit("b")), (_lit("c"), _lit("d"))),
    )
    assert _parse("dmatrix{1}") == Environment(env_name="vmatrix", rows=((_lit("1"),),))


def test_environment_keyword_without_body_is_literal() -> None:
    result = parse_hwp_with_report(tokenize_hwp("cases x"))

    assert result.ast == BinaryOp(operator="concat", left=_lit("CASES"), right=_lit("x"))
    assert result.status == "partial"


def test_sized_bracket() -> None:
    assert _parse("LEFT( x RIGHT)") == Bracket(
        left_delim="(", right_delim=")", content=_lit("x"), sized=True
    )


def test_named_symbols_become_control_words() -> None:
    assert _parse("alpha + GAMMA") == BinaryOp(
        operator="+", left=_lit(r"\alpha"), right=_lit(r"\Gamma")
    )
    assert _parse("sin(x)") == BinaryOp(
        operator="apply",
        left=_lit(r"\sin"),
        right=Bracket(left_delim="(", right_delim=")", content=_lit("x")),
    )


def test_quoted_text_is_verbatim() -> None:
    assert _parse('"over" + "pi"') == BinaryOp(
        operator="+", left=_lit("over"), right=_lit("pi")
    )


def test_script_argument_does_not_apply() -> None:
    assert _parse("x^a (b)") == BinaryOp(
        operator="concat",
        left=Superscript(base=_lit("x"), exponent=_lit("a")),
        right=Bracket(left_delim="(", right_delim=")", content=_lit("b")),
    )


def test_summation_bounds() -> None:
    assert _parse("sum_{i=1}^n i") == Summation(
        lower=BinaryOp(operator="=", left=_lit("i"), right=_lit("1")),
        upper=_lit("n"),
        body=_lit("i"),
    )


def test_hash_outside_environment_is_line_break() -> None:
    assert _parse("a # b") == BinaryOp(
        operator="concat",
        left=BinaryOp(operator="concat", left=_lit("a"), right=_lit(LINE_BREAK)),
        right=_lit("b"),
    )


def test_stray_right_is_skipped() -> None:
    result = parse_hwp_with_report(tokenize_hwp("a RIGHT) + b"))

    assert result.ast == BinaryOp(
        operator="concat",
        left=_lit("a"),
        right=BinaryOp(operator="+", left=EMPTY, right=_lit("b")),
    )
    assert result.status == "partial"


def test_braced_and_bare_radicands_match() -> None:
    assert _parse("sqrt{x}") == _parse("sqrt x") == Root(radicand=_lit("x"))


def test_trailing_row_separator_does_not_change_matrix() -> None:
    assert _parse("matrix{a & b # c & d #}") == _parse("matrix{a & b # c & d}")


def test_line_break_separates_rows_like_hash() -> None:
    expected = Environment(
        env_name="matrix",
        rows=((_lit("a"), _lit("b")), (_lit("c"), _lit("d"))),
    )

    assert _parse(r"matrix{a & b \\ c & d}") == expected
    assert _parse("matrix{a & b # c & d}") == expected


def test_double_bar_sized_delimiter() -> None:
    assert _parse("LEFT|| x RIGHT||") == Bracket(
        left_delim="\\|", right_delim="\\|", content=_lit("x"), sized=True
    )
    assert _parse("LEFT| |x| RIGHT|").left_delim == "|"
