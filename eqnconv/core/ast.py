"""AST node definitions shared by both equation notations."""

from __future__ import annotations

import typing
from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Literal(_Node):
    """Atomic symbol, number, or identifier."""

    node: typing.Literal["Literal"] = "Literal"
    value: str


class BinaryOp(_Node):
    """Infix operator, function application, or juxtaposition."""

    node: typing.Literal["BinaryOp"] = "BinaryOp"
    operator: str = Field(min_length=1)
    left: "Expr"
    right: "Expr"


class Fraction(_Node):
    """Stacked numerator and denominator, with or without a bar."""

    node: typing.Literal["Fraction"] = "Fraction"
    numerator: "Expr"
    denominator: "Expr"
    with_bar: bool = True


class Root(_Node):
    """Square root."""

    node: typing.Literal["Root"] = "Root"
    radicand: "Expr"


class Superscript(_Node):
    """Superscript attachment; base may be an empty literal."""

    node: typing.Literal["Superscript"] = "Superscript"
    base: "Expr"
    exponent: "Expr"


class Subscript(_Node):
    """Subscript attachment; base may be an empty literal."""

    node: typing.Literal["Subscript"] = "Subscript"
    base: "Expr"
    sub: "Expr"


class Integral(_Node):
    """Bounded or unbounded integral."""

    node: typing.Literal["Integral"] = "Integral"
    variant: typing.Literal["int", "oint"] = "int"
    lower: "Expr | None" = None
    upper: "Expr | None" = None
    body: "Expr | None" = None


class Summation(_Node):
    """Summation with optional bounds."""

    node: typing.Literal["Summation"] = "Summation"
    lower: "Expr | None" = None
    upper: "Expr | None" = None
    body: "Expr | None" = None


class Decorated(_Node):
    """Diacritic wrapper such as hat or vec."""

    node: typing.Literal["Decorated"] = "Decorated"
    deco_type: str = Field(min_length=1)
    child: "Expr"


class Environment(_Node):
    """Row/column block: matrix, cases, or a generic named environment."""

    node: typing.Literal["Environment"] = "Environment"
    env_name: str
    rows: tuple[tuple["Expr", ...], ...] = ()


class Bracket(_Node):
    """Explicit or implicit grouping.

    Delimiters are notation-neutral glyphs; ``sized`` marks the
    ``LEFT``/``RIGHT`` (``\\left``/``\\right``) form.
    """

    node: typing.Literal["Bracket"] = "Bracket"
    left_delim: str
    right_delim: str
    content: "Expr"
    sized: bool = False

    @property
    def is_implicit(self) -> bool:
        return not self.sized and self.left_delim in ("{", "")


Expr = Annotated[
    Union[
        Literal,
        BinaryOp,
        Fraction,
        Root,
        Superscript,
        Subscript,
        Integral,
        Summation,
        Decorated,
        Environment,
        Bracket,
    ],
    Field(discriminator="node"),
]

for _model in (
    BinaryOp,
    Fraction,
    Root,
    Superscript,
    Subscript,
    Integral,
    Summation,
    Decorated,
    Environment,
    Bracket,
):
    _model.model_rebuild()

_EXPR_ADAPTER: TypeAdapter = TypeAdapter(Expr)

EMPTY = Literal(value="")


def is_empty(expr: object) -> bool:
    """Return True for the empty literal used as a placeholder."""

    return isinstance(expr, Literal) and expr.value == ""


def parse_expr(data: dict) -> Expr:
    """Parse and validate a dict into an Expr."""

    return _EXPR_ADAPTER.validate_python(data)


def expr_to_dict(expr: Expr) -> dict:
    """Serialize an Expr into a dict."""

    return expr.model_dump(exclude_none=True)
