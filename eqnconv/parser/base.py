"""Recursive-descent grammar shared by the LaTeX and legacy parsers.

Both notations parse into the same AST with the same precedence ladder::

    Input    := Sequence (stray Sequence)*
    Sequence := Relation Relation*             juxtaposition -> concat
    Relation := Expr (('=' | '<' | '>') Expr)*
    Expr     := Term (('+' | '-') Term)*
    Term     := Factor ((times | over | atop | '/' | '*') Factor)*
    Factor   := Primary ('^' Arg | '_' Arg)*

Subclasses supply the notation-specific pieces: how a script argument is
read, how identifiers map to literal values, and the keyword forms that only
exist in one notation. The parser never raises on malformed input; every
degradation is recorded as a :class:`Diagnostic` instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from eqnconv.core.ast import (
    EMPTY,
    BinaryOp,
    Bracket,
    Decorated,
    Expr,
    Fraction,
    Integral,
    Literal,
    Root,
    Subscript,
    Summation,
    Superscript,
    is_empty,
)
from eqnconv.core.diagnostics import Diagnostic, EquationSyntaxError
from eqnconv.core.notation import (
    CLOSING_DELIMITERS,
    LINE_BREAK,
    OPENING_DELIMITERS,
    RELATION_OPERATORS,
    SIZED_LEFT_DELIMITERS,
    SIZED_RIGHT_DELIMITERS,
)
from eqnconv.core.tokens import Token, TokenKind, significant

_TERM_KEYWORDS = ("times", "over", "atop")
_BOUNDARY_KEYWORDS = ("right", "end")


@dataclass(frozen=True)
class ParseResult:
    ast: Expr
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "partial" if self.diagnostics else "ok"


class BaseParser:
    """Single forward cursor over significant tokens plus the shared grammar."""

    row_separator: str = LINE_BREAK

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = significant(tokens)
        if not self.tokens or self.tokens[-1].kind is not TokenKind.END:
            offset = self.tokens[-1].offset + len(self.tokens[-1].text) if self.tokens else 0
            self.tokens.append(Token(TokenKind.END, "", offset))
        self.i = 0
        self.diagnostics: list[Diagnostic] = []
        self._env_depth = 0

    # cursor

    def _peek(self, k: int = 0) -> Token:
        idx = min(self.i + k, len(self.tokens) - 1)
        return self.tokens[idx]

    def _pop(self) -> Token:
        tok = self._peek()
        if tok.kind is not TokenKind.END:
            self.i += 1
        return tok

    def _expect_symbol(self, text: str) -> bool:
        if self._peek().is_symbol(text):
            self.i += 1
            return True
        self._note(f"'{text}'")
        return False

    def _note(self, expected: str, tok: Token | None = None) -> None:
        tok = tok if tok is not None else self._peek()
        self.diagnostics.append(Diagnostic(offset=tok.offset, expected=expected, found=tok.text))

    # token classes

    @staticmethod
    def _keyword(tok: Token) -> str | None:
        return tok.text.lower() if tok.kind is TokenKind.KEYWORD else None

    def _is_row_separator(self, tok: Token) -> bool:
        return tok.is_symbol(self.row_separator)

    def _at_boundary(self) -> bool:
        """True where a Sequence must stop: closers, END, and cell/row breaks."""

        tok = self._peek()
        if tok.kind is TokenKind.END:
            return True
        if tok.kind is TokenKind.SYMBOL and tok.text in CLOSING_DELIMITERS:
            return True
        if self._keyword(tok) in _BOUNDARY_KEYWORDS:
            return True
        if self._env_depth and (tok.is_symbol("&") or self._is_row_separator(tok)):
            return True
        return False

    def _term_operator(self, tok: Token) -> str | None:
        kw = self._keyword(tok)
        if kw in _TERM_KEYWORDS:
            return kw
        if tok.is_symbol("/", "*"):
            return tok.text
        return None

    def _can_start_operand(self) -> bool:
        tok = self._peek()
        if self._at_boundary() or self._term_operator(tok) is not None:
            return False
        return not tok.is_symbol(*RELATION_OPERATORS)

    # entry point

    def run(self, *, strict: bool = False) -> ParseResult:
        """Parse the whole token stream into one AST root."""

        node = self._parse_sequence()
        while self._peek().kind is not TokenKind.END:
            self._skip_stray()
            rest = self._parse_sequence()
            if is_empty(node):
                node = rest
            elif not is_empty(rest):
                node = BinaryOp(operator="concat", left=node, right=rest)
        if strict and self.diagnostics:
            raise EquationSyntaxError(self.diagnostics)
        return ParseResult(ast=node, diagnostics=list(self.diagnostics))

    def _skip_stray(self) -> None:
        tok = self._pop()
        self._note("an operand", tok)
        if self._keyword(tok) == "right":
            self._read_sized_delimiter(SIZED_RIGHT_DELIMITERS)

    # precedence ladder

    def _parse_sequence(self) -> Expr:
        items: list[Expr] = []
        while not self._at_boundary():
            start = self.i
            items.append(self._parse_relation())
            if self.i == start:
                break
        if not items:
            return EMPTY
        node = items[0]
        for item in items[1:]:
            node = BinaryOp(operator="concat", left=node, right=item)
        return node

    def _parse_relation(self) -> Expr:
        left = self._parse_expr()
        while self._peek().is_symbol(*RELATION_OPERATORS):
            op = self._pop()
            right = self._parse_expr()
            left = BinaryOp(operator=op.text, left=left, right=right)
        return left

    def _parse_expr(self) -> Expr:
        left = self._parse_term()
        while self._peek().is_symbol("+", "-"):
            op = self._pop()
            right = self._parse_term()
            left = BinaryOp(operator=op.text, left=left, right=right)
        return left

    def _parse_term(self) -> Expr:
        left = self._parse_factor()
        while True:
            op = self._term_operator(self._peek())
            if op is None:
                break
            self._pop()
            right = self._parse_factor()
            if op in ("over", "atop"):
                left = Fraction(
                    numerator=self._unwrap(left),
                    denominator=self._unwrap(right),
                    with_bar=op == "over",
                )
            else:
                left = BinaryOp(operator=op, left=left, right=right)
        return left

    def _parse_factor(self) -> Expr:
        return self._parse_postfix(self._parse_primary())

    def _parse_postfix(self, node: Expr) -> Expr:
        """Attach ^/_ scripts left-associatively: x^2_3 -> Sub(Sup(x, 2), 3)."""

        while True:
            tok = self._peek()
            if tok.is_symbol("^"):
                self._pop()
                node = Superscript(base=self._unwrap(node), exponent=self._parse_script_arg())
            elif tok.is_symbol("_"):
                self._pop()
                node = Subscript(base=self._unwrap(node), sub=self._parse_script_arg())
            else:
                return node

    def _parse_primary(self) -> Expr:
        tok = self._peek()
        if self._at_boundary() or self._term_operator(tok) is not None:
            self._note("an operand", tok)
            return EMPTY
        if tok.kind is TokenKind.IDENTIFIER:
            applied = self._try_function_apply()
            if applied is not None:
                return applied
            self._pop()
            return Literal(value=self._identifier_value(tok))
        if tok.kind is TokenKind.NUMBER:
            self._pop()
            return Literal(value=tok.text)
        if tok.kind is TokenKind.KEYWORD:
            return self._parse_keyword_form()
        if tok.text in OPENING_DELIMITERS:
            return self._parse_bracket()
        if tok.is_symbol("^", "_"):
            # bare script: the postfix loop attaches it to an empty base
            return EMPTY
        if tok.is_symbol("+", "-"):
            self._pop()
            return BinaryOp(operator=tok.text, left=EMPTY, right=self._parse_factor())
        return self._parse_symbol_literal()

    def _parse_symbol_literal(self) -> Expr:
        tok = self._pop()
        if self._is_row_separator(tok) or tok.is_symbol(LINE_BREAK):
            return Literal(value=LINE_BREAK)
        return Literal(value=tok.text)

    # keyword forms

    def _parse_keyword_form(self) -> Expr:
        tok = self._peek()
        kw = self._keyword(tok)
        if kw == "sqrt":
            self._pop()
            return Root(radicand=self._parse_keyword_argument())
        if kw in ("int", "oint"):
            self._pop()
            lower, upper, body = self._parse_big_operator()
            return Integral(variant=kw, lower=lower, upper=upper, body=body)
        if kw == "sum":
            self._pop()
            lower, upper, body = self._parse_big_operator()
            return Summation(lower=lower, upper=upper, body=body)
        if kw == "left":
            return self._parse_sized_bracket()
        deco = self._decoration(tok)
        if deco is not None:
            self._pop()
            return Decorated(deco_type=deco, child=self._parse_keyword_argument())
        node = self._parse_notation_keyword(tok)
        if node is not None:
            return node
        self._pop()
        self._note("a keyword form", tok)
        return Literal(value=self._keyword_literal(tok))

    def _parse_big_operator(self) -> tuple[Expr | None, Expr | None, Expr | None]:
        lower: Expr | None = None
        upper: Expr | None = None
        for _ in range(2):
            tok = self._peek()
            if lower is None and tok.is_symbol("_"):
                self._pop()
                lower = self._parse_script_arg()
            elif upper is None and tok.is_symbol("^"):
                self._pop()
                upper = self._parse_script_arg()
            else:
                break
        body: Expr | None = None
        if self._can_start_operand():
            body = self._unwrap(self._parse_factor())
        return lower, upper, body

    # brackets

    def _try_function_apply(self) -> Expr | None:
        """f(x), f[x], f{x} and f LEFT( x RIGHT) become BinaryOp("apply")."""

        name = self._peek()
        nxt = self._peek(1)
        if nxt.kind is TokenKind.SYMBOL and nxt.text in OPENING_DELIMITERS:
            self._pop()
            bracket = self._parse_bracket()
        elif self._keyword(nxt) == "left":
            self._pop()
            bracket = self._parse_sized_bracket()
        else:
            return None
        return BinaryOp(
            operator="apply",
            left=Literal(value=self._identifier_value(name)),
            right=bracket,
        )

    def _parse_bracket(self) -> Expr:
        open_tok = self._pop()
        close = OPENING_DELIMITERS[open_tok.text]
        content = self._parse_sequence()
        right = ""
        if self._peek().is_symbol(close):
            self._pop()
            right = close
        else:
            self._note(f"'{close}'")
        return self._flatten(Bracket(left_delim=open_tok.text, right_delim=right, content=content))

    def _parse_sized_bracket(self) -> Expr:
        self._pop()
        left = self._read_sized_delimiter(SIZED_LEFT_DELIMITERS)
        content = self._parse_sequence()
        right = ""
        if self._keyword(self._peek()) == "right":
            self._pop()
            right = self._read_sized_delimiter(SIZED_RIGHT_DELIMITERS)
        else:
            self._note("a right delimiter")
        if not left and not right:
            return content
        return self._flatten(
            Bracket(left_delim=left, right_delim=right, content=content, sized=True)
        )

    def _read_sized_delimiter(self, allowed: frozenset[str]) -> str:
        glyph = self._delimiter_glyph(self._peek())
        if glyph in allowed:
            self._pop()
            return glyph
        self._note("a delimiter")
        return ""

    @staticmethod
    def _flatten(node: Bracket) -> Bracket:
        inner = node.content
        if (
            node.is_implicit
            and isinstance(inner, Bracket)
            and (inner.left_delim, inner.right_delim, inner.sized)
            == (node.left_delim, node.right_delim, node.sized)
        ):
            return inner
        return node

    @staticmethod
    def _unwrap(node: Expr) -> Expr:
        if isinstance(node, Bracket) and node.is_implicit:
            return node.content
        return node

    # environments

    def _parse_rows(self, at_end) -> tuple[tuple[Expr, ...], ...]:
        """Collect rows of cells until ``at_end()``; '&' splits cells."""

        rows: list[tuple[Expr, ...]] = []
        row: list[Expr] = []
        cell_open = False
        self._env_depth += 1
        try:
            while self._peek().kind is not TokenKind.END and not at_end():
                tok = self._peek()
                if self._is_row_separator(tok):
                    self._pop()
                    if row:
                        rows.append(tuple(row))
                    row = []
                    cell_open = False
                elif tok.is_symbol("&"):
                    self._pop()
                    if not cell_open:
                        row.append(EMPTY)
                    cell_open = False
                elif self._at_boundary():
                    self._skip_stray()
                else:
                    start = self.i
                    cell = self._parse_sequence()
                    if self.i == start:
                        self._skip_stray()
                        continue
                    row.append(cell)
                    cell_open = True
        finally:
            self._env_depth -= 1
        if row:
            rows.append(tuple(row))
        return tuple(rows)

    # notation hooks

    def _parse_script_arg(self) -> Expr:
        raise NotImplementedError

    def _parse_keyword_argument(self) -> Expr:
        raise NotImplementedError

    def _identifier_value(self, tok: Token) -> str:
        return tok.text

    def _keyword_literal(self, tok: Token) -> str:
        return tok.text

    def _decoration(self, tok: Token) -> str | None:
        return None

    def _delimiter_glyph(self, tok: Token) -> str | None:
        return tok.text if tok.kind is TokenKind.SYMBOL else None

    def _parse_notation_keyword(self, tok: Token) -> Expr | None:
        return None
