"""Token vocabulary shared by both equation tokenizers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class TokenKind(str, Enum):
    """Lexical category of a token."""

    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    NUMBER = "number"
    SYMBOL = "symbol"
    SPACE = "space"
    END = "end"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Token:
    """One lexical token with its offset in the source text."""

    kind: TokenKind
    text: str
    offset: int = 0

    def is_symbol(self, *texts: str) -> bool:
        return self.kind is TokenKind.SYMBOL and self.text in texts

    def is_keyword(self, *texts: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.text in texts


def significant(tokens: Iterable[Token]) -> list[Token]:
    """Drop whitespace and unknown tokens before parsing."""

    return [tok for tok in tokens if tok.kind not in (TokenKind.SPACE, TokenKind.UNKNOWN)]


def is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()
