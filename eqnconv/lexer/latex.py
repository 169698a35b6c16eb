"""Deterministic tokenizer for LaTeX math markup."""

from __future__ import annotations

from eqnconv.core.notation import (
    LATEX_ESCAPED_SYMBOLS,
    LATEX_KEYWORDS,
    LATEX_SPACING_ESCAPES,
    LATEX_SYMBOLS,
)
from eqnconv.core.tokens import Token, TokenKind, is_digit, is_letter


def tokenize_latex(text: str) -> list[Token]:
    """Tokenize LaTeX math into a token list terminated by an end token."""

    out: list[Token] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            out.append(Token(TokenKind.SPACE, ch, i))
            i += 1
            continue
        if ch == "\\":
            pair = text[i : i + 2]
            if pair == "\\\\":
                out.append(Token(TokenKind.SYMBOL, pair, i))
                i += 2
                continue
            if pair in LATEX_ESCAPED_SYMBOLS:
                out.append(Token(TokenKind.SYMBOL, pair, i))
                i += 2
                continue
            if pair in LATEX_SPACING_ESCAPES:
                out.append(Token(TokenKind.SPACE, pair, i))
                i += 2
                continue
            j = i + 1
            while j < n and is_letter(text[j]):
                j += 1
            if j == i + 1:
                out.append(Token(TokenKind.SYMBOL, "\\", i))
                i += 1
                continue
            name = text[i + 1 : j]
            if name.lower() in LATEX_KEYWORDS:
                out.append(Token(TokenKind.KEYWORD, name.lower(), i))
            else:
                out.append(Token(TokenKind.IDENTIFIER, text[i:j], i))
            i = j
            continue
        if is_digit(ch):
            j = i + 1
            while j < n and is_digit(text[j]):
                j += 1
            out.append(Token(TokenKind.NUMBER, text[i:j], i))
            i = j
            continue
        if is_letter(ch):
            j = i + 1
            while j < n and is_letter(text[j]):
                j += 1
            out.append(Token(TokenKind.IDENTIFIER, text[i:j], i))
            i = j
            continue
        if ch in LATEX_SYMBOLS:
            out.append(Token(TokenKind.SYMBOL, ch, i))
            i += 1
            continue
        out.append(Token(TokenKind.UNKNOWN, ch, i))
        i += 1
    out.append(Token(TokenKind.END, "", n))
    return out
