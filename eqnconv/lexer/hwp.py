"""Deterministic tokenizer for legacy (HWP) equation markup."""

from __future__ import annotations

from eqnconv.core.notation import LEGACY_KEYWORDS, LEGACY_SYMBOLS
from eqnconv.core.tokens import Token, TokenKind, is_digit, is_letter


def tokenize_hwp(text: str) -> list[Token]:
    """Tokenize legacy equation markup; keywords are upper-cased."""

    out: list[Token] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            out.append(Token(TokenKind.SPACE, ch, i))
            i += 1
            continue
        if ch == '"':
            j = text.find('"', i + 1)
            j = n if j < 0 else j + 1
            out.append(Token(TokenKind.IDENTIFIER, text[i:j], i))
            i = j
            continue
        if ch == "\\" and text[i : i + 2] == "\\\\":
            out.append(Token(TokenKind.SYMBOL, "\\\\", i))
            i += 2
            continue
        if ch in LEGACY_SYMBOLS:
            out.append(Token(TokenKind.SYMBOL, ch, i))
            i += 1
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
            word = text[i:j]
            if word.upper() in LEGACY_KEYWORDS:
                out.append(Token(TokenKind.KEYWORD, word.upper(), i))
            else:
                out.append(Token(TokenKind.IDENTIFIER, word, i))
            i = j
            continue
        out.append(Token(TokenKind.UNKNOWN, ch, i))
        i += 1
    out.append(Token(TokenKind.END, "", n))
    return out
