from __future__ import annotations

from eqnconv.core.tokens import Token, TokenKind
from eqnconv.lexer import tokenize_latex


def _kinds_and_texts(text: str) -> list[tuple[TokenKind, str]]:
    return [(tok.kind, tok.text) for tok in tokenize_latex(text)]


def test_tokens_carry_offsets() -> None:
    tokens = tokenize_latex(r"x \times 3")

    assert tokens == [
        Token(TokenKind.IDENTIFIER, "x", 0),
        Token(TokenKind.SPACE, " ", 1),
        Token(TokenKind.KEYWORD, "times", 2),
        Token(TokenKind.SPACE, " ", 8),
        Token(TokenKind.NUMBER, "3", 9),
        Token(TokenKind.END, "", 10),
    ]


def test_empty_input_is_just_end() -> None:
    assert tokenize_latex("") == [Token(TokenKind.END, "", 0)]


def test_unknown_commands_keep_backslash() -> None:
    assert _kinds_and_texts(r"\alpha\foo") == [
        (TokenKind.IDENTIFIER, r"\alpha"),
        (TokenKind.IDENTIFIER, r"\foo"),
        (TokenKind.END, ""),
    ]


def test_keywords_are_case_folded() -> None:
    assert _kinds_and_texts(r"\Frac\hat")[:2] == [
        (TokenKind.KEYWORD, "frac"),
        (TokenKind.KEYWORD, "hat"),
    ]


def test_escapes_and_spacing_commands() -> None:
    assert _kinds_and_texts(r"a\,b \\ \{ \|") == [
        (TokenKind.IDENTIFIER, "a"),
        (TokenKind.SPACE, r"\,"),
        (TokenKind.IDENTIFIER, "b"),
        (TokenKind.SPACE, " "),
        (TokenKind.SYMBOL, "\\\\"),
        (TokenKind.SPACE, " "),
        (TokenKind.SYMBOL, r"\{"),
        (TokenKind.SPACE, " "),
        (TokenKind.SYMBOL, r"\|"),
        (TokenKind.END, ""),
    ]


def test_letter_and_digit_runs_split() -> None:
    assert _kinds_and_texts("xy12z")[:3] == [
        (TokenKind.IDENTIFIER, "xy"),
        (TokenKind.NUMBER, "12"),
        (TokenKind.IDENTIFIER, "z"),
    ]


def test_unrecognized_characters_are_unknown() -> None:
    tokens = tokenize_latex("x?")

    assert tokens[1] == Token(TokenKind.UNKNOWN, "?", 1)
    assert [tok.kind for tok in tokens].count(TokenKind.END) == 1


def test_tokenizer_is_deterministic() -> None:
    text = r"\int_{0}^{1} {x^{2}} dx"

    assert tokenize_latex(text) == tokenize_latex(text)
