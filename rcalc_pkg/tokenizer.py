"""Lexer for calculator input.

Turns raw text into a flat list of string tokens. Runs of letters become
single-letter variables joined by '*', and '*' is inserted wherever two
operands meet without an operator (``7x``, ``3(2+2)``, ``(1)(2)``).
Characters that are not part of the notation are dropped.
"""

from __future__ import annotations

import logging

from .utils.parsing import is_identifier_token, is_number_token

logger = logging.getLogger(__name__)

_SINGLE_CHAR_TOKENS = frozenset("+-*/^=()")


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _ends_operand(tokens: list[str], include_numbers: bool) -> bool:
    if not tokens:
        return False
    last = tokens[-1]
    if last == ")" or is_identifier_token(last):
        return True
    return include_numbers and is_number_token(last)


def tokenize(text: str) -> list[str]:
    """Split ``text`` into tokens. Never raises."""
    tokens: list[str] = []
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch.isspace():
            i += 1
            continue

        if _is_digit(ch) or ch == ".":
            start = i
            saw_dot = ch == "."
            i += 1
            while i < n:
                c = text[i]
                if _is_digit(c):
                    i += 1
                elif c == "." and not saw_dot:
                    saw_dot = True
                    i += 1
                else:
                    break
            if _ends_operand(tokens, include_numbers=False):
                tokens.append("*")
            tokens.append(text[start:i])
            continue

        if _is_letter(ch):
            if _ends_operand(tokens, include_numbers=True):
                tokens.append("*")
            tokens.append(ch)
            i += 1
            while i < n and _is_letter(text[i]):
                tokens.append("*")
                tokens.append(text[i])
                i += 1
            continue

        if ch in _SINGLE_CHAR_TOKENS:
            if ch == "(" and _ends_operand(tokens, include_numbers=True):
                tokens.append("*")
            tokens.append(ch)
        else:
            logger.debug("Dropping unrecognised character %r at %d", ch, i)
        i += 1

    return tokens
