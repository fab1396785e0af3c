from typing import Optional

from ..config import ASSIGNMENT, NUMBER_RE, OPERATORS, PHRASE_LIMITERS


def is_number_token(tok: str) -> bool:
    """True for ASCII numeric literals: digits with at most one '.'."""
    return bool(NUMBER_RE.match(tok))


def is_identifier_token(tok: str) -> bool:
    return len(tok) == 1 and tok.isascii() and tok.isalpha()


def is_operator_token(tok: str) -> bool:
    return tok in OPERATORS


def is_structural_token(tok: str) -> bool:
    return tok in PHRASE_LIMITERS or tok == ASSIGNMENT


def to_float(tok: str) -> Optional[float]:
    """
    Convert a token to float, or return None when it is not a literal.

    Python's float() also accepts words such as 'inf' and 'nan'; tokens only
    ever count as numbers when they look like ASCII numeric literals.
    """
    if not is_number_token(tok):
        return None
    try:
        return float(tok)
    except ValueError:
        return None
