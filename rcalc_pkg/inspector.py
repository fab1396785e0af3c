from __future__ import annotations

from typing import Mapping, Sequence

from .types import VariableEntry
from .utils.parsing import is_operator_token, is_structural_token, to_float


def inspect_unknown_variables(
    tokens: Sequence[str], variables: Mapping[str, VariableEntry]
) -> list[str]:
    """Return names that are neither literals, operators nor bound variables.

    Order is first occurrence; each name appears once.
    """
    unknown: list[str] = []
    for tok in tokens:
        if to_float(tok) is not None:
            continue
        if is_operator_token(tok) or is_structural_token(tok):
            continue
        if tok in variables:
            continue
        if tok not in unknown:
            unknown.append(tok)
    return unknown
