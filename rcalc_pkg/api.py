"""Public evaluation API.

The parser raises; these functions turn every recoverable error into an
``EvalResult`` so callers never need a try/except for malformed input.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from .config import ASSIGNMENT
from .inspector import inspect_unknown_variables
from .parser import calculate
from .plotting import sample_expression
from .tokenizer import tokenize
from .types import CalculatorError, EvalResult, UnknownVariables, VariableEntry
from .variables import parse_assignment

logger = logging.getLogger(__name__)


def evaluate(tokens: Sequence[str], variables: Mapping[str, VariableEntry]) -> EvalResult:
    """Evaluate a token sequence against ``variables``."""
    try:
        value = calculate(tokens, variables)
    except CalculatorError as e:
        return EvalResult(ok=False, error=str(e))
    return EvalResult(ok=True, result=value)


def plot(
    tokens: Sequence[str],
    variable: str,
    variables: Mapping[str, VariableEntry],
    domain: Optional[Iterable[float]] = None,
) -> EvalResult:
    """Sample ``tokens`` as a function of ``variable``."""
    try:
        samples = sample_expression(tokens, variable, variables, domain)
    except CalculatorError as e:
        return EvalResult(ok=False, error=str(e), unknowns=[variable])
    return EvalResult(ok=True, unknowns=[variable], plot_data=samples)


def evaluate_input(
    text: str,
    variables: Mapping[str, VariableEntry],
    domain: Optional[Iterable[float]] = None,
) -> EvalResult:
    """Evaluate one submitted line without mutating ``variables``.

    Dispatch:
        - ``name = expr``: evaluates expr; result.variable names the target.
          Any free variable on the right-hand side is an error.
        - no free variables: plain evaluation.
        - one free variable: sampled over ``domain`` (result.plot_data).
        - several free variables: UnknownVariables error, nothing evaluated.
    """
    tokens = tokenize(text)
    target: Optional[str] = None

    if ASSIGNMENT in tokens:
        try:
            assignment = parse_assignment(tokens)
        except CalculatorError as e:
            return EvalResult(ok=False, error=str(e))
        target = assignment.var_name
        tokens = assignment.value_tokens

    unknowns = inspect_unknown_variables(tokens, variables)

    if len(unknowns) > 1:
        error = UnknownVariables(unknowns)
        logger.info("'%s': %s", text, error)
        return EvalResult(ok=False, error=str(error), unknowns=unknowns)

    if len(unknowns) == 1 and target is None:
        return plot(tokens, unknowns[0], variables, domain)

    result = evaluate(tokens, variables)
    result.unknowns = unknowns
    if result.ok:
        result.variable = target
    return result
