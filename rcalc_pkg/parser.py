"""Recursive-descent parser and evaluator.

Grammar, loosest to tightest binding::

    expr     := add_sub
    add_sub  := mul_div (('+' | '-') mul_div)*
    mul_div  := unary (('*' | '/') unary)*
    unary    := ('+' | '-')* power
    power    := primary ('^' ('+' | '-')* primary)*
    primary  := NUMBER | IDENT | '(' expr ')'

Each tier is its own method so that '^' stays right-associative while the
binary operators associate left, and so that unary sign binds looser than the
base of '^' (``-2^2 == -4``) but is still allowed in its exponent
(``2^-2 == 0.25``). Sign runs and '^' chains are consumed in loops, so only
parentheses add recursion; their depth is capped by ``MAX_EXPRESSION_DEPTH``.
Values are computed while parsing; there is no AST.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

import numpy as np

from .config import MAX_EXPRESSION_DEPTH
from .types import (
    EmptyExpression,
    ExpressionTooDeep,
    UnexpectedEnd,
    UnexpectedToken,
    UnknownVariable,
    UnmatchedParen,
    VariableEntry,
)
from .utils.parsing import is_identifier_token, to_float

logger = logging.getLogger(__name__)


def apply_operator(op: str, a: float, b: float) -> float:
    """Apply a binary operator with IEEE-754 semantics (1/0 -> inf, 0/0 -> nan)."""
    with np.errstate(all="ignore"):
        if op == "+":
            value = np.add(a, b)
        elif op == "-":
            value = np.subtract(a, b)
        elif op == "*":
            value = np.multiply(a, b)
        elif op == "/":
            value = np.divide(a, b)
        elif op == "^":
            value = np.power(a, b)
        else:
            raise UnexpectedToken(op)
    return float(value)


class Parser:
    """Single-use parser over one token sequence."""

    def __init__(
        self,
        tokens: Sequence[str],
        variables: Mapping[str, VariableEntry],
        max_depth: Optional[int] = None,
    ):
        self.tokens = list(tokens)
        self.variables = variables
        self.position = 0
        self.depth = 0  # open parentheses
        self.max_depth = MAX_EXPRESSION_DEPTH if max_depth is None else max_depth

    def peek(self) -> Optional[str]:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def advance(self) -> Optional[str]:
        tok = self.peek()
        self.position += 1
        return tok

    def parse(self) -> float:
        if not self.tokens:
            raise EmptyExpression()
        value = self.parse_add_sub()
        trailing = self.peek()
        if trailing is not None:
            raise UnexpectedToken(trailing)
        return value

    def parse_add_sub(self) -> float:
        value = self.parse_mul_div()
        while self.peek() in ("+", "-"):
            op = self.advance()
            value = apply_operator(op, value, self.parse_mul_div())
        return value

    def parse_mul_div(self) -> float:
        value = self.parse_unary()
        while self.peek() in ("*", "/"):
            op = self.advance()
            value = apply_operator(op, value, self.parse_unary())
        return value

    def parse_signs(self) -> bool:
        """Consume a run of '+'/'-' and return True when it negates."""
        negative = False
        while self.peek() in ("+", "-"):
            if self.advance() == "-":
                negative = not negative
        return negative

    def parse_unary(self) -> float:
        negative = self.parse_signs()
        value = self.parse_power()
        return -value if negative else value

    def parse_power(self) -> float:
        # base ^ [signs] operand ^ [signs] operand ..., folded from the right
        # so 2^3^2 == 2^9 and 2^-3^2 == 2^-(3^2)
        base = self.parse_primary()
        exponents: list[tuple[bool, float]] = []
        while self.peek() == "^":
            self.advance()
            negative = self.parse_signs()
            exponents.append((negative, self.parse_primary()))

        if not exponents:
            return base
        value: Optional[float] = None
        for negative, operand in reversed(exponents):
            if value is not None:
                operand = apply_operator("^", operand, value)
            value = -operand if negative else operand
        return apply_operator("^", base, value)

    def parse_primary(self) -> float:
        tok = self.advance()
        if tok is None:
            if self.depth > 0:
                raise UnmatchedParen()
            raise UnexpectedEnd()

        if tok == "(":
            self.depth += 1
            if self.depth > self.max_depth:
                raise ExpressionTooDeep(self.max_depth)
            value = self.parse_add_sub()
            closing = self.advance()
            if closing is None:
                raise UnmatchedParen()
            if closing != ")":
                raise UnexpectedToken(closing)
            self.depth -= 1
            return value

        number = to_float(tok)
        if number is not None:
            return number

        if is_identifier_token(tok):
            entry = self.variables.get(tok)
            if entry is None:
                raise UnknownVariable(tok)
            return float(entry.value)

        raise UnexpectedToken(tok)


def calculate(tokens: Sequence[str], variables: Mapping[str, VariableEntry]) -> float:
    """Parse and evaluate ``tokens``; raises a ParseError subclass on bad input."""
    value = Parser(tokens, variables).parse()
    logger.debug("calculate %s -> %r", " ".join(tokens), value)
    return value
