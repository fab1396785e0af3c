"""Shared data types and the error hierarchy for rcalc."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Union


class CalculatorError(Exception):
    """Base class for every recoverable rcalc error."""


class ParseError(CalculatorError):
    """Raised when a token sequence cannot be parsed or evaluated."""


class EmptyExpression(ParseError):
    def __init__(self) -> None:
        super().__init__("Empty expression")


class UnknownVariable(ParseError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown variable: {name}")


class UnknownVariables(ParseError):
    """More than one free variable in an expression."""

    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        super().__init__(f"Unknown variables: {', '.join(self.names)}")


class UnexpectedToken(ParseError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unexpected token: {token}")


class UnexpectedEnd(ParseError):
    def __init__(self) -> None:
        super().__init__("Unexpected end of expression")


class UnmatchedParen(ParseError):
    def __init__(self) -> None:
        super().__init__("Unmatched parenthesis")


class ExpressionTooDeep(ParseError):
    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Expression nested too deeply (limit {limit})")


class AssignmentError(CalculatorError):
    """Raised when an assignment line is malformed."""


class AssignmentMissing(AssignmentError):
    def __init__(self) -> None:
        super().__init__("No assignment found")


class AssignmentMissingName(AssignmentError):
    def __init__(self) -> None:
        super().__init__("Missing variable name before '='")


class InvalidAssignmentTarget(AssignmentError):
    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"Invalid assignment target: {target}")


class StateError(CalculatorError):
    """Raised when the saved state cannot be read or written."""


class PlotError(CalculatorError):
    """Raised when plot samples cannot be rendered."""


def json_number(value: Optional[float]) -> Union[float, str, None]:
    """JSON-safe form of a float: non-finite values become "inf", "-inf" or "nan".

    ``float()`` reads all three back, so saved state round-trips.
    """
    if value is None or math.isfinite(value):
        return value
    if math.isnan(value):
        return "nan"
    return "inf" if value > 0 else "-inf"


@dataclass(frozen=True)
class VariableEntry:
    expression: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"expression": self.expression, "value": json_number(self.value)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VariableEntry":
        return cls(expression=str(data["expression"]), value=float(data["value"]))


@dataclass
class HistoryEntry:
    """One submitted line: exactly one of result, error or plot_variable is set."""

    expression: str
    result: Optional[float] = None
    error: Optional[str] = None
    plot_variable: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "expression": self.expression,
            "result": json_number(self.result),
            "error": self.error,
        }
        if self.plot_variable is not None:
            data["plot_variable"] = self.plot_variable
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        result = data.get("result")
        entry = cls(
            expression=str(data.get("expression", "")),
            result=float(result) if result is not None else None,
            error=data.get("error"),
            plot_variable=data.get("plot_variable"),
        )
        if entry.result is None and entry.error is None and entry.plot_variable is None:
            raise ValueError(f"History entry {entry.expression!r} has no result, error or plot")
        return entry


@dataclass
class EvalResult:
    """Outcome of evaluating one submitted line."""

    ok: bool
    result: Optional[float] = None
    error: Optional[str] = None
    variable: Optional[str] = None  # assignment target
    unknowns: list[str] = field(default_factory=list)
    plot_data: Optional[list[tuple[float, float]]] = None

    @property
    def is_plot(self) -> bool:
        return self.ok and self.plot_data is not None


@dataclass
class AppState:
    history: list[HistoryEntry] = field(default_factory=list)
    variables: dict[str, VariableEntry] = field(default_factory=dict)
    plot_data: Optional[list[tuple[float, float]]] = None
