"""Variable environment and assignment parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, MutableMapping, Sequence

from .config import ASSIGNMENT
from .types import (
    AssignmentMissing,
    AssignmentMissingName,
    InvalidAssignmentTarget,
    VariableEntry,
)
from .utils.parsing import is_identifier_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assignment:
    var_name: str
    value_tokens: list[str]


def parse_assignment(tokens: Sequence[str]) -> Assignment:
    """Split ``name = expr`` tokens on the first '='.

    Raises:
        AssignmentMissing: no '=' token.
        AssignmentMissingName: '=' is the first token.
        InvalidAssignmentTarget: anything but one identifier before '='.
    """
    tokens = list(tokens)
    if ASSIGNMENT not in tokens:
        raise AssignmentMissing()

    index = tokens.index(ASSIGNMENT)
    if index == 0:
        raise AssignmentMissingName()

    target = tokens[:index]
    if len(target) != 1 or not is_identifier_token(target[0]):
        raise InvalidAssignmentTarget("".join(target))

    return Assignment(var_name=target[0], value_tokens=tokens[index + 1 :])


class VariableEnvironment(MutableMapping[str, VariableEntry]):
    """Name -> VariableEntry store consulted by the parser."""

    def __init__(self, entries: Mapping[str, VariableEntry] | None = None):
        self._entries: dict[str, VariableEntry] = dict(entries or {})

    def __getitem__(self, name: str) -> VariableEntry:
        return self._entries[name]

    def __setitem__(self, name: str, entry: VariableEntry) -> None:
        self._entries[name] = entry

    def __delitem__(self, name: str) -> None:
        del self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"VariableEnvironment({self._entries!r})"

    def assign(self, name: str, expression: str, value: float) -> VariableEntry:
        entry = VariableEntry(expression=expression, value=float(value))
        self._entries[name] = entry
        logger.debug("assigned %s = %r (%s)", name, entry.value, expression)
        return entry

    def value_of(self, name: str) -> float:
        return self._entries[name].value

    def sorted_names(self) -> list[str]:
        return sorted(self._entries)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {name: entry.to_dict() for name, entry in self._entries.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]]) -> "VariableEnvironment":
        return cls({name: VariableEntry.from_dict(dict(raw)) for name, raw in data.items()})
