"""Interactive calculator session.

``CalculatorSession`` owns the editor, the variable environment, the history
and the latest plot samples. Front ends (the line REPL, the curses UI, tests)
feed it keys or lines and read its state back; nothing else mutates it.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Optional

from . import config
from .api import evaluate_input
from .editor import CommandKind, EditorCommand, InputEditor, Keys, NO_COMMAND
from .persistence import write_state
from .types import AppState, EvalResult, HistoryEntry, StateError
from .variables import VariableEnvironment

logger = logging.getLogger(__name__)


class Focus(Enum):
    INPUT = "input"
    HISTORY = "history"
    VARIABLES = "variables"


_FOCUS_ORDER = [Focus.INPUT, Focus.HISTORY, Focus.VARIABLES]


class CalculatorSession:
    def __init__(
        self,
        state: Optional[AppState] = None,
        autosave: Optional[bool] = None,
        domain: Optional[Iterable[float]] = None,
    ):
        state = state or AppState()
        self.editor = InputEditor()
        self.variables = VariableEnvironment(state.variables)
        self.history: list[HistoryEntry] = list(state.history)
        self.plot_data: Optional[list[tuple[float, float]]] = state.plot_data
        self.autosave = config.AUTOSAVE if autosave is None else autosave
        self.domain = list(domain) if domain is not None else None
        self.focus = Focus.INPUT
        self.history_selected: Optional[int] = None
        self.variables_selected: Optional[int] = None
        self.last_yank: Optional[tuple[int, int]] = None

    @classmethod
    def from_state(cls, state: AppState, **kwargs) -> "CalculatorSession":
        return cls(state=state, **kwargs)

    def to_state(self) -> AppState:
        return AppState(
            history=list(self.history),
            variables=dict(self.variables),
            plot_data=list(self.plot_data) if self.plot_data is not None else None,
        )

    # --- evaluation --------------------------------------------------------

    def submit(self) -> Optional[EvalResult]:
        """Evaluate the editor text, record the outcome and reset the editor."""
        text = self.editor.text
        if not text.strip():
            return None

        result = evaluate_input(text, self.variables, self.domain)

        if not result.ok:
            self.history.append(HistoryEntry(expression=text, error=result.error))
        elif result.plot_data is not None:
            self.plot_data = result.plot_data
            self.history.append(HistoryEntry(expression=text, plot_variable=result.unknowns[0]))
        elif result.variable is not None:
            self.variables.assign(result.variable, text, result.result)
        else:
            self.history.append(HistoryEntry(expression=text, result=result.result))

        logger.info("submitted %r -> %s", text, result.error or "ok")
        self.editor.clear()
        self.set_focus(Focus.INPUT)
        if self.autosave:
            self.save()
        return result

    def submit_line(self, text: str) -> Optional[EvalResult]:
        self.editor.set_text(text)
        return self.submit()

    def save(self) -> None:
        try:
            write_state(self.to_state())
        except StateError as e:
            logger.warning("Could not save state: %s", e)

    def clear(self) -> None:
        self.history.clear()
        self.variables.clear()
        self.plot_data = None
        self.history_selected = None
        self.variables_selected = None

    # --- focus and list navigation ----------------------------------------

    def set_focus(self, focus: Focus) -> None:
        self.focus = focus
        if focus is Focus.HISTORY and self.history_selected is None and self.history:
            self.history_selected = 0
        elif focus is Focus.VARIABLES and self.variables_selected is None and self.variables:
            self.variables_selected = 0

    def cycle_focus(self, step: int) -> None:
        index = _FOCUS_ORDER.index(self.focus)
        self.set_focus(_FOCUS_ORDER[(index + step) % len(_FOCUS_ORDER)])

    def history_newest_first(self) -> list[HistoryEntry]:
        return list(reversed(self.history))

    def _move_selection(self, selected: Optional[int], length: int, step: int) -> Optional[int]:
        if length == 0:
            return None
        if selected is None:
            return 0
        return min(max(selected + step, 0), length - 1)

    def move_selection(self, step: int) -> None:
        if self.focus is Focus.HISTORY:
            self.history_selected = self._move_selection(
                self.history_selected, len(self.history), step
            )
        elif self.focus is Focus.VARIABLES:
            self.variables_selected = self._move_selection(
                self.variables_selected, len(self.variables), step
            )

    def recall_selected(self) -> bool:
        """Copy the selected history expression or variable definition into the editor."""
        text = None
        if self.focus is Focus.HISTORY and self.history_selected is not None:
            entries = self.history_newest_first()
            if self.history_selected < len(entries):
                text = entries[self.history_selected].expression
        elif self.focus is Focus.VARIABLES and self.variables_selected is not None:
            names = self.variables.sorted_names()
            if self.variables_selected < len(names):
                text = self.variables[names[self.variables_selected]].expression
        if text is None:
            return False
        self.editor.set_text(text)
        self.set_focus(Focus.INPUT)
        return True

    def recall_last(self) -> bool:
        if not self.history:
            return False
        self.editor.set_text(self.history[-1].expression)
        return True

    # --- key routing -------------------------------------------------------

    def handle_key(self, key: str) -> EditorCommand:
        if self.focus is not Focus.INPUT:
            self._handle_list_key(key)
            return NO_COMMAND

        command = self.editor.handle_key(key)
        kind = command.kind
        if kind is CommandKind.SUBMIT:
            self.submit()
        elif kind is CommandKind.EXIT_INPUT_MODE:
            self.set_focus(Focus.HISTORY)
        elif kind is CommandKind.INCREMENT_FOCUS:
            self.cycle_focus(1)
        elif kind is CommandKind.DECREMENT_FOCUS:
            self.cycle_focus(-1)
        elif kind is CommandKind.YANKED:
            self.last_yank = (command.start, command.end)
        elif key == Keys.UP:
            self.recall_last()
        return command

    def _handle_list_key(self, key: str) -> None:
        if key in ("j", Keys.DOWN):
            self.move_selection(1)
        elif key in ("k", Keys.UP):
            self.move_selection(-1)
        elif key == Keys.ENTER:
            self.recall_selected()
        elif key in ("i", Keys.ESC):
            self.set_focus(Focus.INPUT)
        elif key == Keys.TAB:
            self.cycle_focus(1)
        elif key == Keys.BACKTAB:
            self.cycle_focus(-1)
        elif key == Keys.LEFT:
            self.set_focus(Focus.HISTORY)
        elif key == Keys.RIGHT:
            self.set_focus(Focus.VARIABLES)
