"""Minimal curses front end driving the modal editor key by key."""

from __future__ import annotations

import curses
import locale
import logging
from typing import Optional, Union

from ..editor import InputMode, Keys
from ..session import CalculatorSession, Focus
from ..utils.formatting import format_history_entry, format_number, format_variable

logger = logging.getLogger(__name__)

CTRL_C = 3
ESCAPE = 27

_SPECIAL_KEYS = {
    ESCAPE: Keys.ESC,
    10: Keys.ENTER,
    13: Keys.ENTER,
    curses.KEY_ENTER: Keys.ENTER,
    9: Keys.TAB,
    curses.KEY_BTAB: Keys.BACKTAB,
    curses.KEY_BACKSPACE: Keys.BACKSPACE,
    127: Keys.BACKSPACE,
    8: Keys.BACKSPACE,
    curses.KEY_LEFT: Keys.LEFT,
    curses.KEY_RIGHT: Keys.RIGHT,
    curses.KEY_UP: Keys.UP,
    curses.KEY_DOWN: Keys.DOWN,
}

_MODE_LABELS = {
    InputMode.INSERT: "-- INSERT --",
    InputMode.NORMAL: "-- NORMAL --",
    InputMode.VISUAL: "-- VISUAL --",
}


def translate_key(code: Union[int, str]) -> Optional[str]:
    """Map a ``get_wch`` result to an editor key, or None if it means nothing to us.

    ``get_wch`` returns a str for typed characters (any code point) and an int
    for function keys.
    """
    if isinstance(code, str):
        if code.isprintable():
            return code
        code = ord(code)
        if code >= 128:
            return None
    if code in _SPECIAL_KEYS:
        return _SPECIAL_KEYS[code]
    if 32 <= code <= 126:
        return chr(code)
    return None


def _addstr(stdscr, row: int, col: int, text: str, attr: int = 0) -> None:
    height, width = stdscr.getmaxyx()
    if row >= height or col >= width:
        return
    try:
        stdscr.addstr(row, col, text[: max(width - col - 1, 0)], attr)
    except curses.error:
        pass


def draw_screen(stdscr, session: CalculatorSession) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    editor = session.editor

    _addstr(stdscr, 0, 0, "Enter to calculate, Esc for normal mode, Ctrl+C to quit")
    _addstr(stdscr, 1, 0, _MODE_LABELS[editor.mode], curses.A_BOLD)

    caret = "> " if session.focus is Focus.INPUT else "< "
    _addstr(stdscr, 2, 0, caret + editor.text)
    selection = editor.visual_range()
    if selection is not None:
        start, end = selection
        _addstr(stdscr, 2, 2 + start, editor.text[start : end + 1], curses.A_REVERSE)

    half = width // 2
    _addstr(stdscr, 4, 0, "History", curses.A_UNDERLINE if session.focus is Focus.HISTORY else 0)
    _addstr(stdscr, 4, half, "Variables", curses.A_UNDERLINE if session.focus is Focus.VARIABLES else 0)

    for i, entry in enumerate(session.history_newest_first()[: max(height - 6, 0)]):
        attr = curses.A_REVERSE if session.focus is Focus.HISTORY and i == session.history_selected else 0
        _addstr(stdscr, 5 + i, 0, format_history_entry(entry)[: half - 1], attr)

    row = 5
    for i, name in enumerate(session.variables.sorted_names()):
        attr = curses.A_REVERSE if session.focus is Focus.VARIABLES and i == session.variables_selected else 0
        _addstr(stdscr, row, half, format_variable(name, session.variables[name]), attr)
        row += 1

    if session.plot_data:
        row += 1
        _addstr(stdscr, row, half, "Samples", curses.A_UNDERLINE)
        for x, y in session.plot_data[: max(height - row - 2, 0)]:
            row += 1
            _addstr(stdscr, row, half, f"({format_number(x)}, {format_number(y)})")

    if session.focus is Focus.INPUT:
        curses.curs_set(1)
        stdscr.move(2, min(2 + editor.cursor, max(width - 1, 0)))
    else:
        curses.curs_set(0)
    stdscr.refresh()


def main(stdscr, session: CalculatorSession) -> None:
    curses.raw()
    curses.set_escdelay(25)
    stdscr.keypad(True)
    while True:
        draw_screen(stdscr, session)
        try:
            code = stdscr.get_wch()
        except curses.error:
            continue
        if code in (CTRL_C, chr(CTRL_C)):
            break
        key = translate_key(code)
        if key is None:
            continue
        session.handle_key(key)


def run(session: CalculatorSession) -> int:
    # get_wch decodes multibyte input using the locale encoding
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as e:
        logger.warning("Could not apply the user locale: %s", e)
    try:
        curses.wrapper(main, session)
    except curses.error as e:
        logger.error("Terminal UI unavailable: %s", e)
        print(f"Error: terminal UI unavailable ({e}). Try 'rcalc run --plain'.")
        return 1
    return 0
