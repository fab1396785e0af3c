import curses

import pytest

from rcalc_pkg.cli import tui
from rcalc_pkg.editor import Keys
from rcalc_pkg.session import CalculatorSession, Focus


class FakeScreen:
    def __init__(self, height=24, width=80):
        self.size = (height, width)
        self.writes = []
        self.cursor = None
        self.keys = []

    def getmaxyx(self):
        return self.size

    def erase(self):
        self.writes.clear()

    def addstr(self, row, col, text, attr=0):
        self.writes.append((row, col, text, attr))

    def keypad(self, flag):
        pass

    def get_wch(self):
        key = self.keys.pop(0)
        if isinstance(key, Exception):
            raise key
        return key

    def move(self, row, col):
        self.cursor = (row, col)

    def refresh(self):
        pass

    def text(self):
        return "\n".join(text for _, _, text, _ in self.writes)


@pytest.mark.parametrize(
    "code, key",
    [
        (27, Keys.ESC),
        (10, Keys.ENTER),
        (9, Keys.TAB),
        (127, Keys.BACKSPACE),
        (curses.KEY_LEFT, Keys.LEFT),
        (curses.KEY_BTAB, Keys.BACKTAB),
        (ord("x"), "x"),
        (ord("$"), "$"),
    ],
)
def test_translate_key(code, key):
    assert tui.translate_key(code) == key


def test_translate_unknown_key():
    assert tui.translate_key(1) is None
    assert tui.translate_key(curses.KEY_F1) is None
    assert tui.translate_key("\x00") is None
    assert tui.translate_key("\u0085") is None


@pytest.mark.parametrize(
    "ch, key",
    [
        ("é", "é"),
        ("π", "π"),
        (" ", " "),
        ("\x1b", Keys.ESC),
        ("\n", Keys.ENTER),
        ("\t", Keys.TAB),
        ("\x7f", Keys.BACKSPACE),
    ],
)
def test_translate_wide_char(ch, key):
    assert tui.translate_key(ch) == key


def test_draw_screen(monkeypatch):
    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
    session = CalculatorSession(autosave=False, domain=[0, 1])
    session.submit_line("x=2+3")
    session.submit_line("7y+1")
    session.editor.set_text("2x")

    screen = FakeScreen()
    tui.draw_screen(screen, session)
    text = screen.text()
    assert "-- INSERT --" in text
    assert "> 2x" in text
    assert "x = 5" in text
    assert "7y+1 plotted over y" in text
    assert "(1, 8)" in text
    assert screen.cursor == (2, 4)

    session.set_focus(Focus.HISTORY)
    tui.draw_screen(screen, session)
    assert "< 2x" in screen.text()


def test_draw_screen_tiny_terminal(monkeypatch):
    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
    session = CalculatorSession(autosave=False)
    session.submit_line("1+1")
    screen = FakeScreen(height=3, width=10)
    tui.draw_screen(screen, session)
    assert all(row < 3 for row, _, _, _ in screen.writes)


def test_main_loop_feeds_unicode_keys(monkeypatch):
    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
    monkeypatch.setattr(curses, "raw", lambda: None)
    monkeypatch.setattr(curses, "set_escdelay", lambda ms: None)
    session = CalculatorSession(autosave=False)
    screen = FakeScreen()
    screen.keys = [
        "1", "+", "é", curses.error("no input"), "\x7f", "2", "\n",
        "3", "π", "\x03",
    ]

    tui.main(screen, session)

    assert session.history[-1].expression == "1+2"
    assert session.history[-1].result == 3.0
    assert session.editor.text == "3π"
    assert screen.keys == []
