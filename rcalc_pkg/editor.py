"""Single-line editor with vi-style Insert, Normal and Visual modes.

State lives in an immutable ``EditorState``. Each mode has one pure handler
``(state, key) -> (state, command)``; ``InputEditor`` owns the current state
and is the only object that replaces it.

Cursor semantics:
- Insert: between characters, ``0..len``
- Normal/Visual: on a character, ``0..len-1`` (``0`` when the buffer is empty)

Keys are one-character strings for printable input, or one of the ``Keys``
constants for special keys. Positions are code-point indices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class InputMode(Enum):
    INSERT = "insert"
    NORMAL = "normal"
    VISUAL = "visual"


class Motion(Enum):
    LEFT = "left"
    RIGHT = "right"
    LINE_START = "line_start"
    LINE_END = "line_end"
    WORD_FORWARD = "word_forward"
    WORD_BACKWARD = "word_backward"


class Keys:
    """Names for non-printable keys."""

    ESC = "<esc>"
    ENTER = "<enter>"
    BACKSPACE = "<backspace>"
    LEFT = "<left>"
    RIGHT = "<right>"
    UP = "<up>"
    DOWN = "<down>"
    TAB = "<tab>"
    BACKTAB = "<backtab>"


class CommandKind(Enum):
    NONE = "none"
    SUBMIT = "submit"
    EXIT_INPUT_MODE = "exit_input_mode"
    INCREMENT_FOCUS = "increment_focus"
    DECREMENT_FOCUS = "decrement_focus"
    YANKED = "yanked"


@dataclass(frozen=True)
class EditorCommand:
    """What the caller should do after a key; ``start``/``end`` only for YANKED."""

    kind: CommandKind
    start: Optional[int] = None
    end: Optional[int] = None

    @classmethod
    def yanked(cls, start: int, end: int) -> "EditorCommand":
        return cls(CommandKind.YANKED, start, end)


NO_COMMAND = EditorCommand(CommandKind.NONE)
SUBMIT = EditorCommand(CommandKind.SUBMIT)
EXIT_INPUT_MODE = EditorCommand(CommandKind.EXIT_INPUT_MODE)
INCREMENT_FOCUS = EditorCommand(CommandKind.INCREMENT_FOCUS)
DECREMENT_FOCUS = EditorCommand(CommandKind.DECREMENT_FOCUS)


@dataclass(frozen=True)
class EditorState:
    text: str = ""
    cursor: int = 0
    mode: InputMode = InputMode.INSERT
    register: str = ""
    visual_anchor: Optional[int] = None
    pending_operator: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.text)


Transition = tuple[EditorState, EditorCommand]

_MOTION_KEYS = {
    Keys.LEFT: Motion.LEFT,
    "h": Motion.LEFT,
    Keys.RIGHT: Motion.RIGHT,
    "l": Motion.RIGHT,
    "0": Motion.LINE_START,
    "$": Motion.LINE_END,
    "w": Motion.WORD_FORWARD,
    "b": Motion.WORD_BACKWARD,
}


def motion_from_key(key: str) -> Optional[Motion]:
    return _MOTION_KEYS.get(key)


def is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _clamp_for_mode(state: EditorState) -> EditorState:
    length = state.length
    if state.mode is InputMode.INSERT:
        cursor = min(max(state.cursor, 0), length)
    else:
        cursor = 0 if length == 0 else min(max(state.cursor, 0), length - 1)
    if cursor == state.cursor:
        return state
    return replace(state, cursor=cursor)


# --- mode switches ---------------------------------------------------------


def switch_to_insert(state: EditorState) -> EditorState:
    return replace(
        state,
        mode=InputMode.INSERT,
        cursor=min(state.cursor, state.length),
        visual_anchor=None,
        pending_operator=None,
    )


def switch_to_normal(state: EditorState) -> EditorState:
    length = state.length
    if length == 0:
        cursor = 0
    elif state.mode is InputMode.INSERT:
        cursor = min(max(state.cursor - 1, 0), length - 1)
    else:
        cursor = min(state.cursor, length - 1)
    return replace(
        state,
        mode=InputMode.NORMAL,
        cursor=cursor,
        visual_anchor=None,
        pending_operator=None,
    )


def switch_to_visual(state: EditorState) -> EditorState:
    # Nothing to select in an empty buffer: stay in Normal
    if state.length == 0:
        return replace(state, cursor=0, visual_anchor=None, pending_operator=None)
    cursor = min(state.cursor, state.length - 1)
    return replace(
        state,
        mode=InputMode.VISUAL,
        cursor=cursor,
        visual_anchor=cursor,
        pending_operator=None,
    )


# --- insert-mode edits -----------------------------------------------------


def enter_char(state: EditorState, ch: str) -> EditorState:
    at = min(state.cursor, state.length)
    return replace(state, text=state.text[:at] + ch + state.text[at:], cursor=at + 1)


def backspace(state: EditorState) -> EditorState:
    if state.cursor == 0:
        return state
    at = min(state.cursor, state.length)
    return replace(state, text=state.text[: at - 1] + state.text[at:], cursor=at - 1)


def move_insert_left(state: EditorState) -> EditorState:
    return replace(state, cursor=max(state.cursor - 1, 0))


def move_insert_right(state: EditorState) -> EditorState:
    return replace(state, cursor=min(state.cursor + 1, state.length))


# --- normal-mode edits -----------------------------------------------------


def delete_under_cursor(state: EditorState) -> EditorState:
    if state.length == 0 or state.cursor >= state.length:
        return state
    text = state.text[: state.cursor] + state.text[state.cursor + 1 :]
    return _clamp_for_mode(replace(state, text=text))


def motion_target(state: EditorState, motion: Motion) -> int:
    """Where ``motion`` would put the cursor; always within ``0..len-1``."""
    text = state.text
    length = len(text)
    if length == 0:
        return 0

    i = min(state.cursor, length - 1)

    if motion is Motion.LEFT:
        return max(i - 1, 0)
    if motion is Motion.RIGHT:
        return min(i + 1, length - 1)
    if motion is Motion.LINE_START:
        return 0
    if motion is Motion.LINE_END:
        return length - 1

    if motion is Motion.WORD_FORWARD:
        j = i
        if is_word_char(text[j]):
            while j < length and is_word_char(text[j]):
                j += 1
        while j < length and not is_word_char(text[j]):
            j += 1
        return length - 1 if j >= length else j

    # WORD_BACKWARD
    if i == 0:
        return 0
    j = i - 1
    while j > 0 and not is_word_char(text[j]):
        j -= 1
    while j > 0 and is_word_char(text[j - 1]):
        j -= 1
    return j


def apply_motion(state: EditorState, motion: Motion) -> EditorState:
    return replace(state, cursor=motion_target(state, motion))


def visual_range(state: EditorState) -> Optional[tuple[int, int]]:
    """Inclusive ``(start, end)`` of the selection, or None outside Visual mode."""
    if state.length == 0 or state.visual_anchor is None:
        return None
    anchor = min(state.visual_anchor, state.length - 1)
    cursor = min(state.cursor, state.length - 1)
    return (anchor, cursor) if anchor <= cursor else (cursor, anchor)


def yank_visual_selection(state: EditorState) -> EditorState:
    selection = visual_range(state)
    if selection is None:
        return state
    start, end = selection
    return replace(state, register=state.text[start : end + 1])


def delete_visual_selection(state: EditorState) -> EditorState:
    selection = visual_range(state)
    if selection is None:
        return state
    start, end = selection
    text = state.text[:start] + state.text[end + 1 :]
    cursor = 0 if not text else min(start, len(text) - 1)
    return replace(state, text=text, cursor=cursor)


def yank_line(state: EditorState) -> EditorState:
    return replace(state, register=state.text)


def yank_span(state: EditorState, motion: Motion) -> Optional[tuple[int, int]]:
    """Half-open span ``[from, to)`` that ``y`` + ``motion`` copies.

    Word motions stop at word boundaries measured from the cursor (``yw``
    copies to the end of the current word, without the separator); other
    motions copy from the cursor to the motion target, inclusive.
    """
    text = state.text
    length = len(text)
    if length == 0:
        return None

    start = min(state.cursor, length - 1)

    if motion is Motion.WORD_FORWARD:
        end = start
        if not is_word_char(text[end]):
            # On a separator: copy through the next word
            while end < length and not is_word_char(text[end]):
                end += 1
        while end < length and is_word_char(text[end]):
            end += 1
        return start, min(max(end, start + 1), length)

    if motion is Motion.WORD_BACKWARD:
        begin = start
        if begin > 0:
            while begin > 0 and not is_word_char(text[begin]):
                begin -= 1
            while begin > 0 and is_word_char(text[begin - 1]):
                begin -= 1
        return begin, start + 1

    target = motion_target(state, motion)
    low, high = min(start, target), max(start, target)
    return low, min(high + 1, length)


def yank_with_motion(state: EditorState, motion: Motion) -> EditorState:
    span = yank_span(state, motion)
    if span is None:
        return replace(state, register="")
    start, end = span
    return replace(state, register=state.text[start:end])


def _paste_at(state: EditorState, at: int) -> EditorState:
    register = state.register
    text = state.text[:at] + register + state.text[at:]
    # Cursor lands on the last pasted character
    return _clamp_for_mode(replace(state, text=text, cursor=at + len(register) - 1))


def paste_after(state: EditorState) -> EditorState:
    if not state.register:
        return state
    at = 0 if state.length == 0 else min(state.cursor + 1, state.length)
    return _paste_at(state, at)


def paste_before(state: EditorState) -> EditorState:
    if not state.register:
        return state
    return _paste_at(state, min(state.cursor, state.length))


# --- per-mode key handlers -------------------------------------------------


def handle_insert_key(state: EditorState, key: str) -> Transition:
    if key == Keys.ESC:
        return switch_to_normal(state), NO_COMMAND
    if key == Keys.ENTER:
        return state, SUBMIT
    if key == Keys.BACKSPACE:
        return backspace(state), NO_COMMAND
    if key == Keys.LEFT:
        return move_insert_left(state), NO_COMMAND
    if key == Keys.RIGHT:
        return move_insert_right(state), NO_COMMAND
    if len(key) == 1 and key.isprintable():
        return enter_char(state, key), NO_COMMAND
    return state, NO_COMMAND


def _handle_pending_operator(state: EditorState, key: str) -> Transition:
    operator = state.pending_operator
    state = replace(state, pending_operator=None)

    if operator == "y":
        if key == "y":
            if state.length == 0:
                return state, NO_COMMAND
            return yank_line(state), EditorCommand.yanked(0, state.length - 1)
        motion = motion_from_key(key)
        if motion is not None:
            span = yank_span(state, motion)
            state = yank_with_motion(state, motion)
            if span is None:
                return state, NO_COMMAND
            return state, EditorCommand.yanked(span[0], span[1] - 1)

    # Unknown follow-up key (or Esc) just cancels the operator
    return state, NO_COMMAND


def handle_normal_key(state: EditorState, key: str) -> Transition:
    if state.pending_operator is not None:
        return _handle_pending_operator(state, key)

    if key == Keys.ESC:
        return state, EXIT_INPUT_MODE
    if key == Keys.ENTER:
        return state, SUBMIT
    if key == Keys.TAB:
        return state, INCREMENT_FOCUS
    if key == Keys.BACKTAB:
        return state, DECREMENT_FOCUS

    if key == "i":
        return switch_to_insert(state), NO_COMMAND
    if key == "a":
        cursor = 0 if state.length == 0 else min(state.cursor + 1, state.length)
        return switch_to_insert(replace(state, cursor=cursor)), NO_COMMAND
    if key == "I":
        return switch_to_insert(replace(state, cursor=0)), NO_COMMAND
    if key == "A":
        return switch_to_insert(replace(state, cursor=state.length)), NO_COMMAND
    if key == "v":
        return switch_to_visual(state), NO_COMMAND
    if key == "x":
        return delete_under_cursor(state), NO_COMMAND
    if key == "p":
        return paste_after(state), NO_COMMAND
    if key == "P":
        return paste_before(state), NO_COMMAND
    if key == "y":
        return replace(state, pending_operator="y"), NO_COMMAND

    motion = motion_from_key(key)
    if motion is not None:
        return apply_motion(state, motion), NO_COMMAND
    return state, NO_COMMAND


def handle_visual_key(state: EditorState, key: str) -> Transition:
    if key in (Keys.ESC, "v"):
        return switch_to_normal(state), NO_COMMAND
    if key == Keys.ENTER:
        return state, SUBMIT
    if key == "y":
        selection = visual_range(state)
        state = switch_to_normal(yank_visual_selection(state))
        if selection is None:
            return state, NO_COMMAND
        return state, EditorCommand.yanked(*selection)
    if key in ("d", "x"):
        return switch_to_normal(delete_visual_selection(state)), NO_COMMAND

    motion = motion_from_key(key)
    if motion is not None:
        return apply_motion(state, motion), NO_COMMAND
    return state, NO_COMMAND


KEY_HANDLERS: dict[InputMode, Callable[[EditorState, str], Transition]] = {
    InputMode.INSERT: handle_insert_key,
    InputMode.NORMAL: handle_normal_key,
    InputMode.VISUAL: handle_visual_key,
}


class InputEditor:
    """Owner of the current ``EditorState``; everything else gets read-only views."""

    def __init__(self, text: str = ""):
        self._state = EditorState(text=text, cursor=len(text))

    @classmethod
    def with_text(cls, text: str) -> "InputEditor":
        return cls(text)

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def text(self) -> str:
        return self._state.text

    @property
    def cursor(self) -> int:
        return self._state.cursor

    @property
    def mode(self) -> InputMode:
        return self._state.mode

    @property
    def register(self) -> str:
        return self._state.register

    @property
    def pending_operator(self) -> Optional[str]:
        return self._state.pending_operator

    def visual_range(self) -> Optional[tuple[int, int]]:
        return visual_range(self._state)

    def handle_key(self, key: str) -> EditorCommand:
        handler = KEY_HANDLERS[self._state.mode]
        self._state, command = handler(self._state, key)
        if command.kind is not CommandKind.NONE:
            logger.debug("key %r in %s -> %s", key, self._state.mode.value, command.kind.value)
        return command

    def apply_motion(self, motion: Motion) -> None:
        self._state = apply_motion(self._state, motion)

    def set_text(self, text: str) -> None:
        """Replace the buffer; cursor at the end, back in Insert mode. Register survives."""
        self._state = EditorState(text=text, cursor=len(text), register=self._state.register)

    def clear(self) -> None:
        self.set_text("")
