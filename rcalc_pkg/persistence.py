"""Save and restore session state as JSON.

The file lives at ``$RCALC_STATE_DIR/state.json`` or, by default,
``$HOME/.config/rcalc/state.json``::

    {"history": [{"expression": "1+1", "result": 2.0, "error": null}],
     "variables": {"x": {"expression": "x=2+3", "value": 5.0}},
     "plot_data": [[0.0, 1.0], [1.0, 8.0]]}

Non-finite numbers are stored as the strings "inf", "-inf" and "nan" so the
file stays strict JSON.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from . import config
from .types import AppState, HistoryEntry, StateError, VariableEntry, json_number

logger = logging.getLogger(__name__)


def state_dir() -> Path:
    if config.STATE_DIR:
        return Path(config.STATE_DIR)
    home = os.getenv("HOME")
    if not home:
        raise StateError("HOME is not set; cannot locate the state directory")
    return Path(home) / ".config" / "rcalc"


def state_file_path() -> Path:
    return state_dir() / config.STATE_FILE_NAME


def create_state_dir() -> Path:
    directory = state_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StateError(f"Could not create {directory}: {e}") from e
    return directory


def state_to_dict(state: AppState) -> dict[str, Any]:
    return {
        "history": [entry.to_dict() for entry in state.history],
        "variables": {name: entry.to_dict() for name, entry in state.variables.items()},
        "plot_data": (
            [[json_number(x), json_number(y)] for x, y in state.plot_data]
            if state.plot_data is not None
            else None
        ),
    }


def state_from_dict(data: dict[str, Any]) -> AppState:
    try:
        history = [HistoryEntry.from_dict(raw) for raw in data.get("history") or []]
        variables = {
            str(name): VariableEntry.from_dict(raw)
            for name, raw in (data.get("variables") or {}).items()
        }
        raw_plot = data.get("plot_data")
        plot_data = (
            [(float(x), float(y)) for x, y in raw_plot] if raw_plot is not None else None
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise StateError(f"Malformed state: {e}") from e
    return AppState(history=history, variables=variables, plot_data=plot_data)


def write_state(state: AppState) -> Path:
    create_state_dir()
    path = state_file_path()
    try:
        path.write_text(json.dumps(state_to_dict(state), allow_nan=False), encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        raise StateError(f"Could not write {path}: {e}") from e
    logger.debug("state written to %s", path)
    return path


def read_state() -> AppState:
    path = state_file_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise StateError(f"No saved state at {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise StateError(f"Could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise StateError(f"Malformed state in {path}")
    return state_from_dict(data)


def load_state_or_default() -> AppState:
    """Saved state, or an empty one when nothing usable is on disk."""
    try:
        return read_state()
    except StateError as e:
        logger.info("Starting with empty state: %s", e)
        return AppState()


def reset_state() -> Path:
    """Delete the saved state file; a missing file is not an error."""
    path = state_file_path()
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise StateError(f"Could not remove {path}: {e}") from e
    create_state_dir()
    logger.info("state reset at %s", path)
    return path
