"""
Command handlers for the rcalc line REPL.
Anything that is not a command is evaluated as an expression by the REPL.
"""

import logging
from typing import Any

from .. import config
from ..persistence import reset_state
from ..plotting import format_plot_table, render_plot
from ..session import CalculatorSession
from ..types import PlotError, StateError
from ..utils.formatting import format_history_entry, format_variable

logger = logging.getLogger(__name__)

# Registry of non-math commands. Single letters are variable names, so no
# command is a single letter.
COMMAND_REGISTRY = {
    "help",
    "?",
    "quit",
    "exit",
    "vars",
    "variables",
    "history",
    "clear",
    "plot",
    "save",
    "debug",
}

HELP_TEXT = """\
rcalc - expression calculator

  2+3*2          evaluate (precedence: + - < * / < unary < ^)
  3(2+2)^2       implicit multiplication; letters are variables
  x=2+3          assign a single-letter variable
  7x+1           one unknown variable: sampled for plotting

Commands:
  vars           list variables
  history        list evaluated expressions
  plot [file]    save the latest samples as an image (needs matplotlib)
  clear          forget history, variables and the saved state
  save           write state to disk now
  debug on|off   toggle debug logging
  help, quit
"""


def print_help_text() -> None:
    print(HELP_TEXT)


def handle_command(text: str, ctx: Any, session: CalculatorSession) -> bool:
    """
    Attempt to handle the input text as a command.
    Returns True if handled, False otherwise.
    """
    raw_lower = text.lower().strip()
    if not raw_lower:
        return False
    word, _, rest = raw_lower.partition(" ")
    if word not in COMMAND_REGISTRY:
        return False

    if word in ("help", "?"):
        print_help_text()
        return True

    if word in ("vars", "variables"):
        _handle_show_variables(session)
        return True

    if word == "history":
        _handle_show_history(session)
        return True

    if word == "clear":
        _handle_clear(session)
        return True

    if word == "plot":
        _handle_plot(text.strip()[len("plot"):].strip(), ctx, session)
        return True

    if word == "save":
        session.save()
        print("State saved.")
        return True

    if word == "debug":
        _handle_debug_command(rest.strip(), ctx)
        return True

    # quit/exit are handled by the REPL loop itself
    return False


def _handle_show_variables(session: CalculatorSession) -> None:
    if not session.variables:
        print("No variables defined.")
        return
    for name in session.variables.sorted_names():
        print(f"  {format_variable(name, session.variables[name])}")


def _handle_show_history(session: CalculatorSession) -> None:
    if not session.history:
        print("History is empty.")
        return
    for i, entry in enumerate(session.history, start=1):
        print(f"  {i}: {format_history_entry(entry)}")


def _handle_clear(session: CalculatorSession) -> None:
    session.clear()
    try:
        reset_state()
    except StateError as e:
        logger.warning("Could not reset saved state: %s", e)
        print(f"Warning: {e}")
    print("Cleared history and variables.")


def _handle_plot(arg: str, ctx: Any, session: CalculatorSession) -> None:
    if session.plot_data is None:
        print("Nothing to plot yet. Enter an expression with one unknown, e.g. 7x+1")
        return
    target = arg or getattr(ctx, "plot_file", None) or config.PLOT_FILE
    variable = "x"
    for entry in reversed(session.history):
        if entry.plot_variable is not None:
            variable = entry.plot_variable
            break
    try:
        path = render_plot(session.plot_data, target, variable=variable)
    except PlotError as e:
        print(f"Error: {e}")
        print(format_plot_table(session.plot_data, variable))
        return
    print(f"Plot saved to: {path}")


def _handle_debug_command(arg: str, ctx: Any) -> None:
    if arg in ("on", "off"):
        ctx.debug_mode = arg == "on"
    else:
        ctx.debug_mode = not ctx.debug_mode
    level = logging.DEBUG if ctx.debug_mode else logging.WARNING
    logging.getLogger("rcalc_pkg").setLevel(level)
    print(f"Debug mode {'on' if ctx.debug_mode else 'off'}.")
