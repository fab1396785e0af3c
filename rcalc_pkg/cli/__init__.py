from .app import _health_check
from .app import main_entry
from .repl_core import REPL

__all__ = ["main_entry", "REPL", "_health_check"]
