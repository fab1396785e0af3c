from dataclasses import dataclass
from typing import Optional


@dataclass
class ReplContext:
    """Holds the settings of the interactive REPL session."""
    plot_file: Optional[str] = None
    debug_mode: bool = False
