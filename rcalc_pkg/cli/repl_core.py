import logging
from typing import Optional

from ..config import VERSION
from ..plotting import format_plot_table
from ..session import CalculatorSession
from ..utils.formatting import format_number
from .context import ReplContext

logger = logging.getLogger(__name__)


class REPL:
    """
    Line-oriented front end: each line goes through the session's editor and
    is submitted as one expression.
    """
    def __init__(self, session: CalculatorSession, context: Optional[ReplContext] = None):
        self.session = session
        self.ctx = context if context else ReplContext()
        self.running = True
        self._setup_readline()

    def _setup_readline(self):
        try:
            import readline  # noqa: F401
        except ImportError:
            pass

    def start(self):
        """Main loop entry point."""
        print(f"rcalc v{VERSION} - type 'help' for commands, 'quit' to exit.")
        while self.running:
            self.loop_once()

    def loop_once(self):
        """Single iteration of the read-eval-print loop."""
        try:
            prompt = ">>> " if not self.ctx.debug_mode else "DEBUG>>> "
            try:
                raw = input(prompt)
            except EOFError:
                self.running = False
                return
            self.process_input(raw)
        except KeyboardInterrupt:
            print("\n[Interrupted] type 'quit' to exit")

    def process_input(self, text: str):
        """Dispatch input to commands or evaluation."""
        text = text.strip()
        if not text or text.startswith("#"):
            return

        if text.lower() in ("quit", "exit"):
            self.running = False
            return

        from .repl_commands import handle_command
        if handle_command(text, self.ctx, self.session):
            return

        result = self.session.submit_line(text)
        if result is None:
            return
        if not result.ok:
            print(f"Error: {result.error}")
        elif result.plot_data is not None:
            variable = result.unknowns[0]
            print(f"{text} sampled over {variable} (use 'plot' to save an image):")
            print(format_plot_table(result.plot_data, variable))
        elif result.variable is not None:
            print(f"{result.variable} = {format_number(result.result)}")
        else:
            print(format_number(result.result))
