from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .. import config
from ..api import evaluate_input
from ..config import VERSION
from ..persistence import load_state_or_default, reset_state, state_file_path
from ..session import CalculatorSession
from ..types import StateError
from ..utils.formatting import format_eval_result
from ..variables import VariableEnvironment
from .context import ReplContext

_logger = logging.getLogger(__name__)


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running rcalc health check...")
    print("-" * 50)

    try:
        import numpy

        print(f"[OK] NumPy {numpy.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] NumPy import failed: {e}")
        checks_failed += 1

    # Check basic evaluation
    try:
        result = evaluate_input("3((2+2)/5)^2", VariableEnvironment())
        if result.ok and abs(result.result - 1.92) < 1e-12:
            print("[OK] Basic evaluation works")
            checks_passed += 1
        else:
            print(f"[FAIL] Basic evaluation failed: expected 1.92, got {result}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Evaluation check failed: {e}")
        checks_failed += 1

    # Check plot sampling
    try:
        result = evaluate_input("7x+1", VariableEnvironment())
        if result.ok and result.plot_data and len(result.plot_data) > 0:
            print(f"[OK] Plot sampling works ({len(result.plot_data)} samples)")
            checks_passed += 1
        else:
            print(f"[FAIL] Plot sampling failed: {result}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Plot sampling check failed: {e}")
        checks_failed += 1

    try:
        import matplotlib

        print(f"[OK] Matplotlib {matplotlib.__version__} available")
        checks_passed += 1
    except ImportError:
        print("[WARN] Matplotlib not available (plot images disabled)")
        print("  To install: pip install matplotlib")

    try:
        print(f"[OK] State file: {state_file_path()}")
        checks_passed += 1
    except StateError as e:
        print(f"[FAIL] State directory unavailable: {e}")
        checks_failed += 1

    print("-" * 50)
    print(f"Health check complete: {checks_passed} passed, {checks_failed} failed")
    return 0 if checks_failed == 0 else 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rcalc", description="Expression calculator with variables and a vi-style editor"
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format for --eval: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )

    subparsers = parser.add_subparsers(dest="command")
    run_parser = subparsers.add_parser(
        "run", help="Start an interactive session (default)", description="rcalc run: interactive session"
    )
    run_parser.add_argument(
        "--plain", action="store_true", help="Use the line-based REPL instead of the terminal UI"
    )
    run_parser.add_argument(
        "--no-save", action="store_true", help="Do not save state after each evaluation"
    )
    run_parser.add_argument("--plot-file", type=str, help="Default image path for 'plot'")
    subparsers.add_parser(
        "clear", help="Remove the saved state", description="rcalc clear: remove the saved state"
    )
    return parser


def _run_eval(expr: str, output_format: str) -> int:
    expr = expr.strip()
    if not expr or expr == "=":
        print("Error: Empty input. Please enter a valid expression or assignment.")
        return 1
    state = load_state_or_default()
    result = evaluate_input(expr, VariableEnvironment(state.variables))
    print(format_eval_result(expr, result, output_format))
    return 0 if result.ok else 1


def _run_clear() -> int:
    try:
        path = reset_state()
    except StateError as e:
        print(f"Error: {e}")
        return 1
    print(f"Removed saved state at {path}")
    return 0


def _run_session(args: argparse.Namespace) -> int:
    state = load_state_or_default()
    session = CalculatorSession.from_state(
        state, autosave=False if getattr(args, "no_save", False) else None
    )
    if getattr(args, "plain", False):
        from .repl_core import REPL

        ctx = ReplContext(plot_file=getattr(args, "plot_file", None))
        REPL(session, ctx).start()
        return 0

    from .tui import run

    return run(session)


def main_entry(argv: Optional[Sequence[str]] = None) -> int:
    """
    Parse command-line arguments and dispatch.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Setup logging
    from ..logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    # Apply CLI configuration overrides
    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.eval_expr is not None:
        return _run_eval(args.eval_expr, args.format)
    if args.command == "clear":
        return _run_clear()

    _logger.debug("starting session (command=%s)", args.command or "run")
    return _run_session(args)
