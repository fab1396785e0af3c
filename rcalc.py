#!/usr/bin/env python3
"""
rcalc: expression calculator with variables and a vi-style input editor

Main entry point for rcalc. This file serves as a thin wrapper that delegates
all functionality to the rcalc_pkg package.

Usage:
    python rcalc.py                    # Interactive terminal UI
    python rcalc.py run --plain        # Line-based REPL
    python rcalc.py -e "3(2+2)^2"      # Evaluate expression
    python rcalc.py clear              # Forget saved history and variables
    python rcalc.py --help             # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for rcalc.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from rcalc_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import rcalc_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
