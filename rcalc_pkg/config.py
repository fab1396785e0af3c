"""Centralized configuration for rcalc.

This module defines:
- Where session state is persisted and whether it is saved automatically
- Output formatting precision
- The sampling domain used when an expression has one free variable
- Logging defaults

Configuration can be overridden via:
- CLI flags (see cli/app.py)
- Environment variables (prefixed with RCALC_)
"""

import os
import re

VERSION = "0.4.0"

# State persistence
STATE_DIR = os.getenv("RCALC_STATE_DIR", "")  # empty -> $HOME/.config/rcalc
STATE_FILE_NAME = "state.json"
AUTOSAVE = os.getenv("RCALC_AUTOSAVE", "true").lower() == "true"

# Output formatting
OUTPUT_PRECISION = int(
    os.getenv("RCALC_OUTPUT_PRECISION", "12")
)  # significant digits

# Plot sampling (stop is exclusive: -10, 10, 1 samples -10..=9)
PLOT_X_MIN = float(os.getenv("RCALC_PLOT_X_MIN", "-10"))
PLOT_X_MAX = float(os.getenv("RCALC_PLOT_X_MAX", "10"))
PLOT_STEP = float(os.getenv("RCALC_PLOT_STEP", "1"))
PLOT_FILE = os.getenv("RCALC_PLOT_FILE", "rcalc_plot.png")

# Parser limits
MAX_EXPRESSION_DEPTH = int(
    os.getenv("RCALC_MAX_EXPRESSION_DEPTH", "100")
)  # nested parentheses

# Logging
LOG_LEVEL = os.getenv("RCALC_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

OPERATORS = ("+", "-", "*", "/", "^")
PHRASE_LIMITERS = ("(", ")")
ASSIGNMENT = "="

NUMBER_RE = re.compile(r"^(?:\d+\.?\d*|\.\d+)$")
