"""Sampling and rendering for expressions with one free variable."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

import numpy as np

from .config import PLOT_STEP, PLOT_X_MAX, PLOT_X_MIN
from .parser import calculate
from .types import PlotError, VariableEntry
from .utils.formatting import format_number

logger = logging.getLogger(__name__)

try:
    import matplotlib

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False


def sample_domain(
    start: Optional[float] = None,
    stop: Optional[float] = None,
    step: Optional[float] = None,
) -> list[float]:
    """Evenly spaced x values in [start, stop). Defaults come from config."""
    start = PLOT_X_MIN if start is None else start
    stop = PLOT_X_MAX if stop is None else stop
    step = PLOT_STEP if step is None else step
    if step <= 0:
        raise ValueError(f"Plot step must be positive, got {step}")
    return [float(x) for x in np.arange(start, stop, step)]


def sample_expression(
    tokens: Sequence[str],
    variable: str,
    variables: Mapping[str, VariableEntry],
    domain: Optional[Iterable[float]] = None,
) -> list[tuple[float, float]]:
    """Evaluate ``tokens`` for each x in ``domain`` with ``variable`` bound to x.

    A ParseError from any sample propagates to the caller.
    """
    xs = sample_domain() if domain is None else list(domain)
    samples = []
    for x in xs:
        overlay = {variable: VariableEntry(expression=f"{variable}={x}", value=float(x))}
        scope = {**variables, **overlay}
        samples.append((float(x), calculate(tokens, scope)))
    logger.debug("sampled %d points over %s", len(samples), variable)
    return samples


def format_plot_table(samples: Sequence[tuple[float, float]], variable: str = "x") -> str:
    if not samples:
        return "(no samples)"
    left = [format_number(x) for x, _ in samples]
    right = [format_number(y) for _, y in samples]
    width = max(len(variable), *(len(s) for s in left))
    lines = [f"{variable:>{width}} | y"]
    lines.append("-" * (width + 1) + "+" + "-" * 12)
    lines.extend(f"{x:>{width}} | {y}" for x, y in zip(left, right))
    return "\n".join(lines)


def render_plot(
    samples: Sequence[tuple[float, float]],
    path: str,
    title: str = "",
    variable: str = "x",
) -> str:
    """Save a scatter plot of ``samples`` to ``path`` and return the path."""
    if not HAS_MATPLOTLIB:
        raise PlotError("Plotting requires matplotlib. Install with: pip install matplotlib")
    if not samples:
        raise PlotError("Nothing to plot")

    matplotlib.use("Agg")  # Non-GUI backend
    import matplotlib.pyplot as plt

    xs = np.array([x for x, _ in samples], dtype=float)
    ys = np.array([y for _, y in samples], dtype=float)

    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        ax.scatter(xs, ys, color="#2E86AB", s=18)
        ax.set_xlabel(variable, fontsize=12, fontweight="bold")
        ax.set_ylabel(f"f({variable})", fontsize=12, fontweight="bold")
        if title:
            ax.set_title(title, fontsize=14, fontweight="bold")
        ax.grid(True, alpha=0.3, linestyle="--")
        ax.axhline(y=0, color="k", linewidth=0.8, alpha=0.3)
        ax.axvline(x=0, color="k", linewidth=0.8, alpha=0.3)
        fig.tight_layout()
        fig.savefig(path, dpi=150, bbox_inches="tight")
    except (OSError, ValueError) as e:
        raise PlotError(f"Could not save plot to {path}: {e}") from e
    finally:
        plt.close(fig)
    logger.info("Plot saved to %s", path)
    return path
