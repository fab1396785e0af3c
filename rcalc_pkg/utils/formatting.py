import json
import logging
import math
from typing import Any, Optional

from .. import config
from ..types import EvalResult, HistoryEntry, VariableEntry, json_number

logger = logging.getLogger(__name__)


def format_number(num: float, precision: Optional[int] = None) -> str:
    """Format a float for display: integers without '.0', others trimmed to precision."""
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "inf" if num > 0 else "-inf"
    if num.is_integer() and abs(num) < 1e16:
        return str(int(num))
    digits = precision if precision is not None else config.OUTPUT_PRECISION
    text = f"{num:.{digits}g}"
    if "e" not in text and "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_history_entry(entry: HistoryEntry) -> str:
    if entry.error is not None:
        return f"'{entry.expression}' resulted in error: {entry.error}"
    if entry.plot_variable is not None:
        return f"{entry.expression} plotted over {entry.plot_variable}"
    return f"{entry.expression} = {format_number(entry.result)}"


def format_variable(name: str, entry: VariableEntry) -> str:
    return f"{name} = {format_number(entry.value)}"


def format_eval_result(expression: str, result: EvalResult, output_format: str = "human") -> str:
    """Render one evaluation for the one-shot CLI."""
    if output_format == "json":
        payload: dict[str, Any] = {"ok": result.ok, "expression": expression}
        if result.ok:
            payload["result"] = json_number(result.result)
            if result.variable:
                payload["variable"] = result.variable
            if result.plot_data is not None:
                payload["plot_data"] = [
                    [json_number(x), json_number(y)] for x, y in result.plot_data
                ]
                payload["variable"] = result.unknowns[0]
        else:
            payload["error"] = result.error
        return json.dumps(payload, allow_nan=False)

    if not result.ok:
        return f"Error: {result.error}"
    if result.plot_data is not None:
        from ..plotting import format_plot_table

        return format_plot_table(result.plot_data, result.unknowns[0])
    if result.variable:
        return f"{result.variable} = {format_number(result.result)}"
    return format_number(result.result)
