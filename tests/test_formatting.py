import json
import math
import unittest

import pytest

from rcalc_pkg.api import evaluate_input
from rcalc_pkg.plotting import HAS_MATPLOTLIB, format_plot_table, render_plot
from rcalc_pkg.types import EvalResult, HistoryEntry, PlotError, VariableEntry
from rcalc_pkg.utils.formatting import (
    format_eval_result,
    format_history_entry,
    format_number,
    format_variable,
)
from rcalc_pkg.variables import VariableEnvironment


class TestFormatNumber(unittest.TestCase):
    def test_integers_drop_decimal_point(self):
        self.assertEqual(format_number(4.0), "4")
        self.assertEqual(format_number(-69.0), "-69")
        self.assertEqual(format_number(0.0), "0")

    def test_fractions(self):
        self.assertEqual(format_number(1.92), "1.92")
        self.assertEqual(format_number(0.1 + 0.2), "0.3")
        self.assertEqual(format_number(2.0 / 3.0, precision=4), "0.6667")

    def test_non_finite(self):
        self.assertEqual(format_number(math.inf), "inf")
        self.assertEqual(format_number(-math.inf), "-inf")
        self.assertEqual(format_number(math.nan), "NaN")

    def test_large_values_use_exponent(self):
        self.assertEqual(format_number(1e300), "1e+300")


class TestFormatEntries(unittest.TestCase):
    def test_history_entries(self):
        self.assertEqual(format_history_entry(HistoryEntry("2+2", result=4.0)), "2+2 = 4")
        self.assertEqual(
            format_history_entry(HistoryEntry("asdf", error="Unknown variable: a")),
            "'asdf' resulted in error: Unknown variable: a",
        )
        self.assertEqual(
            format_history_entry(HistoryEntry("7x+1", plot_variable="x")),
            "7x+1 plotted over x",
        )

    def test_variable(self):
        self.assertEqual(format_variable("x", VariableEntry("x=2+3", 5.0)), "x = 5")


def test_eval_result_human():
    assert format_eval_result("2+2", EvalResult(ok=True, result=4.0)) == "4"
    assert format_eval_result("x=5", EvalResult(ok=True, result=5.0, variable="x")) == "x = 5"
    assert format_eval_result("q", EvalResult(ok=False, error="boom")) == "Error: boom"


def test_eval_result_json():
    payload = json.loads(format_eval_result("2+2", EvalResult(ok=True, result=4.0), "json"))
    assert payload == {"ok": True, "expression": "2+2", "result": 4.0}

    payload = json.loads(
        format_eval_result("1+", EvalResult(ok=False, error="Unexpected end of expression"), "json")
    )
    assert payload["ok"] is False
    assert payload["error"] == "Unexpected end of expression"


def test_eval_result_plot_table():
    result = evaluate_input("7x+1", VariableEnvironment(), domain=[0, 1])
    text = format_eval_result("7x+1", result)
    assert text.splitlines()[0] == "x | y"
    assert "0 | 1" in text
    assert "1 | 8" in text

    payload = json.loads(format_eval_result("7x+1", result, "json"))
    assert payload["plot_data"] == [[0.0, 1.0], [1.0, 8.0]]
    assert payload["variable"] == "x"


def test_plot_table_alignment():
    table = format_plot_table([(-10.0, -69.0), (9.0, 64.0)], "x")
    lines = table.splitlines()
    assert lines[0] == "  x | y"
    assert lines[2] == "-10 | -69"
    assert lines[3] == "  9 | 64"
    assert format_plot_table([]) == "(no samples)"


def test_render_plot_writes_image(tmp_path):
    pytest.importorskip("matplotlib")
    path = tmp_path / "plot.png"
    assert render_plot([(0.0, 1.0), (1.0, 8.0)], str(path), title="7x+1") == str(path)
    assert path.exists()
    assert path.stat().st_size > 0


def test_render_plot_without_samples(tmp_path):
    with pytest.raises(PlotError):
        render_plot([], str(tmp_path / "empty.png"))


@pytest.mark.skipif(HAS_MATPLOTLIB, reason="matplotlib is installed")
def test_render_plot_requires_matplotlib(tmp_path):
    with pytest.raises(PlotError, match="requires matplotlib"):
        render_plot([(0.0, 1.0)], str(tmp_path / "plot.png"))


def test_eval_result_json_non_finite():
    strict = {"parse_constant": lambda name: pytest.fail(f"non-standard {name}")}

    result = evaluate_input("1/0", VariableEnvironment())
    payload = json.loads(format_eval_result("1/0", result, "json"), **strict)
    assert payload["result"] == "inf"

    result = evaluate_input("0/0", VariableEnvironment())
    payload = json.loads(format_eval_result("0/0", result, "json"), **strict)
    assert payload["result"] == "nan"

    result = evaluate_input("1/x", VariableEnvironment(), domain=[0, 1])
    payload = json.loads(format_eval_result("1/x", result, "json"), **strict)
    assert payload["plot_data"] == [[0.0, "inf"], [1.0, 1.0]]
