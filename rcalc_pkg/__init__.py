"""rcalc package: tokenizer, parser, variables, modal editor, session and CLI."""

__version__ = "0.4.0"

from . import api, cli, config, editor, logging_config, parser, session, tokenizer, types
from .api import evaluate, evaluate_input, plot
from .editor import InputEditor, InputMode, Keys, Motion
from .inspector import inspect_unknown_variables
from .parser import calculate
from .session import CalculatorSession
from .tokenizer import tokenize
from .variables import VariableEnvironment, parse_assignment

__all__ = [
    "config",
    "parser",
    "tokenizer",
    "editor",
    "session",
    "cli",
    "types",
    "api",
    "logging_config",
    "tokenize",
    "calculate",
    "evaluate",
    "evaluate_input",
    "plot",
    "inspect_unknown_variables",
    "parse_assignment",
    "VariableEnvironment",
    "InputEditor",
    "InputMode",
    "Keys",
    "Motion",
    "CalculatorSession",
]
