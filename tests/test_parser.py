import math

import pytest

from rcalc_pkg.parser import Parser, calculate
from rcalc_pkg.tokenizer import tokenize
from rcalc_pkg.types import (
    EmptyExpression,
    ExpressionTooDeep,
    ParseError,
    UnexpectedEnd,
    UnexpectedToken,
    UnknownVariable,
    UnmatchedParen,
    VariableEntry,
)


def calc(text, variables=None):
    return calculate(tokenize(text), variables or {})


@pytest.mark.parametrize(
    "tokens, expected",
    [
        (["2", "*", "2"], 4.0),
        (["2.5", "*", "2"], 5.0),
        (["2", "+", "2"], 4.0),
        (["1.5", "+", "1", "+", "0.5"], 3.0),
        (["2", "-", "2"], 0.0),
        (["2.5", "-", "1", "-", "0.5"], 1.0),
        (["2", "/", "2"], 1.0),
        (["2.5", "/", "0.5", "/", "0.5"], 10.0),
        (["2", "^", "2"], 4.0),
        (["4", "^", "0.5"], 2.0),
    ],
)
def test_basic_arithmetic(tokens, expected):
    assert calculate(tokens, {}) == pytest.approx(expected)


def test_order_of_operations():
    assert calculate(["2", "+", "3", "*", "2"], {}) == pytest.approx(8.0)
    assert calculate(["2", "*", "3", "^", "2"], {}) == pytest.approx(18.0)


def test_power_is_right_associative():
    assert calculate(["2", "^", "3", "^", "2"], {}) == pytest.approx(512.0)


def test_leading_negative():
    assert calculate(["-", "2", "+", "2", "*", "2"], {}) == pytest.approx(2.0)


def test_unary_binds_looser_than_power_base():
    assert calc("-2^2") == pytest.approx(-4.0)
    assert calc("2^-2") == pytest.approx(0.25)
    assert calc("--3") == pytest.approx(3.0)
    assert calc("+3-+2") == pytest.approx(1.0)


def test_parentheses():
    assert calc("(2+2)^2") == pytest.approx(16.0)
    assert calc("3((2+2)/5)^2") == pytest.approx(1.92, abs=1e-12)
    assert calc("2*(3+4)") == pytest.approx(14.0)


def test_ieee_division_and_power():
    assert calc("1/0") == math.inf
    assert calc("-1/0") == -math.inf
    assert math.isnan(calc("0/0"))
    assert math.isnan(calc("(-8)^(1/3)"))
    assert calc("10^400") == math.inf


def test_variables_are_resolved():
    variables = {"x": VariableEntry(expression="x=2+3", value=5.0)}
    assert calc("2x+1", variables) == pytest.approx(11.0)


def test_unknown_variable_names_first_letter():
    with pytest.raises(UnknownVariable) as excinfo:
        calc("asdf")
    assert excinfo.value.name == "a"
    assert str(excinfo.value) == "Unknown variable: a"


def test_empty_expression():
    with pytest.raises(EmptyExpression):
        calculate([], {})


def test_unmatched_paren():
    for text in ["(2+3", "(", "(2+", "((1)", "-(", "2^(3*"]:
        with pytest.raises(UnmatchedParen):
            calc(text)


def test_stray_closing_paren():
    with pytest.raises(UnexpectedToken) as excinfo:
        calc(")2")
    assert excinfo.value.token == ")"


def test_trailing_token():
    with pytest.raises(UnexpectedToken) as excinfo:
        calc("(2+3))")
    assert excinfo.value.token == ")"
    with pytest.raises(UnexpectedToken):
        calc("2 3")


def test_assignment_sign_is_not_an_operand():
    with pytest.raises(UnexpectedToken) as excinfo:
        calc("2=3")
    assert excinfo.value.token == "="


def test_missing_operand():
    with pytest.raises(UnexpectedEnd):
        calc("2+")
    with pytest.raises(UnexpectedEnd):
        calc("-")


def test_lone_dot_is_not_a_number():
    with pytest.raises(UnexpectedToken):
        calc(".")


def test_errors_share_a_base_class():
    for text in ["", "q", "(1", ")", "1+"]:
        with pytest.raises(ParseError):
            calc(text)


def test_position_never_runs_past_end():
    parser = Parser(["(", "2"], {})
    with pytest.raises(UnmatchedParen):
        parser.parse()
    assert parser.position <= len(parser.tokens) + 1


def test_long_sign_runs():
    assert calc("-" * 1200 + "1") == 1.0
    assert calc("-" * 1201 + "1") == -1.0
    assert calc("2*" + "+-" * 700 + "3") == 6.0
    assert calc("2^" + "-" * 999 + "1") == pytest.approx(0.5)


def test_long_power_chains():
    assert calc("^".join(["1"] * 2000)) == 1.0
    assert calc("2^-3^2") == pytest.approx(2.0 ** -9)
    assert calc("(2^3)^2") == pytest.approx(64.0)


def test_nesting_limit():
    assert calc("(" * 100 + "7" + ")" * 100) == 7.0
    with pytest.raises(ExpressionTooDeep) as excinfo:
        calc("(" * 300 + "1" + ")" * 300)
    assert isinstance(excinfo.value, ParseError)
    assert excinfo.value.limit == 100


def test_nesting_limit_per_parser():
    with pytest.raises(ExpressionTooDeep):
        Parser(tokenize("((1))"), {}, max_depth=1).parse()
    assert Parser(tokenize("(1)+(2)"), {}, max_depth=1).parse() == 3.0
