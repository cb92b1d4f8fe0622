import pytest

from arithmetic.api import EvaluationError, evaluate_text
from arithmetic.parser import ParserError
from arithmetic.runtime import CalcArithmeticError
from arithmetic.tokenizer import LexError


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", 1.0),
        pytest.param("-1", -1.0),
        pytest.param("1+2", 3.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("-(1+2)", -3.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("1 * 4 + 5", 9.0),
        pytest.param("1 + 4 * 5", 21.0),
        pytest.param("10 / 5 / 2 / 2", 0.5),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24.0),
        pytest.param("80225/+2", 40112.5),
        # precedence
        pytest.param("2 + 3 * 4", 14.0),
        pytest.param("(2 + 3) * 4", 20.0),
        # associativity
        pytest.param("10 - 5 - 2", 3.0),
        pytest.param("2 * 3 / 4", 1.5),
        # unary
        pytest.param("--3", 3.0),
        pytest.param("+-3", -3.0),
        pytest.param("-3 + 4", 1.0),
        pytest.param("2 * -3", -6.0),
        pytest.param("1 - -1", 2.0),
        # literals
        pytest.param("(10 - 5) / 2.5", 2.0),
        pytest.param(".5 + 5.", 5.5),
        pytest.param("007", 7.0),
        pytest.param("  \t 4 \n", 4.0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: float) -> None:
    assert evaluate_text(code) == expected_ret_val


@pytest.mark.parametrize(
    "code, cause_type",
    [
        pytest.param("5 / 0", CalcArithmeticError),
        pytest.param("5 / (2 - 2)", CalcArithmeticError),
        pytest.param("1 / -0", CalcArithmeticError),
        pytest.param("2 + @", LexError),
        pytest.param("1.2.3", LexError),
        pytest.param("2 +", ParserError),
        pytest.param("(2 + 3", ParserError),
        pytest.param("2 + 3)", ParserError),
        pytest.param("()", ParserError),
        pytest.param("", ParserError),
        pytest.param("2 3", ParserError),
        pytest.param("2 (3)", ParserError),
        pytest.param("* 2", ParserError),
    ],
)
def test_eval_errors(code: str, cause_type: type) -> None:
    with pytest.raises(EvaluationError) as excinfo:
        evaluate_text(code)
    assert isinstance(excinfo.value.cause, cause_type)
    assert excinfo.value.__cause__ is excinfo.value.cause
    assert str(excinfo.value) == str(excinfo.value.cause)


def test_division_by_zero_message() -> None:
    with pytest.raises(EvaluationError, match="Division by zero"):
        evaluate_text("5 / 0")


def test_lex_error_references_character() -> None:
    with pytest.raises(EvaluationError) as excinfo:
        evaluate_text("2 + @")
    cause = excinfo.value.cause
    assert isinstance(cause, LexError)
    assert cause.char == "@"
    assert "'@'" in str(excinfo.value)


@pytest.mark.parametrize("code", ["2 + 3 * 4", "5 / 0", "2 +", "2 + @"])
def test_repeated_evaluation_is_stable(code: str) -> None:
    def run() -> object:
        try:
            return evaluate_text(code)
        except EvaluationError as e:
            return type(e.cause)

    first = run()
    for _ in range(3):
        assert run() == first


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("+".join(["1"] * 1500), 1500.0, id="long_sum"),
        pytest.param("*".join(["1"] * 1500), 1.0, id="long_product"),
        pytest.param("-" * 1200 + "1", 1.0, id="even_unary_chain"),
        pytest.param("-" * 1201 + "1", -1.0, id="odd_unary_chain"),
        pytest.param("1" + "- -1" * 1000, 1001.0, id="subtract_negatives"),
        pytest.param("(" * 100 + "1" + ")" * 100, 1.0, id="deep_parentheses"),
        pytest.param("(" * 50 + "-" * 500 + "2" + ")" * 50 + "+1" * 500, 502.0, id="mixed"),
    ],
)
def test_eval_long_and_deep_input(code: str, expected_ret_val: float) -> None:
    assert evaluate_text(code) == expected_ret_val


def test_eval_too_deeply_nested_parentheses() -> None:
    with pytest.raises(EvaluationError, match="nested too deeply") as excinfo:
        evaluate_text("(" * 400 + "1" + ")" * 400)
    assert isinstance(excinfo.value.cause, ParserError)
