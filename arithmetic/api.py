"""Entry points used by the shell and by any other caller.

Every call starts from scratch: nothing is cached or shared between calls.
"""
import logging
from dataclasses import dataclass

from arithmetic.parser import ParserError, parse
from arithmetic.runtime import CalcArithmeticError, evaluate
from arithmetic.tokenizer import LexError, Token, tokenize

logger = logging.getLogger(__name__)


@dataclass
class EvaluationError(Exception):
    errmsg: str
    cause: Exception

    def __str__(self) -> str:
        return self.errmsg


def evaluate_text(code: str) -> float:
    """Tokenize, parse and evaluate ``code``.

    Lexical, syntax and arithmetic failures, and input nested deeper than the
    interpreter can follow, are all raised as :class:`EvaluationError` with the
    original error available as ``cause``.
    """
    try:
        expression = parse(code)
        result = evaluate(expression)
    except (LexError, ParserError, CalcArithmeticError) as e:
        logger.debug("Evaluation of %r failed with %s", code, type(e).__name__)
        raise EvaluationError(str(e), cause=e) from e
    except RecursionError as e:
        logger.debug("Evaluation of %r failed with %s", code, type(e).__name__)
        raise EvaluationError("Expression nested too deeply", cause=e) from e
    logger.debug("Evaluated %r to %r", code, result)
    return result


def tokenize_text(code: str) -> list[Token]:
    return tokenize(code)


def describe_tokens(code: str) -> list[str]:
    return [str(t) for t in tokenize_text(code)]
