import argparse
import logging
import sys
from typing import Optional

from arithmetic.api import EvaluationError, describe_tokens, evaluate_text
from arithmetic.tokenizer import LexError

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Enter expression: "

BANNER = "\n".join(
    [
        "=== Simple Arithmetic Expression Calculator ===",
        "Supports: +, -, *, /, parentheses, and decimal numbers",
        "Enter 'quit' to exit, 'tokens <expr>' to see tokenization",
        "Examples: 2 + 3 * 4, (10 - 5) / 2.5, -3 + 4",
        "",
    ]
)

QUIT_COMMAND = "quit"
TOKENS_COMMAND = "tokens"


class QuitRequested(Exception):
    pass


def format_result(value: float) -> str:
    return f"{value:g}"


def show_tokens(code: str) -> str:
    try:
        descriptions = describe_tokens(code)
    except LexError as e:
        return f"Error: {e}"
    return f'Tokens for "{code}":\n' + " ".join(descriptions)


def show_result(code: str) -> str:
    try:
        return f"Result: {format_result(evaluate_text(code))}"
    except EvaluationError as e:
        return f"Error: {e}"


def handle_line(line: str) -> Optional[str]:
    """Returns the text to print in response to ``line``, if any.

    Raises :class:`QuitRequested` for the quit command.
    """
    line = line.strip()
    if not line:
        return None
    if line == QUIT_COMMAND:
        raise QuitRequested()
    command, _, rest = line.partition(" ")
    if command == TOKENS_COMMAND:
        rest = rest.strip()
        if not rest:
            return f"Usage: {TOKENS_COMMAND} <expression>"
        return show_tokens(rest)
    return show_result(line)


def run_repl(prompt: str = DEFAULT_PROMPT) -> None:
    print(BANNER)
    while True:
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        try:
            output = handle_line(line)
        except QuitRequested:
            break
        if output is not None:
            print(output)
            print()
    print("Goodbye!")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="arithmetic-repl",
        description="Evaluate arithmetic expressions. Without an expression, starts an interactive shell.",
        epilog="Put '--' before an expression that starts with '-', e.g. arithmetic-repl -- -3 + 4",
    )
    parser.add_argument("expression", nargs="*", help="expression to evaluate once instead of starting the shell")
    parser.add_argument("--tokens", action="store_true", help="print the tokens of the expression instead of its value")
    parser.add_argument("--prompt", default=DEFAULT_PROMPT, help="prompt shown by the interactive shell")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.expression:
        if args.tokens:
            parser.error("--tokens requires an expression")
        run_repl(prompt=args.prompt)
        return 0

    code = " ".join(args.expression)
    logger.debug("One-shot mode for %r", code)
    if args.tokens:
        try:
            print(" ".join(describe_tokens(code)))
        except LexError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    try:
        print(format_result(evaluate_text(code)))
    except EvaluationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
