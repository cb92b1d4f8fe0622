import enum
from dataclasses import dataclass
from typing import cast

from arithmetic.tokenizer import Token, Tokenizer, TokenType
from arithmetic.utils import PrintableEnum, point_at


@dataclass
class ParserError(Exception):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        return "\n".join([f"[Parser error] {self.errmsg}", point_at(self.code, self.error_char_idx)])


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()


class UnaryOperator(PrintableEnum):
    NEG = enum.auto()
    POS = enum.auto()


@dataclass
class Literal:
    value: float


@dataclass
class BinaryOperation:
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


@dataclass
class UnaryOperation:
    operator: UnaryOperator
    operand: "Expression"


Expression = Literal | UnaryOperation | BinaryOperation


ADDITIVE_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
}

MULTIPLICATIVE_OPERATORS = {
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
}

UNARY_OPERATORS = {
    TokenType.PLUS: UnaryOperator.POS,
    TokenType.MINUS: UnaryOperator.NEG,
}

# Each level of parentheses costs four stack frames in the parser
MAX_NESTING_DEPTH = 100


class Parser:
    """Recursive descent parser with a single token of lookahead.

    Grammar, loosest binding first::

        expr   = term ( (PLUS | MINUS) term )*
        term   = factor ( (STAR | SLASH) factor )*
        factor = (PLUS | MINUS) factor | NUMBER | LPAREN expr RPAREN

    Binary operators of one level are folded left to right, so both levels are
    left-associative. Chains of unary operators are read in a loop and
    parentheses may nest at most MAX_NESTING_DEPTH levels deep. Tokens are
    pulled from the tokenizer only when the lookahead is consumed.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        self.tokenizer = Tokenizer(code)
        self.current: Token = self.tokenizer.next_token()
        self.depth = 0

    def parse(self) -> Expression:
        result = self._expr()
        if self.current.type is not TokenType.END_OF_INPUT:
            raise self._error(f"Trailing input: expected {TokenType.END_OF_INPUT}, found {self.current}")
        return result

    def _error(self, errmsg: str) -> ParserError:
        return ParserError(errmsg, code=self.code, error_char_idx=self.current.position)

    def _eat(self, token_type: TokenType) -> Token:
        token = self.current
        if token.type is not token_type:
            raise self._error(f"Unexpected token: expected {token_type}, found {token}")
        self.current = self.tokenizer.next_token()
        return token

    def _expr(self) -> Expression:
        result = self._term()
        while self.current.type in ADDITIVE_OPERATORS:
            operator = ADDITIVE_OPERATORS[self._eat(self.current.type).type]
            result = BinaryOperation(operator=operator, left=result, right=self._term())
        return result

    def _term(self) -> Expression:
        result = self._factor()
        while self.current.type in MULTIPLICATIVE_OPERATORS:
            operator = MULTIPLICATIVE_OPERATORS[self._eat(self.current.type).type]
            result = BinaryOperation(operator=operator, left=result, right=self._factor())
        return result

    def _factor(self) -> Expression:
        unary_operators: list[UnaryOperator] = []
        while self.current.type in UNARY_OPERATORS:
            unary_operators.append(UNARY_OPERATORS[self._eat(self.current.type).type])
        result = self._operand()
        for operator in reversed(unary_operators):
            result = UnaryOperation(operator=operator, operand=result)
        return result

    def _operand(self) -> Expression:
        token = self.current
        if token.type is TokenType.NUMBER:
            self._eat(TokenType.NUMBER)
            return Literal(cast(float, token.value))
        elif token.type is TokenType.LPAREN:
            if self.depth >= MAX_NESTING_DEPTH:
                raise self._error(f"Expression nested too deeply: more than {MAX_NESTING_DEPTH} levels of parentheses")
            self._eat(TokenType.LPAREN)
            self.depth += 1
            result = self._expr()
            self._eat(TokenType.RPAREN)
            self.depth -= 1
            return result
        else:
            raise self._error(
                f"Unexpected token: expected number, unary operator or {TokenType.LPAREN}, found {token}"
            )


def parse(code: str) -> Expression:
    return Parser(code).parse()
