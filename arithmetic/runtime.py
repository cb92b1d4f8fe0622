import operator
from dataclasses import dataclass
from typing import Callable

from arithmetic.parser import BinaryOperation, BinaryOperator, Expression, Literal, UnaryOperation, UnaryOperator


@dataclass
class CalcArithmeticError(ArithmeticError):
    errmsg: str

    def __str__(self) -> str:
        return self.errmsg


def _divide(a: float, b: float) -> float:
    if b == 0.0:
        raise CalcArithmeticError("Division by zero")
    return a / b


BINARY_OPERATION_IMPLS: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUB: operator.sub,
    BinaryOperator.MUL: operator.mul,
    BinaryOperator.DIV: _divide,
}

UNARY_OPERATION_IMPLS: dict[UnaryOperator, Callable[[float], float]] = {
    UnaryOperator.POS: operator.pos,
    UnaryOperator.NEG: operator.neg,
}


def evaluate(expression: Expression) -> float:
    """Reduces ``expression`` to a number, left operands first.

    Walks the tree with an explicit stack, so the depth of the tree is not
    limited by the interpreter's recursion limit.
    """
    results: list[float] = []
    stack: list[tuple[Expression, bool]] = [(expression, False)]
    while stack:
        node, operands_done = stack.pop()
        if isinstance(node, Literal):
            results.append(node.value)
        elif isinstance(node, UnaryOperation):
            if operands_done:
                results.append(UNARY_OPERATION_IMPLS[node.operator](results.pop()))
            else:
                stack.append((node, True))
                stack.append((node.operand, False))
        elif isinstance(node, BinaryOperation):
            if operands_done:
                right_res = results.pop()
                left_res = results.pop()
                results.append(BINARY_OPERATION_IMPLS[node.operator](left_res, right_res))
            else:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
        else:
            raise TypeError(f"Unexpected expression type: {node!r}")
    return results.pop()
