import enum
from dataclasses import dataclass, field
from typing import Iterator, Optional

from arithmetic.utils import PrintableEnum, point_at


@dataclass
class LexError(Exception):
    errmsg: str
    code: str
    error_char_idx: int

    @property
    def char(self) -> str:
        return self.code[self.error_char_idx]

    def __str__(self) -> str:
        return "\n".join([f"[Tokenizer error] {self.errmsg}", point_at(self.code, self.error_char_idx)])


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    END_OF_INPUT = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Optional[float] = None
    lexeme: str = field(default="", compare=False)
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        if self.type is TokenType.NUMBER:
            return f"{self.type}({self.value:g})"
        return str(self.type)


def _is_valid_in_number(s: str) -> bool:
    return (s.isascii() and s.isdigit()) or s == "."


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


class Tokenizer:
    """Produces tokens one at a time from ``code``.

    The cursor only moves forward. Once the input is exhausted every call to
    :meth:`next_token` returns an ``END_OF_INPUT`` token.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        self.pos = 0

    def next_token(self) -> Token:
        code = self.code
        while self.pos < len(code) and code[self.pos].isspace():
            self.pos += 1

        if self.pos >= len(code):
            return Token(type=TokenType.END_OF_INPUT, position=len(code))

        start = self.pos
        char = code[start]
        if _is_valid_in_number(char):
            number_end_idx = start + 1
            while number_end_idx < len(code) and _is_valid_in_number(code[number_end_idx]):
                number_end_idx += 1
            lexeme = code[start:number_end_idx]
            try:
                value = float(lexeme)
            except ValueError:
                raise LexError(f"Malformed number literal: {lexeme!r}", code=code, error_char_idx=start) from None
            self.pos = number_end_idx
            return Token(type=TokenType.NUMBER, value=value, lexeme=lexeme, position=start)
        elif char in SINGLE_CHAR_TOKENS:
            self.pos += 1
            return Token(type=SINGLE_CHAR_TOKENS[char], lexeme=char, position=start)
        else:
            raise LexError(f"Unexpected character: {char!r}", code=code, error_char_idx=start)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.END_OF_INPUT:
                return


def iter_tokens(code: str) -> Iterator[Token]:
    return iter(Tokenizer(code))


def tokenize(code: str) -> list[Token]:
    return list(iter_tokens(code))
