from enum import Enum, auto
from typing import List, NamedTuple

from cellsheet.errors import TokenizerError


class TokenType(Enum):
    IDENTIFIER = auto()
    NUMBER = auto()
    OPERATOR = auto()
    LPAREN = auto()
    RPAREN = auto()


class Token(NamedTuple):
    type: TokenType
    value: str
    position: int


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_letter(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z"


class FormulaTokenizer:
    OPERATORS = "+-*/"

    def __init__(self, formula: str, start: int = 0, end: int | None = None):
        """Tokenize `formula[start:end + 1]`. Token positions are indices into
        the full formula."""
        self.formula = formula
        self.pos = start
        # `end` is inclusive
        self.length = len(formula) if end is None else min(end + 1, len(formula))

    def tokenize(self) -> List[Token]:
        """Tokenize the formula and return list of tokens."""
        tokens = []
        while self.pos < self.length:
            char = self.formula[self.pos]

            if char.isspace():
                self.pos += 1
                continue
            elif _is_digit(char):
                tokens.append(self._tokenize_number())
            elif _is_letter(char):
                tokens.append(self._tokenize_identifier())
            elif char in self.OPERATORS:
                tokens.append(Token(TokenType.OPERATOR, char, self.pos))
                self.pos += 1
            elif char == "(":
                tokens.append(Token(TokenType.LPAREN, char, self.pos))
                self.pos += 1
            elif char == ")":
                tokens.append(Token(TokenType.RPAREN, char, self.pos))
                self.pos += 1
            else:
                raise TokenizerError(
                    f"Unexpected character: {char} at position {self.pos}"
                )

        return tokens

    def _tokenize_identifier(self) -> Token:
        """Tokenize an identifier (a cell reference in valid formulas)."""
        start = self.pos
        while self.pos < self.length and (
            _is_letter(self.formula[self.pos]) or _is_digit(self.formula[self.pos])
        ):
            self.pos += 1

        return Token(TokenType.IDENTIFIER, self.formula[start : self.pos], start)

    def _tokenize_number(self) -> Token:
        """Tokenize an integer. Leading zeros are kept, e.g. `007`."""
        start = self.pos
        while self.pos < self.length and _is_digit(self.formula[self.pos]):
            self.pos += 1

        # Digits immediately followed by letters, e.g. `12A`
        if self.pos < self.length and _is_letter(self.formula[self.pos]):
            raise TokenizerError(
                f"Invalid number format at position {start}: "
                f"unexpected letter {self.formula[self.pos]}"
            )

        return Token(TokenType.NUMBER, self.formula[start : self.pos], start)
