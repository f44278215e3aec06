from typing import Callable, List, Optional

from cellsheet.errors import ParseError
from .tokenizer import Token, TokenType, FormulaTokenizer
from .ast import (
    ASTNode,
    BinaryOperation,
    Constant,
    UnaryOperation,
)
from .utils import extract_cell_reference


# Helper function to parse a formula string into an AST.
def parse_formula(formula: str, start: int = 0, end: int | None = None) -> ASTNode:
    """Helper function to parse a formula (or the inclusive range
    `[start, end]` of it) into an AST."""
    tokens = FormulaTokenizer(formula, start, end).tokenize()
    return FormulaParser(tokens).parse()


class FormulaParser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.current = 0

    def parse(self) -> ASTNode:
        """Parse tokens into an AST. An empty formula evaluates to 0."""
        self.current = 0
        if not self.tokens:
            return Constant(0)

        node = self.parse_expression()

        trailing = self.peek()
        if trailing is not None:
            raise ParseError(
                f"Unexpected token: {trailing.value!r} at position {trailing.position}"
            )
        return node

    # We call .peek() and .read() very often, so we duplicate code to avoid
    # unnecessary function calls.
    def peek(self) -> Optional[Token]:
        """Look at the current token without consuming it."""
        if self.current >= len(self.tokens):
            return None
        return self.tokens[self.current]

    def read(self) -> Token:
        """Consume and return the current token."""
        if self.current >= len(self.tokens):
            raise ParseError("Unexpected end of formula")
        tok = self.tokens[self.current]
        self.current += 1
        return tok

    def read_if_match(self, *types: TokenType) -> Optional[Token]:
        """Consume and return current token if it matches any of the given types."""
        token = self.peek()
        if token is not None and token.type in types:
            self.current += 1
            return token
        return None

    def _parse_binary_operation(
        self, parse_operand: Callable[[], ASTNode], valid_operators: set[str]
    ) -> ASTNode:
        """Parse a left-associative chain of operands joined by `valid_operators`."""
        left = parse_operand()

        while True:
            next_tok = self.peek()
            if (
                not next_tok
                or next_tok.type != TokenType.OPERATOR
                or next_tok.value not in valid_operators
            ):
                break

            self.read()  # consume operator
            right = parse_operand()
            left = BinaryOperation(left=left, operator=next_tok.value, right=right)

        return left

    def parse_expression(self) -> ASTNode:
        """Parse an expression (lowest precedence: addition/subtraction)."""
        return self._parse_binary_operation(self.parse_term, {"+", "-"})

    def parse_term(self) -> ASTNode:
        """Parse multiplication/division (*, /)."""
        return self._parse_binary_operation(self.parse_factor, {"*", "/"})

    def parse_factor(self) -> ASTNode:
        """Parse a factor (highest precedence: numbers, references, parentheses)."""
        token = self.peek()
        if token is None:
            raise ParseError("Unexpected end of formula")

        if token.type == TokenType.NUMBER:
            self.read()
            return Constant(int(token.value))

        elif token.type == TokenType.IDENTIFIER:
            self.read()
            ref = extract_cell_reference(token.value)
            if not ref:
                raise ParseError(
                    f"Invalid cell reference: {token.value} at position {token.position}"
                )
            return ref

        elif token.type == TokenType.OPERATOR and token.value in ["+", "-"]:
            operator = self.read().value
            operand = self.parse_factor()
            return UnaryOperation(operator=operator, operand=operand)

        elif token.type == TokenType.LPAREN:
            self.read()  # consume '('
            expr = self.parse_expression()
            if not self.read_if_match(TokenType.RPAREN):
                raise ParseError("Expected closing parenthesis ')'")
            return expr

        raise ParseError(
            f"Unexpected token: {token.type.name} at position {token.position}"
        )
