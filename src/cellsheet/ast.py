from typing import NamedTuple


class BinaryOperation(NamedTuple):
    left: "ASTNode"
    operator: str
    right: "ASTNode"


class UnaryOperation(NamedTuple):
    operator: str
    operand: "ASTNode"


class CellReference(NamedTuple):
    column: str
    row: int

    def coords(self) -> str:
        return f"{self.column}{self.row}"


class Constant(NamedTuple):
    value: int


# Type alias for all possible AST nodes
ASTNode = BinaryOperation | UnaryOperation | CellReference | Constant
