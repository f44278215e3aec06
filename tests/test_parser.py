import pytest

from cellsheet.ast import (
    BinaryOperation,
    CellReference,
    Constant,
    UnaryOperation,
)
from cellsheet.errors import ParseError
from cellsheet.parser import parse_formula


class TestFormulaParser:
    def test_simple_arithmetic(self):
        """Test parsing of basic arithmetic expressions."""
        # Test addition
        ast = parse_formula("1 + 2")
        assert isinstance(ast, BinaryOperation)
        assert ast.operator == "+"
        assert ast.left == Constant(1)
        assert ast.right == Constant(2)

        # Test multiplication with parentheses
        ast = parse_formula("(2 + 3) * 4")
        assert isinstance(ast, BinaryOperation)
        assert ast.operator == "*"
        assert ast.right == Constant(4)
        assert isinstance(ast.left, BinaryOperation)
        assert ast.left.operator == "+"

    def test_operator_precedence(self):
        """Test that operator precedence is correctly handled."""
        # Multiplication before addition
        ast = parse_formula("1 + 2 * 3")
        assert isinstance(ast, BinaryOperation)
        assert ast.operator == "+"
        assert ast.left == Constant(1)
        assert isinstance(ast.right, BinaryOperation)
        assert ast.right.operator == "*"

        # Left associativity: (8 / 4) / 2
        ast = parse_formula("8 / 4 / 2")
        assert ast == BinaryOperation(
            BinaryOperation(Constant(8), "/", Constant(4)), "/", Constant(2)
        )

        # Left associativity: (1 - 2) + 3
        ast = parse_formula("1 - 2 + 3")
        assert ast == BinaryOperation(
            BinaryOperation(Constant(1), "-", Constant(2)), "+", Constant(3)
        )

    def test_numbers_with_leading_zeros(self):
        assert parse_formula("007") == Constant(7)
        assert parse_formula("000") == Constant(0)

    def test_cell_references(self):
        """Test parsing of cell references."""
        ast = parse_formula("A1")
        assert isinstance(ast, CellReference)
        assert ast.column == "A"
        assert ast.row == 1

        # Case and leading zeros are normalized
        assert parse_formula("ab0012") == CellReference(column="AB", row=12)
        assert parse_formula("ab0012").coords() == "AB12"

    def test_unary_operators(self):
        assert parse_formula("-7") == UnaryOperation("-", Constant(7))
        assert parse_formula("+A1") == UnaryOperation("+", CellReference("A", 1))

        # Unary minus binds to the factor, not to the whole term
        ast = parse_formula("-7 / 2")
        assert ast == BinaryOperation(
            UnaryOperation("-", Constant(7)), "/", Constant(2)
        )

        # After another operator and inside parentheses
        ast = parse_formula("2 * -(3)")
        assert ast == BinaryOperation(
            Constant(2), "*", UnaryOperation("-", Constant(3))
        )
        assert parse_formula("(-1)") == UnaryOperation("-", Constant(1))

    def test_nested_parentheses(self):
        ast = parse_formula("((1 + 2) * (3 - A1))")
        assert ast == BinaryOperation(
            BinaryOperation(Constant(1), "+", Constant(2)),
            "*",
            BinaryOperation(Constant(3), "-", CellReference("A", 1)),
        )

    def test_index_range(self):
        """Only the inclusive range [start, end] is parsed."""
        assert parse_formula("(1+2)*3", 1, 3) == BinaryOperation(
            Constant(1), "+", Constant(2)
        )

    def test_empty_formula(self):
        assert parse_formula("") == Constant(0)
        assert parse_formula("   ") == Constant(0)

    def test_parse_errors(self):
        """Test that appropriate errors are raised for invalid formulas."""
        with pytest.raises(ParseError, match="Expected closing parenthesis"):
            parse_formula("(1 + 2")

        with pytest.raises(ParseError, match="Unexpected token"):
            parse_formula("1 + 2)")

        with pytest.raises(ParseError, match="Unexpected token"):
            parse_formula("1 2")

        with pytest.raises(ParseError, match="Unexpected end of formula"):
            parse_formula("1 +")

        with pytest.raises(ParseError, match="Unexpected token"):
            parse_formula("1 + * 2")

        with pytest.raises(ParseError, match="Unexpected token"):
            parse_formula("()")

    def test_invalid_cell_references(self):
        for formula in ["A", "A0", "A000", "A1B"]:
            with pytest.raises(ParseError, match="Invalid cell reference"):
                parse_formula(formula)
