import logging
from typing import Iterator, List, Optional, Tuple, Union

from .ast import (
    ASTNode,
    BinaryOperation,
    CellReference,
    Constant,
    UnaryOperation,
)
from cellsheet.errors import CycleError
from cellsheet.operators import add, divide, multiply, negate, subtract
from cellsheet.parser import FormulaParser, parse_formula
from cellsheet.tokenizer import FormulaTokenizer
from cellsheet.types import CellResolver, FormulaLookup
from cellsheet.utils import cell_references


class EvaluationStack:
    """Tracks the cells whose formulas are currently being evaluated."""

    def __init__(self):
        self.stack: List[str] = []

    def push(self, cell_id: str) -> None:
        """Add a cell to the stack."""
        self.stack.append(cell_id)

    def pop(self) -> None:
        """Remove the last cell from the stack."""
        self.stack.pop()

    def contains(self, cell_id: str) -> bool:
        return cell_id in self.stack

    def format_cycle_path(self, cell_id: str) -> str:
        """Format the evaluation stack into a readable cycle path, starting at
        the first occurrence of `cell_id`."""
        path = self.stack[self.stack.index(cell_id) :] + [cell_id]
        return " -> ".join(path)


# A formula being resolved: its cell (None for the formula passed to
# `evaluate`), its AST and the references still to visit
Frame = Tuple[Optional[str], ASTNode, Iterator[str]]


class FormulaInterpreter:
    def __init__(
        self, resolver: CellResolver, formula_lookup: FormulaLookup | None = None
    ):
        # Value of a cell that holds no formula
        self.resolver = resolver
        # Formula text of a cell, or None. Without it every reference goes
        # through `resolver`.
        self.formula_lookup = formula_lookup

    def evaluate(
        self,
        formula_or_node: Union[str, ASTNode],
        start: int = 0,
        end: int | None = None,
    ) -> int:
        """Evaluate a formula, the inclusive range `[start, end]` of it, or an
        already parsed AST node."""
        if isinstance(formula_or_node, str):
            tokens = FormulaTokenizer(formula_or_node, start, end).tokenize()
            node = FormulaParser(tokens).parse()
        else:
            node = formula_or_node
        return self._evaluate_with_dependencies(None, node)

    def evaluate_cell(self, cell_id: str, formula: str) -> int:
        """Evaluate the formula stored in `cell_id`, guarding against cycles."""
        return self._evaluate_with_dependencies(cell_id, parse_formula(formula))

    def _evaluate_with_dependencies(self, cell_id: str | None, node: ASTNode) -> int:
        """Evaluate `node` after every formula cell it depends on.

        Dependencies are walked depth-first with an explicit worklist, so long
        reference chains do not grow the Python stack. Each formula cell is
        evaluated once per call.
        """
        values: dict[str, int] = {}
        stack = EvaluationStack()
        frames: List[Frame] = [(cell_id, node, iter(cell_references(node)))]
        if cell_id is not None:
            stack.push(cell_id)

        while frames:
            current, current_node, references = frames[-1]
            ref = next(references, None)

            if ref is None:
                # All dependencies are known
                frames.pop()
                value = self._evaluate_node(current_node, values)
                if current is None:
                    return value
                stack.pop()
                values[current] = value
                logging.debug(f"{current} = {value}")
                continue

            if ref in values or self.formula_lookup is None:
                continue
            formula = self.formula_lookup(ref)
            if formula is None:
                continue

            if stack.contains(ref):
                raise CycleError(f"Detected cycle: {stack.format_cycle_path(ref)}")
            stack.push(ref)
            ref_node = parse_formula(formula)
            frames.append((ref, ref_node, iter(cell_references(ref_node))))

        assert cell_id is not None
        return values[cell_id]

    def _evaluate_node(self, node: ASTNode, values: dict[str, int]) -> int:
        """Evaluate an AST node. `values` holds the already evaluated formula
        cells."""

        if isinstance(node, Constant):
            return node.value

        elif isinstance(node, BinaryOperation):
            return self._evaluate_binary_op(node, values)

        elif isinstance(node, UnaryOperation):
            return self._evaluate_unary_op(node, values)

        elif isinstance(node, CellReference):
            return self._evaluate_cell_ref(node, values)

        raise ValueError(f"Unknown node type: {type(node)}")

    def _evaluate_binary_op(self, node: BinaryOperation, values: dict[str, int]) -> int:
        """Evaluate a binary operation."""
        left = self._evaluate_node(node.left, values)
        right = self._evaluate_node(node.right, values)

        match node.operator:
            case "+":
                return add(left, right)
            case "-":
                return subtract(left, right)
            case "*":
                return multiply(left, right)
            case "/":
                return divide(left, right)
            case _:
                raise ValueError(f"Unknown operator: {node.operator}")

    def _evaluate_unary_op(self, node: UnaryOperation, values: dict[str, int]) -> int:
        """Evaluate a unary operation."""
        value = self._evaluate_node(node.operand, values)

        match node.operator:
            case "+":
                return value
            case "-":
                return negate(value)
            case _:
                raise ValueError(f"Unknown unary operator: {node.operator}")

    def _evaluate_cell_ref(self, node: CellReference, values: dict[str, int]) -> int:
        """Evaluate a cell reference. Unset cells read as 0."""
        cell_id = node.coords()
        if cell_id in values:
            return values[cell_id]
        logging.debug(f"Resolving cell reference {cell_id}")
        return self.resolver(cell_id)
