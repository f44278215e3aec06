import re

import cellsheet.ast as ast
from cellsheet.errors import InvalidCellId

# Constants
# Letters, then a row number >= 1 with optional leading zeros
CELL_ID_REGEX = re.compile(r"([A-Za-z]+)0*([1-9][0-9]*)")
NUMBER_REGEX = re.compile(r"[0-9]+")


def validate_cell_id(cell_id: str) -> bool:
    """Return True if `cell_id` is a valid cell id, such as `A1`, `b12` or `AA007`."""
    return isinstance(cell_id, str) and CELL_ID_REGEX.fullmatch(cell_id) is not None


def is_number(value: str) -> bool:
    """Return True if `value` is an integer literal (leading zeros allowed)."""
    return NUMBER_REGEX.fullmatch(value) is not None


def extract_cell_reference(ref: str) -> ast.CellReference | None:
    """Parse a cell reference, returning None if invalid."""
    match = CELL_ID_REGEX.fullmatch(ref)
    if match:
        col, row = match.groups()
        return ast.CellReference(column=col.upper(), row=int(row))
    return None


def normalize_cell_id(cell_id: str) -> str:
    """Normalize a cell id to its canonical form: uppercase column, row
    without leading zeros. `a0010` becomes `A10`.

    Raises `InvalidCellId` if the id is malformed.
    """
    ref = extract_cell_reference(cell_id) if isinstance(cell_id, str) else None
    if ref is None:
        raise InvalidCellId(f"Cell id is not valid: {cell_id!r}")
    return ref.coords()


def cell_references(node: ast.ASTNode) -> list[str]:
    """Return the normalized ids of the cells referenced by `node`, in
    evaluation order. Repeated references are kept."""
    refs = []
    pending = [node]
    while pending:
        current = pending.pop()
        if isinstance(current, ast.CellReference):
            refs.append(current.coords())
        elif isinstance(current, ast.BinaryOperation):
            # Right first, so the left operand is visited first
            pending.append(current.right)
            pending.append(current.left)
        elif isinstance(current, ast.UnaryOperation):
            pending.append(current.operand)
    return refs
