import logging
from typing import Iterator

from openpyxl.worksheet.worksheet import Worksheet
from typing_extensions import Self

from cellsheet.interpreter import FormulaInterpreter
from cellsheet.types import CellValue, Formula, Literal, to_cell_value
from cellsheet.utils import normalize_cell_id


class Spreadsheet:
    """In-memory cell store holding integer literals and formulas.

    Cell ids are case-insensitive and ignore leading zeros in the row number,
    so `a1`, `A1` and `A0001` address the same cell. Literals and formulas
    live in separate maps; when a cell has both, the formula wins.
    """

    def __init__(self) -> None:
        self.literals: dict[str, int] = {}
        self.formulas: dict[str, str] = {}
        self.interpreter = FormulaInterpreter(
            lambda key: self.literals.get(key, 0), formula_lookup=self.formulas.get
        )

    def set_cell_value(self, cell_id: str, value: int | str | CellValue) -> None:
        """Store an integer, or a formula string starting with "=", in a cell."""
        key = normalize_cell_id(cell_id)

        match to_cell_value(value):
            case Literal(value=number):
                if key in self.formulas:
                    logging.warning(
                        f"Literal {number} stored in {key} is shadowed by its formula "
                        f"={self.formulas[key]}"
                    )
                self.literals[key] = number
            case Formula(text=text):
                self.formulas[key] = text

    def get_cell_value(self, cell_id: str) -> int:
        """Return the evaluated formula of a cell, else its literal, else 0."""
        key = normalize_cell_id(cell_id)

        formula = self.formulas.get(key)
        if formula is not None:
            return self.interpreter.evaluate_cell(key, formula)
        return self.literals.get(key, 0)

    def get_cell(self, cell_id: str) -> CellValue | None:
        """Return the stored value of a cell without evaluating it."""
        key = normalize_cell_id(cell_id)
        if key in self.formulas:
            return Formula(self.formulas[key])
        if key in self.literals:
            return Literal(self.literals[key])
        return None

    def evaluate(self, formula: str, start: int = 0, end: int | None = None) -> int:
        """Evaluate formula text, or the inclusive range `[start, end]` of it,
        against this spreadsheet. A leading "=" is ignored."""
        if formula.lstrip().startswith("="):
            # Blank it out so `start` and `end` keep pointing at the same characters
            formula = formula.replace("=", " ", 1)
        return self.interpreter.evaluate(formula, start, end)

    def cell_ids(self) -> list[str]:
        # Sorted by column, then row
        ids = set(self.literals) | set(self.formulas)
        return sorted(ids, key=_cell_sort_key)

    def __contains__(self, cell_id: object) -> bool:
        if not isinstance(cell_id, str):
            return False
        try:
            key = normalize_cell_id(cell_id)
        except ValueError:
            return False
        return key in self.literals or key in self.formulas

    def __len__(self) -> int:
        return len(set(self.literals) | set(self.formulas))

    def __iter__(self) -> Iterator[str]:
        return iter(self.cell_ids())

    @classmethod
    def from_worksheet(cls, ws: Worksheet) -> Self:
        # Avoid circular imports
        from cellsheet.reader import read_worksheet

        return read_worksheet(ws, sheet=cls())

    def to_worksheet(self, ws: Worksheet, evaluate: bool = False) -> Worksheet:
        # Avoid circular imports
        from cellsheet.writer import write_worksheet

        return write_worksheet(self, ws, evaluate=evaluate)


def _cell_sort_key(cell_id: str) -> tuple[int, str, int]:
    column = cell_id.rstrip("0123456789")
    return (len(column), column, int(cell_id[len(column) :]))
