from cellsheet.errors import (
    CycleError,
    DivideByZero,
    InvalidCellId,
    InvalidCellValue,
    ParseError,
    SpreadsheetError,
    TokenizerError,
)
from cellsheet.spreadsheet import Spreadsheet
from cellsheet.types import CellValue, Formula, Literal

__all__ = [
    "CellValue",
    "CycleError",
    "DivideByZero",
    "Formula",
    "InvalidCellId",
    "InvalidCellValue",
    "Literal",
    "ParseError",
    "Spreadsheet",
    "SpreadsheetError",
    "TokenizerError",
]
