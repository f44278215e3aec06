import logging

from openpyxl.worksheet.worksheet import Worksheet

from cellsheet.errors import ParseError, TokenizerError
from cellsheet.parser import parse_formula
from cellsheet.spreadsheet import Spreadsheet


def read_worksheet(ws: Worksheet, sheet: Spreadsheet | None = None) -> Spreadsheet:
    """Load the integer and formula cells of an openpyxl worksheet into a
    spreadsheet. Other values (text, floats, booleans, dates) and formulas
    outside the integer arithmetic grammar, such as `=SUM(A1:A2)`, are skipped."""
    if sheet is None:
        sheet = Spreadsheet()

    for row in ws.iter_rows():
        for cell in row:
            value = cell.value
            if value is None:
                continue
            # bool is a subclass of int
            if isinstance(value, int) and not isinstance(value, bool):
                sheet.set_cell_value(cell.coordinate, value)
            elif isinstance(value, str) and value.startswith("="):
                try:
                    parse_formula(value[1:])
                except (TokenizerError, ParseError) as e:
                    logging.warning(
                        f"Skipping {ws.title}!{cell.coordinate}: unsupported formula "
                        f"{value!r} ({e})"
                    )
                    continue
                sheet.set_cell_value(cell.coordinate, value)
            else:
                logging.warning(
                    f"Skipping {ws.title}!{cell.coordinate}: unsupported value {value!r}"
                )

    return sheet
