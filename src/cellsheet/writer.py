from openpyxl.worksheet.worksheet import Worksheet

from cellsheet.spreadsheet import Spreadsheet
from cellsheet.types import Formula, Literal


def write_worksheet(
    sheet: Spreadsheet, ws: Worksheet, evaluate: bool = False
) -> Worksheet:
    """Write every cell of `sheet` into `ws`.

    Formulas are written as "=<formula>", or as their evaluated value when
    `evaluate` is set. Ids outside the worksheet bounds (columns past XFD)
    are rejected by openpyxl.
    """
    for cell_id in sheet.cell_ids():
        match sheet.get_cell(cell_id):
            case Formula(text=text):
                ws[cell_id] = sheet.get_cell_value(cell_id) if evaluate else f"={text}"
            case Literal(value=value):
                ws[cell_id] = value
    return ws
