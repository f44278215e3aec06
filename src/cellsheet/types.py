from typing import Callable, NamedTuple

from cellsheet.errors import InvalidCellValue


class Literal(NamedTuple):
    value: int


class Formula(NamedTuple):
    # Formula text without the leading "=", trimmed
    text: str


CellValue = Literal | Formula
CellResolver = Callable[[str], int]
FormulaLookup = Callable[[str], str | None]


def parse_formula_text(value: str) -> str:
    """Strip the leading "=" and surrounding whitespace of a formula."""
    if not value.startswith("="):
        raise InvalidCellValue(f"Formula must start with '=': {value!r}")
    return value[1:].strip()


def normalize_formula_text(text: str) -> str:
    """Trim a formula, dropping its leading "=" if it still has one."""
    text = text.strip()
    if text.startswith("="):
        text = text[1:].strip()
    return text


def to_cell_value(value: int | str | CellValue) -> CellValue:
    """Convert a raw value to a `CellValue`.

    Integers become literals and strings starting with "=" become formulas.
    `Literal` and `Formula` values get the same checks. Anything else raises `InvalidCellValue`.
    """
    match value:
        case Literal(value=bool()):
            raise InvalidCellValue(f"Unsupported literal value: {value.value!r}")
        case Literal(value=int()):
            return value
        case Formula(text=str() as text):
            return Formula(normalize_formula_text(text))
        case Literal() | Formula():
            raise InvalidCellValue(f"Unsupported cell value: {value!r}")
        case bool():
            # bool is a subclass of int, but TRUE/FALSE are not cell values here
            raise InvalidCellValue(f"Unsupported cell value: {value!r}")
        case int():
            return Literal(value)
        case str():
            return Formula(parse_formula_text(value))
        case _:
            raise InvalidCellValue(
                f"Unsupported cell value of type {type(value).__name__}: {value!r}"
            )
