class SpreadsheetError(Exception):
    pass


class InvalidCellId(SpreadsheetError, ValueError):
    pass


class InvalidCellValue(SpreadsheetError, TypeError):
    pass


class TokenizerError(SpreadsheetError):
    pass


class ParseError(SpreadsheetError):
    pass


class EvaluationError(SpreadsheetError):
    pass


class DivideByZero(EvaluationError, ZeroDivisionError):
    pass


class CycleError(EvaluationError):
    pass
