from cellsheet.errors import DivideByZero


def add(left: int, right: int) -> int:
    return left + right


def subtract(left: int, right: int) -> int:
    return left - right


def multiply(left: int, right: int) -> int:
    return left * right


def divide(left: int, right: int) -> int:
    """Integer division truncating toward zero: 7 / 2 = 3 and -7 / 2 = -3.

    Python's `//` floors instead, so we divide the magnitudes and restore the
    sign ourselves.
    """
    if right == 0:
        raise DivideByZero(f"Division by zero: {left} / {right}")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def negate(value: int) -> int:
    return -value
