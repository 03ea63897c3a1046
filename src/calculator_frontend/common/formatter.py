"""Format numeric values into bounded-width display strings."""
from decimal import ROUND_HALF_UP, Decimal
import math
from typing import Union

# Total number of digits the display keeps for plain decimal numbers
MAX_DISPLAY_DIGITS: int = 10

# Fractional digits of the mantissa in exponential notation
MANTISSA_DIGITS: int = 4

# Integers from this magnitude on are shown in exponential notation
EXPONENTIAL_THRESHOLD: float = 1e10

Number = Union[int, float]


def _to_exponential(num: float) -> str:
    """
    Render a number in exponential notation with a fixed mantissa precision.

    The mantissa is rounded half away from zero on the exact binary value.
    The exponent is unpadded and always signed, e.g. ``1.2346e+10``.

    :param float num: Finite number

    :return: Exponential representation
    :rtype: str
    """
    value = Decimal(num)
    exponent: int = value.adjusted()
    rounded = value.quantize(Decimal(1).scaleb(exponent - MANTISSA_DIGITS), rounding=ROUND_HALF_UP)
    if rounded.adjusted() > exponent:
        # Rounding carried into a new digit, e.g. 9.99995 -> 10.0000
        exponent += 1
        rounded = rounded.quantize(Decimal(1).scaleb(exponent - MANTISSA_DIGITS))
    return f"{rounded.scaleb(-exponent)}e{exponent:+d}"


def number_to_string(num: float) -> str:
    """
    Shortest round-trip representation of a number.

    Plain decimal notation is used between 1e-6 and 1e21, exponential notation
    outside that range. Integral values carry no fractional part.

    :param float num: Number to render

    :return: Canonical string form
    :rtype: str
    """
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"
    if num == 0:
        return "0"

    if 1e-6 <= abs(num) < 1e21:
        text = format(Decimal(repr(num)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    mantissa, exponent = repr(num).split("e")
    return f"{mantissa}e{int(exponent):+d}"


def format_number(value: Union[Number, str]) -> str:
    """
    Convert a numeric value into a display string of bounded width.

    Rules:
        - Integers below 1e10 in magnitude are shown as-is.
        - Larger integers use exponential notation with 4 mantissa digits.
        - Tiny non-integers, already exponential, get their mantissa rounded to 4 digits.
        - Other non-integers keep at most 10 digits in total, trailing zeros dropped.

    Formatting the numeric value of a formatted string yields the same string.

    Examples:
        - 1234567890 -> "1234567890"
        - 12345678901 -> "1.2346e+10"
        - 3.14159265358979 -> "3.141592654"

    :param value: Number, or numeric string
    :type value: int | float | str

    :return: Display string
    :rtype: str
    """
    num: float = float(value)

    if not math.isfinite(num):
        return number_to_string(num)

    if num.is_integer():
        if abs(num) >= EXPONENTIAL_THRESHOLD:
            return _to_exponential(num)
        return number_to_string(num)

    text: str = number_to_string(num)

    if "e" in text:
        mantissa, exponent = text.split("e")
        rounded = Decimal(float(mantissa)).quantize(Decimal(1).scaleb(-MANTISSA_DIGITS), rounding=ROUND_HALF_UP)
        return f"{rounded}e{exponent}"

    # Digits only, the sign is not counted: -2/3 keeps 9 fractional digits, not 8
    integer_digits: int = len(text.split(".")[0].lstrip("-"))
    if integer_digits > MAX_DISPLAY_DIGITS:
        return _to_exponential(num)

    # Round on the exact binary value, halves away from zero
    decimals: int = max(0, MAX_DISPLAY_DIGITS - integer_digits)
    rounded = Decimal(num).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    return number_to_string(float(rounded))
