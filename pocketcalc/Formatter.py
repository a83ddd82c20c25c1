# Formatter.py
"""
String helpers shared by the buffer, the engine and the UI.

- plain_string():   Decimal -> "12.5" style text (no exponent, no trailing zeros)
- round_result():   rounds a result to a fixed number of fractional digits
- group_thousands() / ungroup(): display-only digit grouping
"""

import re
from decimal import Decimal, Context, ROUND_HALF_UP

# Results are rounded to this many fractional digits before display
DEFAULT_DECIMAL_PLACES = 10

# Strings that are never grouped
PASSTHROUGH = ("", "0", "Error", "Undefined")

_LITERAL = re.compile(r"\d+(?:\.\d*)?")


def strip_trailing_zeros(value):
    """Drop trailing fractional zeros without touching the integer digits."""
    sign, digits, exponent = value.as_tuple()
    digits = list(digits)
    while exponent < 0 and len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    return Decimal((sign, tuple(digits), exponent))


def plain_string(value):
    """Canonical text for a Decimal: no exponent, no trailing zeros, no '-0'."""
    if value.is_zero():
        return "0"
    return format(strip_trailing_zeros(value), "f")


def round_result(value, decimal_places=DEFAULT_DECIMAL_PLACES):
    """Round half-up to `decimal_places` fractional digits.

    Values that already fit are returned unchanged. The quantize context is
    sized from the value itself so big integers never trip InvalidOperation.
    """
    if value.as_tuple().exponent >= -decimal_places:
        return value
    rundungs_muster = Decimal(1).scaleb(-decimal_places)
    context = Context(prec=max(value.adjusted(), 0) + decimal_places + 2, rounding=ROUND_HALF_UP)
    return value.quantize(rundungs_muster, context=context)


def format_result(value, decimal_places=DEFAULT_DECIMAL_PLACES):
    """Round, then render canonically. This is what `calculate` shows."""
    return plain_string(round_result(value, decimal_places))


def group_thousands(number, separator=" "):
    """Insert `separator` every three integer digits: "1234567.89" -> "1 234 567.89"."""
    if number is None or number in PASSTHROUGH:
        return number

    integer_part, dot, fraction = number.partition(".")

    negative = integer_part.startswith("-")
    if negative:
        integer_part = integer_part[1:]

    groups = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)

    formatted = separator.join(groups)
    if negative:
        formatted = "-" + formatted
    return formatted + dot + fraction


def group_expression(expression, separator=" "):
    """Group every literal inside an expression, e.g. "12345+6789" -> "12 345+6 789"."""
    return _LITERAL.sub(lambda match: group_thousands(match.group(), separator), expression)


def ungroup(formatted, separator=" "):
    return formatted.replace(separator, "")
