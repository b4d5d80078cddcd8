"""
Numeric parsing for form and store input.

`parse_number` is the strict step; `coerce_number` applies the store's
coerce-to-zero policy on top of it.
"""
import logging
import math
import re
from typing import Any, Union

from portfolio.exceptions import InvalidNumberError

logger = logging.getLogger(__name__)

Number = Union[int, float]

_STRIP_CHARS = re.compile(r"[,\s$]")


def parse_number(value: Any) -> Number:
    """
    Parse a number from user input.

    Accepts ints, floats and numeric strings such as "1,250,000" or "$400".
    Integral strings come back as int. Raises InvalidNumberError otherwise.
    """
    # bool is an int subclass but never a meaningful amount
    if value is None or isinstance(value, bool):
        raise InvalidNumberError(value)

    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            raise InvalidNumberError(value)
        return value

    if isinstance(value, str):
        cleaned = _STRIP_CHARS.sub("", value)
        if not cleaned:
            raise InvalidNumberError(value)
        try:
            return int(cleaned)
        except ValueError:
            pass
        try:
            parsed = float(cleaned)
        except ValueError:
            raise InvalidNumberError(value) from None
        if math.isnan(parsed) or math.isinf(parsed):
            raise InvalidNumberError(value)
        return parsed

    # numpy scalars and other number-likes
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise InvalidNumberError(value) from None
    if math.isnan(parsed) or math.isinf(parsed):
        raise InvalidNumberError(value)
    return int(parsed) if parsed.is_integer() else parsed


def coerce_number(value: Any, default: Number = 0) -> Number:
    """Parse a number, falling back to `default` for absent or invalid input."""
    try:
        return parse_number(value)
    except InvalidNumberError:
        if value is not None:
            logger.debug("Coercing non-numeric value %r to %r", value, default)
        return default


def coerce_count(value: Any) -> int:
    """Coerce a headcount: integral, never negative."""
    number = coerce_number(value)
    return max(int(number), 0)
