"""Parse/format boundary for numeric form text such as '35,000'"""

import math
import re
from typing import Union

# Leading float prefix, the way browsers' parseFloat reads form text
_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_formatted_number(value: Union[str, float, int, None]) -> float:
    """
    Lenient parse: strip thousands separators and read the leading number.

    Anything unparseable or non-finite becomes 0.0, matching the calculator forms.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMBER_PREFIX.match(value.replace(",", ""))
        if not match:
            return 0.0
        number = float(match.group(0))

    return number if math.isfinite(number) else 0.0


def parse_form_int(value: Union[str, float, int, None], default: int) -> int:
    """Truncate form input to an integer; zero or unparseable input gives the default"""
    return int(parse_formatted_number(value)) or default


def format_currency(amount: float) -> str:
    """Whole-dollar USD of the absolute amount, e.g. '$12,813'"""
    if math.isinf(amount):
        return "∞"
    if math.isnan(amount):
        return "-"
    return f"${abs(amount):,.0f}"
