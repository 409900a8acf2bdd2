# pretty.py
# Display rendering for parsed JSON value trees.
#
# Output follows the Java collection toString convention: maps render as
# {key=value, ...}, lists as [a, b], strings unquoted and unescaped. No
# indentation or line breaks. The rendering is lossy and not meant to be
# parsed back.

from decimal import Decimal
from typing import Any


def pretty_print(value: Any) -> str:
    """
    Render a value tree as display text.

    Handles every variant parse() produces (dict, list, str, Decimal, bool,
    None) plus tuples and plain int/float for hand-built trees.
    """
    # bool before numbers: True is an int
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return "{" + ", ".join(f"{pretty_print(k)}={pretty_print(v)}" for k, v in value.items()) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(pretty_print(v) for v in value) + "]"
    if isinstance(value, Decimal) and value.is_zero():
        # no negative zero in the display form; scale is kept (-0.0 -> 0.0)
        return str(value.copy_abs())
    return str(value)
