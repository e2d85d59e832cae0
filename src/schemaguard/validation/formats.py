"""
Date, time and datetime-local format validation.

Integer-typed schemas carry epoch timestamps: the value must be a whole
number of at least 1. String values match a fixed pattern per format
unless a rich format validator is available for the path, in which case
it decides (the empty string is always accepted).
"""

import math
import re
from typing import Any, Dict, List, Mapping, Optional

from .context import ValidationContext
from .errors import ValidationError

DATE_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "date": re.compile(r"^(\d{4}\D\d{2}\D\d{2})?$"),
    "time": re.compile(r"^(\d{2}:\d{2}(?::\d{2})?)?$"),
    "datetime-local": re.compile(r"^(\d{4}\D\d{2}\D\d{2}[ T]\d{2}:\d{2}(?::\d{2})?)?$"),
}

DISPLAY_FORMATS = {
    "date": '"YYYY-MM-DD"',
    "time": '"HH:MM"',
    "datetime-local": '"YYYY-MM-DD HH:MM"',
}


def _message_key(fmt: str) -> str:
    return "error_" + fmt.replace("-", "_")


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        if isinstance(value, str) and value.strip().isdecimal():
            return int(value)
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def validate_epoch(fmt: str, value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    number = _as_number(value)
    if number is None:
        return [ctx.error(path, "format", _message_key(fmt), [DISPLAY_FORMATS[fmt]])]
    if number < 1 or number != math.floor(number):
        return [ctx.error(path, "format", "error_invalid_epoch")]
    return []


def validate_date_time(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    """
    Validate a value whose schema format is date, time or datetime-local.

    Args:
        schema: Schema with a date-kind ``format``
        value: Value to check
        path: Value path
        ctx: Validation context
    """
    fmt = schema["format"]
    if schema.get("type") == "integer":
        return validate_epoch(fmt, value, path, ctx)

    check = ctx.rich_format_validator(path) if ctx.rich_format_validator else None
    if check is not None:
        if value == "":
            return []
        try:
            matched = bool(check(value))
        except (TypeError, ValueError):
            matched = False
        if matched:
            return []
        return [ctx.error(path, "format", _message_key(fmt), [DISPLAY_FORMATS[fmt]])]

    if DATE_PATTERNS[fmt].fullmatch(str(value)):
        return []
    return [ctx.error(path, "format", _message_key(fmt), [DISPLAY_FORMATS[fmt]])]
