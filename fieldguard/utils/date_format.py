"""
Date format utilities for date_format rules.

Formats are written with single format characters ("Y-m-d", "d/m/Y H:i"),
or as strptime formats when they contain "%". Both are translated to
strptime directives for parsing and rendered back for the exact round-trip
check.
"""

import re
from collections.abc import Callable
from datetime import datetime

# Format character -> (strptime directive, renderer)
FORMAT_CHARACTERS: dict[str, tuple[str, Callable[[datetime], str]]] = {
    "d": ("%d", lambda dt: f"{dt.day:02d}"),
    "j": ("%d", lambda dt: str(dt.day)),
    "m": ("%m", lambda dt: f"{dt.month:02d}"),
    "n": ("%m", lambda dt: str(dt.month)),
    "Y": ("%Y", lambda dt: f"{dt.year:04d}"),
    "y": ("%y", lambda dt: f"{dt.year % 100:02d}"),
    "H": ("%H", lambda dt: f"{dt.hour:02d}"),
    "G": ("%H", lambda dt: str(dt.hour)),
    "h": ("%I", lambda dt: f"{dt.hour % 12 or 12:02d}"),
    "g": ("%I", lambda dt: str(dt.hour % 12 or 12)),
    "i": ("%M", lambda dt: f"{dt.minute:02d}"),
    "s": ("%S", lambda dt: f"{dt.second:02d}"),
    "u": ("%f", lambda dt: f"{dt.microsecond:06d}"),
    "A": ("%p", lambda dt: "AM" if dt.hour < 12 else "PM"),
    "a": ("%p", lambda dt: "am" if dt.hour < 12 else "pm"),
    "D": ("%a", lambda dt: dt.strftime("%a")),
    "l": ("%A", lambda dt: dt.strftime("%A")),
    "M": ("%b", lambda dt: dt.strftime("%b")),
    "F": ("%B", lambda dt: dt.strftime("%B")),
}

_STRPTIME_DIRECTIVE = re.compile(r"%(.)", re.DOTALL)


def _tokenize(date_format: str) -> list[tuple[bool, str]]:
    """Split a format into (is_directive, text) pairs; a backslash escapes a literal."""
    tokens = []
    escaped = False
    for char in date_format:
        if escaped:
            tokens.append((False, char))
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            tokens.append((char in FORMAT_CHARACTERS, char))
    return tokens


def format_directives(date_format: str) -> list[str]:
    """Return the strptime directives a format parses with, in order."""
    if "%" in date_format:
        return [f"%{char}" for char in _STRPTIME_DIRECTIVE.findall(date_format) if char != "%"]
    return [FORMAT_CHARACTERS[char][0] for is_directive, char in _tokenize(date_format) if is_directive]


def check_date_format(date_format: str) -> None:
    """
    Reject formats strptime cannot compile.

    strptime captures each directive once, so a format naming the same field
    twice ("d j", "Y Y") can never parse.

    Raises:
        ValueError: If a directive appears more than once
    """
    seen = set()
    for directive in format_directives(date_format):
        if directive in seen:
            raise ValueError(f"Date format '{date_format}' repeats the {directive} field")
        seen.add(directive)


def parse_with_format(text: str, date_format: str) -> datetime:
    """
    Parse text under a date format.

    Raises:
        ValueError: If the text does not parse under the format
    """
    if "%" in date_format:
        return datetime.strptime(text, date_format)

    directives = "".join(
        FORMAT_CHARACTERS[char][0] if is_directive else char
        for is_directive, char in _tokenize(date_format)
    )
    return datetime.strptime(text, directives)


def render_with_format(moment: datetime, date_format: str) -> str:
    """Render a datetime under the same format parse_with_format accepts."""
    if "%" in date_format:
        return moment.strftime(date_format)

    return "".join(
        FORMAT_CHARACTERS[char][1](moment) if is_directive else char
        for is_directive, char in _tokenize(date_format)
    )
