"""String helpers: width-aware line splitting and lenient parsing."""

import base64
import binascii
import math
import re
from typing import Dict, List, Optional, Tuple, Union

from .config import SplitTextOptions, StringToNumberOptions
from .errors import InvalidInputError

# (low, high) code point ranges rendered as full-width
_FULL_WIDTH_RANGES = (
    (0x3000, 0x303F),  # CJK symbols and punctuation
    (0xFF00, 0xFFEF),  # Full-width ASCII and punctuation
    (0x4E00, 0x9FAF),  # CJK unified ideographs
    (0x1100, 0x11FF),  # Hangul jamo
    (0x3130, 0x318F),  # Hangul compatibility jamo
    (0xAC00, 0xD7AF),  # Hangul syllables
)

ELLIPSIS = "..."

_INT_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|(\d+))")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity)")
_DATA_URL = re.compile(r"^data:(?P<mime>[^;,]*)(?P<params>(?:;[^;,]*)*?);base64,(?P<data>.*)$", re.S)


def is_full_width_char(char: str) -> bool:
    """Check whether a single character is rendered full-width.

    Raises:
        InvalidInputError: If ``char`` is not exactly one character
    """
    if len(char) != 1:
        raise InvalidInputError("Function expects a single character")

    code = ord(char)
    return any(low <= code <= high for low, high in _FULL_WIDTH_RANGES)


def _char_width(char: str) -> int:
    """Width in half-width units."""
    return 2 if is_full_width_char(char) else 1


def split_text_to_lines(text: str, options: Optional[SplitTextOptions] = None) -> List[str]:
    """Split text into lines that fit a display width.

    Width is counted in full-width characters: a full-width character takes
    1 and a half-width character 0.5. When the text does not fit in
    ``max_lines`` lines, the last line is shortened and ends with "...".

    Args:
        text: Text to split
        options: Maximum width and line count (both unlimited by default)

    Returns:
        The lines, at least one (possibly empty)

    Example:
        >>> split_text_to_lines("abcdef", SplitTextOptions(max_width=1.5))
        ['abc', 'def']
    """
    options = options or SplitTextOptions()
    max_width = options.max_width * 2
    max_lines = options.max_lines

    # Each line is [text, width in half-width units]
    lines: List[list] = [["", 0]]
    overflow = False

    for char in text:
        width = _char_width(char)
        line = lines[-1]
        if line[1] + width <= max_width:
            line[0] += char
            line[1] += width
            continue
        if len(lines) >= max_lines:
            overflow = True
            break
        lines.append([char, width])

    if overflow:
        last = lines[-1]
        content, length = last
        final = 0
        # Drop characters from the end until the ellipsis fits
        for i, char in enumerate(reversed(content)):
            width = _char_width(char)
            if length - width + len(ELLIPSIS) <= max_width:
                final = i
                break
            length -= width
        last[0] = content[:len(content) - 1 - final] + ELLIPSIS

    return [line[0] for line in lines]


def _parse_prefix(value: str, as_float: bool) -> float:
    """Parse the numeric prefix of a string, NaN if there is none."""
    pattern = _FLOAT_PREFIX if as_float else _INT_PREFIX
    match = pattern.match(value)
    if match is None:
        return math.nan
    if as_float:
        return float(match.group(1).replace("Infinity", "inf"))

    sign, hex_digits, digits = match.groups()
    if hex_digits is None:
        number = int(digits)
    elif hex_digits:
        number = int(hex_digits, 16)
    else:
        return math.nan  # "0x" with no digits
    return -number if sign == "-" else number


def string_to_number(value: str,
                     option: Union[float, StringToNumberOptions, None] = None) -> float:
    """Parse a number from the start of a string.

    Like a lenient form input: "42px" gives 42, "abc" gives NaN. Integer
    parsing also reads a "0x" hexadecimal prefix, so "0x1A" gives 26.

    Args:
        value: String to parse
        option: Either a plain default returned for NaN, or
            StringToNumberOptions with float parsing, clamping and a default

    Returns:
        The parsed (and possibly clamped) number
    """
    as_float = isinstance(option, StringToNumberOptions) and option.as_float
    number = _parse_prefix(value, as_float)

    if option is None:
        return number

    if not isinstance(option, StringToNumberOptions):
        return option if math.isnan(number) else number

    if math.isnan(number):
        return option.default
    if option.min_value is not None and number < option.min_value:
        return option.min_value
    if option.max_value is not None and number > option.max_value:
        return option.max_value
    return number


def string_to_list(value: Union[str, List[str]]) -> List[str]:
    """Wrap a single string into a list; lists pass through."""
    return [value] if isinstance(value, str) else value


def parse_headers(headers: str) -> Dict[str, str]:
    """Parse a header block copied from browser dev tools.

    Blank lines and HTTP/2 pseudo headers (":authority" ...) are skipped.
    Names are lower-cased; a repeated name keeps its last value.

    Raises:
        InvalidInputError: If a line has no name before its colon
    """
    result: Dict[str, str] = {}
    for raw in headers.split("\n"):
        line = raw.strip()
        if not line or line.startswith(":"):
            continue
        index = line.find(":")
        if index < 1:
            raise InvalidInputError(f"Invalid header line: {line}")
        result[line[:index].strip().lower()] = line[index + 1:].strip()
    return result


def parse_data_url(url: str) -> Tuple[str, bytes]:
    """Decode a base64 data URL.

    Returns:
        Tuple of (mime type, decoded bytes)

    Raises:
        InvalidInputError: If the URL is not a base64 data URL
    """
    match = _DATA_URL.match(url)
    if match is None:
        raise InvalidInputError("Expected a base64 data URL")
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except binascii.Error as e:
        raise InvalidInputError(f"Invalid base64 payload: {e}") from e
    return match.group("mime"), data
