"""Mainland China resident ID number helpers.

An 18-character ID is: 6-digit area code, 8-digit birth date (YYYYMMDD),
3-digit sequence number whose last digit is odd for men and even for women,
and a check character (digit or X).
"""

import datetime
import re
from typing import Optional

from .errors import InvalidInputError

ID_PATTERN = re.compile(
    r"[1-9]\d{5}(?:18|19|20)\d{2}(?:0[1-9]|10|11|12)(?:0[1-9]|[1-2]\d|30|31)\d{3}[\dXx]",
    re.ASCII,
)


def is_legal_id(id_number: str) -> bool:
    """Check the shape of an ID number (the check character is not verified)."""
    return ID_PATTERN.fullmatch(id_number) is not None


def _require_legal(id_number: str) -> None:
    if not is_legal_id(id_number):
        raise InvalidInputError(f"Illegal ID number: {id_number!r}")


def get_age_from_id(id_number: str, year: Optional[int] = None) -> int:
    """Age in years counted by calendar year, i.e. ``year - birth year``.

    Args:
        id_number: An 18-character ID
        year: Reference year (defaults to the current year)
    """
    _require_legal(id_number)
    if year is None:
        year = datetime.date.today().year
    return year - int(id_number[6:10])


def get_sex_from_id(id_number: str) -> int:
    """Return 1 for male, 0 for female."""
    _require_legal(id_number)
    return int(id_number[-2]) % 2


def cover_id_with_mosaics(id_number: str) -> str:
    """Mask the 8-digit birth date with asterisks."""
    _require_legal(id_number)
    return id_number[:6] + "*" * 8 + id_number[14:]
