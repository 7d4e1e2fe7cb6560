"""Random test data: phone numbers, plates, ID numbers, names."""

import datetime
import random
from typing import Any, List, Optional, Sequence, TypeVar

from .compare import get_array
from .errors import InvalidInputError

T = TypeVar('T')

DIGITS: List[int] = list(range(10))

# Second digit of a mobile number, and the third digits allowed after it
_PHONE_PREFIXES = {
    3: DIGITS,
    5: DIGITS,
    7: [0, 1, 2, 3, 4, 5, 6, 7, 8],
    8: DIGITS,
    9: [1, 5, 8, 9],
}

# I and O are never used on plates
PLATE_NO_ALPHABETS: List[str] = list("ABCDEFGHJKLMNPQRSTUVWXYZ0123456789")

DEFAULT_PLATE_PREFIX = "苏H"
DEFAULT_AREA_CODE = 380812
MIN_AREA_CODE = 110000
MAX_AREA_CODE = 820000

_SURNAMES = ["张", "李", "王", "赵", "钱", "孙", "李", "吴", "徐", "周", "庞", "关", "朱"]
_GIVEN_NAME_CHARS = ["子", "文", "涛", "权", "明", "亮", "盛", "雨", "宇", "冰", "浩", "腾", "勇", "雪"]

_LONG_MONTHS = (1, 3, 5, 7, 8, 10, 12)
_SHORT_MONTHS = (4, 6, 9, 11)


def _as_integer(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise InvalidInputError(f"{name} must be an integer")


def get_random_between(start: int, end: int) -> int:
    """Random integer in the closed range [start, end].

    Raises:
        InvalidInputError: If a bound is not an integer or ``end < start``
    """
    start = _as_integer(start, "start")
    end = _as_integer(end, "end")
    if end < start:
        raise InvalidInputError("end must be greater than or equal to start")
    return random.randint(start, end)


def get_random_item_from_array(array: Sequence[T]) -> T:
    if not array:
        raise InvalidInputError("Cannot pick from an empty sequence")
    return array[get_random_between(0, len(array) - 1)]


def possibility(p: float) -> bool:
    """Return True with probability ``p``."""
    return random.random() < p


def get_random_phone() -> str:
    """Random 11-digit mainland mobile number."""
    second = get_random_item_from_array(list(_PHONE_PREFIXES))
    third = get_random_item_from_array(_PHONE_PREFIXES[second])
    rest = "".join(str(get_random_item_from_array(DIGITS)) for _ in range(8))
    return f"1{second}{third}{rest}"


def get_random_plate_no(start: Optional[str] = None) -> str:
    """Random plate number: a two-character prefix plus five characters."""
    prefix = DEFAULT_PLATE_PREFIX if start is None else start
    tail = get_array(5, lambda _: get_random_item_from_array(PLATE_NO_ALPHABETS))
    return prefix + "".join(tail)


def get_random_year() -> int:
    """Birth year of someone aged 20 to 50."""
    return datetime.date.today().year - get_random_between(20, 50)


def get_month_length(month: int) -> int:
    """Days in a month, ignoring leap years."""
    if month in _LONG_MONTHS:
        return 31
    if month in _SHORT_MONTHS:
        return 30
    return 28


def get_random_date() -> str:
    """Random month and day as "MMDD"."""
    month = get_random_between(1, 12)
    day = get_random_between(1, get_month_length(month))
    return f"{month:02d}{day:02d}"


def get_random_id(area: Optional[int] = None) -> str:
    """Random 18-digit ID number.

    Args:
        area: Six-digit area code (default 380812)

    Raises:
        InvalidInputError: If ``area`` is not an integer in [110000, 820000]
    """
    if area is None:
        area = DEFAULT_AREA_CODE
    else:
        area = _as_integer(area, "area")
        if area < MIN_AREA_CODE or area > MAX_AREA_CODE:
            raise InvalidInputError(
                f"area must be between {MIN_AREA_CODE} and {MAX_AREA_CODE}"
            )

    sequence = "".join(str(get_random_between(0, 9)) for _ in range(4))
    return f"{area}{get_random_year()}{get_random_date()}{sequence}"


def get_random_name() -> str:
    """Random two or three character Chinese name."""
    name = get_random_item_from_array(_SURNAMES) + get_random_item_from_array(_GIVEN_NAME_CHARS)
    if possibility(0.66):
        name += get_random_item_from_array(_GIVEN_NAME_CHARS)
    return name
