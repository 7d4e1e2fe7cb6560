"""Comparing objects by selected properties.

Objects may be mappings or plain objects; plain objects are read through
their attributes. Values are compared with ``==``, which is already a deep
comparison for dicts, lists and tuples.
"""

import math
import sys
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List

from .errors import InvalidInputError

_MISSING = object()


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, _MISSING)
    return getattr(obj, key, _MISSING)


def _keys(obj: Any) -> Iterable[str]:
    if isinstance(obj, Mapping):
        return obj.keys()
    return vars(obj).keys()


def get_properties(obj: Any, *keys: str) -> Dict[str, Any]:
    """Pick the given keys into a new dict; missing keys map to None."""
    result = {}
    for key in keys:
        value = _get(obj, key)
        result[key] = None if value is _MISSING else value
    return result


def compare_properties(a: Any, b: Any, *keys: str) -> bool:
    """Check that ``a`` and ``b`` agree on every listed property.

    Raises:
        InvalidInputError: If no keys are given
    """
    if not keys:
        raise InvalidInputError("keys must not be empty")
    return all(_get(a, key) == _get(b, key) for key in keys)


def compare_without_properties(a: Any, b: Any, *ignore: str) -> bool:
    """Check that ``a`` and ``b`` agree on every property except the ignored ones.

    Raises:
        InvalidInputError: If no keys to ignore are given
    """
    if not ignore:
        raise InvalidInputError("ignore list must not be empty")
    keys = set(_keys(a)) | set(_keys(b))
    return all(_get(a, key) == _get(b, key) for key in keys if key not in ignore)


def get_properties_is_modified(a: Any, b: Any) -> Callable[..., bool]:
    """Bind two objects and return a checker for changed properties.

    Example:
        >>> modified = get_properties_is_modified({"x": 1, "y": 2}, {"x": 1, "y": 3})
        >>> modified("x"), modified("x", "y")
        (False, True)
    """
    def is_modified(*keys: str) -> bool:
        return any(_get(a, key) != _get(b, key) for key in keys)

    return is_modified


def two_number_is_equal(a: float, b: float) -> bool:
    """Float equality where NaN equals NaN and tiny differences are ignored."""
    if a == b:
        return True
    if math.isnan(a) and math.isnan(b):
        return True
    if math.isnan(a) or math.isnan(b):
        return False
    return abs(a - b) < sys.float_info.epsilon


def get_array(length: int, fill: Any = None) -> List[Any]:
    """Build a list of ``length`` items.

    - no ``fill``: the indexes, ``get_array(3) == [0, 1, 2]``
    - a callable: called with each index, ``get_array(3, lambda i: i * 2) == [0, 2, 4]``
    - any other value: repeated, ``get_array(3, "a") == ["a", "a", "a"]``
    """
    if callable(fill):
        return [fill(index) for index in range(length)]
    if fill is None:
        return list(range(length))
    return [fill] * length
