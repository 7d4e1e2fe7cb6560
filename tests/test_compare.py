"""Tests for property comparison helpers."""

import math
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sodautils.compare import (
    get_properties,
    compare_properties,
    compare_without_properties,
    get_properties_is_modified,
    two_number_is_equal,
    get_array,
)
from sodautils.errors import InvalidInputError


def test_get_properties():
    obj = {"a": 1, "b": 2, "c": 3}
    assert get_properties(obj, "a", "c") == {"a": 1, "c": 3}
    assert get_properties(obj, "z") == {"z": None}


def test_get_properties_from_object():
    obj = SimpleNamespace(name="x", size=3)
    assert get_properties(obj, "name") == {"name": "x"}


def test_compare_properties_deep():
    a = {"tags": ["x", {"y": 1}], "id": 1}
    b = {"tags": ["x", {"y": 1}], "id": 2}
    assert compare_properties(a, b, "tags")
    assert not compare_properties(a, b, "tags", "id")


def test_compare_properties_requires_keys():
    with pytest.raises(InvalidInputError):
        compare_properties({}, {})


def test_compare_without_properties():
    a = {"id": 1, "name": "x", "updated": 10}
    b = {"id": 1, "name": "x", "updated": 20}
    assert compare_without_properties(a, b, "updated")
    assert not compare_without_properties(a, b, "name")


def test_compare_without_properties_missing_key():
    assert not compare_without_properties({"a": 1, "b": 2}, {"a": 1}, "c")
    assert compare_without_properties({"a": 1, "b": 2}, {"a": 1}, "b")


def test_compare_without_properties_on_objects():
    a = SimpleNamespace(id=1, stamp=1)
    b = SimpleNamespace(id=1, stamp=2)
    assert compare_without_properties(a, b, "stamp")


def test_compare_without_properties_requires_ignore():
    with pytest.raises(InvalidInputError):
        compare_without_properties({}, {})


def test_properties_is_modified():
    modified = get_properties_is_modified({"x": 1, "y": 2}, {"x": 1, "y": 3})
    assert not modified("x")
    assert modified("y")
    assert modified("x", "y")
    assert not modified()


@pytest.mark.parametrize("a, b, expected", [
    (1.0, 1.0, True),
    (0.1 + 0.2, 0.3, True),
    (math.nan, math.nan, True),
    (math.nan, 1.0, False),
    (1.0, 1.0001, False),
    (math.inf, math.inf, True),
])
def test_two_number_is_equal(a, b, expected):
    assert two_number_is_equal(a, b) is expected


def test_get_array():
    assert get_array(3) == [0, 1, 2]
    assert get_array(3, lambda i: i * 2) == [0, 2, 4]
    assert get_array(2, "a") == ["a", "a"]
    assert get_array(0) == []
