"""SodaUtils - a toolkit of small, independent helpers.

The centrepiece is the fiber tree: a linked representation of nested data
with stack-free traversal and incremental search.
━━━━━━━━━━━━━━━━━━━━━━━━━━
Trees:
    from sodautils.tree import tree_to_fiber, search_tree

Helpers:
    sodautils.geo       datum conversion and distances
    sodautils.geometry  segments, polygons, arcs
    sodautils.text      width-aware splitting and lenient parsing
    sodautils.idcard    ID number validation
    sodautils.mock      random test data
    sodautils.compare   property comparison
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

# Library logging: callers decide where records go
logging.getLogger(__name__).addHandler(logging.NullHandler())

from . import tree
from . import geo
from . import geometry
from . import text
from . import idcard
from . import mock
from . import compare
from .config import TreeConfig, SplitTextOptions, StringToNumberOptions, DrawArcOptions
from .errors import (
    SodaUtilsError,
    InvalidInputError,
    InvariantViolationError,
    ConfigurationError,
)

__all__ = [
    "__version__",
    "tree",
    "geo",
    "geometry",
    "text",
    "idcard",
    "mock",
    "compare",
    "TreeConfig",
    "SplitTextOptions",
    "StringToNumberOptions",
    "DrawArcOptions",
    "SodaUtilsError",
    "InvalidInputError",
    "InvariantViolationError",
    "ConfigurationError",
]
