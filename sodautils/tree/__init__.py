"""Fiber trees: linked tree representation with incremental search.

Typical use:
    from sodautils.tree import tree_to_fiber, walk_through_fiber, search_tree

    root = tree_to_fiber(forest)
    walk_through_fiber(root, lambda fiber: print(fiber["id"]))
    result = search_tree(root, lambda value: value["id"] == "D")
"""

from .fiber import Fiber, FiberTree, tree_to_fiber
from .traverser import (
    get_next_fiber,
    walk_through_fiber,
    iter_fibers,
    traverse_fibers,
)
from .search import SearchTreeResult, search_tree, resolve_fiber
from .caching import SearchTreeCache

__all__ = [
    'Fiber',
    'FiberTree',
    'tree_to_fiber',
    'get_next_fiber',
    'walk_through_fiber',
    'iter_fibers',
    'traverse_fibers',
    'SearchTreeResult',
    'search_tree',
    'resolve_fiber',
    'SearchTreeCache',
]
