"""Predicate-driven search over fiber trees.

search_tree() walks every fiber once in pre-order and rebuilds a filtered
forest of plain dicts. A fiber is kept when it matches the predicate, when
one of its ancestors matched, or when one of its descendants matches. The
last case falls out of reconstruction: adding a fiber first adds any
missing ancestors, top-down, so the path from the top level is always
present.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Union

from ..errors import InvalidInputError
from .fiber import Fiber, tree_to_fiber
from .traverser import iter_fibers

logger = logging.getLogger(__name__)

Predicate = Callable[[Mapping], bool]
Transform = Callable[[Dict[str, Any], bool, bool], Mapping]


@dataclass
class SearchTreeResult:
    """Everything a search produces.

    Attributes:
        fiber: Root fiber of the searched tree
        search_tree: Filtered forest of dict nodes
        matched_fibers: Fibers that satisfied the predicate themselves
        added_fiber_map: Every fiber included in the output, mapped to its node
    """
    fiber: Fiber
    search_tree: List[Dict[str, Any]] = field(default_factory=list)
    matched_fibers: Set[Fiber] = field(default_factory=set)
    added_fiber_map: Dict[Fiber, Dict[str, Any]] = field(default_factory=dict)

    @property
    def match_count(self) -> int:
        return len(self.matched_fibers)

    def is_included(self, fiber: Fiber) -> bool:
        return fiber in self.added_fiber_map

    def node_for(self, fiber: Fiber) -> Optional[Dict[str, Any]]:
        return self.added_fiber_map.get(fiber)


def resolve_fiber(tree_or_fiber: Union[Sequence, Fiber], children_key: str = "children") -> Fiber:
    """Return the fiber as-is, or convert a forest into one."""
    if isinstance(tree_or_fiber, Fiber):
        return tree_or_fiber
    return tree_to_fiber(tree_or_fiber, children_key)


class _SearchBuilder:
    """Incremental reconstruction state for one search run."""

    def __init__(self, root: Fiber, transform: Optional[Transform], children_key: str):
        self.result = SearchTreeResult(fiber=root)
        self.transform = transform
        self.children_key = children_key
        # Indexed by arena position; parents precede children in pre-order
        self.ancestor_matched: List[bool] = [False] * len(root.tree)

    def visit(self, fiber: Fiber, is_match: bool) -> None:
        parent = fiber.parent
        if parent is not None:
            self.ancestor_matched[fiber.index] = (
                parent in self.result.matched_fibers
                or self.ancestor_matched[parent.index]
            )

        if is_match:
            self.result.matched_fibers.add(fiber)

        if is_match or self.ancestor_matched[fiber.index]:
            self.add(fiber)

    def add(self, fiber: Fiber) -> None:
        """Add a fiber, adding its missing ancestors first."""
        added = self.result.added_fiber_map

        # Collect the chain of ancestors not yet in the output
        chain = [fiber]
        parent = fiber.parent
        while parent is not None and parent not in added:
            chain.append(parent)
            parent = parent.parent

        for item in reversed(chain):
            self._attach(item)

    def _attach(self, fiber: Fiber) -> None:
        node = self._build_node(fiber)
        self.result.added_fiber_map[fiber] = node

        parent = fiber.parent
        if parent is None:
            self.result.search_tree.append(node)
            return

        parent_node = self.result.added_fiber_map[parent]
        parent_node.setdefault(self.children_key, []).append(node)

    def _build_node(self, fiber: Fiber) -> Dict[str, Any]:
        value = fiber.to_dict()
        if self.transform is None:
            return value

        transformed = self.transform(
            value,
            fiber in self.result.matched_fibers,
            self.ancestor_matched[fiber.index],
        )
        if not isinstance(transformed, Mapping):
            raise InvalidInputError(
                f"transform must return a mapping, got {type(transformed).__name__}"
            )
        node = dict(transformed)
        # Child lists are rebuilt from the included fibers only
        node.pop(self.children_key, None)
        return node


def search_tree(tree_or_fiber: Union[Sequence, Fiber],
                predicate: Predicate,
                transform: Optional[Transform] = None,
                children_key: str = "children") -> SearchTreeResult:
    """Search a tree and rebuild the part that matters.

    Args:
        tree_or_fiber: Forest of nested nodes, or a root fiber from tree_to_fiber()
        predicate: Called with each fiber's read-only value; truthy means match
        transform: Optional ``transform(value, is_match, has_matched_ancestor)``
            returning the mapping to place in the output node; any
            children key it returns is replaced by the rebuilt child list
        children_key: Key used for child lists, in the input and the output

    Returns:
        SearchTreeResult with the filtered forest and bookkeeping

    Raises:
        InvalidInputError: From conversion of an empty or malformed forest
        InvariantViolationError: If a non-root fiber is passed

    Example:
        >>> tree = [{"id": "A", "children": [{"id": "B"}, {"id": "C"}]}]
        >>> search_tree(tree, lambda v: v["id"] == "C").search_tree
        [{'id': 'A', 'children': [{'id': 'C'}]}]
    """
    root = resolve_fiber(tree_or_fiber, children_key)
    fibers = iter_fibers(root)
    builder = _SearchBuilder(root, transform, children_key)

    for fiber in fibers:
        builder.visit(fiber, bool(predicate(fiber.value)))

    result = builder.result
    logger.debug(
        "Search matched %d of %d fibers, kept %d",
        len(result.matched_fibers), len(root.tree), len(result.added_fiber_map),
    )
    return result
