"""Fiber representation of hierarchical data.

A fiber is a tree node whose relations are stored as explicit links
(parent, first child, next sibling) instead of a nested child list. All
fibers of one tree live in a FiberTree arena; each fiber keeps integer
indices into the arena and resolves them to Fiber objects on access.

Arena order equals pre-order, because conversion allocates fibers in the
order it visits the input nodes.
"""

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..errors import InvalidInputError

logger = logging.getLogger(__name__)

_END = object()


class Fiber:
    """A single node of a FiberTree.

    The node's own attributes (everything except its children) are exposed
    through ``value`` as a read-only mapping. Relations are resolved through
    the owning arena, so a fiber never holds direct references to its
    neighbours.

    Fibers compare and hash by identity, which makes them usable as set
    members and dict keys even when two nodes carry equal values.
    """

    __slots__ = ('_tree', '_value', 'index', 'parent_index', 'child_index', 'sibling_index')

    def __init__(self, tree: 'FiberTree', index: int, value: Dict[str, Any],
                 parent_index: Optional[int] = None):
        self._tree = tree
        self._value = value
        self.index = index
        self.parent_index = parent_index
        self.child_index: Optional[int] = None
        self.sibling_index: Optional[int] = None

    @property
    def tree(self) -> 'FiberTree':
        """The arena this fiber belongs to."""
        return self._tree

    @property
    def value(self) -> Mapping:
        """Read-only view of the node attributes."""
        return MappingProxyType(self._value)

    def to_dict(self) -> Dict[str, Any]:
        """Return a fresh shallow copy of the node attributes."""
        return dict(self._value)

    @property
    def parent(self) -> Optional['Fiber']:
        return self._tree.get(self.parent_index)

    @property
    def child(self) -> Optional['Fiber']:
        return self._tree.get(self.child_index)

    @property
    def sibling(self) -> Optional['Fiber']:
        return self._tree.get(self.sibling_index)

    @property
    def is_root(self) -> bool:
        return self.parent_index is None

    @property
    def is_leaf(self) -> bool:
        return self.child_index is None

    @property
    def depth(self) -> int:
        """Number of ancestors above this fiber (0 for top-level fibers)."""
        depth = 0
        for _ in self.ancestors():
            depth += 1
        return depth

    def ancestors(self) -> Iterator['Fiber']:
        """Yield ancestors from the direct parent up to the top level."""
        parent = self.parent
        while parent is not None:
            yield parent
            parent = parent.parent

    def children(self) -> Iterator['Fiber']:
        """Yield direct children in original order."""
        child = self.child
        while child is not None:
            yield child
            child = child.sibling

    def __getitem__(self, key: str) -> Any:
        return self._value[key]

    def __contains__(self, key: object) -> bool:
        return key in self._value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(index={self.index}, value={self._value!r})"


class FiberTree:
    """Arena holding every fiber of one converted forest.

    Fibers are stored in allocation (pre-order) order. The first fiber is
    the root: the first top-level node of the forest. Other top-level nodes
    are reachable as the root's siblings.
    """

    def __init__(self):
        self._fibers: List[Fiber] = []

    def allocate(self, value: Dict[str, Any], parent: Optional[Fiber] = None) -> Fiber:
        """Create a fiber at the end of the arena.

        Args:
            value: Node attributes, children already removed
            parent: Enclosing fiber, or None for a top-level node

        Returns:
            The new fiber
        """
        parent_index = parent.index if parent is not None else None
        fiber = Fiber(self, len(self._fibers), value, parent_index)
        self._fibers.append(fiber)
        return fiber

    def get(self, index: Optional[int]) -> Optional[Fiber]:
        """Resolve an index to its fiber; None stays None."""
        if index is None:
            return None
        return self._fibers[index]

    @property
    def root(self) -> Optional[Fiber]:
        return self._fibers[0] if self._fibers else None

    def top_level(self) -> Iterator[Fiber]:
        """Yield the top-level fibers in original order."""
        fiber = self.root
        while fiber is not None:
            yield fiber
            fiber = fiber.sibling

    def __len__(self) -> int:
        return len(self._fibers)

    def __iter__(self) -> Iterator[Fiber]:
        """Iterate fibers in arena order, which is pre-order."""
        return iter(self._fibers)

    def __getitem__(self, index: int) -> Fiber:
        return self._fibers[index]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={len(self._fibers)})"


def _split_node(node: Any, children_key: str) -> Tuple[Dict[str, Any], Optional[Sequence]]:
    """Separate a node's own attributes from its child list."""
    if not isinstance(node, Mapping):
        raise InvalidInputError(
            f"Tree nodes must be mappings, got {type(node).__name__}"
        )

    value = {key: item for key, item in node.items() if key != children_key}
    children = node.get(children_key)

    if children is not None and (
        isinstance(children, (str, bytes, Mapping)) or not isinstance(children, Sequence)
    ):
        raise InvalidInputError(
            f"'{children_key}' must be a sequence of nodes, got {type(children).__name__}"
        )

    return value, children


def tree_to_fiber(tree: Sequence, children_key: str = "children") -> Fiber:
    """Convert a forest of nested nodes into linked fibers.

    Nodes are visited depth-first, pre-order. Each new fiber is linked as
    the ``sibling`` of the previous fiber on its level, and the first fiber
    created under a parent becomes that parent's ``child``. An explicit
    stack replaces recursion so very deep trees convert without hitting the
    interpreter recursion limit.

    Args:
        tree: Ordered sequence of top-level nodes (mappings)
        children_key: Key that holds each node's child list

    Returns:
        The fiber of the first top-level node

    Raises:
        InvalidInputError: If the forest is empty or a node is malformed

    Example:
        >>> root = tree_to_fiber([{"id": "A", "children": [{"id": "B"}]}])
        >>> root["id"], root.child["id"]
        ('A', 'B')
    """
    if isinstance(tree, (str, bytes, Mapping)) or not isinstance(tree, Sequence):
        raise InvalidInputError(
            f"Tree must be a sequence of nodes, got {type(tree).__name__}"
        )
    if len(tree) == 0:
        raise InvalidInputError("Tree must not be empty")

    arena = FiberTree()

    # Each frame: [remaining nodes, parent fiber, previous sibling fiber]
    stack: List[list] = [[iter(tree), None, None]]

    while stack:
        frame = stack[-1]
        node = next(frame[0], _END)
        if node is _END:
            stack.pop()
            continue

        value, children = _split_node(node, children_key)
        parent, previous = frame[1], frame[2]

        fiber = arena.allocate(value, parent)
        if parent is not None and parent.child_index is None:
            parent.child_index = fiber.index
        if previous is not None:
            previous.sibling_index = fiber.index
        frame[2] = fiber

        if children:
            stack.append([iter(children), fiber, None])

    logger.debug("Converted tree into %d fibers", len(arena))
    return arena.root
