"""Pre-order traversal over linked fibers.

Traversal is pure pointer chasing: from any fiber the next one is its
child, else its sibling, else the sibling of the nearest ancestor that has
one. No stack and no recursion are needed, so arbitrarily deep trees are
walked in constant extra memory.
"""

from typing import Callable, Iterator, Optional, Tuple

from ..errors import InvariantViolationError
from .fiber import Fiber


def get_next_fiber(fiber: Fiber, skip_children: bool = False) -> Optional[Fiber]:
    """Return the fiber that follows ``fiber`` in pre-order.

    Args:
        fiber: Current fiber
        skip_children: Continue after the fiber's subtree instead of
            descending into it

    Returns:
        The next fiber, or None when traversal is complete
    """
    if not skip_children and fiber.child is not None:
        return fiber.child
    if fiber.sibling is not None:
        return fiber.sibling

    parent = fiber.parent
    while parent is not None:
        if parent.sibling is not None:
            return parent.sibling
        parent = parent.parent
    return None


def _check_root(fiber: Fiber) -> None:
    if fiber.parent is not None:
        raise InvariantViolationError(
            f"Traversal root must have no parent, got {fiber!r}"
        )


def walk_through_fiber(fiber: Fiber, callback: Callable[[Fiber], None]) -> None:
    """Invoke ``callback`` on every fiber in pre-order.

    The walk starts at ``fiber`` and continues through its siblings, so
    passing the root visits the whole forest.

    Args:
        fiber: Root fiber (must have no parent)
        callback: Visitor called once per fiber

    Raises:
        InvariantViolationError: If ``fiber`` has a parent. Starting below
            the root would climb past the intended root and end early.
    """
    _check_root(fiber)

    current: Optional[Fiber] = fiber
    while current is not None:
        callback(current)
        current = get_next_fiber(current)


def iter_fibers(fiber: Fiber) -> Iterator[Fiber]:
    """Iterate fibers in pre-order starting at a root fiber.

    Unlike a plain generator, the root check happens immediately when this
    function is called, not on the first ``next()``.

    Raises:
        InvariantViolationError: If ``fiber`` has a parent
    """
    _check_root(fiber)
    return _iterate(fiber)


def _iterate(fiber: Fiber) -> Iterator[Fiber]:
    current: Optional[Fiber] = fiber
    while current is not None:
        yield current
        current = get_next_fiber(current)


def traverse_fibers(fiber: Fiber,
                    max_depth: Optional[int] = None,
                    min_depth: int = 0) -> Iterator[Tuple[Fiber, int]]:
    """Traverse fibers in pre-order, tracking depth.

    Depth is tracked incrementally: descending adds one, moving to a
    sibling keeps it, and climbing to an ancestor's sibling subtracts the
    number of levels climbed.

    Args:
        fiber: Root fiber (must have no parent)
        max_depth: Do not descend below this depth (None = unlimited)
        min_depth: Only yield fibers at or below this depth

    Yields:
        Tuples of (fiber, depth) where top-level fibers have depth 0

    Raises:
        InvariantViolationError: If ``fiber`` has a parent
    """
    _check_root(fiber)
    return _iterate_with_depth(fiber, max_depth, min_depth)


def _iterate_with_depth(fiber: Fiber,
                        max_depth: Optional[int],
                        min_depth: int) -> Iterator[Tuple[Fiber, int]]:
    current: Optional[Fiber] = fiber
    depth = 0

    while current is not None:
        if depth >= min_depth:
            yield (current, depth)

        if current.child is not None and (max_depth is None or depth < max_depth):
            current = current.child
            depth += 1
            continue

        # Climb until a sibling is found
        while current is not None and current.sibling is None:
            current = current.parent
            depth -= 1
        if current is not None:
            current = current.sibling
