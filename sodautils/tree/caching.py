"""Memoized conversion and search.

SearchTreeCache is the Python counterpart of a reactive "recompute when
inputs change" hook. Conversion is keyed by the identity of the source
forest; search is keyed by the identity triple (fiber, predicate,
transform). Passing the same objects again returns the stored result;
passing anything new recomputes.

Entries keep strong references to their key objects, so an id() can never
be reused by a different live object while its entry is cached.
"""

import logging
from typing import Any, Dict, NamedTuple, Optional, Sequence, Tuple, Union

from cachetools import LRUCache

from ..config import TreeConfig
from .fiber import Fiber, tree_to_fiber
from .search import Predicate, SearchTreeResult, Transform, search_tree

logger = logging.getLogger(__name__)


class _FiberEntry(NamedTuple):
    source: Sequence
    fiber: Fiber


class _SearchEntry(NamedTuple):
    fiber: Fiber
    predicate: Predicate
    transform: Optional[Transform]
    result: SearchTreeResult


class SearchTreeCache:
    """
    Identity-keyed cache for tree_to_fiber() and search_tree().

    Example:
        cache = SearchTreeCache()
        matches = lambda v: "py" in v["name"]

        first = cache.search(tree, matches)
        again = cache.search(tree, matches)    # same objects: cached
        assert first is again
    """

    def __init__(self, config: Optional[TreeConfig] = None):
        """
        Initialize the cache.

        Args:
            config: Tree configuration (children key and cache size)
        """
        self.config = (config or TreeConfig()).ensure_valid()
        self._fibers: LRUCache = LRUCache(maxsize=self.config.cache_size)
        self._searches: LRUCache = LRUCache(maxsize=self.config.cache_size)

        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0

    def get_fiber(self, source: Union[Sequence, Fiber]) -> Fiber:
        """
        Return the root fiber for a forest, converting only on first sight.

        Fibers are returned unchanged.
        """
        if isinstance(source, Fiber):
            return source

        key = id(source)
        entry = self._fibers.get(key)
        if entry is not None and entry.source is source:
            self.cache_hits += 1
            return entry.fiber

        self.cache_misses += 1
        fiber = tree_to_fiber(source, self.config.children_key)
        self._fibers[key] = _FiberEntry(source, fiber)
        return fiber

    def search(self,
               source: Union[Sequence, Fiber],
               predicate: Predicate,
               transform: Optional[Transform] = None) -> SearchTreeResult:
        """
        Return the search result for (source, predicate, transform).

        The result object is shared between calls with identical inputs;
        treat it as read-only.
        """
        fiber = self.get_fiber(source)
        key = self._get_search_key(fiber, predicate, transform)

        entry = self._searches.get(key)
        if entry is not None and self._entry_matches(entry, fiber, predicate, transform):
            self.cache_hits += 1
            return entry.result

        self.cache_misses += 1
        logger.debug("Search cache miss for fiber tree %r", fiber.tree)
        result = search_tree(fiber, predicate, transform, self.config.children_key)
        self._searches[key] = _SearchEntry(fiber, predicate, transform, result)
        return result

    def _get_search_key(self, fiber: Fiber, predicate: Predicate,
                        transform: Optional[Transform]) -> Tuple[int, int, int]:
        return (id(fiber), id(predicate), id(transform))

    @staticmethod
    def _entry_matches(entry: _SearchEntry, fiber: Fiber, predicate: Predicate,
                       transform: Optional[Transform]) -> bool:
        return (
            entry.fiber is fiber
            and entry.predicate is predicate
            and entry.transform is transform
        )

    def get_cache_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics for monitoring and debugging.
        """
        total_requests = self.cache_hits + self.cache_misses
        hit_rate = self.cache_hits / total_requests if total_requests > 0 else 0

        return {
            'cache_hits': self.cache_hits,
            'cache_misses': self.cache_misses,
            'hit_rate': hit_rate,
            'fiber_entries': len(self._fibers),
            'search_entries': len(self._searches),
            'max_size': self.config.cache_size,
        }

    def clear_cache(self) -> None:
        """
        Clear all cached entries and statistics.
        """
        self._fibers.clear()
        self._searches.clear()
        self.cache_hits = 0
        self.cache_misses = 0
