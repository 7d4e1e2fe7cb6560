#!/usr/bin/env python
"""
Demonstrate fiber conversion and incremental search on a menu tree.

Run:
    python examples/search_demo.py [keyword]
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sodautils.tree import SearchTreeCache, traverse_fibers

MENU = [
    {"title": "Dashboard"},
    {"title": "Settings", "children": [
        {"title": "Profile"},
        {"title": "Security", "children": [
            {"title": "Password"},
            {"title": "Two-factor login"},
        ]},
    ]},
    {"title": "Reports", "children": [
        {"title": "Monthly"},
        {"title": "Login history"},
    ]},
]


def highlight(value, is_match, has_matched_ancestor):
    """Mark matching titles in the output tree."""
    title = f"[{value['title']}]" if is_match else value["title"]
    return {**value, "title": title}


def print_tree(nodes, indent=0):
    for node in nodes:
        print("  " * indent + node["title"])
        print_tree(node.get("children", []), indent + 1)


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    keyword = (sys.argv[1] if len(sys.argv) > 1 else "login").lower()

    cache = SearchTreeCache()

    print("Full menu:")
    for fiber, depth in traverse_fibers(cache.get_fiber(MENU)):
        print("  " * (depth + 1) + fiber["title"])

    def matches(value):
        return keyword in value["title"].lower()

    result = cache.search(MENU, matches, highlight)
    print(f"\nSearch for {keyword!r}: {result.match_count} match(es)")
    print_tree(result.search_tree, 1)

    # Same inputs again: served from the cache
    cache.search(MENU, matches, highlight)
    print(f"\nCache stats: {cache.get_cache_stats()}")


if __name__ == "__main__":
    main()
