"""Configuration objects for SodaUtils.

This module defines how callers tune the tree helpers and the text/geometry
helpers that take option bundles. Each config is a plain dataclass with
sensible defaults and a validate() method that reports problems as a list
of messages instead of raising.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from .errors import ConfigurationError


@dataclass
class TreeConfig:
    """Configuration for fiber conversion, search and caching."""

    children_key: str = "children"   # Key holding the child list in input nodes
    cache_size: int = 128            # Max entries per SearchTreeCache table

    @classmethod
    def for_key(cls, children_key: str) -> 'TreeConfig':
        """Create a config for trees that keep children under another key.

        Args:
            children_key: Name of the child list key (e.g. "items", "nodes")

        Returns:
            TreeConfig using that key
        """
        return cls(children_key=children_key)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.children_key, str) or not self.children_key:
            errors.append("children_key must be a non-empty string")

        if not isinstance(self.cache_size, int) or self.cache_size <= 0:
            errors.append("cache_size must be a positive integer")

        return errors

    def ensure_valid(self) -> 'TreeConfig':
        """Raise ConfigurationError if validate() reports anything."""
        errors = self.validate()
        if errors:
            raise ConfigurationError(f"Invalid tree configuration: {'; '.join(errors)}")
        return self


@dataclass
class SplitTextOptions:
    """Options for split_text_to_lines.

    Widths are measured in full-width characters: a full-width character
    takes 1, a half-width character takes 0.5.
    """

    max_width: float = math.inf    # Maximum width of a line
    max_lines: float = math.inf    # Maximum number of lines

    def validate(self) -> List[str]:
        errors = []
        if self.max_width <= 0:
            errors.append("max_width must be positive")
        if self.max_lines < 1:
            errors.append("max_lines must be at least 1")
        return errors


@dataclass
class StringToNumberOptions:
    """Options for string_to_number."""

    default: float                     # Value returned when parsing yields NaN
    as_float: bool = False             # Parse as float instead of int
    min_value: Optional[float] = None  # Results below are clamped up
    max_value: Optional[float] = None  # Results above are clamped down

    def validate(self) -> List[str]:
        errors = []
        if self.min_value is not None and self.max_value is not None:
            if self.max_value < self.min_value:
                errors.append("max_value cannot be less than min_value")
        return errors


@dataclass
class DrawArcOptions:
    """Options for draw_arc."""

    line: bool = False            # Reach the start point with a line (L) instead of a move (M)
    anticlockwise: bool = False   # Sweep from start to end anticlockwise
