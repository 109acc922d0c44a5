"""
valueset is a hash-based set container with value semantics.

A `Set` holds unique hashable elements in a presence map, supports the usual
algebra (union, intersection, difference, subset and superset tests),
functional transforms (`map`, `filter`, `reduce`) and positional traversal
through `SetIndex` tokens.
"""

from valueset.basic import Set
from valueset.configdefaults import config
from valueset.exceptions import InvalidIndexError
from valueset.index import SetIndex


__all__ = ["InvalidIndexError", "Set", "SetIndex", "config"]

__version__ = "0.1.0"
