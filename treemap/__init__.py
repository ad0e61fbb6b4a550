from treemap.common import (
    Comparator,
    Impossible,
    Ordering,
    compare,
    key_by,
    natural_compare,
    reverse,
)
from treemap.config import RenderConfig
from treemap.node import Node
from treemap.tree import TreeMap

__all__ = [
    "Comparator",
    "Impossible",
    "Node",
    "Ordering",
    "RenderConfig",
    "TreeMap",
    "compare",
    "key_by",
    "natural_compare",
    "reverse",
]
