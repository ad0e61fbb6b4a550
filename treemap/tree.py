"""Ordered map backed by an unbalanced binary search tree.

Keys are ordered by a three-way comparator supplied at construction
rather than by the key type itself. No rebalancing is performed, so
adversarial insertion orders produce a degenerate (list-shaped) tree.
Descent and traversal are loops, so such trees are still handled at any
depth.
"""

from __future__ import annotations

import logging
from typing import (
    Any,
    Generator,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    override,
)

from treemap.common import (
    Comparator,
    Impossible,
    Iterating,
    Ordering,
    Sized,
    natural_compare,
)
from treemap.config import RenderConfig
from treemap.node import Node

__all__ = ["TreeMap"]

logger = logging.getLogger(__name__)


class TreeMap[K, V](Sized, Iterating[Tuple[K, V]]):
    """A mutable ordered map.

    Not safe for concurrent mutation; callers sharing a map across
    threads must synchronize externally.

    Example:
        >>> m = TreeMap.mk([(5, "a"), (3, "b"), (8, "c")])
        >>> m.keys()
        [3, 5, 8]
        >>> m.remove(5)
        'a'
        >>> str(m)
        "[3: 'b', 8: 'c']"
    """

    def __init__(self, comparator: Optional[Comparator[K]] = None) -> None:
        """Create an empty map.

        Args:
            comparator: Three-way comparator over keys returning a negative,
                zero or positive int (or an Ordering). Defaults to the keys'
                natural order. Must stay consistent for the map's lifetime.
        """
        self._comparator: Comparator[K] = (
            natural_compare if comparator is None else comparator
        )
        self._root: Optional[Node[K, V]] = None
        self._size = 0

    @staticmethod
    def mk(
        pairs: Iterable[Tuple[K, V]], comparator: Optional[Comparator[K]] = None
    ) -> TreeMap[K, V]:
        """Create a map from an iterable of key-value pairs.

        Later pairs overwrite earlier pairs with the same key.

        Time Complexity: O(n log n) expected, O(n^2) for sorted input

        Args:
            pairs: Iterable of (key, value) tuples.
            comparator: Optional comparator, as for the constructor.

        Returns:
            A map containing all the given key-value pairs.
        """
        tree: TreeMap[K, V] = TreeMap(comparator)
        for key, value in pairs:
            tree.put(key, value)
        return tree

    @property
    def comparator(self) -> Comparator[K]:
        return self._comparator

    @override
    def size(self) -> int:
        """Get the number of entries in the map.

        Time Complexity: O(1)
        """
        return self._size

    def is_empty(self) -> bool:
        return self.null()

    def _compare(self, a: K, b: K) -> Ordering:
        return Ordering.of(self._comparator(a, b))

    def _search(self, key: K) -> Optional[Node[K, V]]:
        node = self._root
        while node is not None:
            match self._compare(key, node.key):
                case Ordering.Eq:
                    return node
                case Ordering.Lt:
                    node = node.left
                case Ordering.Gt:
                    node = node.right
        return None

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Get the value associated with a key.

        Time Complexity: O(h) where h is the tree height

        Args:
            key: The key to look up.
            default: Value to return if the key is not found.

        Returns:
            The value associated with the key, or default.
        """
        node = self._search(key)
        return default if node is None else node.value

    def contains_key(self, key: K) -> bool:
        """Check if the map contains the given key.

        Unlike ``get``, this distinguishes a stored ``None`` from a
        missing key.
        """
        return self._search(key) is not None

    def contains_value(self, value: V) -> bool:
        """Check if any entry holds a value equal to the given one.

        Time Complexity: O(n)
        """
        values = self.values()
        return any(stored == value for stored in values)

    def put(self, key: K, value: V) -> Optional[V]:
        """Insert or update a key-value pair.

        An existing key keeps its node and has its value replaced.

        Time Complexity: O(h) where h is the tree height

        Args:
            key: The key to insert or update.
            value: The value to associate with the key.

        Returns:
            The previous value for the key, or None if the key was new.
        """
        node = self._root
        if node is None:
            self._root = Node(key, value)
            self._size = 1
            logger.debug("Created root with key %r", key)
            return None
        while True:
            match self._compare(key, node.key):
                case Ordering.Eq:
                    previous = node.value
                    node.value = value
                    return previous
                case Ordering.Lt:
                    if node.left is None:
                        node.set_left(Node(key, value))
                        self._size += 1
                        return None
                    node = node.left
                case Ordering.Gt:
                    if node.right is None:
                        node.set_right(Node(key, value))
                        self._size += 1
                        return None
                    node = node.right

    def remove(self, key: K) -> Optional[V]:
        """Remove the entry for a key.

        Time Complexity: O(h) where h is the tree height

        Args:
            key: The key to remove.

        Returns:
            The removed value, or None if the key was not present.
        """
        node = self._search(key)
        if node is None:
            return None
        value = node.value
        self._unlink(node)
        return value

    def _unlink(self, node: Node[K, V]) -> None:
        match (node.left, node.right):
            case (None, None):
                logger.debug("Removing leaf %r", node.key)
                self._replace(node, None)
            case (left, None):
                logger.debug("Removing %r, promoting left child", node.key)
                self._replace(node, left)
            case (left, right) if right.left is None:
                logger.debug("Removing %r, promoting right child", node.key)
                right.set_left(left)
                self._replace(node, right)
            case (left, right):
                # Successor is the left-most node of the right subtree
                spine = right
                successor = right.left
                while successor.left is not None:
                    spine = successor
                    successor = successor.left
                logger.debug(
                    "Removing %r, promoting successor %r", node.key, successor.key
                )
                spine.set_left(successor.right)
                successor.set_left(left)
                successor.set_right(right)
                self._replace(node, successor)

    def _replace(self, node: Node[K, V], replacement: Optional[Node[K, V]]) -> None:
        parent = node.parent
        if parent is None:
            if node is not self._root:
                raise Impossible(f"Detached node {node.key!r} is not the root")
            self._root = replacement
            if replacement is not None:
                replacement.parent = None
        elif parent.left is node:
            parent.set_left(replacement)
        elif parent.right is node:
            parent.set_right(replacement)
        else:
            raise Impossible(f"Node {node.key!r} is not a child of its parent")
        node.detach()
        self._size -= 1

    def clear(self) -> None:
        """Remove all entries."""
        logger.debug("Clearing %d entries", self._size)
        self._root = None
        self._size = 0

    def _nodes(self) -> Generator[Node[K, V]]:
        # In-order walk with an explicit stack
        stack: List[Node[K, V]] = []
        node = self._root
        while stack or node is not None:
            if node is not None:
                stack.append(node)
                node = node.left
            else:
                node = stack.pop()
                yield node
                node = node.right

    @override
    def iter(self) -> Generator[Tuple[K, V]]:
        """Iterate over all key-value pairs in ascending key order.

        The map must not be modified during iteration.
        """
        for node in self._nodes():
            yield (node.key, node.value)

    def keys(self) -> List[K]:
        """List all keys in ascending comparator order."""
        return [node.key for node in self._nodes()]

    def values(self) -> List[V]:
        """List all values in the ascending order of their keys."""
        return [node.value for node in self._nodes()]

    def items(self) -> List[Tuple[K, V]]:
        """List all key-value pairs in ascending key order."""
        return self.list()

    def height(self) -> int:
        """Count the nodes on the longest path from the root to a leaf.

        Returns 0 for an empty map and the size for a fully degenerate tree.
        """
        height = 0
        level = [] if self._root is None else [self._root]
        while level:
            height += 1
            level = [
                child
                for node in level
                for child in (node.left, node.right)
                if child is not None
            ]
        return height

    def check_invariants(self) -> None:
        """Verify the structure of the tree.

        Raises:
            Impossible: If keys are out of order, a child does not link
                back to its parent, or the stored size is wrong.
        """
        if self._root is None:
            if self._size != 0:
                raise Impossible(f"Empty tree has size {self._size}")
            return
        if self._root.parent is not None:
            raise Impossible(f"Root {self._root.key!r} has a parent")
        count = 0
        previous: Optional[Node[K, V]] = None
        for node in self._nodes():
            count += 1
            for child in (node.left, node.right):
                if child is not None and child.parent is not node:
                    raise Impossible(
                        f"Child {child.key!r} does not link back to {node.key!r}"
                    )
            if (
                previous is not None
                and self._compare(previous.key, node.key) != Ordering.Lt
            ):
                raise Impossible(
                    f"Keys out of order: {previous.key!r} before {node.key!r}"
                )
            previous = node
        if count != self._size:
            raise Impossible(f"Tree has {count} nodes but size {self._size}")

    def render(self, config: Optional[RenderConfig] = None) -> str:
        """Render the entries as a bracketed list in ascending key order.

        Args:
            config: Rendering options, the default configuration if omitted.
        """
        if config is None:
            config = RenderConfig.default()
        body = config.entry_sep.join(
            config.format_pair(key, value) for key, value in self.iter()
        )
        return f"{config.open}{body}{config.close}"

    def __getitem__(self, key: K) -> V:
        node = self._search(key)
        if node is None:
            raise KeyError(key)
        return node.value

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        node = self._search(key)
        if node is None:
            raise KeyError(key)
        self._unlink(node)

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __iter__(self) -> Iterator[K]:
        for node in self._nodes():
            yield node.key

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"TreeMap({self.items()!r})"
