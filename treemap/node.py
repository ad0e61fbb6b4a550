"""Mutable binary tree node with a non-owning parent link."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Optional

__all__ = ["Node"]


@dataclass(eq=False, slots=True, weakref_slot=True)
class Node[K, V]:
    """A single entry of the tree.

    Children are owned by their parent. The parent link is a weak
    reference so that it never keeps a detached node alive.
    """

    key: K
    value: V
    left: Optional[Node[K, V]] = field(default=None, repr=False)
    right: Optional[Node[K, V]] = field(default=None, repr=False)
    _parent: Optional[weakref.ReferenceType[Node[K, V]]] = field(
        default=None, init=False, repr=False
    )

    @property
    def parent(self) -> Optional[Node[K, V]]:
        return None if self._parent is None else self._parent()

    @parent.setter
    def parent(self, node: Optional[Node[K, V]]) -> None:
        self._parent = None if node is None else weakref.ref(node)

    def set_left(self, node: Optional[Node[K, V]]) -> None:
        """Install a left child and point its parent link back here."""
        self.left = node
        if node is not None:
            node.parent = self

    def set_right(self, node: Optional[Node[K, V]]) -> None:
        """Install a right child and point its parent link back here."""
        self.right = node
        if node is not None:
            node.parent = self

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def detach(self) -> None:
        """Clear all three relations of a node leaving the tree."""
        self.left = None
        self.right = None
        self._parent = None
