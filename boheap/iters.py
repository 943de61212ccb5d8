"""Traversal helpers over the sibling lists of heap nodes.

Sibling lists are mutated while the heap restructures itself, so any
pass that detaches or re-inserts nodes must walk a snapshot rather than
the live links.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List, Optional

if TYPE_CHECKING:
    from boheap.node import BONode

__all__ = ["iter_siblings", "iter_subtree", "snapshot"]


def iter_siblings[T](head: Optional[BONode[T]]) -> Iterator[BONode[T]]:
    """Iterate a live sibling list from its head, following right links.

    The list must not be modified while iterating; use snapshot for that.
    """
    node = head
    while node is not None:
        yield node
        node = node.right


def snapshot[T](head: Optional[BONode[T]]) -> List[BONode[T]]:
    """Copy a sibling list into a Python list.

    Args:
        head: First node of the list, or None for an empty list.

    Returns:
        The nodes in list order, safe to detach or re-insert one by one.
    """
    return list(iter_siblings(head))


def iter_subtree[T](node: BONode[T]) -> Iterator[BONode[T]]:
    """Iterate every node reachable from node through children and subqueues.

    Depth-first and pre-order, with an explicit stack so deep trees do not
    hit the recursion limit.

    Yields:
        node itself first, then its descendants.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(iter_siblings(current.subqueue))
        stack.extend(iter_siblings(current.children))
