"""Tree nodes of the Brodal-Okasaki heap and the linking primitives.

A node heads two independent doubly-linked sibling lists:

- children: the nodes it dominates, kept in non-decreasing rank order.
- subqueue: a deferred forest parked by a lazy merge. Every node in it is
  no smaller than the owner, but it has not been linked into the live
  rank structure yet.

Each node records which of its parent's lists it sits in, so removal is
O(1) without guessing from list heads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from boheap.common import Comparable, Impossible, Membership
from boheap.iters import iter_siblings, snapshot

__all__ = ["BONode", "min_of_3", "simple_link", "skew_link"]


@dataclass(eq=False)
class BONode[T: Comparable]:
    """A single key and its place in the skew-binomial forest.

    Attributes:
        value: The key used for heap ordering.
        rank: Binomial order of the tree rooted here.
        children: Head of the rank-ordered children list.
        subqueue: Head of the deferred (not yet linked) forest.
        parent: Owner of the list this node is in. Navigation only.
        left: Previous sibling. Navigation only.
        right: Next sibling. Navigation only.
        membership: Which list of parent holds this node.
    """

    value: T
    rank: int = 0
    children: Optional[BONode[T]] = field(default=None, repr=False)
    subqueue: Optional[BONode[T]] = field(default=None, repr=False)
    parent: Optional[BONode[T]] = field(default=None, repr=False)
    left: Optional[BONode[T]] = field(default=None, repr=False)
    right: Optional[BONode[T]] = field(default=None, repr=False)
    membership: Membership = Membership.Detached

    def has_children(self) -> bool:
        return self.children is not None

    def has_subqueue(self) -> bool:
        return self.subqueue is not None

    def adopt(self, child: BONode[T]) -> None:
        """Make this node the parent of child.

        The child is placed in the children list ahead of the first sibling
        whose rank is not smaller, so the list stays in rank order.

        Raises:
            Impossible: If child is still in some other list.
        """
        if child.membership != Membership.Detached:
            raise Impossible(f"adopting attached node {child!r}")

        prev: Optional[BONode[T]] = None
        nxt = self.children
        while nxt is not None and child.rank > nxt.rank:
            prev = nxt
            nxt = nxt.right

        child.left = prev
        child.right = nxt
        if prev is None:
            self.children = child
        else:
            prev.right = child
        if nxt is not None:
            nxt.left = child

        child.parent = self
        child.membership = Membership.Child

    def park(self, node: BONode[T]) -> None:
        """Push a detached node onto the front of this node's subqueue.

        Raises:
            Impossible: If node is still in some other list.
        """
        if node.membership != Membership.Detached:
            raise Impossible(f"parking attached node {node!r}")

        head = self.subqueue
        node.left = None
        node.right = head
        if head is not None:
            head.left = node
        self.subqueue = node

        node.parent = self
        node.membership = Membership.Subqueue

    def detach(self) -> None:
        """Remove this node from whichever list holds it ("go rogue").

        Parent and sibling links are cleared. A detached node is left as is.
        """
        parent = self.parent
        if parent is None:
            return

        if self.left is None:
            match self.membership:
                case Membership.Child:
                    parent.children = self.right
                case Membership.Subqueue:
                    parent.subqueue = self.right
                case _:
                    raise Impossible(f"node with parent but no list: {self!r}")
        else:
            self.left.right = self.right
        if self.right is not None:
            self.right.left = self.left

        self.parent = None
        self.left = None
        self.right = None
        self.membership = Membership.Detached

    def move_children_to_subqueue(self) -> None:
        """Defer this node's whole children list into its subqueue.

        Anything already parked in the subqueue stays there.
        """
        for child in snapshot(self.children):
            child.detach()
            self.park(child)

    def take_subqueue(self, other: BONode[T]) -> None:
        """Move every node parked under other into this node's subqueue."""
        for node in snapshot(other.subqueue):
            node.detach()
            self.park(node)

    def min_child(self) -> Optional[BONode[T]]:
        """Return the minimum-valued direct child, the first one on ties."""
        best: Optional[BONode[T]] = None
        for child in iter_siblings(self.children):
            if best is None or child.value < best.value:
                best = child
        return best

    def smallest_rank_children(
        self,
    ) -> Tuple[Optional[BONode[T]], Optional[BONode[T]]]:
        # The list is rank ordered so these are just the first two entries.
        head = self.children
        if head is None:
            return (None, None)
        return (head, head.right)

    def same_rank_child(self, rank: int) -> Optional[BONode[T]]:
        for child in iter_siblings(self.children):
            if child.rank == rank:
                return child
            elif child.rank > rank:
                break
        return None


def min_of_3[T: Comparable](
    n1: BONode[T], n2: BONode[T], n3: BONode[T]
) -> Tuple[BONode[T], BONode[T], BONode[T]]:
    """Pick the minimum-valued node of three.

    Returns:
        The minimum first, followed by the other two.
    """
    if n1.value < n2.value:
        if n1.value < n3.value:
            return (n1, n2, n3)
        else:
            return (n3, n1, n2)
    else:
        if n2.value < n3.value:
            return (n2, n1, n3)
        else:
            return (n3, n1, n2)


def skew_link[T: Comparable](
    first: Optional[BONode[T]], second: Optional[BONode[T]], new_node: BONode[T]
) -> BONode[T]:
    """Link two equal-rank trees and a rank-0 node into one tree.

    If either tree is missing, or their ranks differ, nothing is linked and
    new_node is returned as is. Otherwise the smallest of the three adopts
    the other two and its rank becomes one more than the pair's.

    Returns:
        The node to hand to the heap root.
    """
    if first is None or second is None or first.rank != second.rank:
        return new_node

    rank = first.rank
    top, x, y = min_of_3(first, second, new_node)

    top.detach()
    x.detach()
    y.detach()

    top.adopt(x)
    top.adopt(y)
    top.rank = rank + 1

    return top


def simple_link[T: Comparable](
    existing: BONode[T], new_node: BONode[T]
) -> BONode[T]:
    """Binomial link of two equal-rank trees.

    existing is detached first; new_node is expected to be detached already.
    The result is detached.
    """
    existing.detach()

    if existing.value < new_node.value:
        existing.adopt(new_node)
        existing.rank += 1
        return existing
    else:
        new_node.adopt(existing)
        new_node.rank += 1
        return new_node
