"""Mutable meldable min-heap using Brodal-Okasaki skew binomial trees.

The heap is a single root node whose children form a rank-ordered forest.
Insertion skew-links the two lowest-rank children with the new node, so it
never cascades. Merge is lazy: the other heap's root parks its children in
its subqueue and is inserted like a fresh node, and the parked forest is
only linked in when pop exposes that node at the root.

Time Complexity:
    insert, merge: O(1) amortized, O(log n) worst case
    pop: O(log n)
    peek, size: O(1)
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Type, override

from boheap.common import (
    Comparable,
    EmptyQueue,
    Impossible,
    IncompatibleMerge,
    Membership,
    Sized,
)
from boheap.iters import iter_siblings, iter_subtree, snapshot
from boheap.node import BONode, simple_link, skew_link

__all__ = ["BOHeap"]


class BOHeap[T: Comparable](Sized):
    """A Brodal-Okasaki mutable min-heap"""

    def __init__(self) -> None:
        self._root: Optional[BONode[T]] = None
        self._size = 0

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> BOHeap[T]:
        """Create an empty heap.

        Args:
            _ty: Optional type hint for elements (unused).

        Returns:
            A new empty heap.
        """
        return BOHeap[T]()

    @staticmethod
    def singleton(value: T) -> BOHeap[T]:
        heap: BOHeap[T] = BOHeap()
        heap.insert(value)
        return heap

    @staticmethod
    def mk(values: Iterable[T]) -> BOHeap[T]:
        """Create a heap from an iterable of elements.

        Args:
            values: Iterable of elements to insert into the heap.

        Returns:
            A heap containing all the given elements.
        """
        heap: BOHeap[T] = BOHeap()
        for value in values:
            heap.insert(value)
        return heap

    @override
    def size(self) -> int:
        """Return the number of elements in the heap, including those still
        parked by a lazy merge.
        """
        return self._size

    def insert(self, value: T) -> None:
        """Insert a new element into the heap.

        Time Complexity: O(1) amortized

        Args:
            value: The element to insert.
        """
        self._size += 1
        self._insert_node(BONode(value))

    def peek(self) -> T:
        """Return the minimum element without removing it.

        Raises:
            EmptyQueue: If the heap is empty.
        """
        if self._root is None:
            raise EmptyQueue("peek into an empty heap")
        return self._root.value

    def pop(self) -> T:
        """Remove and return the minimum element.

        Any subqueue parked at the root is linked in first, then the
        smallest child of the root is removed, its own children are
        re-inserted, and its key and subqueue are promoted into the root.

        Time Complexity: O(log n)

        Raises:
            EmptyQueue: If the heap is empty.
        """
        if self._root is None:
            raise EmptyQueue("pop from an empty heap")

        value = self._root.value
        self._size -= 1

        if self._root.has_subqueue():
            self._drain_subqueue()

        root = self._root
        min_child = root.min_child()
        if min_child is None:
            self._root = None
        else:
            min_child.detach()
            self._reinsert_children(min_child)
            self._promote(min_child)

        return value

    def merge(self, other: BOHeap[T]) -> None:
        """Move every element of other into this heap.

        The merge is lazy: other's structure is parked under its root and
        linked in by later pops. other is left empty.

        Args:
            other: A heap of the same concrete type, distinct from this one.

        Raises:
            IncompatibleMerge: If other is not the same kind of heap, or is
                this heap.
        """
        if type(other) is not type(self):
            raise IncompatibleMerge(
                f"cannot merge {type(other).__name__} into {type(self).__name__}"
            )
        if other is self:
            raise IncompatibleMerge("cannot merge a heap into itself")

        other_root = other._root
        if other_root is None:
            return

        logging.debug(
            "merging heap of size %d into heap of size %d", other._size, self._size
        )
        self._size += other._size
        other._root = None
        other._size = 0

        other_root.move_children_to_subqueue()
        # Childless now, so it goes back in as a rank-0 tree
        other_root.rank = 0
        self._insert_node(other_root)

    def drain(self) -> Iterator[T]:
        """Pop elements in ascending order until the heap is empty.

        Yields:
            Elements in ascending order.
        """
        while self._root is not None:
            yield self.pop()

    def check_invariants(self) -> None:
        """Walk the whole structure and verify it.

        Checks heap order for children and subqueues, rank order of every
        children list, parent/membership/sibling link consistency, and that
        the number of reachable keys matches size().

        Raises:
            Impossible: Describing the first violation found.
        """
        root = self._root
        if root is None:
            if self._size != 0:
                raise Impossible(f"empty heap with size {self._size}")
            return
        if root.parent is not None or root.membership != Membership.Detached:
            raise Impossible(f"root is attached: {root!r}")

        count = 0
        for node in iter_subtree(root):
            count += 1
            _check_list(node, node.children, Membership.Child)
            _check_list(node, node.subqueue, Membership.Subqueue)
            prev_rank = -1
            for child in iter_siblings(node.children):
                if child.rank < prev_rank:
                    raise Impossible(f"children of {node!r} out of rank order")
                prev_rank = child.rank

        if count != self._size:
            raise Impossible(f"{count} reachable keys but size is {self._size}")

    def _insert_node(self, node: BONode[T]) -> None:
        # node must be detached. Swapping with the root and cascading carries
        # both continue the loop with a new node to place.
        current = node
        while True:
            root = self._root
            if root is None:
                self._root = current
                return
            elif current.value < root.value:
                # Strict: an equal old root would swap back forever
                self._swap_with_root(current)
                current = root
            elif current.rank == 0:
                first, second = root.smallest_rank_children()
                root.adopt(skew_link(first, second, current))
                return
            else:
                same = root.same_rank_child(current.rank)
                if same is None:
                    root.adopt(current)
                    return
                current = simple_link(same, current)
                logging.debug("carrying rank %d tree", current.rank)

    def _swap_with_root(self, new_root: BONode[T]) -> None:
        old_root = self._root
        if old_root is None:
            raise Impossible
        # Children hold parent references, so each one is re-adopted
        for child in snapshot(old_root.children):
            child.detach()
            new_root.adopt(child)
        old_root.rank = 0
        self._root = new_root

    def _drain_subqueue(self) -> None:
        root = self._root
        if root is None:
            raise Impossible
        parked = snapshot(root.subqueue)
        logging.debug("linking %d parked trees", len(parked))
        for node in parked:
            node.detach()
            self._insert_node(node)

    def _reinsert_children(self, node: BONode[T]) -> None:
        for child in snapshot(node.children):
            child.detach()
            self._insert_node(child)

    def _promote(self, min_child: BONode[T]) -> None:
        root = self._root
        if root is None:
            raise Impossible
        if root.has_subqueue():
            raise Impossible("promoting into a root with an undrained subqueue")
        root.value = min_child.value
        root.take_subqueue(min_child)


def _check_list[T: Comparable](
    owner: BONode[T], head: Optional[BONode[T]], membership: Membership
) -> None:
    prev: Optional[BONode[T]] = None
    for node in iter_siblings(head):
        if node.parent is not owner:
            raise Impossible(f"{node!r} does not point back to {owner!r}")
        if node.membership != membership:
            raise Impossible(f"{node!r} tagged {node.membership} in {membership} list")
        if node.left is not prev:
            raise Impossible(f"broken left link at {node!r}")
        if node.value < owner.value:
            raise Impossible(f"{node!r} is smaller than its parent {owner!r}")
        prev = node
