from typing import List

import pytest

from boheap.common import Impossible, Membership
from boheap.iters import snapshot
from boheap.node import BONode, min_of_3, simple_link, skew_link


def ranked(value: int, rank: int) -> BONode[int]:
    return BONode(value, rank)


def child_values(node: BONode[int]) -> List[int]:
    return [child.value for child in snapshot(node.children)]


def child_ranks(node: BONode[int]) -> List[int]:
    return [child.rank for child in snapshot(node.children)]


def test_adopt_in_rank_order():
    """Children adopted in ascending rank come out in the same order"""
    root = BONode(0)
    nodes = [ranked(i, i) for i in range(1, 5)]
    for node in nodes:
        root.adopt(node)

    assert snapshot(root.children) == nodes
    for node in nodes:
        assert node.parent is root
        assert node.membership == Membership.Child


def test_adopt_reverse_rank_order():
    """Adopting in descending rank still yields an ascending list"""
    root = BONode(0)
    n1 = ranked(1, 1)
    n2 = ranked(2, 2)
    n3 = ranked(3, 3)
    n4 = ranked(4, 4)
    n4_2 = ranked(5, 4)

    for node in [n4_2, n4, n3, n2, n1]:
        root.adopt(node)

    assert snapshot(root.children) == [n1, n2, n3, n4, n4_2]


def test_adopt_mixed_ranks():
    root = BONode(0)
    for value, rank in [(1, 0), (2, 0), (3, 3), (4, 1)]:
        root.adopt(ranked(value, rank))

    assert child_ranks(root) == [0, 0, 1, 3]


def test_adopt_links_are_symmetric():
    root = BONode(0)
    for rank in [2, 0, 1]:
        root.adopt(ranked(rank, rank))

    children = snapshot(root.children)
    assert children[0].left is None
    assert children[-1].right is None
    for left, right in zip(children, children[1:]):
        assert left.right is right
        assert right.left is left


def test_adopt_attached_node_fails():
    root = BONode(0)
    other = BONode(1)
    node = BONode(2)
    root.adopt(node)

    with pytest.raises(Impossible):
        other.adopt(node)


def test_smallest_rank_children():
    root = BONode(0)
    n1 = ranked(1, 1)
    n2 = ranked(2, 1)
    root.adopt(n1)
    root.adopt(n2)
    root.adopt(ranked(3, 5))
    root.adopt(ranked(4, 6))

    first, second = root.smallest_rank_children()
    assert {first, second} == {n1, n2}


def test_smallest_rank_children_short():
    root = BONode(0)
    assert root.smallest_rank_children() == (None, None)

    only = BONode(1)
    root.adopt(only)
    assert root.smallest_rank_children() == (only, None)


def test_same_rank_child():
    root = BONode(0)
    root.adopt(ranked(1, 0))
    target = ranked(2, 2)
    root.adopt(target)
    root.adopt(ranked(3, 4))

    assert root.same_rank_child(2) is target
    assert root.same_rank_child(3) is None
    assert root.same_rank_child(7) is None


def test_min_child():
    root = BONode(0)
    assert root.min_child() is None

    root.adopt(ranked(7, 0))
    low = ranked(3, 1)
    root.adopt(low)
    root.adopt(ranked(3, 2))
    root.adopt(ranked(5, 3))

    # Ties resolve to the first one in the list
    assert root.min_child() is low


@pytest.mark.parametrize("position", [0, 1, 2])
def test_detach_from_children(position: int):
    root = BONode(0)
    nodes = [ranked(i, i) for i in range(3)]
    for node in nodes:
        root.adopt(node)

    target = nodes[position]
    target.detach()

    remaining = [n for n in nodes if n is not target]
    assert snapshot(root.children) == remaining
    assert target.parent is None
    assert target.left is None
    assert target.right is None
    assert target.membership == Membership.Detached
    assert remaining[0].left is None
    assert remaining[0].right is remaining[1]
    assert remaining[1].left is remaining[0]


def test_detach_only_child():
    root = BONode(0)
    node = BONode(1)
    root.adopt(node)
    node.detach()

    assert not root.has_children()


def test_detach_without_parent_is_noop():
    node = BONode(1)
    node.detach()
    assert node.membership == Membership.Detached


def test_detach_from_subqueue_leaves_children():
    root = BONode(0)
    child = BONode(1)
    parked = BONode(2)
    other_parked = BONode(3)
    root.adopt(child)
    root.park(parked)
    root.park(other_parked)

    # Parking pushes to the front
    assert snapshot(root.subqueue) == [other_parked, parked]

    other_parked.detach()
    assert snapshot(root.subqueue) == [parked]
    assert snapshot(root.children) == [child]

    parked.detach()
    assert not root.has_subqueue()
    assert snapshot(root.children) == [child]


def test_move_children_to_subqueue_keeps_parked():
    root = BONode(0)
    already = BONode(10)
    root.park(already)
    kids = [ranked(i, i) for i in range(1, 4)]
    for kid in kids:
        root.adopt(kid)

    root.move_children_to_subqueue()

    assert not root.has_children()
    parked = snapshot(root.subqueue)
    assert set(parked) == set(kids) | {already}
    for node in parked:
        assert node.parent is root
        assert node.membership == Membership.Subqueue


def test_take_subqueue():
    source = BONode(1)
    target = BONode(0)
    parked = [BONode(5), BONode(6)]
    for node in parked:
        source.park(node)

    target.take_subqueue(source)

    assert not source.has_subqueue()
    assert set(snapshot(target.subqueue)) == set(parked)
    assert all(node.parent is target for node in parked)


def test_min_of_3():
    a, b, c = BONode(1), BONode(2), BONode(3)
    for args in [(a, b, c), (a, c, b), (b, a, c), (b, c, a), (c, a, b), (c, b, a)]:
        low, x, y = min_of_3(*args)
        assert low is a
        assert {x, y} == {b, c}


def test_skew_link_missing_or_unequal():
    new = BONode(5)
    assert skew_link(None, None, new) is new
    assert skew_link(ranked(1, 0), None, new) is new
    assert skew_link(ranked(1, 0), ranked(2, 1), new) is new
    assert not new.has_children()
    assert new.rank == 0


def test_skew_link_new_node_smallest():
    root = BONode(-1)
    a = ranked(3, 1)
    b = ranked(4, 1)
    root.adopt(a)
    root.adopt(b)
    new = BONode(2)

    top = skew_link(a, b, new)

    assert top is new
    assert top.rank == 2
    assert set(snapshot(top.children)) == {a, b}
    assert top.membership == Membership.Detached
    assert not root.has_children()


def test_skew_link_existing_smallest():
    root = BONode(-1)
    a = BONode(1)
    b = BONode(2)
    root.adopt(a)
    root.adopt(b)
    new = BONode(3)

    top = skew_link(a, b, new)

    assert top is a
    assert top.rank == 1
    assert set(snapshot(top.children)) == {b, new}
    assert child_ranks(top) == [0, 0]
    assert top.parent is None


def test_simple_link():
    root = BONode(0)
    existing = ranked(5, 2)
    root.adopt(existing)
    new = ranked(3, 2)

    top = simple_link(existing, new)

    assert top is new
    assert top.rank == 3
    assert snapshot(top.children) == [existing]
    assert not root.has_children()


def test_simple_link_existing_wins():
    existing = ranked(1, 0)
    new = ranked(4, 0)
    top = simple_link(existing, new)

    assert top is existing
    assert top.rank == 1
    assert child_values(top) == [4]
