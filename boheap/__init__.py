from boheap.common import EmptyQueue, Impossible, IncompatibleMerge, Membership
from boheap.heap import BOHeap
from boheap.node import BONode

__all__ = [
    "BOHeap",
    "BONode",
    "EmptyQueue",
    "Impossible",
    "IncompatibleMerge",
    "Membership",
]
