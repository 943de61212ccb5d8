"""Common types and exceptions for the boheap package.

This module provides the error taxonomy raised by heap operations, the
ordering protocol keys must satisfy, and small mixins shared by the
node and queue layers.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from enum import Enum, auto, unique
from typing import Protocol

__all__ = [
    "Comparable",
    "EmptyQueue",
    "Impossible",
    "IncompatibleMerge",
    "Irrelevant",
    "Membership",
    "Sized",
]


class Irrelevant(NotImplementedError):
    pass


class Impossible(Exception):
    """Exception raised when encountering theoretically impossible states.

    Used to indicate internal consistency violations in heap operations.
    """

    pass


class EmptyQueue(IndexError):
    """Raised by pop and peek when the heap holds no elements."""

    pass


class IncompatibleMerge(TypeError):
    """Raised when merging a heap with something that is not a heap of the
    same concrete type, or with itself.
    """

    pass


class Comparable(Protocol):
    def __lt__[S](self: S, other: S) -> bool:
        raise Irrelevant


@unique
class Membership(Enum):
    """Which sibling list of its parent a node currently occupies."""

    Detached = auto()  # Not in any list
    Child = auto()  # In the parent's children list
    Subqueue = auto()  # In the parent's deferred subqueue list


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def null(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.null()

    def __len__(self) -> int:
        return self.size()
