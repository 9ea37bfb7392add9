"""
the two consumption contracts every sequence supports.

push (Traverser): the sequence drives a sink over every remaining element until
it is exhausted or the sink returns STOP.
pull (Advancer): the consumer asks for one element at a time and the sequence
keeps its cursor between calls.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from .types import *
from .errors import UnsupportedTraversalError


class Traverser(ABC, Generic[T]):
    @abstractmethod
    def traverse(self, sink: Sink[T]) -> Flow:
        """push every remaining element into sink. returns STOP only if the sink asked to stop."""
        pass


class Advancer(ABC, Generic[T]):
    @abstractmethod
    def try_advance(self, sink: Sink[T]) -> bool:
        """push at most one element into sink. returns False when nothing is left."""
        pass


class Operator(Advancer[T], Traverser[T]):
    """a sequence stage that implements both contracts over one shared cursor"""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class _Empty(Operator[Any]):
    def traverse(self, sink: Sink[Any]) -> Flow:
        return CONTINUE

    def try_advance(self, sink: Sink[Any]) -> bool:
        return False


EMPTY = _Empty()


class FunctionTraverser(Traverser[T]):
    """adapts a plain `traverse(sink)` callable, treating a None result as CONTINUE"""

    def __init__(self, fn: Callable[[Sink[T]], Optional[Flow]]):
        self._fn = fn

    def traverse(self, sink: Sink[T]) -> Flow:
        return STOP if self._fn(sink) is STOP else CONTINUE


class FunctionAdvancer(Advancer[T]):
    """adapts a plain `try_advance(sink) -> bool` callable"""

    def __init__(self, fn: Callable[[Sink[T]], bool]):
        self._fn = fn

    def try_advance(self, sink: Sink[T]) -> bool:
        return bool(self._fn(sink))


class UnsupportedAdvancer(Advancer[Any]):
    """placeholder for push-only chains; any pull request fails fast"""

    def __init__(self, message: str):
        self._message = message

    def try_advance(self, sink: Sink[Any]) -> bool:
        raise UnsupportedTraversalError(self._message)
