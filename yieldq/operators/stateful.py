"""
operators that keep explicit cursor state between calls.

the state is shared by both contracts, so a chain can be pulled for a while and
then traversed (or the other way round) without losing or repeating elements.
"""
from __future__ import annotations

import logging
import typing
from ..types import *
from ..traversal import Operator
from ..sources import ArraySource

if typing.TYPE_CHECKING:
    from ..kinds import ElementKind
    from ..query import Query

logger = logging.getLogger(__name__)


def _discard(item: Any) -> None:
    pass


class Distinct(Operator[T]):
    """
    drops elements equal to one already emitted.
    memory grows with the number of distinct elements, unbounded for infinite sources.
    """

    def __init__(self, upstream: 'Query[T]'):
        self._upstream = upstream
        self._seen: Set[T] = set()

    def _admit(self, item: T) -> bool:
        if item in self._seen:
            return False
        self._seen.add(item)
        return True

    def traverse(self, sink: Sink[T]) -> Flow:
        return self._upstream.traverse(lambda item: sink(item) if self._admit(item) else CONTINUE)

    def try_advance(self, sink: Sink[T]) -> bool:
        found = False

        def check(item: T) -> None:
            nonlocal found
            if self._admit(item):
                found = True
                sink(item)

        while self._upstream.try_advance(check):
            if found:
                return True
        return False


class Concat(Operator[T]):
    """all of first, then all of second. the switch to second is permanent."""

    def __init__(self, first: 'Query[T]', second: 'Query[T]'):
        self._first = first
        self._second = second
        self._on_second = False

    def traverse(self, sink: Sink[T]) -> Flow:
        if not self._on_second:
            if self._first.traverse(sink) is STOP:
                return STOP
            self._on_second = True
        return self._second.traverse(sink)

    def try_advance(self, sink: Sink[T]) -> bool:
        if not self._on_second:
            if self._first.try_advance(sink):
                return True
            self._on_second = True
        return self._second.try_advance(sink)


class FlatMap(Operator[U]):
    """
    maps each upstream element to a sub-sequence and emits it whole before
    moving to the next upstream element.
    """

    def __init__(self, upstream: 'Query[T]', mapper: Callable[[T], 'Query[U]']):
        self._upstream = upstream
        self._mapper = mapper
        self._current: Optional['Query[U]'] = None

    def _open(self, item: T) -> None:
        self._current = self._mapper(item)

    def traverse(self, sink: Sink[U]) -> Flow:
        # finish a sub-sequence left half-consumed by earlier pulls or an early stop
        if self._current is not None and self._current.traverse(sink) is STOP:
            return STOP

        def step(item: T) -> Flow:
            self._open(item)
            return self._current.traverse(sink)

        return self._upstream.traverse(step)

    def try_advance(self, sink: Sink[U]) -> bool:
        while self._current is None or not self._current.try_advance(sink):
            if not self._upstream.try_advance(self._open):
                return False
        return True


class Zip(Operator[V]):
    """pairs elements positionally and ends as soon as either side runs out"""

    def __init__(self, upstream: 'Query[T]', other: 'Query[U]', zipper: Zipper[T, U, V]):
        self._upstream = upstream
        self._other = other
        self._zipper = zipper

    def traverse(self, sink: Sink[V]) -> Flow:
        other = self._other
        if not other.has_next():
            return CONTINUE
        exhausted = False

        def step(item: T) -> Optional[Flow]:
            nonlocal exhausted
            if not other.has_next():
                # the unmatched left element is dropped
                exhausted = True
                return STOP
            return sink(self._zipper(item, other.next()))

        flow = self._upstream.traverse(step)
        return CONTINUE if exhausted else flow

    def try_advance(self, sink: Sink[V]) -> bool:
        if not (self._upstream.has_next() and self._other.has_next()):
            return False
        left = self._upstream.next()
        sink(self._zipper(left, self._other.next()))
        return True


class Skip(Operator[T]):
    """discards the first n elements; skipping past the end just yields nothing"""

    def __init__(self, upstream: 'Query[T]', n: int):
        if n < 0:
            raise ValueError(f"skip count must be non-negative, got {n}")
        self._upstream = upstream
        self._n = n
        self._index = 0

    def traverse(self, sink: Sink[T]) -> Flow:
        if self._index >= self._n:
            return self._upstream.traverse(sink)

        def step(item: T) -> Optional[Flow]:
            if self._index < self._n:
                self._index += 1
                return CONTINUE
            return sink(item)

        return self._upstream.traverse(step)

    def try_advance(self, sink: Sink[T]) -> bool:
        while self._index < self._n:
            if not self._upstream.try_advance(_discard):
                return False
            self._index += 1
        return self._upstream.try_advance(sink)


class Limit(Operator[T]):
    """emits at most n elements and never asks upstream for more once n have gone out"""

    def __init__(self, upstream: 'Query[T]', n: int):
        if n < 0:
            raise ValueError(f"limit count must be non-negative, got {n}")
        self._upstream = upstream
        self._n = n
        self._count = 0

    def traverse(self, sink: Sink[T]) -> Flow:
        if self._count >= self._n:
            return CONTINUE
        reached = False

        def step(item: T) -> Flow:
            nonlocal reached
            self._count += 1
            if sink(item) is STOP:
                return STOP
            if self._count >= self._n:
                reached = True
                return STOP
            return CONTINUE

        flow = self._upstream.traverse(step)
        return CONTINUE if reached else flow

    def try_advance(self, sink: Sink[T]) -> bool:
        if self._count >= self._n:
            return False
        if self._upstream.try_advance(sink):
            self._count += 1
            return True
        return False


class Sorted(Operator[T]):
    """
    buffers the whole upstream, sorts it and replays the buffer.
    this is the one non-streaming operator: the buffer is filled on the first
    request of either contract, so upstream must be finite.
    """

    def __init__(self, upstream: 'Query[T]', kind: 'ElementKind',
                 key: Optional[KeySelector[T, Any]] = None, reverse: bool = False):
        self._upstream = upstream
        self._kind = kind
        self._key = key
        self._reverse = reverse
        self._replay: Optional[ArraySource[T]] = None

    def _source(self) -> ArraySource[T]:
        if self._replay is None:
            buffer: List[T] = []
            self._upstream.traverse(buffer.append)
            logger.debug("sorted buffered %d elements", len(buffer))
            self._replay = ArraySource(self._kind.sort(buffer, key=self._key, reverse=self._reverse))
            self._upstream = None
        return self._replay

    def traverse(self, sink: Sink[T]) -> Flow:
        return self._source().traverse(sink)

    def try_advance(self, sink: Sink[T]) -> bool:
        return self._source().try_advance(sink)
