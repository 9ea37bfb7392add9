"""operators that gate or transform elements without memory beyond a flag."""
from __future__ import annotations

import typing
from ..types import *
from ..traversal import Operator

if typing.TYPE_CHECKING:
    from ..query import Query


class Filter(Operator[T]):
    def __init__(self, upstream: 'Query[T]', predicate: Predicate[T]):
        self._upstream = upstream
        self._predicate = predicate

    def traverse(self, sink: Sink[T]) -> Flow:
        predicate = self._predicate
        return self._upstream.traverse(lambda item: sink(item) if predicate(item) else CONTINUE)

    def try_advance(self, sink: Sink[T]) -> bool:
        found = False

        def check(item: T) -> None:
            nonlocal found
            if self._predicate(item):
                found = True
                sink(item)

        # keep pulling until an element passes or upstream runs dry
        while self._upstream.try_advance(check):
            if found:
                return True
        return False


class Map(Operator[U]):
    def __init__(self, upstream: 'Query[T]', mapper: Selector[T, U]):
        self._upstream = upstream
        self._mapper = mapper

    def traverse(self, sink: Sink[U]) -> Flow:
        mapper = self._mapper
        return self._upstream.traverse(lambda item: sink(mapper(item)))

    def try_advance(self, sink: Sink[U]) -> bool:
        return self._upstream.try_advance(lambda item: sink(self._mapper(item)))


class Peek(Operator[T]):
    def __init__(self, upstream: 'Query[T]', action: Action[T]):
        self._upstream = upstream
        self._action = action

    def _visit(self, sink: Sink[T]) -> Sink[T]:
        action = self._action

        def visit(item: T) -> Optional[Flow]:
            action(item)
            return sink(item)
        return visit

    def traverse(self, sink: Sink[T]) -> Flow:
        return self._upstream.traverse(self._visit(sink))

    def try_advance(self, sink: Sink[T]) -> bool:
        return self._upstream.try_advance(self._visit(sink))


class TakeWhile(Operator[T]):
    """
    forwards elements until the predicate first fails.
    the failing element is consumed from upstream and discarded; once it has been
    seen the operator stays exhausted.
    """

    def __init__(self, upstream: 'Query[T]', predicate: Predicate[T]):
        self._upstream = upstream
        self._predicate = predicate
        self._done = False

    def traverse(self, sink: Sink[T]) -> Flow:
        if self._done:
            return CONTINUE

        def step(item: T) -> Optional[Flow]:
            if not self._predicate(item):
                self._done = True
                return STOP
            return sink(item)

        flow = self._upstream.traverse(step)
        # stopping upstream ourselves is exhaustion, not a downstream stop
        return CONTINUE if self._done else flow

    def try_advance(self, sink: Sink[T]) -> bool:
        if self._done:
            return False
        passed = False

        def step(item: T) -> None:
            nonlocal passed
            if self._predicate(item):
                passed = True
                sink(item)
            else:
                self._done = True

        if not self._upstream.try_advance(step):
            self._done = True
            return False
        return passed


class DropWhile(Operator[T]):
    """skips the leading run of elements matching the predicate, then forwards everything"""

    def __init__(self, upstream: 'Query[T]', predicate: Predicate[T]):
        self._upstream = upstream
        self._predicate = predicate
        self._dropping = True

    def traverse(self, sink: Sink[T]) -> Flow:
        if not self._dropping:
            return self._upstream.traverse(sink)

        def step(item: T) -> Optional[Flow]:
            if self._dropping:
                if self._predicate(item):
                    return CONTINUE
                self._dropping = False
            return sink(item)

        return self._upstream.traverse(step)

    def try_advance(self, sink: Sink[T]) -> bool:
        if not self._dropping:
            return self._upstream.try_advance(sink)

        def step(item: T) -> None:
            if self._predicate(item):
                return
            self._dropping = False
            sink(item)

        while self._dropping:
            if not self._upstream.try_advance(step):
                return False
        return True
