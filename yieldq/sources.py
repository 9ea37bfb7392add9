"""leaf sequences: adapters that bring external data into the push/pull model."""
from __future__ import annotations

import logging
from .types import *
from .traversal import Operator

logger = logging.getLogger(__name__)


class ArraySource(Operator[T]):
    """indexable, finite data walked with an index cursor"""

    def __init__(self, data: Sequence[T], coerce: Optional[Callable[[Any], T]] = None):
        self._data = data
        self._coerce = coerce
        self._index = 0

    def _at(self, index: int) -> T:
        item = self._data[index]
        return self._coerce(item) if self._coerce else item

    def traverse(self, sink: Sink[T]) -> Flow:
        size = len(self._data)
        while self._index < size:
            item = self._at(self._index)
            # move the cursor before emitting so a stopped traversal resumes after this element
            self._index += 1
            if sink(item) is STOP:
                return STOP
        return CONTINUE

    def try_advance(self, sink: Sink[T]) -> bool:
        if self._index >= len(self._data):
            return False
        item = self._at(self._index)
        self._index += 1
        sink(item)
        return True

    def __repr__(self) -> str:
        return f"ArraySource(size={len(self._data)}, index={self._index})"


class IterableSource(Operator[T]):
    """
    bridge from any python iterable or iterator.
    the iterator is created on first use and released once it runs dry.
    """

    def __init__(self, data: Iterable[T], coerce: Optional[Callable[[Any], T]] = None):
        self._data = data
        self._coerce = coerce
        self._iterator: Optional[Iterator[T]] = None
        self._done = False

    def _current(self) -> Iterator[T]:
        if self._iterator is None:
            self._iterator = iter(self._data)
        return self._iterator

    def _release(self) -> None:
        iterator, self._iterator = self._iterator, None
        self._done = True
        self._data = None
        close = getattr(iterator, 'close', None)
        if close is not None:
            close()
        logger.debug("iterable source exhausted and released")

    def traverse(self, sink: Sink[T]) -> Flow:
        if self._done:
            return CONTINUE
        coerce = self._coerce
        for item in self._current():
            if sink(coerce(item) if coerce else item) is STOP:
                return STOP
        self._release()
        return CONTINUE

    def try_advance(self, sink: Sink[T]) -> bool:
        if self._done:
            return False
        sentinel = object()
        item = next(self._current(), sentinel)
        if item is sentinel:
            self._release()
            return False
        sink(self._coerce(item) if self._coerce else item)
        return True


class IterateSource(Operator[T]):
    """infinite sequence seed, f(seed), f(f(seed)), ... ; f runs only when the next element is requested"""

    def __init__(self, seed: T, fn: Callable[[T], T]):
        self._value = seed
        self._fn = fn
        self._started = False

    def _step(self) -> T:
        if self._started:
            self._value = self._fn(self._value)
        else:
            self._started = True
        return self._value

    def traverse(self, sink: Sink[T]) -> Flow:
        while True:
            if sink(self._step()) is STOP:
                return STOP

    def try_advance(self, sink: Sink[T]) -> bool:
        sink(self._step())
        return True


class GenerateSource(Operator[T]):
    """infinite sequence of supplier() results"""

    def __init__(self, supplier: Callable[[], T]):
        self._supplier = supplier

    def traverse(self, sink: Sink[T]) -> Flow:
        supplier = self._supplier
        while True:
            if sink(supplier()) is STOP:
                return STOP

    def try_advance(self, sink: Sink[T]) -> bool:
        sink(self._supplier())
        return True
