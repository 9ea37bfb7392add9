from __future__ import annotations

from .types import *
from .errors import QueryExhaustedError
from .kinds import ElementKind, OBJECT
from .traversal import Advancer, Traverser

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.terminal import TerminalAccessor
from .extensions.stats import StatsAccessor

_NOTHING = object()


class Query(_CoreOperations[T]):
    """
    a lazy, single-pass sequence consumable by push (traverse) or pull (try_advance).

    both contracts share one logical position: after n pulls, a traversal
    yields exactly the remaining elements, and after a full traversal every
    pull reports nothing left. a query is meant to be consumed once.
    """

    def __init__(self, advancer: Advancer[T], traverser: Traverser[T], kind: ElementKind = OBJECT):
        self._adv = advancer
        self._trav = traverser
        self.kind = kind
        # one-element lookahead filled by has_next()
        self._pending: Any = _NOTHING
        # --- initialize accessors ---
        self.to = TerminalAccessor(self)
        self.stats = StatsAccessor(self)

    # --- push ---

    def traverse(self, sink: Sink[T]) -> Flow:
        """push every remaining element into sink until exhausted or the sink returns STOP"""
        if self._pending is not _NOTHING:
            item, self._pending = self._pending, _NOTHING
            if sink(item) is STOP:
                return STOP
        return self._trav.traverse(sink)

    def for_each(self, sink: Sink[T]) -> None:
        self.traverse(sink)

    def short_circuit(self, sink: Sink[T]) -> None:
        """traversal for early-exit terminals: a STOP from sink ends here and is never reported"""
        self.traverse(sink)

    # --- pull ---

    def try_advance(self, sink: Sink[T]) -> bool:
        """push the next element into sink, returning False when there is none"""
        if self._pending is not _NOTHING:
            item, self._pending = self._pending, _NOTHING
            sink(item)
            return True
        return self._adv.try_advance(sink)

    def has_next(self) -> bool:
        """whether another element exists. does not consume it."""
        if self._pending is not _NOTHING:
            return True

        def hold(item: T) -> None:
            self._pending = item
        return self._adv.try_advance(hold)

    def next(self) -> T:
        """the next element; raises QueryExhaustedError when none is left"""
        if not self.has_next():
            raise QueryExhaustedError("no more elements available on iteration!")
        item, self._pending = self._pending, _NOTHING
        return item

    def __iter__(self) -> Iterator[T]:
        return self.to.iter()

    def __repr__(self) -> str:
        return f"Query(kind={self.kind.name}, traverser={self._trav!r})"
