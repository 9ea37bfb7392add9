from __future__ import annotations
import typing
from ..types import *
from ..errors import EmptySequenceError

if typing.TYPE_CHECKING:
    from ..query import Query

_NOTHING = object()


class StatsAccessor(Generic[T]):
    """numeric reductions, each a single push-traversal fold"""

    def __init__(self, query_instance: 'Query[T]'):
        self._query = query_instance

    def _values(self, selector: Optional[Selector[T, Any]]) -> 'Query[Any]':
        return self._query.map_to_obj(selector) if selector else self._query

    def sum(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> Union[int, float]:
        """calc sum, starting from the kind's zero"""
        return self._values(selector).to.fold(self._query.kind.zero, lambda acc, x: acc + x)

    def average(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> float:
        """calc average"""
        stats = self.summary_statistics(selector)
        if stats.count == 0: raise EmptySequenceError("cannot calculate average of empty sequence")
        return stats.average

    def min(self, selector: Optional[Selector[T, Any]] = None) -> T:
        """find minimum"""
        best = _NOTHING

        def keep(item: T) -> None:
            nonlocal best
            if best is _NOTHING or item < best:
                best = item
        self._values(selector).traverse(keep)
        if best is _NOTHING: raise EmptySequenceError("cannot find minimum of empty sequence")
        return best

    def max(self, selector: Optional[Selector[T, Any]] = None) -> T:
        """find maximum"""
        best = _NOTHING

        def keep(item: T) -> None:
            nonlocal best
            if best is _NOTHING or item > best:
                best = item
        self._values(selector).traverse(keep)
        if best is _NOTHING: raise EmptySequenceError("cannot find maximum of empty sequence")
        return best

    def summary_statistics(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> SummaryStatistics:
        """count, sum, min, max and average in one pass"""
        count, total = 0, self._query.kind.zero
        low = high = None

        def accept(item) -> None:
            nonlocal count, total, low, high
            count += 1
            total += item
            if low is None or item < low: low = item
            if high is None or item > high: high = item
        self._values(selector).traverse(accept)
        return SummaryStatistics(count, total, low, high)
