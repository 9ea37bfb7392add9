from enum import Enum
from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Sequence, AsyncIterable
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')
R = TypeVar('R')

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
Action = Callable[[T], Any]
Combiner = Callable[[U, T], U]
Zipper = Callable[[T, U], V]


class Flow(Enum):
    """result of a push step: keep going, or stop the traversal early"""
    CONTINUE = 'continue'
    STOP = 'stop'


CONTINUE = Flow.CONTINUE
STOP = Flow.STOP

# a sink receives one element; returning None is the same as CONTINUE
Sink = Callable[[T], Optional[Flow]]


class SummaryStatistics:
    """count, sum, min, max and average gathered in a single pass"""

    def __init__(self, count: int, total: Any, minimum: Any, maximum: Any):
        self.count = count
        self.sum = total
        self.min = minimum
        self.max = maximum

    @property
    def average(self) -> float:
        return self.sum / self.count if self.count > 0 else 0.0

    def __eq__(self, other) -> bool:
        if not isinstance(other, SummaryStatistics):
            return NotImplemented
        return (self.count, self.sum, self.min, self.max) == (other.count, other.sum, other.min, other.max)

    def __repr__(self) -> str:
        return (f"SummaryStatistics(count={self.count}, sum={self.sum}, min={self.min}, "
                f"average={self.average}, max={self.max})")
