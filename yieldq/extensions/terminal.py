from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from ..types import *
from ..errors import EmptySequenceError

if typing.TYPE_CHECKING:
    from ..query import Query

_NOTHING = object()


class TerminalAccessor(Generic[T]):
    """
    operations that consume the query and produce a final value.
    full walks go through push; early-exit checks use push with STOP;
    single-element lookups use pull.
    """

    def __init__(self, query_instance: 'Query[T]'):
        self._query = query_instance

    # --- materialization ---

    def list(self) -> List[T]:
        """collect into a list"""
        result: List[T] = []
        self._query.traverse(result.append)
        return result

    def array(self) -> np.ndarray:
        """collect into a numpy array typed by the query's kind"""
        return np.array(self.list(), dtype=self._query.kind.dtype)

    def set(self) -> Set[T]:
        """collect into a set"""
        result: Set[T] = set()
        self._query.traverse(result.add)
        return result

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """collect into a dictionary; later keys overwrite earlier ones"""
        val_sel = value_selector if value_selector else lambda item: item
        result: Dict[K, V] = {}

        def put(item: T) -> None:
            result[key_selector(item)] = val_sel(item)
        self._query.traverse(put)
        return result

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self.list(), dtype=self._query.kind.dtype)

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self.list())

    def join(self, separator: str = '') -> str:
        """concatenate the string form of every element"""
        return separator.join(str(item) for item in self.list())

    def iter(self) -> Iterator[T]:
        """a python iterator driven one element at a time by pull advancement"""
        query = self._query
        while query.has_next():
            yield query.next()

    # --- reductions ---

    def fold(self, identity: U, combiner: Combiner[U, T]) -> U:
        """thread an accumulator through every element"""
        result = identity

        def accumulate(item: T) -> None:
            nonlocal result
            result = combiner(result, item)
        self._query.traverse(accumulate)
        return result

    def reduce(self, combiner: Combiner[T, T]) -> T:
        """fold seeded with the first element"""
        first = self.find_first(_NOTHING)
        if first is _NOTHING:
            raise EmptySequenceError("cannot reduce empty sequence")
        return self.fold(first, combiner)

    def collect(self, supplier: Callable[[], R], accumulator: Callable[[R, T], Any]) -> R:
        """feed every element into a mutable container built by supplier"""
        container = supplier()
        self._query.traverse(lambda item: accumulator(container, item))
        return container

    def for_each(self, action: Action[T]) -> None:
        """run action on every element"""
        self._query.traverse(lambda item: action(item))

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """number of elements, walking the whole sequence"""
        total = 0

        def tick(item: T) -> None:
            nonlocal total
            if predicate is None or predicate(item):
                total += 1
        self._query.traverse(tick)
        return total

    # --- short-circuiting matches ---

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition"""
        found = False

        def check(item: T) -> Optional[Flow]:
            nonlocal found
            if predicate is None or predicate(item):
                found = True
                return STOP
            return CONTINUE
        self._query.short_circuit(check)
        return found

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition"""
        succeed = True

        def check(item: T) -> Optional[Flow]:
            nonlocal succeed
            if not predicate(item):
                succeed = False
                return STOP
            return CONTINUE
        self._query.short_circuit(check)
        return succeed

    def none(self, predicate: Predicate[T]) -> bool:
        """check that no element satisfies condition"""
        return not self.any(predicate)

    # --- single elements ---

    def find_first(self, default: Optional[T] = None) -> Optional[T]:
        """the first element, or default when the sequence is empty"""
        result = default

        def take(item: T) -> None:
            nonlocal result
            result = item
        self._query.try_advance(take)
        return result

    def first(self) -> T:
        """get first element"""
        item = self.find_first(_NOTHING)
        if item is _NOTHING:
            raise EmptySequenceError("sequence contains no elements")
        return item
