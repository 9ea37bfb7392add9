import typing
from .types import *
from .kinds import ElementKind, OBJECT, INT, LONG, DOUBLE
from .traversal import EMPTY
from .sources import ArraySource, IterableSource, IterateSource, GenerateSource

if typing.TYPE_CHECKING:
    from .query import Query


def _coercion(kind: ElementKind) -> Optional[Callable[[Any], Any]]:
    return kind.coerce if kind.is_primitive else None


def _wrap(source, kind: ElementKind) -> 'Query[Any]':
    from .query import Query
    return Query(source, source, kind)


def of(*items: T, kind: ElementKind = OBJECT) -> 'Query[T]':
    """create query from the given elements"""
    return from_array(items, kind)


def from_array(data: Sequence[T], kind: ElementKind = OBJECT) -> 'Query[T]':
    """create query over indexable data (list, tuple, range, numpy array)"""
    return _wrap(ArraySource(data, _coercion(kind)), kind)


def from_iterable(data: Iterable[T], kind: ElementKind = OBJECT) -> 'Query[T]':
    """create query from any iterable or iterator, consumed lazily"""
    return _wrap(IterableSource(data, _coercion(kind)), kind)


def from_range(start: int, count: int) -> 'Query[int]':
    """create int query start, start + 1, ... of count elements"""
    return from_array(range(start, start + count), INT)


def iterate(seed: T, fn: Callable[[T], T], kind: ElementKind = OBJECT) -> 'Query[T]':
    """infinite query seed, fn(seed), fn(fn(seed)), ..."""
    return _wrap(IterateSource(kind.coerce(seed), kind.coerced(fn)), kind)


def generate(supplier: Callable[[], T], kind: ElementKind = OBJECT) -> 'Query[T]':
    """infinite query of supplier() results"""
    return _wrap(GenerateSource(kind.coerced(supplier)), kind)


def empty(kind: ElementKind = OBJECT) -> 'Query[Any]':
    """create empty query"""
    return _wrap(EMPTY, kind)


def as_query(data: Union['Query[T]', Iterable[T]], kind: ElementKind = OBJECT) -> 'Query[T]':
    """pass queries through; wrap anything else iterable as a source of the given kind"""
    from .query import Query
    if isinstance(data, Query):
        return data
    if isinstance(data, (list, tuple, range)):
        return from_array(data, kind)
    return from_iterable(data, kind)


# --- primitive shortcuts ---

def of_ints(*items: int) -> 'Query[int]':
    return from_array(items, INT)


def of_longs(*items: int) -> 'Query[int]':
    return from_array(items, LONG)


def of_doubles(*items: float) -> 'Query[float]':
    return from_array(items, DOUBLE)


# --- aliases ---
q = from_iterable
Q = from_iterable
