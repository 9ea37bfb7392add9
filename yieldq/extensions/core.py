from __future__ import annotations
import typing
from ..types import *
from ..kinds import ElementKind, OBJECT, INT, LONG, DOUBLE
from ..operators.stateless import Filter, Map, Peek, TakeWhile, DropWhile
from ..operators.stateful import Distinct, Concat, FlatMap, Zip, Skip, Limit, Sorted

if typing.TYPE_CHECKING:
    from ..query import Query


class _CoreOperations(Generic[T]):
    """intermediate operators. each returns a new query over `self` and does no work until traversed."""

    def _chain(self: 'Query[T]', operator, kind: Optional[ElementKind] = None) -> 'Query[Any]':
        from ..query import Query
        return Query(operator, operator, kind or self.kind)

    # --- stateless ---

    def filter(self: 'Query[T]', predicate: Predicate[T]) -> 'Query[T]':
        """keep elements satisfying predicate"""
        return self._chain(Filter(self, predicate))

    def map(self: 'Query[T]', mapper: Selector[T, U]) -> 'Query[U]':
        """transform every element; results are coerced into this query's kind"""
        return self._chain(Map(self, self.kind.coerced(mapper)))

    def peek(self: 'Query[T]', action: Action[T]) -> 'Query[T]':
        """run action on each element as it passes through"""
        return self._chain(Peek(self, action))

    def take_while(self: 'Query[T]', predicate: Predicate[T]) -> 'Query[T]':
        """forward elements until predicate first fails"""
        return self._chain(TakeWhile(self, predicate))

    def drop_while(self: 'Query[T]', predicate: Predicate[T]) -> 'Query[T]':
        """skip the leading run of elements satisfying predicate"""
        return self._chain(DropWhile(self, predicate))

    # --- stateful ---

    def distinct(self: 'Query[T]') -> 'Query[T]':
        """drop repeated elements, keeping first appearances in order"""
        return self._chain(Distinct(self))

    def concat(self: 'Query[T]', other: Union['Query[T]', Iterable[T]]) -> 'Query[T]':
        """all of this sequence followed by all of other"""
        from ..factories import as_query
        return self._chain(Concat(self, as_query(other, self.kind)))

    def flat_map(self: 'Query[T]', mapper: Callable[[T], Union['Query[U]', Iterable[U]]],
                 kind: Optional[ElementKind] = None) -> 'Query[U]':
        """map each element to a sub-sequence and flatten the results in order"""
        from ..factories import as_query
        result_kind = kind or self.kind
        return self._chain(FlatMap(self, lambda item: as_query(mapper(item), result_kind)), result_kind)

    def zip(self: 'Query[T]', other: Union['Query[U]', Iterable[U]], zipper: Zipper[T, U, V],
            kind: Optional[ElementKind] = None) -> 'Query[V]':
        """combine elements pairwise; stops at the end of the shorter side. results are objects unless kind is given."""
        from ..factories import as_query
        result_kind = kind or OBJECT
        return self._chain(Zip(self, as_query(other), result_kind.coerced(zipper)), result_kind)

    def skip(self: 'Query[T]', count: int) -> 'Query[T]':
        """discard the first count elements"""
        return self._chain(Skip(self, count))

    def limit(self: 'Query[T]', count: int) -> 'Query[T]':
        """emit at most count elements"""
        return self._chain(Limit(self, count))

    def sorted(self: 'Query[T]', key: Optional[KeySelector[T, Any]] = None,
               reverse: bool = False) -> 'Query[T]':
        """
        natural-order sort. not streaming: the whole upstream is buffered on first
        use, so this never terminates on an infinite sequence.
        """
        return self._chain(Sorted(self, self.kind, key, reverse))

    # --- kind conversions ---

    def map_to(self: 'Query[T]', kind: ElementKind, mapper: Selector[T, U]) -> 'Query[U]':
        """transform every element into a value of another kind"""
        return self._chain(Map(self, kind.coerced(mapper)), kind)

    def map_to_int(self: 'Query[T]', mapper: Selector[T, int]) -> 'Query[int]':
        return self.map_to(INT, mapper)

    def map_to_long(self: 'Query[T]', mapper: Selector[T, int]) -> 'Query[int]':
        return self.map_to(LONG, mapper)

    def map_to_double(self: 'Query[T]', mapper: Selector[T, float]) -> 'Query[float]':
        return self.map_to(DOUBLE, mapper)

    def map_to_obj(self: 'Query[T]', mapper: Selector[T, U]) -> 'Query[U]':
        return self.map_to(OBJECT, mapper)

    def as_long_query(self: 'Query[T]') -> 'Query[int]':
        return self.map_to(LONG, lambda item: item)

    def as_double_query(self: 'Query[T]') -> 'Query[float]':
        return self.map_to(DOUBLE, lambda item: item)

    def boxed(self: 'Query[T]') -> 'Query[T]':
        """the same elements viewed as generic objects"""
        from ..query import Query
        return Query(self, self, OBJECT)

    # --- user-defined operators ---

    def then(self: 'Query[T]',
             traverser_factory: Callable[['Query[T]'], Callable[[Sink[U]], Optional[Flow]]],
             advancer_factory: Optional[Callable[['Query[T]'], Callable[[Sink[U]], bool]]] = None,
             kind: Optional[ElementKind] = None) -> 'Query[U]':
        """
        chain a custom operator. each factory receives this query and returns the
        traverse (push) or try_advance (pull) function of the new stage.
        without an advancer factory the new query is push-only.
        """
        from ..query import Query
        from ..traversal import FunctionTraverser, FunctionAdvancer, UnsupportedAdvancer
        traverser = FunctionTraverser(traverser_factory(self))
        if advancer_factory is None:
            advancer = UnsupportedAdvancer(
                "missing try_advance() implementation! use then() providing both traverser and advancer factories.")
        else:
            advancer = FunctionAdvancer(advancer_factory(self))
        return Query(advancer, traverser, kind or self.kind)
