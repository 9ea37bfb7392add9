"""
asynchronous subscriptions.

a consumer is called as consumer(item, None) for every item and
consumer(None, error) when the source fails. a consumer may return an
awaitable; it is awaited before the next item is delivered, which is what
keeps flat_map_concat strictly sequential.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from .types import *

logger = logging.getLogger(__name__)

Consumer = Callable[[Optional[T], Optional[BaseException]], Any]


async def _deliver(consumer: Consumer[T], item: Optional[T], err: Optional[BaseException]) -> None:
    result = consumer(item, err)
    if inspect.isawaitable(result):
        await result


class AsyncQuery(ABC, Generic[T]):

    @abstractmethod
    def subscribe(self, consumer: Consumer[T]) -> 'asyncio.Future[None]':
        """start delivering items to consumer. the returned task completes when the source is done."""
        pass

    # --- sources ---

    @staticmethod
    def of(*items: T) -> 'AsyncQuery[T]':
        return _AsyncSource(items)

    @staticmethod
    def from_iterable(data: Union[Iterable[T], AsyncIterable[T]]) -> 'AsyncQuery[T]':
        return _AsyncSource(data)

    # --- operators ---

    def map(self, mapper: Selector[T, U]) -> 'AsyncQuery[U]':
        return _AsyncMap(self, mapper)

    def filter(self, predicate: Predicate[T]) -> 'AsyncQuery[T]':
        return _AsyncFilter(self, predicate)

    def on_next(self, consumer: Consumer[T]) -> 'AsyncQuery[T]':
        """observe every item and error as it passes through"""
        return _AsyncOnNext(self, consumer)

    def flat_map_concat(self, mapper: Callable[[T], 'AsyncQuery[U]']) -> 'AsyncQuery[U]':
        """subscribe to mapper(item) for each item, one subscription fully completing before the next starts"""
        return _AsyncFlatMapConcat(self, mapper)

    # --- terminals ---

    async def to_list(self) -> List[T]:
        """collect every item; raises the first error the source delivered"""
        items: List[T] = []
        errors: List[BaseException] = []

        def collect(item: Optional[T], err: Optional[BaseException]) -> None:
            if err is not None:
                errors.append(err)
            else:
                items.append(item)

        await self.subscribe(collect)
        if errors:
            raise errors[0]
        return items

    def blocking_subscribe(self, consumer: Consumer[T]) -> None:
        """subscribe and wait for completion on a fresh event loop"""
        async def run() -> None:
            await self.subscribe(consumer)
        asyncio.run(run())


class _AsyncSource(AsyncQuery[T]):
    def __init__(self, data: Union[Iterable[T], AsyncIterable[T]]):
        self._data = data

    def subscribe(self, consumer: Consumer[T]) -> 'asyncio.Future[None]':
        return asyncio.get_running_loop().create_task(self._drive(consumer))

    async def _drive(self, consumer: Consumer[T]) -> None:
        is_async = hasattr(self._data, '__aiter__')
        iterator = self._data.__aiter__() if is_async else iter(self._data)
        while True:
            # only failures of the source are delivered; consumer errors propagate to the task
            try:
                if is_async:
                    item = await iterator.__anext__()
                else:
                    item = next(iterator)
                    await asyncio.sleep(0)
            except (StopIteration, StopAsyncIteration):
                return
            except Exception as err:
                logger.debug("async source failed: %s", err)
                await _deliver(consumer, None, err)
                return
            await _deliver(consumer, item, None)


class _AsyncMap(AsyncQuery[U]):
    def __init__(self, upstream: AsyncQuery[T], mapper: Selector[T, U]):
        self._upstream = upstream
        self._mapper = mapper

    def subscribe(self, consumer: Consumer[U]) -> 'asyncio.Future[None]':
        def forward(item, err):
            if err is not None:
                return consumer(None, err)
            return consumer(self._mapper(item), None)
        return self._upstream.subscribe(forward)


class _AsyncFilter(AsyncQuery[T]):
    def __init__(self, upstream: AsyncQuery[T], predicate: Predicate[T]):
        self._upstream = upstream
        self._predicate = predicate

    def subscribe(self, consumer: Consumer[T]) -> 'asyncio.Future[None]':
        def forward(item, err):
            if err is not None:
                return consumer(None, err)
            if self._predicate(item):
                return consumer(item, None)
            return None
        return self._upstream.subscribe(forward)


class _AsyncOnNext(AsyncQuery[T]):
    def __init__(self, upstream: AsyncQuery[T], action: Consumer[T]):
        self._upstream = upstream
        self._action = action

    def subscribe(self, consumer: Consumer[T]) -> 'asyncio.Future[None]':
        async def forward(item, err):
            await _deliver(self._action, item, err)
            await _deliver(consumer, item, err)
        return self._upstream.subscribe(forward)


class _AsyncFlatMapConcat(AsyncQuery[U]):
    def __init__(self, upstream: AsyncQuery[T], mapper: Callable[[T], AsyncQuery[U]]):
        self._upstream = upstream
        self._mapper = mapper

    def subscribe(self, consumer: Consumer[U]) -> 'asyncio.Future[None]':
        async def forward(item, err):
            if err is not None:
                await _deliver(consumer, None, err)
                return
            # the inner subscription must complete before the next upstream item
            await self._mapper(item).subscribe(consumer)
        return self._upstream.subscribe(forward)
