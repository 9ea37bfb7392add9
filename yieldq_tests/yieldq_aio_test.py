import asyncio
import suite
from yieldq import AsyncQuery

test = suite.test
assert_that = suite.assert_that


class SourceDown(Exception):
    pass


async def ticking(label, count, delay, log):
    """async generator that records when it starts and finishes"""
    log.append(f"start {label}")
    for i in range(count):
        await asyncio.sleep(delay)
        yield f"{label}{i}"
    log.append(f"end {label}")


def failing():
    yield 1
    raise SourceDown("lost connection")


# sources

@test("of delivers every item in order")
def test_of():
    assert_that(asyncio.run(AsyncQuery.of(1, 2, 3).to_list()) == [1, 2, 3], "three items")


@test("from_iterable accepts sync and async iterables")
def test_from_iterable():
    async def countdown():
        for i in (3, 2, 1):
            await asyncio.sleep(0)
            yield i
    assert_that(asyncio.run(AsyncQuery.from_iterable(range(3)).to_list()) == [0, 1, 2], "sync range")
    assert_that(asyncio.run(AsyncQuery.from_iterable(countdown()).to_list()) == [3, 2, 1], "async generator")


@test("a failing source delivers its error once and completes")
def test_source_error():
    received = []

    async def scenario():
        await AsyncQuery.from_iterable(failing()).subscribe(lambda item, err: received.append((item, err)))
    asyncio.run(scenario())
    assert_that(len(received) == 2, "one item and one error")
    assert_that(received[0] == (1, None), "item first")
    assert_that(received[1][0] is None and isinstance(received[1][1], SourceDown), "then the error")


@test("to_list raises the delivered error")
def test_to_list_error():
    with suite.raises(SourceDown):
        asyncio.run(AsyncQuery.from_iterable(failing()).to_list())


# operators

@test("map, filter and on_next")
def test_operators():
    seen = []
    query = (AsyncQuery.of(1, 2, 3, 4)
             .filter(lambda x: x % 2 == 0)
             .on_next(lambda item, err: seen.append(item))
             .map(lambda x: x * 10))
    assert_that(asyncio.run(query.to_list()) == [20, 40], "even items scaled")
    assert_that(seen == [2, 4], "on_next observed the filtered items")


@test("errors pass through map and filter")
def test_operator_errors():
    query = AsyncQuery.from_iterable(failing()).map(lambda x: x + 1).filter(lambda x: True)
    with suite.raises(SourceDown):
        asyncio.run(query.to_list())


@test("flat_map_concat keeps inner subscriptions sequential")
def test_flat_map_concat_sequential():
    log = []
    query = AsyncQuery.of('a', 'b', 'c').flat_map_concat(
        lambda label: AsyncQuery.from_iterable(ticking(label, 2, 0.001, log)))
    result = asyncio.run(query.to_list())
    assert_that(result == ['a0', 'a1', 'b0', 'b1', 'c0', 'c1'], "inner items in upstream order")
    assert_that(log == ['start a', 'end a', 'start b', 'end b', 'start c', 'end c'],
                "each inner sequence completed before the next started")


@test("flat_map_concat with a slow first inner sequence")
def test_flat_map_concat_slow_first():
    log = []
    delays = {'slow': 0.01, 'fast': 0}
    query = AsyncQuery.of('slow', 'fast').flat_map_concat(
        lambda label: AsyncQuery.from_iterable(ticking(label, 1, delays[label], log)))
    assert_that(asyncio.run(query.to_list()) == ['slow0', 'fast0'], "order follows upstream, not speed")


@test("async consumers are awaited between items")
def test_async_consumer():
    events = []

    async def slow_consumer(item, err):
        events.append(f"begin {item}")
        await asyncio.sleep(0.001)
        events.append(f"done {item}")

    async def scenario():
        await AsyncQuery.of(1, 2).subscribe(slow_consumer)
    asyncio.run(scenario())
    assert_that(events == ['begin 1', 'done 1', 'begin 2', 'done 2'], "no overlapping deliveries")


@test("blocking_subscribe runs to completion")
def test_blocking_subscribe():
    received = []
    AsyncQuery.of('x', 'y').map(str.upper).blocking_subscribe(lambda item, err: received.append(item))
    assert_that(received == ['X', 'Y'], "all items delivered before returning")


@test("subscribe needs a running event loop")
def test_subscribe_without_loop():
    with suite.raises(RuntimeError):
        AsyncQuery.of(1).subscribe(lambda item, err: None)


if __name__ == "__main__":
    suite.run(title="yieldq async chaining test suite")
