"""
a tiny decorator-based test harness.

register cases with @test("description"), check them with assert_that and
raises, then call run() at the bottom of a test module. the registered
functions are plain `test_*` functions, so pytest collects them as well.
"""
import time
import traceback
from contextlib import contextmanager
from functools import wraps
from typing import List, Dict, Any, Callable, Iterator, Type

_registry: Dict[str, List[Dict[str, Any]]] = {
    'cases': [],
    'outcomes': []
}

PASS_MARK = '(^ ω ^)'
FAIL_MARK = '(ﾉಥДಥ)ﾉ'


class _c:
    """ansi color codes for the report."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


class TestAssertionError(AssertionError):
    """assertion failure raised by assert_that and raises."""
    pass


def test(description: str) -> Callable:
    """decorator to register a function as a test case."""

    def decorator(func: Callable) -> Callable:
        _registry['cases'].append({'func': func, 'description': description})

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise TestAssertionError(message)


@contextmanager
def raises(expected: Type[BaseException], message: str = "") -> Iterator[None]:
    """fail unless the block raises `expected` (or a subclass)."""
    try:
        yield
    except expected:
        return
    raise TestAssertionError(message or f"expected {expected.__name__} to be raised")


def run(title: str = "test run", verbose: bool = False) -> bool:
    """executes all registered cases, prints a report and returns whether all passed."""
    print(f"\n{_c.info}--- starting: {title} ---{_c.reset}")
    started = time.perf_counter()
    _registry['outcomes'] = []

    for case in _registry['cases']:
        error = None
        try:
            case['func']()
        except TestAssertionError as e:
            error = f"assertion failed: {e}"
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            if verbose:
                traceback.print_exc()

        _registry['outcomes'].append({'passed': error is None, 'description': case['description']})

        if error is None:
            print(f"  {_c.ok}✔ pass{_c.reset}  {PASS_MARK}  {case['description']}")
        else:
            print(f"  {_c.fail}✖ fail{_c.reset}  {FAIL_MARK}  {case['description']}")
            print(f"    {_c.grey}└─> {error}{_c.reset}")

    failed = _report(started)
    # each module registers its own cases; start clean for the next run
    _registry['cases'] = []
    return failed == 0


def _report(started: float) -> int:
    elapsed = (time.perf_counter() - started) * 1000
    outcomes = _registry['outcomes']
    passed = sum(1 for o in outcomes if o['passed'])
    failed = len(outcomes) - passed
    color = _c.ok if failed == 0 else _c.fail

    print(f"\n{color}--- summary ---{_c.reset}")
    print(f"  ran {_c.info}{len(outcomes)}{_c.reset} tests in {_c.warn}{elapsed:.2f}ms{_c.reset}")
    print(f"  {_c.ok}passed: {passed}{_c.reset}, {_c.fail}failed: {failed}{_c.reset}")
    print(f"{color}---------------{_c.reset}\n")
    return failed
