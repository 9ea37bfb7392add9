import numpy as np
import pandas as pd
import suite
from dgen import from_schema
from yieldq import (
    of, of_ints, of_longs, of_doubles, from_range, from_array, empty, iterate, generate,
    INT, LONG, DOUBLE, OBJECT, EmptySequenceError, SummaryStatistics
)

test = suite.test
assert_that = suite.assert_that

sale_schema = {
    'region': {'_qen_provider': 'choice', 'from': ['north', 'south']},
    'units': ('pyint', {'min_value': 1, 'max_value': 20}),
    'price': ('pyfloat', {'min_value': 1.0, 'max_value': 50.0, 'right_digits': 2}),
}


# fold / reduce / collect

@test("fold threads an accumulator")
def test_fold():
    assert_that(from_range(1, 4).to.fold(0, lambda acc, x: acc + x) == 10, "sum via fold")
    assert_that(of('a', 'b').to.fold('>', lambda acc, x: acc + x) == '>ab', "string fold keeps order")


@test("fold of empty is the identity")
def test_fold_empty():
    assert_that(empty().to.fold(42, lambda acc, x: acc + x) == 42, "identity returned")


@test("reduce seeds with the first element")
def test_reduce():
    assert_that(of(3, 9, 2).to.reduce(max) == 9, "max via reduce")
    with suite.raises(EmptySequenceError):
        empty().to.reduce(max)


@test("collect into a mutable container")
def test_collect():
    result = of('x', 'y').to.collect(list, lambda acc, item: acc.append(item * 2))
    assert_that(result == ['xx', 'yy'], "container filled in order")


# matches

@test("any, all and none on empty sequences skip the predicate")
def test_matches_empty():
    calls = []

    def spy(x):
        calls.append(x)
        return True
    assert_that(empty().to.any(spy) is False, "any of empty is false")
    assert_that(empty().to.all(spy) is True, "all of empty is true")
    assert_that(empty().to.none(spy) is True, "none of empty is true")
    assert_that(calls == [], "predicate never called")


@test("all stops at the first failure")
def test_all_short_circuit():
    seen = []
    result = iterate(0, lambda x: x + 1).peek(seen.append).to.all(lambda x: x < 3)
    assert_that(result is False, "3 breaks the rule")
    assert_that(seen == [0, 1, 2, 3], "stopped at the deciding element")


@test("any without predicate checks for elements")
def test_any_no_predicate():
    assert_that(of(0).to.any(), "a falsy element still counts")
    assert_that(not empty().to.any(), "empty has none")


@test("none is the negation of any")
def test_none():
    assert_that(of(1, 3, 5).to.none(lambda x: x % 2 == 0), "no evens")
    assert_that(not of(1, 2).to.none(lambda x: x % 2 == 0), "has an even")


# single elements

@test("find_first pulls exactly one element")
def test_find_first():
    produced = []
    query = generate(lambda: len(produced)).peek(produced.append)
    assert_that(query.to.find_first() == 0, "first generated value")
    assert_that(produced == [0], "only one element produced")
    assert_that(empty().to.find_first('none') == 'none', "default for empty")


@test("first raises on empty")
def test_first():
    assert_that(of(5, 6).to.first() == 5, "first element")
    with suite.raises(EmptySequenceError):
        empty().to.first()
    with suite.raises(ValueError):
        of(1).filter(lambda x: x > 1).to.first()


# count

@test("count walks the sequence")
def test_count():
    assert_that(from_range(0, 25).to.count() == 25, "twenty five")
    assert_that(from_range(0, 25).to.count(lambda x: x % 5 == 0) == 5, "multiples of five")
    assert_that(empty().to.count() == 0, "empty")


@test("count over generated sales")
def test_count_records():
    north = from_schema(sale_schema, seed=5).take(50).to.count(lambda s: s['region'] == 'north')
    assert_that(0 <= north <= 50, "partition of fifty records")


# materialization

@test("list, set and dict")
def test_collections():
    assert_that(of(1, 2, 2).to.set() == {1, 2}, "set")
    mapping = of('a', 'bb').to.dict(len, str.upper)
    assert_that(mapping == {1: 'A', 2: 'BB'}, "dict with selectors")
    assert_that(of('a').to.dict(lambda s: s) == {'a': 'a'}, "identity values")


@test("join concatenates string forms")
def test_join():
    assert_that(from_range(1, 3).to.join(', ') == '1, 2, 3', "joined")


@test("array uses the kind dtype")
def test_array():
    ints = of_ints(1, 2, 3).to.array()
    doubles = of_doubles(1, 2).to.array()
    assert_that(ints.dtype == np.int32, "int kind is int32")
    assert_that(doubles.dtype == np.float64, "double kind is float64")
    assert_that(np.array_equal(ints, np.array([1, 2, 3])), "values preserved")


@test("pandas series and dataframe")
def test_pandas():
    series = of_longs(4, 5).to.pandas()
    assert_that(isinstance(series, pd.Series) and series.dtype == np.int64, "long series")
    frame = from_schema(sale_schema, seed=9).take(4).to.df()
    assert_that(isinstance(frame, pd.DataFrame) and len(frame) == 4, "four rows")
    assert_that(set(frame.columns) == {'region', 'units', 'price'}, "schema columns")


@test("numpy arrays as sources")
def test_numpy_source():
    data = np.arange(5)
    assert_that(from_array(data, INT).map(lambda x: x * 2).to.list() == [0, 2, 4, 6, 8], "coerced to python ints")


# element kinds

@test("kind conversions")
def test_kind_conversions():
    query = of('1', '22', '333').map_to_int(len)
    assert_that(query.kind is INT, "int kind")
    assert_that(of_ints(1, 2).as_double_query().to.list() == [1.0, 2.0], "widened to double")
    assert_that(of_ints(1).as_long_query().kind is LONG, "long kind")
    assert_that(of_ints(1).boxed().kind is OBJECT, "boxed is object")
    assert_that(of_doubles(1.5).map_to_long(lambda x: x * 2).to.list() == [3], "double to long")
    assert_that(of_ints(7).map_to_obj(str).to.list() == ['7'], "to objects")


@test("int kind rejects overflow")
def test_int_overflow():
    with suite.raises(OverflowError):
        of_ints(2 ** 40).to.list()
    assert_that(of_longs(2 ** 40).to.list() == [2 ** 40], "fits in long")


@test("iterate and generate honour the kind")
def test_kind_sources():
    assert_that(iterate(1, lambda x: x * 1.5, DOUBLE).limit(3).to.list() == [1.0, 1.5, 2.25], "doubles")
    assert_that(generate(lambda: 2.9, INT).limit(2).to.list() == [2, 2], "truncated ints")


# stats

@test("sum average min max")
def test_stats():
    assert_that(from_range(1, 4).stats.sum() == 10, "sum")
    assert_that(of_doubles().stats.sum() == 0.0, "empty double sum is zero")
    assert_that(from_range(1, 4).stats.average() == 2.5, "average")
    assert_that(of(4, -2, 9).stats.min() == -2, "min")
    assert_that(of(4, -2, 9).stats.max() == 9, "max")
    assert_that(of('bb', 'a').stats.max(len) == 2, "max with selector")


@test("stats on empty sequences")
def test_stats_empty():
    for reduction in ('average', 'min', 'max'):
        with suite.raises(EmptySequenceError, f"{reduction} of empty should raise"):
            getattr(empty().stats, reduction)()
    stats = empty().stats.summary_statistics()
    assert_that(stats.count == 0 and stats.min is None and stats.average == 0.0, "empty summary")


@test("summary statistics in one pass")
def test_summary_statistics():
    stats = of_ints(4, 8, 6).stats.summary_statistics()
    assert_that(stats == SummaryStatistics(3, 18, 4, 8), "count, sum, min, max")
    assert_that(stats.average == 6.0, "average")


@test("stats over generated sales")
def test_stats_records():
    revenue = from_schema(sale_schema, seed=21).take(30).stats.sum(lambda s: s['units'] * s['price'])
    assert_that(revenue > 0, "positive revenue")


if __name__ == "__main__":
    suite.run(title="yieldq terminal operations test suite")
