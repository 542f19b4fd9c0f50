import pyarrow as pa
import pytest

from numframe.compute.aggregate import (
    CountAggregation,
    DotAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    SumAggregation,
    VarianceAggregation,
)

TEST_DATA = pa.array([4, None, 1, 7, None, 3])


def _aggregate(aggregation, *arrays, chunk=2):
    chunks = [
        aggregation.compute_chunk(*(a.slice(offset, chunk) for a in arrays))
        for offset in range(0, len(arrays[0]), chunk)
    ]
    return aggregation.reduce(chunks)


@pytest.mark.parametrize(
    "aggregation, expected",
    [
        (SumAggregation(), 15),
        (MinAggregation(), 1),
        (MaxAggregation(), 7),
        (MeanAggregation(), 3.75),
    ],
)
def test_simple_aggregations_skip_nulls(aggregation, expected):
    assert _aggregate(aggregation, TEST_DATA) == expected


@pytest.mark.parametrize(
    "aggregation",
    [SumAggregation(), MinAggregation(), MaxAggregation(), MeanAggregation()],
)
def test_no_valid_values(aggregation):
    data = pa.array([None, None, None], type=pa.float64())
    assert _aggregate(aggregation, data) is None
    assert aggregation.reduce([]) is None


def test_chunk_of_nulls_has_no_partial_result():
    partial = SumAggregation().compute_chunk(pa.array([None, None], type=pa.int64()))
    assert not partial.is_valid
    chunks = [partial, pa.scalar(3), partial, pa.scalar(4)]
    assert SumAggregation().reduce(chunks) == 7


@pytest.mark.parametrize(
    "aggregation, expected",
    [
        (SumAggregation(), 2**63 + 2**62 + 5),
        (MinAggregation(), 5),
        (MaxAggregation(), 2**63),
    ],
)
def test_partials_keep_unsigned_type(aggregation, expected):
    data = pa.array([2**63, 5, None, 2**62], type=pa.uint64())
    assert _aggregate(aggregation, data, chunk=1) == expected


def test_count_aggregation():
    flags = pa.array([True, False, True, True, False])
    assert _aggregate(CountAggregation(True), flags) == 3
    assert _aggregate(CountAggregation(False), flags) == 2
    assert CountAggregation().reduce([]) == 0


def test_mean_aggregation_reduce():
    # (count, sum) partial results
    assert MeanAggregation().reduce([(2, 3), (1, 4)]) == pytest.approx(7 / 3)


def test_variance_aggregation():
    data = pa.array([2.0, 4.0, 4.0, None, 4.0, 5.0, 5.0, 7.0, 9.0])
    assert _aggregate(VarianceAggregation(5.0), data, chunk=4) == 4.0
    assert VarianceAggregation(5.0).reduce([]) is None


def test_variance_aggregation_of_integers():
    data = pa.array([1, 2, 3, 4])
    assert _aggregate(VarianceAggregation(2.5), data) == 1.25


def test_dot_aggregation():
    left = pa.array([1, 2, None, 4])
    right = pa.array([5, 6, 7, None])
    assert _aggregate(DotAggregation(0), left, right) == 17


def test_dot_aggregation_identity():
    assert DotAggregation(0.0).reduce([]) == 0.0
    assert isinstance(DotAggregation(0.0).reduce([]), float)


def test_aggregation_str():
    assert str(SumAggregation()) == "SumAggregation()"
    assert repr(MinAggregation()) == "MinAggregation()"
    assert str(CountAggregation(False)) == "CountAggregation(False)"
    assert str(VarianceAggregation(2.5)) == "VarianceAggregation(mean=2.5)"
