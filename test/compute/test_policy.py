import pyarrow as pa
import pyarrow.compute as pc
import pytest

from numframe.compute.aggregate import SumAggregation
from numframe.compute.policy import (
    DEFAULT_CHUNK_SIZE,
    ExecPolicy,
    ExecutionPolicyError,
    ParallelMode,
    ParallelVectorizedMode,
    SequentialMode,
    VectorizedMode,
    with_policy,
)


@pytest.mark.parametrize(
    "policy, mode_class",
    [
        (ExecPolicy.SEQ, SequentialMode),
        (ExecPolicy.PAR, ParallelMode),
        (ExecPolicy.UNSEQ, VectorizedMode),
        (ExecPolicy.PAR_UNSEQ, ParallelVectorizedMode),
    ],
)
def test_policy_selects_mode(policy, mode_class):
    mode = with_policy(policy, lambda mode: mode)
    assert type(mode) is mode_class


def test_mode_defaults():
    mode = with_policy(ExecPolicy.SEQ, lambda mode: mode)
    assert mode.chunk_size == DEFAULT_CHUNK_SIZE
    assert str(mode) == f"SequentialMode(chunk_size={DEFAULT_CHUNK_SIZE})"


def test_mode_options():
    mode = with_policy(ExecPolicy.PAR, lambda mode: mode, chunk_size=10, max_workers=2)
    assert mode.chunk_size == 10
    assert mode.max_workers == 2


@pytest.mark.parametrize("policy", ["par", None, 3])
def test_unknown_policy_is_fatal(policy):
    with pytest.raises(ExecutionPolicyError, match="Unknown execution policy"):
        with_policy(policy, lambda mode: mode)


def test_policy_error_is_not_a_user_error():
    assert issubclass(ExecutionPolicyError, AssertionError)
    assert not issubclass(ExecutionPolicyError, ValueError)


def test_invalid_chunk_size():
    with pytest.raises(ValueError):
        SequentialMode(chunk_size=-1)


def test_slices():
    assert SequentialMode(chunk_size=4).slices(10) == [(0, 4), (4, 4), (8, 2)]
    assert SequentialMode(chunk_size=4).slices(0) == []


@pytest.mark.parametrize("mode_class", [SequentialMode, ParallelMode])
def test_run_preserves_slice_order(mode_class):
    mode = mode_class(chunk_size=3, max_workers=4)
    slices = mode.slices(20)
    assert mode.run(lambda s: s[0], slices) == [0, 3, 6, 9, 12, 15, 18]


@pytest.mark.parametrize("policy", list(ExecPolicy))
def test_map_keeps_positions(policy):
    data = pa.array(range(100))
    result = with_policy(
        policy, lambda mode: mode.map(pc.multiply, data, data), chunk_size=7
    )
    assert result.to_pylist() == [i * i for i in range(100)]


@pytest.mark.parametrize("policy", list(ExecPolicy))
def test_map_propagates_nulls(policy):
    data = pa.array([1, None, 3, None, 5])
    result = with_policy(
        policy, lambda mode: mode.map(pc.negate, data), chunk_size=2
    )
    assert result.to_pylist() == [-1, None, -3, None, -5]


@pytest.mark.parametrize("policy", list(ExecPolicy))
def test_map_empty(policy):
    data = pa.array([], type=pa.int32())
    result = with_policy(policy, lambda mode: mode.map(pc.exp, data))
    assert len(result) == 0
    assert result.type == pa.float64()


def test_sequential_applies_per_element():
    received = []

    def record(x):
        received.append(x)
        return pc.negate(x)

    with_policy(ExecPolicy.SEQ, lambda mode: mode.map(record, pa.array([1, 2, 3])))
    assert len(received) == 3
    assert all(isinstance(x, pa.Scalar) for x in received)


def test_vectorized_applies_per_chunk():
    received = []

    def record(x):
        received.append(x)
        return pc.negate(x)

    with_policy(
        ExecPolicy.UNSEQ,
        lambda mode: mode.map(record, pa.array([1, 2, 3, 4, 5])),
        chunk_size=2,
    )
    assert [len(x) for x in received] == [2, 2, 1]
    assert all(isinstance(x, pa.Array) for x in received)


@pytest.mark.parametrize("policy", list(ExecPolicy))
def test_reduce(policy):
    data = pa.array(range(100))
    result = with_policy(
        policy, lambda mode: mode.reduce(SumAggregation(), data), chunk_size=9
    )
    assert result == 4950


def test_map_propagates_kernel_errors():
    data = pa.array([1, 2, 3])
    with pytest.raises(pa.ArrowInvalid):
        with_policy(
            ExecPolicy.PAR_UNSEQ,
            lambda mode: mode.map(pc.divide, data, pa.array([1, 0, 1])),
            chunk_size=1,
        )
