"""Reductions used by Series aggregates.

Aggregates like the sum, the mean or the variance
of a Series are computed by splitting the data in chunks,
computing an intermediate result for each chunk and then
combining the intermediate results into the final one.

This is what allows an :class:`numframe.compute.policy.ExecutionMode`
to compute the chunks concurrently, the only requirement
is that combining the intermediate results does not depend
on the order in which they were computed.

For example, given the chunks::

    [1, 2, 3], [4, None], [6]

The sum is computed as ``sum([6, 4, 6])``,
null values never take part in the computation.

>>> import pyarrow as pa
>>> data = pa.array([1, 2, 3, 4, None, 6])
>>> aggregation = SumAggregation()
>>> aggregation.reduce([aggregation.compute_chunk(data.slice(o, 3)) for o in (0, 3)])
16
"""

import abc
from typing import Any

import pyarrow as pa
import pyarrow.compute as pc

__all__ = (
    "Aggregation",
    "SumAggregation",
    "MinAggregation",
    "MaxAggregation",
    "CountAggregation",
    "MeanAggregation",
    "VarianceAggregation",
    "DotAggregation",
)


class Aggregation(abc.ABC):
    """Base class for aggregations.

    Every aggregation is expected to implement
    a method to compute any needed intermediate results
    on a single chunk of data and then provide a reduce method
    to combine the intermediate results into a final result.

    Chunks are :class:`pyarrow.Array` where null entries
    are the values that must be skipped.
    When there is nothing to aggregate the result is ``None``.
    """

    def __str__(self) -> str:
        return f"{self.__class__.__name__}()"

    __repr__ = __str__

    @abc.abstractmethod
    def compute_chunk(self, *arrays: pa.Array) -> Any: ...

    @abc.abstractmethod
    def reduce(self, chunks: list[Any]) -> Any: ...


class SimpleAggregation(Aggregation):
    """Provide a base implementation for simple aggregations like min,max,sum.

    Simple aggregations are those where the function applied to compute
    intermediate results for a single chunk of data is the same as the function
    applied to combine the intermediate results into the final.

    For example ``sum([1, 2, 3])`` is the same as ``sum([sum([1, 2]), 3])``.
    """

    @abc.abstractmethod
    def _aggregate(self, data: pa.Array) -> pa.Scalar: ...

    def compute_chunk(self, values: pa.Array) -> pa.Scalar:
        return self._aggregate(values)

    def reduce(self, chunks: list[pa.Scalar]) -> Any:
        # Chunks made only of nulls have no intermediate result.
        partials = [chunk for chunk in chunks if chunk.is_valid]
        if not partials:
            return None
        # Partials are combined with the type of the chunks.
        partials_type = partials[0].type
        combined = pa.array([p.as_py() for p in partials], type=partials_type)
        return self._aggregate(combined).as_py()


class SumAggregation(SimpleAggregation):
    """Compute the sum of the valid values."""

    def _aggregate(self, data: pa.Array) -> pa.Scalar:
        return pc.sum(data)


class MinAggregation(SimpleAggregation):
    """Compute the min of the valid values."""

    def _aggregate(self, data: pa.Array) -> pa.Scalar:
        return pc.min(data)


class MaxAggregation(SimpleAggregation):
    """Compute the max of the valid values."""

    def _aggregate(self, data: pa.Array) -> pa.Scalar:
        return pc.max(data)


class CountAggregation(Aggregation):
    """Count the entries of a boolean array equal to ``flag``.

    Applied to a validity mask, counting ``True``
    gives the number of valid values while counting
    ``False`` gives the number of nulls.
    """

    def __init__(self, flag: bool = True) -> None:
        self.flag = flag

    def __str__(self) -> str:
        return f"CountAggregation({self.flag})"

    def compute_chunk(self, flags: pa.BooleanArray) -> int:
        return flags.true_count if self.flag else flags.false_count

    def reduce(self, chunks: list[int]) -> int:
        return sum(chunks)


class MeanAggregation(Aggregation):
    """Compute the mean of the valid values.

    This is based by computing count and sum of the values
    for each intermediate chunk and then dividing
    the sum of all intermediate results by the count
    of all intermediate results.
    """

    def compute_chunk(self, values: pa.Array) -> tuple[int, Any]:
        """Compute the count and sum of the values in a single chunk."""
        return (pc.count(values).as_py(), pc.sum(values, min_count=0).as_py())

    def reduce(self, chunks: list[tuple[int, Any]]) -> float | None:
        """Compute the mean from the intermediate sums and counts."""
        count = sum(chunk[0] for chunk in chunks)
        if count == 0:
            return None
        total = sum(chunk[1] for chunk in chunks)
        return total / count


class VarianceAggregation(Aggregation):
    """Compute the population variance of the valid values.

    The mean has to be known upfront, each chunk
    then computes the sum of the squared deviations from it
    and its count of valid values.
    """

    def __init__(self, mean: float) -> None:
        self.mean = mean

    def __str__(self) -> str:
        return f"VarianceAggregation(mean={self.mean})"

    def compute_chunk(self, values: pa.Array) -> tuple[int, float]:
        deviations = pc.subtract(pc.cast(values, pa.float64()), self.mean)
        squared = pc.sum(pc.multiply(deviations, deviations), min_count=0)
        return (pc.count(values).as_py(), squared.as_py())

    def reduce(self, chunks: list[tuple[int, float]]) -> float | None:
        count = sum(chunk[0] for chunk in chunks)
        if count == 0:
            return None
        return sum(chunk[1] for chunk in chunks) / count


class DotAggregation(Aggregation):
    """Compute the sum of the products of two aligned arrays.

    Positions that are null in any of the two arrays
    are skipped, when there is nothing to multiply
    the result is ``identity``.
    """

    def __init__(self, identity: int | float = 0) -> None:
        self.identity = identity

    def compute_chunk(self, left: pa.Array, right: pa.Array) -> Any:
        return pc.sum(pc.multiply(left, right), min_count=0).as_py()

    def reduce(self, chunks: list[Any]) -> Any:
        return sum(chunks, self.identity)
