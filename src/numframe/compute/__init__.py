"""The NumFrame Compute layer

The compute layer defines how bulk operations over
the values of a Series are executed.

It is tightly bound to Apache Arrow, values are always
:class:`pyarrow.Array` objects and the functions applied
to them are Arrow compute functions.

The layer is made of three parts:

* The execution policies, which decide if the values
  are processed one at the time or in vectorized chunks,
  in the calling thread or in a pool of threads.
* The aggregations, which reduce chunks of values
  to a single result.
* The elementwise functions, which adapt compute functions
  to the shapes needed by Series operations.

For example summing the values of an array
in parallel chunks of 2 elements looks like:

>>> import pyarrow as pa
>>> from numframe.compute import ExecPolicy, SumAggregation, with_policy
>>> data = pa.array([1, 2, 3, 4, 5])
>>> with_policy(ExecPolicy.PAR_UNSEQ, lambda mode: mode.reduce(SumAggregation(), data), chunk_size=2)
15
"""

from .aggregate import (
    CountAggregation,
    DotAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    SumAggregation,
    VarianceAggregation,
)
from .functions import BoundFunction, ReversedFunction, signum, true_divide
from .policy import (
    ExecPolicy,
    ExecutionMode,
    ExecutionPolicyError,
    ParallelMode,
    ParallelVectorizedMode,
    SequentialMode,
    VectorizedMode,
    with_policy,
)

__all__ = (
    "ExecPolicy",
    "ExecutionMode",
    "ExecutionPolicyError",
    "SequentialMode",
    "ParallelMode",
    "VectorizedMode",
    "ParallelVectorizedMode",
    "with_policy",
    "BoundFunction",
    "ReversedFunction",
    "signum",
    "true_divide",
    "CountAggregation",
    "DotAggregation",
    "MaxAggregation",
    "MeanAggregation",
    "MinAggregation",
    "SumAggregation",
    "VarianceAggregation",
)
