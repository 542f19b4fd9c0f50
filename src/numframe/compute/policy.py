"""Execution policies for bulk operations.

Every bulk operation of a :class:`numframe.series.Series`, being
an elementwise transformation or a reduction, is not run directly
but handed to an :class:`ExecutionMode` that decides how the loop
over the data has to be executed.

The mode is selected by a symbolic :class:`ExecPolicy`, which
is what users configure on their Series:

* ``SEQ``: The kernel is applied to one element at the time
  in the calling thread.
* ``PAR``: The data is split in chunks that are processed
  by a pool of threads, each chunk still one element at the time.
* ``UNSEQ``: The kernel is applied to whole chunks at once (vectorized)
  in the calling thread.
* ``PAR_UNSEQ``: The data is split in chunks that are processed
  by a pool of threads, each chunk vectorized.

Kernels are Arrow compute functions, which accept both
:class:`pyarrow.Array` and :class:`pyarrow.Scalar` arguments,
that is what allows the same function to be applied
per element or per chunk:

>>> import pyarrow as pa
>>> import pyarrow.compute as pc
>>> data = pa.array([1, 2, 3, 4, 5])
>>> for policy in ExecPolicy:
...     result = with_policy(policy, lambda mode: mode.map(pc.negate, data), chunk_size=2)
...     print(policy.name, result.to_pylist())
SEQ [-1, -2, -3, -4, -5]
PAR [-1, -2, -3, -4, -5]
UNSEQ [-1, -2, -3, -4, -5]
PAR_UNSEQ [-1, -2, -3, -4, -5]

Parallel modes use a :class:`concurrent.futures.ThreadPoolExecutor`
that lives only for the duration of a single operation,
Arrow compute kernels release the GIL so chunks are actually
processed concurrently.
"""

import abc
import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Callable, TypeVar

import pyarrow as pa

if TYPE_CHECKING:
    from .aggregate import Aggregation

__all__ = (
    "ExecPolicy",
    "ExecutionMode",
    "SequentialMode",
    "ParallelMode",
    "VectorizedMode",
    "ParallelVectorizedMode",
    "ExecutionPolicyError",
    "with_policy",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_MAX_WORKERS",
)

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536
"""How many elements each chunk of a bulk operation contains."""

DEFAULT_MAX_WORKERS = None
"""Size of the thread pool of parallel modes, ``None`` lets Python pick it."""

T = TypeVar("T")
Slice = tuple[int, int]


class ExecPolicy(enum.Enum):
    """Symbolic execution policy of bulk operations."""

    SEQ = "seq"
    PAR = "par"
    UNSEQ = "unseq"
    PAR_UNSEQ = "par_unseq"


class ExecutionMode(abc.ABC):
    """Concrete strategy used to run a bulk loop.

    The data is always split in slices of at most ``chunk_size``
    elements, how those slices are processed depends on the subclass:
    :meth:`run` decides in which thread each slice is processed
    and :attr:`vectorized` tells if the kernel receives the whole
    slice or each of its elements one by one.
    """

    vectorized: bool = False

    def __init__(
        self, chunk_size: int | None = None, max_workers: int | None = None
    ) -> None:
        """
        :param chunk_size: Maximum number of elements processed per task.
        :param max_workers: How many threads parallel modes can use.
        """
        self.chunk_size = chunk_size or DEFAULT_CHUNK_SIZE
        self.max_workers = max_workers or DEFAULT_MAX_WORKERS
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be a positive number")

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(chunk_size={self.chunk_size})"

    __repr__ = __str__

    def slices(self, length: int) -> list[Slice]:
        """Split ``length`` elements in ``(offset, size)`` slices."""
        return [
            (offset, min(self.chunk_size, length - offset))
            for offset in range(0, length, self.chunk_size)
        ]

    @abc.abstractmethod
    def run(self, task: Callable[[Slice], T], slices: list[Slice]) -> list[T]:
        """Execute ``task`` for each slice and return results in slice order."""
        ...

    def map(self, func: Callable[..., Any], *arrays: pa.Array) -> pa.Array:
        """Apply ``func`` elementwise over aligned arrays.

        The position of each value in the result always matches
        the position of the values it was computed from,
        regardless of how the work was scheduled.
        """
        length = len(arrays[0])
        if length == 0:
            # Let the kernel decide the result type of empty data.
            return func(*arrays)

        def apply_slice(chunk: Slice) -> pa.Array:
            offset, size = chunk
            args = [array.slice(offset, size) for array in arrays]
            if self.vectorized:
                return func(*args)
            return _apply_per_element(func, args)

        results = self.run(apply_slice, self.slices(length))
        if len(results) == 1:
            return results[0]
        return pa.concat_arrays(results)

    def reduce(self, aggregation: "Aggregation", *arrays: pa.Array) -> Any:
        """Reduce aligned arrays to a single value.

        Each slice is aggregated separately through
        ``aggregation.compute_chunk`` and the partial results
        are combined by ``aggregation.reduce``.
        The order in which partial results are accumulated
        must not matter to the aggregation.
        """

        def compute_slice(chunk: Slice) -> Any:
            offset, size = chunk
            return aggregation.compute_chunk(
                *(array.slice(offset, size) for array in arrays)
            )

        chunks = self.run(compute_slice, self.slices(len(arrays[0])))
        return aggregation.reduce(chunks)


class SequentialMode(ExecutionMode):
    """Process one element at the time in the calling thread."""

    def run(self, task: Callable[[Slice], T], slices: list[Slice]) -> list[T]:
        return [task(s) for s in slices]


class ParallelMode(ExecutionMode):
    """Process slices concurrently, one element at the time."""

    def run(self, task: Callable[[Slice], T], slices: list[Slice]) -> list[T]:
        if len(slices) <= 1:
            return [task(s) for s in slices]
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(task, slices))


class VectorizedMode(SequentialMode):
    """Process whole slices at once in the calling thread."""

    vectorized = True


class ParallelVectorizedMode(ParallelMode):
    """Process whole slices at once and concurrently."""

    vectorized = True


_POLICY_MODES: dict[ExecPolicy, type[ExecutionMode]] = {
    ExecPolicy.SEQ: SequentialMode,
    ExecPolicy.PAR: ParallelMode,
    ExecPolicy.UNSEQ: VectorizedMode,
    ExecPolicy.PAR_UNSEQ: ParallelVectorizedMode,
}


def with_policy(
    policy: ExecPolicy,
    operation: Callable[[ExecutionMode], T],
    chunk_size: int | None = None,
    max_workers: int | None = None,
) -> T:
    """Invoke ``operation`` with the execution mode matching ``policy``.

    There is no fallback for values that are not an :class:`ExecPolicy`,
    receiving one means the policy was corrupted and
    :class:`ExecutionPolicyError` is raised.

    :param policy: The policy that has to be used.
    :param operation: Callable receiving the :class:`ExecutionMode`.
    :param chunk_size: Override of :data:`DEFAULT_CHUNK_SIZE`.
    :param max_workers: Override of :data:`DEFAULT_MAX_WORKERS`.
    """
    try:
        mode_class = _POLICY_MODES[policy]
    except (KeyError, TypeError):
        raise ExecutionPolicyError(f"Unknown execution policy: {policy!r}") from None

    mode = mode_class(chunk_size=chunk_size, max_workers=max_workers)
    logger.debug(f"Dispatching {policy.name} to {mode}")
    return operation(mode)


def _apply_per_element(func: Callable[..., Any], args: list[pa.Array]) -> pa.Array:
    """Call ``func`` on each row of scalars and build back an array."""
    values = []
    for row in zip(*args):
        value = func(*row)
        if not isinstance(value, pa.Scalar):
            value = pa.scalar(value)
        values.append(value)
    return pa.array([v.as_py() for v in values], type=values[0].type)


class ExecutionPolicyError(AssertionError):
    """The execution policy is not one of the known ones.

    This is never caused by user data, it signals that
    a policy value got corrupted and the operation cannot proceed.
    """

    pass
