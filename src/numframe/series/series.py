"""The Series object itself."""

import collections.abc
import logging
import math
import numbers
import operator
from typing import Any, Callable, Iterable, Iterator, Self

import pyarrow as pa
import pyarrow.compute as pc

from ..compute.aggregate import (
    CountAggregation,
    DotAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    SumAggregation,
    VarianceAggregation,
)
from ..compute.functions import BoundFunction, ReversedFunction, signum, true_divide
from ..compute.policy import ExecPolicy, ExecutionMode, with_policy
from ..dtypes import DType
from ..utils import inspect
from ..utils.tabulate import format_series
from .validity import ValidityMask

logger = logging.getLogger(__name__)

Scalar = int | float


class Series:
    """Ordered values of a single numeric type, which can be null.

    A Series owns a buffer of values (a :class:`pyarrow.Array`
    that never contains nulls) and a :class:`ValidityMask`
    telling which of those values are null.

    The Series can be transformed in place through its named
    methods, like :meth:`add` or :meth:`exp`, which return the Series
    itself so that they can be chained::

        series.mul(2).add(1).exp()

    While operators like ``+`` or ``*`` never modify their operands
    and always return a new Series::

        doubled = series * 2

    Every bulk operation goes through the :class:`ExecPolicy`
    of the Series, and Series derived from it inherit the same policy.

    >>> s = Series([1, 2, None, 4])
    >>> print(s + 1)
    [2, 3, null, 5]
    >>> s.sum(), s.mean(), s.null_count()
    (7, 2.3333333333333335, 1)
    """

    def __init__(
        self,
        data: Iterable[Scalar | None] | pa.Array = (),
        dtype: DType | pa.DataType | str | type | None = None,
        policy: ExecPolicy = ExecPolicy.PAR_UNSEQ,
        chunk_size: int | None = None,
        max_workers: int | None = None,
    ) -> None:
        """
        :param data: The values of the Series, ``None`` values are nulls.
        :param dtype: The element type, inferred from the data when omitted.
                      Data that provides no type information is float64.
        :param policy: How bulk operations on the Series are executed.
        :param chunk_size: How many elements each task of a bulk operation processes.
        :param max_workers: How many threads parallel policies can use.
        """
        target_type = DType.coerce(dtype).arrow_type if dtype is not None else None
        if isinstance(data, pa.ChunkedArray):
            data = data.combine_chunks()
        if isinstance(data, pa.Array):
            array = data.cast(target_type) if target_type is not None else data
        else:
            if isinstance(data, collections.abc.Iterator):
                data = list(data)
            array = pa.array(data, type=target_type)
        if pa.types.is_null(array.type):
            array = array.cast(DType.FLOAT64.arrow_type)

        self.dtype = DType.from_arrow(array.type)
        self.policy = policy
        self.chunk_size = chunk_size
        self.max_workers = max_workers
        self._validity = ValidityMask.from_arrow(array)
        self._data = array.fill_null(self.dtype.zero()) if array.null_count else array

    @classmethod
    def from_generator(
        cls, size: int, generator: Callable[[int], Scalar | None], **kwargs: Any
    ) -> Self:
        """Create a Series of ``size`` elements from a per index generator.

        >>> Series.from_generator(4, lambda i: i * i).to_pylist()
        [0, 1, 4, 9]

        :param size: The number of elements.
        :param generator: Called with each index to get the value at that index.
        :param kwargs: Any other argument accepted by :class:`Series`.
        """
        return cls([generator(i) for i in range(size)], **kwargs)

    def _derive(self, data: pa.Array, validity: ValidityMask) -> "Series":
        """Build a new Series sharing the configuration of this one."""
        series = self.__class__.__new__(self.__class__)
        series.dtype = DType.from_arrow(data.type)
        series.policy = self.policy
        series.chunk_size = self.chunk_size
        series.max_workers = self.max_workers
        series._validity = validity
        series._data = data
        return series

    def _dispatch(self, operation: Callable[[ExecutionMode], Any]) -> Any:
        return with_policy(
            self.policy,
            operation,
            chunk_size=self.chunk_size,
            max_workers=self.max_workers,
        )

    def copy(self) -> "Series":
        """A new Series with the same values and nulls.

        Useful to chain in place operations without
        modifying the original Series::

            result = series.copy().mul(2).exp()
        """
        return self._derive(self._data, self._validity.copy())

    # Access

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int) -> Scalar | None:
        """The value at ``index`` or ``None`` if it's null.

        Raises :class:`IndexError` for positions outside of the Series.
        """
        index = self._check_index(index)
        if not self._validity.is_valid(index):
            return None
        return self._data[index].as_py()

    def __iter__(self) -> Iterator[Scalar | None]:
        return iter(self.to_pylist())

    def __str__(self) -> str:
        return format_series(self)

    def __repr__(self) -> str:
        return f"Series({format_series(self)}, dtype={self.dtype}, policy={self.policy.name})"

    def to_arrow(self) -> pa.Array:
        """The values as an arrow array where null values are null entries."""
        if self._validity.all_valid:
            return self._data
        return pc.if_else(
            self._validity.to_arrow(len(self)),
            self._data,
            pa.scalar(None, type=self._data.type),
        )

    def to_pylist(self) -> list[Scalar | None]:
        return self.to_arrow().to_pylist()

    def _check_index(self, index: int) -> int:
        index = operator.index(index)
        length = len(self)
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError(f"Series index out of range: {index} (length {length})")
        return index

    def _check_same_length(self, other: "Series", operation: str) -> None:
        if len(self) != len(other):
            raise SizeMismatchError(
                f"Series sizes do not match for {operation}: {len(self)} != {len(other)}"
            )

    # Nulls

    def set_null(self, index: int) -> None:
        """Mark the value at ``index`` as null.

        Does nothing on an empty Series.
        """
        if len(self) == 0:
            return
        self._validity.set_null(self._check_index(index), len(self))

    def is_null(self, index: int) -> bool:
        """If the value at ``index`` is null.

        Positions outside of the Series are reported as null.
        """
        try:
            index = self._check_index(index)
        except IndexError:
            return True
        return not self._validity.is_valid(index)

    def valid_count(self) -> int:
        """How many values are not null."""
        return self._count_flags(True)

    def null_count(self) -> int:
        """How many values are null."""
        return self._count_flags(False)

    def _count_flags(self, flag: bool) -> int:
        flags = self._validity.to_arrow(len(self))
        return self._dispatch(lambda mode: mode.reduce(CountAggregation(flag), flags))

    # Transformations

    def transform(self, func: Callable, other: "Series | None" = None) -> Self:
        """Apply ``func`` elementwise and store the result in this Series.

        With only ``func`` it is called with each value,
        when ``other`` is provided it is called with the values
        of both Series at the same position and the values that
        are null in ``other`` become null in this Series too.

        The values keep the type of this Series, results
        of a different type are converted to it.

        :param func: A function accepting arrow arrays and scalars,
                     like the ones in :mod:`pyarrow.compute`.
        :param other: The Series providing the second argument of ``func``.
        """
        if other is None:
            result = self._dispatch(lambda mode: mode.map(func, self.to_arrow()))
            validity = self._validity
        else:
            self._check_same_length(other, "transform")
            validity = self._dispatch(
                lambda mode: self._validity.intersect(other._validity, len(self), mode)
            )
            result = self._dispatch(
                lambda mode: mode.map(func, self.to_arrow(), other.to_arrow())
            )
        logger.debug(f"Transformed {len(self)} values in place with {inspect.get_qualname(func)}")
        self._data = _buffer(result, self.dtype)
        self._validity = validity
        return self

    def map(self, func: Callable, other: "Series | None" = None) -> "Series":
        """Apply ``func`` elementwise and return the result as a new Series.

        The new Series has the null values of this Series,
        and when ``other`` is provided also the null values of ``other``.
        Its type is the type of the values returned by ``func``.

        :param func: A function accepting arrow arrays and scalars,
                     like the ones in :mod:`pyarrow.compute`.
        :param other: The Series providing the second argument of ``func``.
        """
        if other is None:
            validity = self._validity.copy()
            result = self._dispatch(lambda mode: mode.map(func, self.to_arrow()))
        else:
            self._check_same_length(other, "map")
            validity = self._dispatch(
                lambda mode: self._validity.intersect(other._validity, len(self), mode)
            )
            result = self._dispatch(
                lambda mode: mode.map(func, self.to_arrow(), other.to_arrow())
            )
        logger.debug(f"Mapped {len(self)} values with {inspect.get_qualname(func)}")
        dtype = DType.from_arrow(result.type)
        return self._derive(_buffer(result, dtype), validity)

    def _inplace(self, func: Callable, value: "Series | Scalar", reverse: bool = False) -> Self:
        if isinstance(value, Series):
            return self.transform(ReversedFunction(func) if reverse else func, value)
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(
                f"Unsupported operand for a Series of {self.dtype} values: {value!r}"
            )
        return self.transform(BoundFunction(func, value, reverse=reverse))

    def add(self, value: "Series | Scalar") -> Self:
        """Add ``value`` to each value, in place."""
        return self._inplace(pc.add, value)

    def sub(self, value: "Series | Scalar") -> Self:
        """Subtract ``value`` from each value, in place."""
        return self._inplace(pc.subtract, value)

    def rsub(self, value: "Series | Scalar") -> Self:
        """Replace each value ``x`` with ``value - x``."""
        return self._inplace(pc.subtract, value, reverse=True)

    def mul(self, value: "Series | Scalar") -> Self:
        """Multiply each value by ``value``, in place."""
        return self._inplace(pc.multiply, value)

    def div(self, value: "Series | Scalar") -> Self:
        """Divide each value by ``value``, in place.

        Integer Series perform integer division.
        """
        return self._inplace(pc.divide, value)

    def rdiv(self, value: "Series | Scalar") -> Self:
        """Replace each value ``x`` with ``value / x``."""
        return self._inplace(pc.divide, value, reverse=True)

    def pow(self, value: "Series | Scalar") -> Self:
        """Raise each value to the power of ``value``, in place."""
        return self._inplace(pc.power, value)

    def minimum(self, value: "Series | Scalar") -> Self:
        """Replace each value with the smaller between it and ``value``."""
        return self._inplace(pc.min_element_wise, value)

    def maximum(self, value: "Series | Scalar") -> Self:
        """Replace each value with the bigger between it and ``value``."""
        return self._inplace(pc.max_element_wise, value)

    def exp(self) -> Self:
        return self.transform(pc.exp)

    def log(self) -> Self:
        """Natural logarithm of each value, in place."""
        return self.transform(pc.ln)

    def sqrt(self) -> Self:
        return self.transform(pc.sqrt)

    def abs(self) -> Self:
        return self.transform(pc.abs)

    def signum(self) -> Self:
        """Replace each value with -1, 0 or 1 depending on its sign."""
        return self.transform(signum)

    # Operators

    def _binary(self, func: Callable, other: Any, reverse: bool = False) -> "Series":
        if isinstance(other, Series):
            return self.map(ReversedFunction(func) if reverse else func, other)
        if isinstance(other, bool) or not isinstance(other, numbers.Real):
            return NotImplemented
        return self.map(BoundFunction(func, other, reverse=reverse))

    def __add__(self, other: Any) -> "Series":
        return self._binary(pc.add, other)

    def __radd__(self, other: Any) -> "Series":
        return self._binary(pc.add, other, reverse=True)

    def __sub__(self, other: Any) -> "Series":
        return self._binary(pc.subtract, other)

    def __rsub__(self, other: Any) -> "Series":
        return self._binary(pc.subtract, other, reverse=True)

    def __mul__(self, other: Any) -> "Series":
        return self._binary(pc.multiply, other)

    def __rmul__(self, other: Any) -> "Series":
        return self._binary(pc.multiply, other, reverse=True)

    def __truediv__(self, other: Any) -> "Series":
        return self._binary(true_divide, other)

    def __rtruediv__(self, other: Any) -> "Series":
        return self._binary(true_divide, other, reverse=True)

    def __neg__(self) -> "Series":
        return self.map(pc.negate)

    def __abs__(self) -> "Series":
        return self.map(pc.abs)

    def __iadd__(self, other: Any) -> Self:
        return self.add(other)

    def __isub__(self, other: Any) -> Self:
        return self.sub(other)

    def __imul__(self, other: Any) -> Self:
        return self.mul(other)

    def __itruediv__(self, other: Any) -> Self:
        return self.div(other)

    # Aggregations

    def sum(self) -> Scalar | None:
        """Sum of the valid values, ``None`` if there are none."""
        if self.valid_count() == 0:
            return None
        values = self.to_arrow()
        return self._dispatch(lambda mode: mode.reduce(SumAggregation(), values))

    def mean(self) -> float | None:
        """Mean of the valid values, ``None`` if there are none.

        Null values are not counted, so the sum is
        divided by :meth:`valid_count` not by the length.
        """
        if self.valid_count() == 0:
            return None
        values = self.to_arrow()
        return self._dispatch(lambda mode: mode.reduce(MeanAggregation(), values))

    def variance(self) -> float | None:
        """Population variance of the valid values, ``None`` if there are none."""
        mean = self.mean()
        if mean is None:
            return None
        values = self.to_arrow()
        return self._dispatch(
            lambda mode: mode.reduce(VarianceAggregation(mean), values)
        )

    def stddev(self) -> float | None:
        """Population standard deviation of the valid values."""
        variance = self.variance()
        if variance is None:
            return None
        return math.sqrt(variance)

    def min(self) -> Scalar | None:
        """Smallest of the valid values, ``None`` if there are none."""
        if len(self) == 0:
            return None
        values = self.to_arrow()
        return self._dispatch(lambda mode: mode.reduce(MinAggregation(), values))

    def max(self) -> Scalar | None:
        """Biggest of the valid values, ``None`` if there are none."""
        if len(self) == 0:
            return None
        values = self.to_arrow()
        return self._dispatch(lambda mode: mode.reduce(MaxAggregation(), values))

    def dot(self, other: "Series") -> Scalar:
        """Sum of the products of the values at the same positions.

        Positions that are null in any of the two Series are skipped,
        when nothing is left the result is zero.
        """
        self._check_same_length(other, "dot")
        left, right = self.to_arrow(), other.to_arrow()
        identity = DType.from_arrow(
            pc.multiply(left.slice(0, 0), right.slice(0, 0)).type
        ).zero()
        return self._dispatch(
            lambda mode: mode.reduce(DotAggregation(identity), left, right)
        )


def _buffer(result: pa.Array, dtype: DType) -> pa.Array:
    """Make ``result`` a null free buffer of ``dtype`` values."""
    if result.type != dtype.arrow_type:
        result = result.cast(dtype.arrow_type, safe=False)
    if result.null_count:
        result = result.fill_null(dtype.zero())
    return result


class SizeMismatchError(ValueError):
    """Operands of an operation don't have the same length."""

    pass
