"""Elementwise functions applied by Series transforms.

Transforms accept any callable that works on both
:class:`pyarrow.Array` and :class:`pyarrow.Scalar`
arguments, which is the case for the Arrow compute functions.

Many operations combine the values with a scalar,
like ``series + 5``. Those are represented by
:class:`BoundFunction` which binds one of the arguments
of a binary compute function:

>>> import pyarrow as pa
>>> import pyarrow.compute as pc
>>> minus_from_five = BoundFunction(pc.subtract, 5, reverse=True)
>>> str(minus_from_five)
'pyarrow.compute.subtract(5,x)'
>>> minus_from_five(pa.array([1, 2, 3])).to_pylist()
[4, 3, 2]
"""

from typing import Any, Callable

import pyarrow as pa
import pyarrow.compute as pc

from .. import utils

__all__ = ("BoundFunction", "ReversedFunction", "true_divide", "signum")


class BoundFunction:
    """Call a binary compute function with one argument bound to a scalar.

    By default the scalar is the right side of the function,
    ``reverse=True`` makes it the left side so that
    operations like ``5 - series`` can be expressed.
    """

    def __init__(self, func: Callable, value: Any, reverse: bool = False) -> None:
        """
        :param func: The binary function to call.
        :param value: The scalar bound to one side of the function.
        :param reverse: If the scalar is the left argument.
        """
        self.func = func
        self.value = value
        self.reverse = reverse

    def __str__(self) -> str:
        func_qualname = utils.inspect.get_qualname(self.func)
        args = (self.value, "x") if self.reverse else ("x", self.value)
        return f"{func_qualname}({','.join(map(str, args))})"

    def __call__(self, x: pa.Array | pa.Scalar) -> pa.Array | pa.Scalar:
        if self.reverse:
            return self.func(self.value, x)
        return self.func(x, self.value)


class ReversedFunction:
    """Call a binary compute function with swapped arguments."""

    def __init__(self, func: Callable) -> None:
        self.func = func

    def __str__(self) -> str:
        return f"{utils.inspect.get_qualname(self.func)}(y,x)"

    def __call__(self, x: Any, y: Any) -> Any:
        return self.func(y, x)


def true_divide(x: Any, y: Any) -> Any:
    """Divide promoting integer operands to float64.

    Arrow performs integer division when both operands are integers,
    this makes ``/`` behave like python ``int / int`` instead.
    """
    return pc.divide(_as_floating(x), _as_floating(y))


def signum(x: Any) -> Any:
    """The sign of each value as -1, 0 or 1."""
    return pc.sign(x)


def _as_floating(value: Any) -> Any:
    if isinstance(value, (pa.Array, pa.Scalar)):
        if pa.types.is_integer(value.type):
            return pc.cast(value, pa.float64())
        return value
    if isinstance(value, int):
        return float(value)
    return value
