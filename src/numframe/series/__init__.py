"""Nullable numeric columns.

A :class:`Series` is an ordered sequence of values that all
share the same numeric type, like a column of a table.
Values can be null, in which case they are skipped
by aggregations and propagate through arithmetic:

>>> from numframe.series import Series
>>> prices = Series([10.0, 12.5, None, 9.0])
>>> quantities = Series([1, 2, 3, None])
>>> totals = prices * quantities
>>> totals.to_pylist()
[10.0, 25.0, None, None]
>>> totals.sum()
35.0

Operators always create a new Series, while the named
methods modify the Series in place and return it,
which makes possible to chain them:

>>> prices.mul(2).add(1).to_pylist()
[21.0, 26.0, None, 19.0]

Bulk operations are executed according to the
:class:`numframe.compute.ExecPolicy` of the Series.
"""

from .series import Series, SizeMismatchError
from .validity import ValidityMask

__all__ = ("Series", "SizeMismatchError", "ValidityMask")
