"""Tables of named Series.

A DataFrame groups multiple :class:`numframe.series.Series`
of the same length under a name, each one can hold values
of a different type. It's a minimal column store:
there is no joining, grouping or indexing, only the
ability to add columns and get them back.

The type of each column is remembered when it's added,
and requesting the column requires to state its type.
Requesting it with the wrong type is an error,
values are never reinterpreted as another type:

>>> from numframe.dataframe import DataFrame, ColumnTypeError
>>> from numframe.series import Series
>>> df = DataFrame({"visits": Series([10, 12, 7])})
>>> df.column("visits", "int64").mean()
9.666666666666666
>>> try:
...     df.column("visits", float)
... except ColumnTypeError as e:
...     print(e)
Column 'visits' holds int64 values, not double
"""

from .dataframe import Column, ColumnNotFoundError, ColumnTypeError, DataFrame

__all__ = ("DataFrame", "Column", "ColumnNotFoundError", "ColumnTypeError")
