"""The DataFrame object itself."""
import logging
from typing import NamedTuple

import pyarrow as pa

from ..dtypes import DType
from ..series import Series, SizeMismatchError
from ..utils.tabulate import tabulate

logger = logging.getLogger(__name__)

DISPLAY_ROWS = 5
"""How many rows are shown when printing a DataFrame."""


class Column(NamedTuple):
  """A Series tagged with the element type it had when added."""
  dtype: DType
  series: Series


class DataFrame:
  """Named Series of the same length, possibly of different types.

  Columns are kept in the order they were added.
  Each column remembers the type of its values, and
  retrieving a column requires to state the expected type,
  so that values are never read with the wrong type.

  >>> df = DataFrame()
  >>> df.add("qty", Series([1, 2, 3]))
  >>> df.add("price", Series([9.5, 3.0, 1.25]))
  >>> df.shape()
  (3, 2)
  >>> df.column("price", float).to_pylist()
  [9.5, 3.0, 1.25]
  """
  def __init__(self, columns: dict[str, Series] | None = None) -> None:
    """
    :param columns: Initial columns, added in the order of the dict.
    """
    self._columns: dict[str, Column] = {}
    for name, series in (columns or {}).items():
      self.add(name, series)

  def add(self, name: str, series: Series) -> None:
    """Add a new column to the DataFrame.

    When the DataFrame already has columns, the new one
    must have the same length or :class:`SizeMismatchError` is raised.

    Adding a name that already exists replaces the column
    but leaves it in its original position.

    :param name: The name of the column.
    :param series: The values of the column.
    """
    if not isinstance(series, Series):
      raise ValueError("Invalid input, expected a Series")

    if self._columns and len(series) != self.length():
      raise SizeMismatchError(
        f"Cannot add column {name!r} with inconsistent length: "
        f"{len(series)} != {self.length()}"
      )

    self._columns[name] = Column(series.dtype, series)
    logger.debug(f"Added column {name!r} of {series.dtype} values")

  def column(self, name: str, dtype: DType | pa.DataType | str | type) -> Series:
    """Get a column, checking it holds values of ``dtype``.

    Raises :class:`ColumnNotFoundError` when there is no column with that name
    and :class:`ColumnTypeError` when the column holds values of another type.

    :param name: The name of the column.
    :param dtype: The expected type of the values,
                  anything accepted by :meth:`numframe.dtypes.DType.coerce`.
    """
    try:
      column = self._columns[name]
    except KeyError:
      raise ColumnNotFoundError(f"Column not found: {name}") from None

    expected = DType.coerce(dtype)
    if column.dtype is not expected:
      raise ColumnTypeError(
        f"Column {name!r} holds {column.dtype} values, not {expected}"
      )
    return column.series

  def __contains__(self, name: str) -> bool:
    return name in self._columns

  @property
  def columns(self) -> list[str]:
    """Names of the columns in the order they were added."""
    return list(self._columns)

  @property
  def dtypes(self) -> dict[str, DType]:
    """The element type of each column."""
    return {name: column.dtype for name, column in self._columns.items()}

  def length(self) -> int:
    """Number of rows, 0 when there are no columns."""
    if not self._columns:
      return 0
    return len(next(iter(self._columns.values())).series)

  def width(self) -> int:
    """Number of columns."""
    return len(self._columns)

  def shape(self) -> tuple[int, int]:
    return (self.length(), self.width())

  def to_arrow(self) -> pa.Table:
    """The columns as a pyarrow.Table, null values as nulls."""
    return pa.table(
      {name: column.series.to_arrow() for name, column in self._columns.items()}
    )

  def __str__(self) -> str:
    nrows, ncols = self.shape()
    header = f"DataFrame: {nrows} rows x {ncols} columns"
    if not self._columns:
      return header
    head = pa.table({
      name: column.series.to_arrow().slice(0, DISPLAY_ROWS)
      for name, column in self._columns.items()
    })
    return f"{header}\n{tabulate(head, max_rows=DISPLAY_ROWS)}"

  def __repr__(self) -> str:
    return f"DataFrame(columns={self.columns}, rows={self.length()})"


class ColumnNotFoundError(KeyError):
  """There is no column with the requested name."""

  def __str__(self) -> str:
    # KeyError would show the message quoted.
    return str(self.args[0]) if self.args else ""


class ColumnTypeError(TypeError):
  """The column holds values of a different type than the requested one."""

  pass
