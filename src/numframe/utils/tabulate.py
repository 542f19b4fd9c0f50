"""Format Series and tabular data into text for print.

The `tabulate` function takes a `pyarrow.Table` or `pyarrow.RecordBatch`
and formats it into a text table, it is what DataFrames use to print themselves.
It will truncate long strings, format floats to 2 decimal places, render
null values as ``null`` and limit the number of rows to display.

Example:

    >>> import pyarrow as pa
    >>> data = {
    ...     "qty": [8, None, 7],
    ...     "price": [66.5, 38.72, 77.46],
    ... }
    >>> table = pa.RecordBatch.from_pydict(data)
    >>> print(tabulate(table))
    qty  | price
    ---- | -----
    8    | 66.50
    null | 38.72
    7    | 77.46

The `format_series` function renders a sequence of values
on a single line, long sequences only show their head and tail:

    >>> format_series(list(range(20)))
    '[0, 1, 2, 3, 4, ..., 15, 16, 17, 18, 19]'
"""

from typing import Any, Sequence

import pyarrow as pa

MAX_SERIES_ITEMS = 10
"""Sequences longer than this only show their first and last items."""


def tabulate(data: pa.Table | pa.RecordBatch, max_rows: int = 5) -> str:
    """Format a Table or RecordBatch into a text table.

    Will produce a string like::

        price | quantity
        ----- | --------
        66.50 | 8
        38.72 | 8
    """
    cols = data.column_names
    rows = [
        [format_value(row[c]) for c in cols]
        for row in data.slice(length=max_rows).to_pylist()
    ]

    colsizes = compute_max_colsize(cols, rows)
    header = [maketablerow(cols, colsizes=colsizes)]
    separator = [maketablerow(["-"] * len(cols), colsizes=colsizes, fillvalue="-")]
    textrows = [maketablerow(row, colsizes=colsizes) for row in rows]

    table = "\n".join(header + separator + textrows)
    if data.num_rows > max_rows:
        table += f"\n... and {data.num_rows - max_rows} more rows"
    return table


def format_series(values: Sequence[Any], max_items: int = MAX_SERIES_ITEMS) -> str:
    """Format a sequence of values as ``[a, b, c]``.

    When there are more than ``max_items`` values only
    the first and last ``max_items // 2`` are shown.
    Values are only accessed by position, so this works
    with any object supporting ``len`` and indexing.
    """
    length = len(values)
    if length <= max_items:
        items = [format_value(values[i]) for i in range(length)]
    else:
        chunk = max_items // 2
        items = (
            [format_value(values[i]) for i in range(chunk)]
            + ["..."]
            + [format_value(values[i]) for i in range(length - chunk, length)]
        )
    return f"[{', '.join(items)}]"


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column in a table."""
    return [
        max([len(row[colidx]) for row in rows] + [len(cols[colidx])])
        for colidx, _ in enumerate(cols)
    ]


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(
        [col.ljust(colsizes[idx], fillvalue) for idx, col in enumerate(cols)]
    )


def format_value(v: Any) -> str:
    """Format a value to be printed.

    This function will format floats to 2 decimal places,
    null values as ``null`` and truncate long strings.
    """
    if v is None:
        return "null"
    elif isinstance(v, float):
        return f"{v:.2f}"
    elif isinstance(v, bool):
        return "true" if v else "false"

    v = str(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v
