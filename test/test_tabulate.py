import pyarrow as pa

from numframe.utils.tabulate import format_series, format_value, tabulate


def test_format_value():
    assert format_value(None) == "null"
    assert format_value(1.234) == "1.23"
    assert format_value(3) == "3"
    assert format_value(True) == "true"
    assert format_value(False) == "false"
    assert format_value("x" * 40) == "x" * 27 + "..."


def test_format_series_short():
    assert format_series([]) == "[]"
    assert format_series(list(range(10))) == "[0, 1, 2, 3, 4, 5, 6, 7, 8, 9]"


def test_format_series_long():
    assert format_series(list(range(11))) == "[0, 1, 2, 3, 4, ..., 6, 7, 8, 9, 10]"
    assert format_series([0.5, None, 2.0], max_items=2) == "[0.50, ..., 2.00]"


def test_tabulate_limits_rows():
    table = pa.table({"n": list(range(7))})
    assert tabulate(table, max_rows=2).splitlines() == [
        "n",
        "-",
        "0",
        "1",
        "... and 5 more rows",
    ]


def test_tabulate_column_sizes():
    table = pa.table({"name": ["a", "longer"], "v": [1.0, None]})
    assert tabulate(table).splitlines() == [
        "name   | v   ",
        "------ | ----",
        "a      | 1.00",
        "longer | null",
    ]
