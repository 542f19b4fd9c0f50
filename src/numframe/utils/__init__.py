"""Generic utilities and helpers.

This is a collection of generic utilities and helpers
that are used by the other parts of the codebase
but are not specifically bound to Series or DataFrames.
"""

from . import inspect, tabulate

__all__ = ("inspect", "tabulate")
