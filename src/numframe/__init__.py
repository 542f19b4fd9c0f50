"""NumFrame

Strongly typed, nullable, numeric columns and a minimal
table built out of them, on top of Apache Arrow.

The package is constituted by multiple components, each isolated within its own
package and each self documented in literate programming style.

The primary components are:

* The Series, a column of numeric values that can be null,
  supporting elementwise arithmetic and null aware aggregations.
* The Compute layer, which executes the bulk operations of Series
  according to an execution policy (sequential, parallel, vectorized).
* The DataFrame, which groups named Series of possibly different types.

For the user guide and code documentation of each component, refer to the
component itself.

>>> from numframe import DataFrame, Series
>>> s = Series([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
>>> s.mean(), s.variance(), s.stddev()
(5.0, 4.0, 2.0)
"""

import logging

from . import compute, dtypes
from .compute import ExecPolicy
from .dataframe import DataFrame
from .dtypes import DType
from .series import Series

__all__ = ("compute", "dtypes", "DataFrame", "DType", "ExecPolicy", "Series")

logging.getLogger(__name__).addHandler(logging.NullHandler())
