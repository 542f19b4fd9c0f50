"""Element types supported by Series and DataFrame columns.

A Series always holds values of a single numeric type,
and the set of those types is closed: only the Arrow
signed/unsigned integers and floating point types are accepted.

Each type is represented by a :class:`DType` member which wraps
the matching :class:`pyarrow.DataType`. The DataFrame stores
the DType of each column as its tag and compares tags
when a column is requested with a specific type.

>>> DType.coerce(float) is DType.FLOAT64
True
>>> DType.coerce("int32").arrow_type
DataType(int32)
"""

import enum
from typing import Any

import pyarrow as pa

__all__ = ("DType", "UnsupportedTypeError")


class DType(enum.Enum):
    """Closed set of the numeric element types."""

    INT8 = pa.int8()
    INT16 = pa.int16()
    INT32 = pa.int32()
    INT64 = pa.int64()
    UINT8 = pa.uint8()
    UINT16 = pa.uint16()
    UINT32 = pa.uint32()
    UINT64 = pa.uint64()
    FLOAT32 = pa.float32()
    FLOAT64 = pa.float64()

    @property
    def arrow_type(self) -> pa.DataType:
        """The pyarrow type backing the element type."""
        return self.value

    @property
    def is_integer(self) -> bool:
        return pa.types.is_integer(self.value)

    @property
    def is_floating(self) -> bool:
        return pa.types.is_floating(self.value)

    def zero(self) -> int | float:
        """The additive identity for the type."""
        return 0.0 if self.is_floating else 0

    @classmethod
    def from_arrow(cls, arrow_type: pa.DataType) -> "DType":
        """Find the DType wrapping the given pyarrow type.

        Raises :class:`UnsupportedTypeError` for any type
        outside of the numeric ones.
        """
        try:
            return cls(arrow_type)
        except ValueError:
            raise UnsupportedTypeError(
                f"Unsupported element type: {arrow_type}"
            ) from None

    @classmethod
    def coerce(cls, value: Any) -> "DType":
        """Convert a type specification into a DType.

        Accepts a DType itself, a :class:`pyarrow.DataType`,
        a type name known to :func:`pyarrow.type_for_alias`,
        like ``"float64"`` or ``"double"``, or the python
        ``int`` and ``float`` types, which map to
        ``INT64`` and ``FLOAT64`` like pyarrow does
        when inferring types from python values.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, pa.DataType):
            return cls.from_arrow(value)
        if value is int:
            return cls.INT64
        if value is float:
            return cls.FLOAT64
        if isinstance(value, str):
            try:
                arrow_type = pa.type_for_alias(value.lower())
            except ValueError:
                raise UnsupportedTypeError(
                    f"Unsupported element type: {value}"
                ) from None
            return cls.from_arrow(arrow_type)
        raise UnsupportedTypeError(f"Unsupported element type: {value!r}")

    def __str__(self) -> str:
        return str(self.value)


class UnsupportedTypeError(TypeError):
    """The element type is not one of the supported numeric types."""

    pass
