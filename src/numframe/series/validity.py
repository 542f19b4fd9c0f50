"""Validity flags of the values of a Series.

A Series does not store nulls in its values, each value
is always present in the buffer and a separate mask tells
if the value at that position is valid or null.

The mask is grown lazily: a brand new Series has an empty
mask, and positions past the end of the mask are valid.
Only when a position is nulled the mask is padded with
``True`` up to the length of the data.

>>> mask = ValidityMask()
>>> mask.is_valid(3)
True
>>> mask.set_null(1, length=4)
>>> len(mask), mask.is_valid(1), mask.is_valid(3)
(4, False, True)
>>> mask.to_arrow(4).to_pylist()
[True, False, True, True]

This class is the only place aware of how lazy growth works,
everything else should go through its methods.
"""

from typing import Iterable

import pyarrow as pa
import pyarrow.compute as pc

from ..compute.policy import ExecutionMode


class ValidityMask:
    """Per position validity flags, all valid until nulled."""

    def __init__(self, flags: Iterable[bool] | pa.BooleanArray = ()) -> None:
        """
        :param flags: The initial validity of the first positions.
        """
        if not isinstance(flags, pa.BooleanArray):
            flags = pa.array([bool(f) for f in flags], type=pa.bool_())
        self._flags = flags

    @classmethod
    def from_arrow(cls, array: pa.Array) -> "ValidityMask":
        """Capture the validity of an arrow array.

        Arrays without any null value lead to an empty mask.
        """
        if array.null_count == 0:
            return cls()
        return cls(array.is_valid())

    def __len__(self) -> int:
        return len(self._flags)

    def __repr__(self) -> str:
        return f"ValidityMask(length={len(self)}, nulls={self._flags.false_count})"

    @property
    def all_valid(self) -> bool:
        """If no position was ever nulled."""
        return self._flags.false_count == 0

    def is_valid(self, index: int) -> bool:
        """If the value at ``index`` is valid.

        Positions that the mask doesn't cover are valid.
        """
        if index < len(self._flags):
            return self._flags[index].as_py()
        return True

    def set_null(self, index: int, length: int) -> None:
        """Mark ``index`` as null.

        The mask is padded with valid flags up to
        ``max(index + 1, length)`` before clearing the position.

        :param index: The position to null.
        :param length: The length of the data the mask refers to.
        """
        flags = self.to_arrow(max(index + 1, length, len(self._flags)))
        self._flags = pa.concat_arrays([
            flags.slice(0, index),
            pa.array([False], type=pa.bool_()),
            flags.slice(index + 1),
        ])

    def copy(self) -> "ValidityMask":
        # Arrow arrays are immutable, mutations replace the flags.
        return ValidityMask(self._flags)

    def to_arrow(self, length: int) -> pa.BooleanArray:
        """The flags for ``length`` positions as a BooleanArray."""
        flags = self._flags
        if len(flags) > length:
            return flags.slice(0, length)
        if len(flags) < length:
            padding = pa.repeat(pa.scalar(True, type=pa.bool_()), length - len(flags))
            return pa.concat_arrays([flags, padding])
        return flags

    def intersect(
        self, other: "ValidityMask", length: int, mode: ExecutionMode
    ) -> "ValidityMask":
        """Mask valid only where both this and ``other`` are valid.

        The flags are combined through ``mode`` like any
        other bulk operation. When neither mask has nulls
        the result stays an empty, lazily grown, mask.
        """
        if self.all_valid and other.all_valid:
            return ValidityMask()
        return ValidityMask(
            mode.map(pc.and_, self.to_arrow(length), other.to_arrow(length))
        )
