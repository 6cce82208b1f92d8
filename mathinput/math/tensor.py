"""
N-dimensional tensor stored as a flat row-major buffer.

The flat offset of a multi-index is the sum of each index times the
product of the sizes of all later axes. ``len(data) == prod(shape)`` holds
for every tensor; construction rejects mismatched input with ShapeError and
any later drift is reported as InvariantViolation.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Sequence

import numpy as np
from pydantic import BaseModel, Field

from ..core.errors import InvariantViolation, ShapeError
from ..core.logging import get_context_logger
from .formatting import format_number
from .value import MathValue

logger = get_context_logger(__name__, component="tensor")

#: Decimals kept when rendering tensor elements.
ELEMENT_DECIMALS = 4


class Tensor(BaseModel, MathValue):
    """Arbitrary-rank tensor of floats."""

    data: list[float] = Field(default_factory=list)
    shape: list[int] = Field(default_factory=list)

    def __init__(
        self,
        data: Iterable[float] | np.ndarray | None = None,
        shape: Sequence[int] | None = None,
        **kwargs: Any,
    ) -> None:
        if isinstance(data, np.ndarray):
            if shape is None:
                shape = list(data.shape)
            data = data.ravel().tolist()
        values = list(data) if data is not None else []
        dims = list(shape) if shape is not None else [len(values)]

        if any(d < 0 for d in dims):
            raise ShapeError("Tensor dimensions must be non-negative", shape=dims)
        expected = math.prod(dims)
        if len(values) != expected:
            raise ShapeError(
                "Tensor data length does not match its shape",
                shape=dims,
                expected=expected,
                actual=len(values),
            )
        super().__init__(data=values, shape=dims, **kwargs)

    @classmethod
    def zeros(cls, shape: Sequence[int]) -> Tensor:
        return cls.fill(shape, 0.0)

    @classmethod
    def fill(cls, shape: Sequence[int], value: float) -> Tensor:
        return cls([value] * math.prod(shape), shape)

    def _assert_consistent(self) -> None:
        if len(self.data) != math.prod(self.shape):
            raise InvariantViolation(
                "Tensor buffer length drifted from its shape",
                {"shape": list(self.shape), "length": len(self.data)},
            )

    def rank(self) -> int:
        return len(self.shape)

    def size(self) -> int:
        return math.prod(self.shape)

    # Indexing

    def flat_index(self, indices: Sequence[int]) -> int | None:
        """
        Row-major flat offset of a multi-index.

        Returns None when the index count differs from the rank or any index
        is out of range for its axis.
        """
        if len(indices) != len(self.shape):
            return None
        flat = 0
        stride = 1
        for idx, dim in zip(reversed(indices), reversed(self.shape)):
            if not 0 <= idx < dim:
                return None
            flat += idx * stride
            stride *= dim
        return flat

    def multi_index(self, flat: int) -> list[int] | None:
        """Inverse of flat_index; None when ``flat`` is out of range."""
        if not 0 <= flat < self.size():
            return None
        indices = [0] * len(self.shape)
        remaining = flat
        for axis in range(len(self.shape) - 1, -1, -1):
            indices[axis] = remaining % self.shape[axis]
            remaining //= self.shape[axis]
        return indices

    def get(self, indices: Sequence[int]) -> float | None:
        self._assert_consistent()
        flat = self.flat_index(indices)
        if flat is None:
            return None
        return self.data[flat]

    def set(self, indices: Sequence[int], value: float) -> bool:
        self._assert_consistent()
        flat = self.flat_index(indices)
        if flat is None:
            return False
        self.data[flat] = value
        return True

    def slice_2d(self, fixed: Sequence[tuple[int, int]]) -> tuple[int, int, list[float]] | None:
        """
        Materialize a 2D slice.

        ``fixed`` pins (axis, index) pairs; the last two remaining free axes
        become rows and columns. Returns (rows, cols, row-major data), or
        None when fewer than two free axes remain or a pinned axis/index is
        out of range.
        """
        self._assert_consistent()
        if self.rank() < 2:
            return None

        indices = [0] * self.rank()
        fixed_axes = set()
        for axis, index in fixed:
            if not 0 <= axis < self.rank() or not 0 <= index < self.shape[axis]:
                return None
            indices[axis] = index
            fixed_axes.add(axis)

        free_axes = [axis for axis in range(self.rank()) if axis not in fixed_axes]
        if len(free_axes) < 2:
            return None
        row_axis, col_axis = free_axes[-2], free_axes[-1]

        rows, cols = self.shape[row_axis], self.shape[col_axis]
        values: list[float] = []
        for r in range(rows):
            indices[row_axis] = r
            for c in range(cols):
                indices[col_axis] = c
                values.append(self.data[self.flat_index(indices)])
        return rows, cols, values

    # Shape operations

    def reshape(self, new_shape: Sequence[int]) -> bool:
        """Change the shape in place when the element count is preserved."""
        self._assert_consistent()
        dims = list(new_shape)
        if any(d < 0 for d in dims) or math.prod(dims) != len(self.data):
            logger.debug(
                "Refused reshape",
                extra_data={"shape": list(self.shape), "new_shape": dims},
            )
            return False
        self.shape = dims
        return True

    def transpose(self) -> Tensor | None:
        """Swap the last two axes; None below rank 2."""
        self._assert_consistent()
        n = self.rank()
        if n < 2:
            return None

        new_shape = list(self.shape)
        new_shape[-2], new_shape[-1] = new_shape[-1], new_shape[-2]
        result = Tensor.zeros(new_shape)

        for flat, value in enumerate(self.data):
            idx = self.multi_index(flat)
            idx[-2], idx[-1] = idx[-1], idx[-2]
            result.data[result.flat_index(idx)] = value
        return result

    # Reductions

    def sum(self) -> float:
        return sum(self.data)

    def mean(self) -> float:
        """Arithmetic mean; 0.0 for an empty tensor."""
        if not self.data:
            return 0.0
        return self.sum() / len(self.data)

    def min(self) -> float | None:
        return min(self.data) if self.data else None

    def max(self) -> float | None:
        return max(self.data) if self.data else None

    def frobenius_norm(self) -> float:
        return math.sqrt(sum(x * x for x in self.data))

    # Formatting

    def shape_string(self) -> str:
        """Shape as "(2 × 3 × 4)"."""
        return "(" + " × ".join(str(d) for d in self.shape) + ")"

    def _nested(self, axis: int, offset: int) -> str:
        if axis == self.rank():
            return format_number(self.data[offset], ELEMENT_DECIMALS)
        stride = math.prod(self.shape[axis + 1:])
        items = (self._nested(axis + 1, offset + i * stride) for i in range(self.shape[axis]))
        return "[" + ", ".join(items) + "]"

    def to_string(self) -> str:
        """Nested-bracket rendering, e.g. "[[1, 2], [3, 4]]"."""
        self._assert_consistent()
        return self._nested(0, 0)

    def to_tex(self) -> str:
        if self.rank() == 2:
            rows, cols = self.shape
            body = " \\\\ ".join(
                " & ".join(format_number(self.data[r * cols + c], ELEMENT_DECIMALS) for c in range(cols))
                for r in range(rows)
            )
            return f"\\begin{{pmatrix}} {body} \\end{{pmatrix}}"
        return "\\mathcal{T}_{" + " \\times ".join(str(d) for d in self.shape) + "}"

    def to_python(self) -> list[Any]:
        return self.to_numpy().tolist()

    def to_numpy(self) -> np.ndarray:
        """Convert to a NumPy array with this tensor's shape."""
        self._assert_consistent()
        return np.array(self.data, dtype=float).reshape(self.shape)

    def __str__(self) -> str:
        return self.to_string()
