"""
Geometric MathValue types: Vector, Matrix.

Vector is a Euclidean vector of floats. Matrix is a dense, resizable
row-major grid of floats. Operations whose inputs do not fit (dimension
mismatch, non-square matrix, vanishing magnitude) return None.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Iterable

import numpy as np
from pydantic import BaseModel, Field

from ..core.errors import ShapeError
from ..core.logging import get_context_logger
from .formatting import format_number
from .value import MathValue

logger = get_context_logger(__name__, component="geometric")

#: Magnitudes, pivots and projections below this are treated as zero.
EPSILON = 1e-10

_BASIS_SYMBOLS = ("î", "ĵ", "k̂", "ê₄", "ê₅", "ê₆")
_FALLBACK_BASIS = "eₙ"


class VectorNotation(Enum):
    """Vector notation style."""

    ROW = "row"  # [x, y, z]
    COLUMN = "column"  # displayed vertically
    ANGLE_BRACKETS = "angle"  # ⟨x, y, z⟩
    PARENTHESES = "parens"  # (x, y, z)
    UNIT_VECTOR = "unit"  # xî + yĵ + zk̂

    @property
    def left(self) -> str:
        return _VECTOR_DELIMITERS[self][0]

    @property
    def right(self) -> str:
        return _VECTOR_DELIMITERS[self][1]

    @property
    def is_vertical(self) -> bool:
        return self is VectorNotation.COLUMN


_VECTOR_DELIMITERS = {
    VectorNotation.ROW: ("[", "]"),
    VectorNotation.COLUMN: ("[", "]"),
    VectorNotation.ANGLE_BRACKETS: ("⟨", "⟩"),
    VectorNotation.PARENTHESES: ("(", ")"),
    VectorNotation.UNIT_VECTOR: ("", ""),
}


class Vector(BaseModel, MathValue):
    """
    Euclidean vector in n dimensions.

    Binary operations require equal dimensionality and return None otherwise.
    """

    components: list[float] = Field(default_factory=list)

    def __init__(self, components: Iterable[float] | np.ndarray | None = None, **kwargs: Any) -> None:
        if isinstance(components, np.ndarray):
            components = components.tolist()
        super().__init__(components=list(components) if components is not None else [], **kwargs)

    @classmethod
    def zeros(cls, dimensions: int) -> Vector:
        return cls([0.0] * dimensions)

    @classmethod
    def new_2d(cls, x: float, y: float) -> Vector:
        return cls([x, y])

    @classmethod
    def new_3d(cls, x: float, y: float, z: float) -> Vector:
        return cls([x, y, z])

    def dimensions(self) -> int:
        return len(self.components)

    def get(self, index: int) -> float | None:
        """Component at index, or None when out of range."""
        if 0 <= index < len(self.components):
            return self.components[index]
        return None

    def set(self, index: int, value: float) -> bool:
        """Set a component; out-of-range indices are ignored."""
        if 0 <= index < len(self.components):
            self.components[index] = value
            return True
        return False

    @property
    def x(self) -> float:
        return self.components[0] if len(self.components) > 0 else 0.0

    @property
    def y(self) -> float:
        return self.components[1] if len(self.components) > 1 else 0.0

    @property
    def z(self) -> float:
        return self.components[2] if len(self.components) > 2 else 0.0

    # Vector operations

    def magnitude(self) -> float:
        """Euclidean norm ||v||."""
        return math.sqrt(self.magnitude_squared())

    def magnitude_squared(self) -> float:
        return sum(c * c for c in self.components)

    def normalize(self) -> Vector | None:
        """
        Unit vector in the same direction.

        Returns:
            Normalized vector, or None when the magnitude is below EPSILON
        """
        mag = self.magnitude()
        if mag < EPSILON:
            return None
        return Vector([c / mag for c in self.components])

    def is_unit(self) -> bool:
        return abs(self.magnitude() - 1.0) < EPSILON

    def dot(self, other: Vector) -> float | None:
        if self.dimensions() != other.dimensions():
            return None
        return sum(a * b for a, b in zip(self.components, other.components))

    def cross(self, other: Vector) -> Vector | None:
        """Cross product, defined for 3-dimensional vectors only."""
        if self.dimensions() != 3 or other.dimensions() != 3:
            return None
        return Vector.new_3d(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def angle_to(self, other: Vector) -> float | None:
        """
        Angle between two vectors in radians.

        The cosine is clamped to [-1, 1] before acos. Returns None on a
        dimension mismatch or when |a||b| is below EPSILON.
        """
        dot = self.dot(other)
        if dot is None:
            return None
        mags = self.magnitude() * other.magnitude()
        if mags < EPSILON:
            return None
        return math.acos(max(-1.0, min(1.0, dot / mags)))

    def direction_angles(self) -> tuple[float, float, float] | None:
        """Angles (alpha, beta, gamma) with the x, y and z axes; 3D only."""
        if self.dimensions() != 3:
            return None
        mag = self.magnitude()
        if mag < EPSILON:
            return None
        return (math.acos(self.x / mag), math.acos(self.y / mag), math.acos(self.z / mag))

    def scale(self, factor: float) -> Vector:
        return Vector([c * factor for c in self.components])

    def add(self, other: Vector) -> Vector | None:
        if self.dimensions() != other.dimensions():
            return None
        return Vector([a + b for a, b in zip(self.components, other.components)])

    def subtract(self, other: Vector) -> Vector | None:
        if self.dimensions() != other.dimensions():
            return None
        return Vector([a - b for a, b in zip(self.components, other.components)])

    def project_onto(self, other: Vector) -> Vector | None:
        """
        Projection of this vector onto ``other``: b * (a·b / b·b).

        Returns None on a dimension mismatch or when b·b is below EPSILON.
        """
        dot_ab = self.dot(other)
        if dot_ab is None:
            return None
        dot_bb = other.magnitude_squared()
        if dot_bb < EPSILON:
            return None
        return other.scale(dot_ab / dot_bb)

    # Formatting

    def to_unit_notation(self) -> str:
        """
        Render in basis notation, e.g. "3î - 4ĵ + k̂".

        Near-zero components are skipped; coefficients of ±1 show only the
        basis symbol. The zero vector renders as "0".
        """
        parts: list[str] = []
        for i, value in enumerate(self.components):
            if abs(value) < EPSILON:
                continue
            basis = _BASIS_SYMBOLS[i] if i < len(_BASIS_SYMBOLS) else _FALLBACK_BASIS

            if abs(value - 1.0) < EPSILON:
                coef = ""
            elif abs(value + 1.0) < EPSILON:
                coef = "-"
            else:
                coef = format_number(value)

            if not parts:
                if value < 0.0 and abs(value + 1.0) >= EPSILON:
                    parts.append(f"-{coef.lstrip('-')}{basis}")
                else:
                    parts.append(f"{coef}{basis}")
            elif value > 0.0:
                parts.append(f"+ {coef}{basis}")
            else:
                parts.append(f"- {coef.lstrip('-')}{basis}")

        return " ".join(parts) if parts else "0"

    def to_latex(self, column: bool = False) -> str:
        separator = " \\\\ " if column else " & "
        values = separator.join(format_number(c) for c in self.components)
        return f"\\begin{{pmatrix}} {values} \\end{{pmatrix}}"

    def format(self, notation: VectorNotation = VectorNotation.ROW) -> str:
        """Render with the delimiters of the given notation."""
        if notation is VectorNotation.UNIT_VECTOR:
            return self.to_unit_notation()
        values = [format_number(c) for c in self.components]
        if notation.is_vertical:
            return "\n".join(f"{notation.left}{v}{notation.right}" for v in values)
        return f"{notation.left}{', '.join(values)}{notation.right}"

    def to_string(self) -> str:
        return self.format(VectorNotation.ROW)

    def to_tex(self) -> str:
        return self.to_latex(column=False)

    def to_python(self) -> list[float]:
        return list(self.components)

    def to_numpy(self) -> np.ndarray:
        """Convert to NumPy array."""
        return np.array(self.components, dtype=float)

    def __len__(self) -> int:
        return len(self.components)

    def __str__(self) -> str:
        return self.to_string()


class MatrixNotation(Enum):
    """Matrix delimiter style."""

    BRACKETS = "brackets"  # [ ]
    PARENTHESES = "parens"  # ( )
    BARS = "bars"  # | |, determinant
    DOUBLE_BARS = "double_bars"  # ‖ ‖, norm

    @property
    def left(self) -> str:
        return _MATRIX_DELIMITERS[self][0]

    @property
    def right(self) -> str:
        return _MATRIX_DELIMITERS[self][1]


_MATRIX_DELIMITERS = {
    MatrixNotation.BRACKETS: ("[", "]"),
    MatrixNotation.PARENTHESES: ("(", ")"),
    MatrixNotation.BARS: ("|", "|"),
    MatrixNotation.DOUBLE_BARS: ("‖", "‖"),
}


class MatrixOperation(Enum):
    """Matrix operations that can be previewed next to an input grid."""

    DETERMINANT = "determinant"
    TRACE = "trace"
    TRANSPOSE = "transpose"
    FROBENIUS_NORM = "frobenius_norm"

    @property
    def label(self) -> str:
        return _OPERATION_LABELS[self]


_OPERATION_LABELS = {
    MatrixOperation.DETERMINANT: "det",
    MatrixOperation.TRACE: "tr",
    MatrixOperation.TRANSPOSE: "T",
    MatrixOperation.FROBENIUS_NORM: "‖·‖F",
}


class MatrixExportFormat(Enum):
    """Text formats a matrix can be exported to."""

    LATEX = "latex"
    MATLAB = "matlab"
    NUMPY = "numpy"
    MATHEMATICA = "mathematica"


class Matrix(BaseModel, MathValue):
    """
    Dense matrix of floats stored row-major.

    ``rows`` and ``cols`` are derived from ``data`` at construction; ragged
    input raises ShapeError. Resizing goes through add_row/add_col and
    remove_row/remove_col, which keep every row at ``cols`` entries.
    """

    data: list[list[float]] = Field(default_factory=list)
    rows: int = 0
    cols: int = 0

    def __init__(self, data: Iterable[Iterable[float]] | np.ndarray | None = None, **kwargs: Any) -> None:
        # rows/cols are recomputed from data; an explicit cols is kept only
        # when there are no rows to measure (0 x n)
        kwargs.pop("rows", None)
        explicit_cols = kwargs.pop("cols", None)
        if isinstance(data, np.ndarray):
            if data.ndim == 2 and data.shape[0] == 0:
                explicit_cols = data.shape[1]
            data = data.tolist()
        normalized = [list(row) for row in data] if data is not None else []

        if normalized:
            cols = len(normalized[0])
        else:
            cols = explicit_cols or 0
            if cols < 0:
                raise ShapeError("Matrix dimensions must be non-negative", cols=cols)
        for index, row in enumerate(normalized):
            if len(row) != cols:
                raise ShapeError(
                    "Matrix rows must all have the same length",
                    row=index,
                    expected=cols,
                    actual=len(row),
                )
        super().__init__(data=normalized, rows=len(normalized), cols=cols, **kwargs)

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        return cls.fill(rows, cols, 0.0)

    @classmethod
    def fill(cls, rows: int, cols: int, value: float) -> Matrix:
        return cls([[value] * cols for _ in range(rows)], cols=cols)

    @classmethod
    def identity(cls, size: int) -> Matrix:
        return cls([[1.0 if i == j else 0.0 for j in range(size)] for i in range(size)])

    @property
    def shape(self) -> tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return (self.rows, self.cols)

    def is_square(self) -> bool:
        return self.rows == self.cols

    def get(self, row: int, col: int) -> float | None:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.data[row][col]
        return None

    def set(self, row: int, col: int, value: float) -> bool:
        """Set an element; out-of-range positions are ignored."""
        if 0 <= row < self.rows and 0 <= col < self.cols:
            self.data[row][col] = value
            return True
        return False

    def row(self, index: int) -> list[float] | None:
        if 0 <= index < self.rows:
            return list(self.data[index])
        return None

    def col(self, index: int) -> list[float] | None:
        if 0 <= index < self.cols:
            return [row[index] for row in self.data]
        return None

    # Matrix operations

    def trace(self) -> float | None:
        """Sum of the diagonal; None for non-square matrices."""
        if not self.is_square():
            return None
        return sum(self.data[i][i] for i in range(self.rows))

    def determinant(self) -> float | None:
        """
        Determinant of a square matrix.

        Closed forms are used up to 3x3 (the empty matrix has determinant 1).
        Larger matrices are reduced with partial-pivoting LU elimination.

        Returns:
            Determinant, or None for non-square matrices
        """
        if not self.is_square():
            return None

        n = self.rows
        m = self.data
        if n == 0:
            return 1.0
        if n == 1:
            return m[0][0]
        if n == 2:
            return m[0][0] * m[1][1] - m[0][1] * m[1][0]
        if n == 3:
            a, b, c = m[0]
            d, e, f = m[1]
            g, h, i = m[2]
            return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)
        return self._determinant_lu()

    def _determinant_lu(self) -> float:
        n = self.rows
        lu = [list(row) for row in self.data]
        det = 1.0

        for k in range(n):
            # Partial pivoting: largest magnitude in column k at or below row k
            max_row = k
            max_val = abs(lu[k][k])
            for i in range(k + 1, n):
                if abs(lu[i][k]) > max_val:
                    max_val = abs(lu[i][k])
                    max_row = i

            if max_val < EPSILON:
                logger.debug("Singular matrix", extra_data={"size": n, "pivot_column": k})
                return 0.0

            if max_row != k:
                lu[k], lu[max_row] = lu[max_row], lu[k]
                det = -det

            det *= lu[k][k]

            for i in range(k + 1, n):
                factor = lu[i][k] / lu[k][k]
                for j in range(k, n):
                    lu[i][j] -= factor * lu[k][j]

        return det

    def frobenius_norm(self) -> float:
        """Square root of the sum of squared elements."""
        return math.sqrt(sum(x * x for row in self.data for x in row))

    def transpose(self) -> Matrix:
        """Return the transpose as a new matrix."""
        if self.cols == 0:
            # n x 0 has no column to read, so the row count survives as cols
            return Matrix([], cols=self.rows)
        return Matrix([[self.data[i][j] for i in range(self.rows)] for j in range(self.cols)])

    def apply(self, operation: MatrixOperation) -> float | Matrix | None:
        """Evaluate a previewable operation."""
        if operation is MatrixOperation.DETERMINANT:
            return self.determinant()
        if operation is MatrixOperation.TRACE:
            return self.trace()
        if operation is MatrixOperation.TRANSPOSE:
            return self.transpose()
        if operation is MatrixOperation.FROBENIUS_NORM:
            return self.frobenius_norm()
        raise ValueError(f"Unknown matrix operation: {operation}")

    # Resizing

    def add_row(self, index: int) -> bool:
        """Insert a zero row before ``index`` (``index == rows`` appends)."""
        if not 0 <= index <= self.rows:
            return False
        self.data.insert(index, [0.0] * self.cols)
        self.rows += 1
        return True

    def add_col(self, index: int) -> bool:
        """Insert a zero column before ``index`` (``index == cols`` appends)."""
        if not 0 <= index <= self.cols:
            return False
        for row in self.data:
            row.insert(index, 0.0)
        self.cols += 1
        return True

    def remove_row(self, index: int) -> bool:
        """Delete a row unless it is the last one left."""
        if not 0 <= index < self.rows or self.rows <= 1:
            return False
        del self.data[index]
        self.rows -= 1
        return True

    def remove_col(self, index: int) -> bool:
        """Delete a column unless it is the last one left."""
        if not 0 <= index < self.cols or self.cols <= 1:
            return False
        for row in self.data:
            del row[index]
        self.cols -= 1
        return True

    # Export

    def _formatted_rows(self) -> list[list[str]]:
        return [[format_number(v) for v in row] for row in self.data]

    def to_latex(self) -> str:
        body = " \\\\\n".join(" & ".join(row) for row in self._formatted_rows())
        if body:
            body += "\n"
        return f"\\begin{{pmatrix}}\n{body}\\end{{pmatrix}}"

    def to_matlab(self) -> str:
        return "[" + "; ".join(", ".join(row) for row in self._formatted_rows()) + "]"

    def to_numpy_string(self) -> str:
        rows = ", ".join("[" + ", ".join(row) + "]" for row in self._formatted_rows())
        return f"np.array([{rows}])"

    def to_mathematica(self) -> str:
        rows = ", ".join("{" + ", ".join(row) + "}" for row in self._formatted_rows())
        return "{" + rows + "}"

    def export(self, fmt: MatrixExportFormat) -> str:
        if fmt is MatrixExportFormat.LATEX:
            return self.to_latex()
        if fmt is MatrixExportFormat.MATLAB:
            return self.to_matlab()
        if fmt is MatrixExportFormat.NUMPY:
            return self.to_numpy_string()
        if fmt is MatrixExportFormat.MATHEMATICA:
            return self.to_mathematica()
        raise ValueError(f"Unknown export format: {fmt}")

    def to_string(self) -> str:
        """Nested-list rendering, e.g. "[[1, 2], [3, 4]]"."""
        return "[" + ", ".join("[" + ", ".join(row) + "]" for row in self._formatted_rows()) + "]"

    def to_tex(self) -> str:
        return self.to_latex()

    def to_python(self) -> list[list[float]]:
        return [list(row) for row in self.data]

    def to_numpy(self) -> np.ndarray:
        """Convert to NumPy array of shape (rows, cols)."""
        return np.array(self.data, dtype=float).reshape(self.rows, self.cols)

    def __str__(self) -> str:
        return self.to_string()
