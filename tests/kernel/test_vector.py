"""Tests for the Vector value type."""

import math

import numpy as np
import pytest

from mathinput.math.geometric import Vector, VectorNotation
from mathinput.math.value import MathValue


class TestVectorCreation:
    """Constructors and element access."""

    def test_from_list(self):
        v = Vector([1, 2, 3])
        assert v.components == [1.0, 2.0, 3.0]
        assert v.dimensions() == 3
        assert isinstance(v, MathValue)

    def test_from_numpy(self):
        v = Vector(np.array([1.5, -2.0]))
        assert v.components == [1.5, -2.0]

    def test_zeros(self):
        v = Vector.zeros(4)
        assert v.dimensions() == 4
        assert v.get(0) == 0.0

    def test_named_components(self):
        v = Vector.new_3d(1.0, 2.0, 3.0)
        assert (v.x, v.y, v.z) == (1.0, 2.0, 3.0)
        short = Vector.new_2d(4.0, 5.0)
        assert short.z == 0.0

    def test_get_and_set(self):
        v = Vector.zeros(2)
        assert v.set(1, 7.5) is True
        assert v.get(1) == 7.5
        assert v.set(5, 1.0) is False
        assert v.get(5) is None
        assert v.get(-1) is None

    def test_serialization_round_trip(self, assert_serializable):
        restored = assert_serializable(Vector([1.0, -2.5]), Vector)
        assert restored == Vector([1.0, -2.5])


class TestVectorAlgebra:
    """Norms, products and projections."""

    def test_magnitude(self):
        v = Vector.new_3d(3.0, 4.0, 0.0)
        assert v.magnitude() == 5.0
        assert v.magnitude_squared() == 25.0

    def test_normalize(self):
        n = Vector.new_3d(3.0, 4.0, 0.0).normalize()
        assert n.magnitude() == pytest.approx(1.0)
        assert n.x == pytest.approx(0.6)
        assert n.y == pytest.approx(0.8)
        assert n.is_unit()

    def test_normalize_zero_vector(self):
        assert Vector.zeros(3).normalize() is None
        assert Vector([1e-11, 0.0]).normalize() is None

    def test_is_unit(self):
        assert Vector.new_3d(1.0, 0.0, 0.0).is_unit()
        assert not Vector.new_3d(1.0, 1.0, 0.0).is_unit()

    def test_dot(self):
        assert Vector([1, 2, 3]).dot(Vector([4, 5, 6])) == 32.0

    def test_dot_dimension_mismatch(self):
        assert Vector([1, 2]).dot(Vector([1, 2, 3])) is None

    def test_cross(self):
        cross = Vector([1, 0, 0]).cross(Vector([0, 1, 0]))
        assert cross.components == [0.0, 0.0, 1.0]

    def test_cross_matches_numpy(self):
        a, b = Vector([1.5, -2.0, 3.0]), Vector([0.5, 4.0, -1.0])
        expected = np.cross(a.to_numpy(), b.to_numpy())
        assert np.allclose(a.cross(b).to_numpy(), expected)

    def test_cross_requires_3d(self):
        assert Vector([1, 0]).cross(Vector([0, 1])) is None

    def test_angle_orthogonal(self):
        angle = Vector([1, 0, 0]).angle_to(Vector([0, 1, 0]))
        assert angle == pytest.approx(math.pi / 2)

    def test_angle_parallel_is_clamped(self):
        v = Vector([0.1, 0.2, 0.3])
        assert v.angle_to(v.scale(3.0)) == pytest.approx(0.0, abs=1e-7)
        assert v.angle_to(v.scale(-1.0)) == pytest.approx(math.pi)

    def test_angle_with_zero_vector(self):
        assert Vector([1, 0]).angle_to(Vector([0, 0])) is None
        assert Vector([1, 0]).angle_to(Vector([1, 0, 0])) is None

    def test_direction_angles(self):
        alpha, beta, gamma = Vector([1, 0, 0]).direction_angles()
        assert alpha == pytest.approx(0.0)
        assert beta == pytest.approx(math.pi / 2)
        assert gamma == pytest.approx(math.pi / 2)

    def test_direction_angles_undefined(self):
        assert Vector([1, 0]).direction_angles() is None
        assert Vector.zeros(3).direction_angles() is None

    def test_scale(self):
        assert Vector([1, 2, 3]).scale(2.0).components == [2.0, 4.0, 6.0]

    def test_add_and_subtract(self):
        assert Vector([1, 2, 3]).add(Vector([4, 5, 6])).components == [5.0, 7.0, 9.0]
        assert Vector([4, 5, 6]).subtract(Vector([1, 2, 3])).components == [3.0, 3.0, 3.0]
        assert Vector([1]).add(Vector([1, 2])) is None
        assert Vector([1]).subtract(Vector([1, 2])) is None

    def test_project_onto(self):
        proj = Vector([3, 4]).project_onto(Vector([1, 0]))
        assert proj.components == [3.0, 0.0]

    def test_project_onto_zero(self):
        assert Vector([3, 4]).project_onto(Vector([0, 0])) is None
        assert Vector([3, 4]).project_onto(Vector([1, 0, 0])) is None


class TestVectorFormatting:
    """Unit-basis, LaTeX and delimiter notations."""

    def test_unit_notation(self):
        assert Vector([3, -4, 0]).to_unit_notation() == "3î - 4ĵ"
        assert Vector([1, 1, 1]).to_unit_notation() == "î + ĵ + k̂"
        assert Vector([-1, 0, -1]).to_unit_notation() == "-î - k̂"
        assert Vector([0, -2.5, 1]).to_unit_notation() == "-2.5ĵ + k̂"

    def test_unit_notation_higher_dimensions(self):
        v = Vector([0, 0, 0, 2, 0, 0, 5])
        assert v.to_unit_notation() == "2ê₄ + 5eₙ"

    def test_unit_notation_zero_vector(self):
        assert Vector.zeros(3).to_unit_notation() == "0"
        assert Vector([1e-12, 0]).to_unit_notation() == "0"

    def test_latex(self):
        v = Vector([1, 2.5, 3])
        assert v.to_latex(column=False) == "\\begin{pmatrix} 1 & 2.5 & 3 \\end{pmatrix}"
        assert v.to_latex(column=True) == "\\begin{pmatrix} 1 \\\\ 2.5 \\\\ 3 \\end{pmatrix}"
        assert v.to_tex() == v.to_latex()

    def test_notation_delimiters(self):
        assert VectorNotation.ROW.left == "["
        assert VectorNotation.ANGLE_BRACKETS.left == "⟨"
        assert VectorNotation.ANGLE_BRACKETS.right == "⟩"
        assert VectorNotation.COLUMN.is_vertical
        assert not VectorNotation.ROW.is_vertical

    def test_format(self):
        v = Vector([1, 2, 3])
        assert v.format(VectorNotation.ROW) == "[1, 2, 3]"
        assert v.format(VectorNotation.ANGLE_BRACKETS) == "⟨1, 2, 3⟩"
        assert v.format(VectorNotation.PARENTHESES) == "(1, 2, 3)"
        assert v.format(VectorNotation.COLUMN) == "[1]\n[2]\n[3]"
        assert v.format(VectorNotation.UNIT_VECTOR) == "î + 2ĵ + 3k̂"
        assert str(v) == "[1, 2, 3]"

    def test_format_trims_decimals(self):
        assert Vector([1 / 3, 0.5]).format() == "[0.333333, 0.5]"

    def test_to_python_and_numpy(self):
        v = Vector([1, 2])
        assert v.to_python() == [1.0, 2.0]
        assert v.to_numpy().dtype == np.float64
        assert len(v) == 2
