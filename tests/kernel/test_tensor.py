"""Tests for the Tensor value type."""

import numpy as np
import pytest

from mathinput.core.errors import InvariantViolation, ShapeError
from mathinput.math.tensor import Tensor


@pytest.fixture
def cube():
    """2 x 3 x 4 tensor holding 0..23 in row-major order."""
    return Tensor(np.arange(24, dtype=float).reshape(2, 3, 4))


class TestTensorCreation:
    """Construction and shape validation."""

    def test_default_shape_is_flat(self):
        t = Tensor([1.0, 2.0, 3.0])
        assert t.shape == [3]
        assert t.rank() == 1
        assert t.size() == 3

    def test_from_numpy_keeps_shape(self, cube):
        assert cube.shape == [2, 3, 4]
        assert cube.rank() == 3
        assert cube.size() == 24

    def test_zeros_and_fill(self):
        assert Tensor.zeros([2, 2]).data == [0.0] * 4
        assert Tensor.fill([3], 1.5).data == [1.5, 1.5, 1.5]

    def test_scalar_tensor(self):
        t = Tensor([5.0], [])
        assert t.rank() == 0
        assert t.size() == 1
        assert str(t) == "5"

    def test_length_mismatch(self):
        with pytest.raises(ShapeError) as exc_info:
            Tensor([1, 2, 3], [2, 2])
        assert exc_info.value.details["expected"] == 4
        assert exc_info.value.details["actual"] == 3

    def test_negative_dimension(self):
        with pytest.raises(ShapeError):
            Tensor([], [-1, 0])

    def test_serialization_round_trip(self, assert_serializable, cube):
        restored = assert_serializable(cube, Tensor)
        assert restored.shape == [2, 3, 4]


class TestTensorIndexing:
    """Row-major flat offsets."""

    def test_flat_index(self, cube):
        assert cube.flat_index([0, 0, 0]) == 0
        assert cube.flat_index([1, 2, 3]) == 23
        assert cube.flat_index([1, 0, 2]) == 14

    def test_flat_index_out_of_range(self, cube):
        assert cube.flat_index([2, 0, 0]) is None
        assert cube.flat_index([0, -1, 0]) is None
        assert cube.flat_index([0, 0]) is None

    def test_multi_index_inverts_flat_index(self, cube):
        for flat in range(cube.size()):
            assert cube.flat_index(cube.multi_index(flat)) == flat
        assert cube.multi_index(23) == [1, 2, 3]
        assert cube.multi_index(24) is None

    def test_get_matches_numpy(self, cube):
        array = cube.to_numpy()
        assert cube.get([1, 2, 0]) == array[1, 2, 0]
        assert cube.get([5, 0, 0]) is None

    def test_set(self, cube):
        assert cube.set([0, 1, 2], -1.0) is True
        assert cube.get([0, 1, 2]) == -1.0
        assert cube.set([0, 3, 0], 1.0) is False

    def test_drift_is_invariant_violation(self, cube):
        cube.data.append(99.0)
        with pytest.raises(InvariantViolation) as exc_info:
            cube.get([0, 0, 0])
        assert exc_info.value.details == {"shape": [2, 3, 4], "length": 25}


class TestSlice2D:
    """Two-dimensional views."""

    def test_pin_first_axis(self, cube):
        rows, cols, values = cube.slice_2d([(0, 1)])
        assert (rows, cols) == (3, 4)
        assert values == cube.to_numpy()[1].ravel().tolist()

    def test_no_pins_uses_last_two_axes(self, cube):
        rows, cols, values = cube.slice_2d([])
        assert (rows, cols) == (3, 4)
        assert values == cube.to_numpy()[0].ravel().tolist()

    def test_pin_last_axis(self, cube):
        rows, cols, values = cube.slice_2d([(2, 1)])
        assert (rows, cols) == (2, 3)
        assert values == cube.to_numpy()[:, :, 1].ravel().tolist()

    def test_too_few_free_axes(self, cube):
        assert cube.slice_2d([(0, 0), (1, 0)]) is None
        assert Tensor([1.0, 2.0]).slice_2d([]) is None

    def test_invalid_pin(self, cube):
        assert cube.slice_2d([(5, 0)]) is None
        assert cube.slice_2d([(0, 2)]) is None


class TestTensorShapeOperations:
    """Reshape and transpose."""

    def test_reshape(self, cube):
        assert cube.reshape([6, 4]) is True
        assert cube.shape == [6, 4]
        assert cube.get([5, 3]) == 23.0

    def test_reshape_refused(self, cube, kernel_debug_logs):
        assert cube.reshape([5, 5]) is False
        assert cube.shape == [2, 3, 4]
        record = kernel_debug_logs.records[-1]
        assert record.getMessage() == "Refused reshape"
        assert record.extra_data["new_shape"] == [5, 5]

    def test_transpose_matches_numpy(self, cube):
        transposed = cube.transpose()
        assert transposed.shape == [2, 4, 3]
        expected = np.swapaxes(cube.to_numpy(), -1, -2)
        assert np.array_equal(transposed.to_numpy(), expected)

    def test_transpose_twice_is_identity(self, cube):
        assert cube.transpose().transpose() == cube

    def test_transpose_requires_rank_two(self):
        assert Tensor([1.0, 2.0]).transpose() is None


class TestTensorReductions:
    """Aggregates over all elements."""

    def test_reductions(self, cube):
        assert cube.sum() == 276.0
        assert cube.mean() == 11.5
        assert cube.min() == 0.0
        assert cube.max() == 23.0

    def test_frobenius_norm(self):
        assert Tensor([3.0, 4.0], [2, 1]).frobenius_norm() == 5.0

    def test_empty(self):
        empty = Tensor()
        assert empty.shape == [0]
        assert empty.mean() == 0.0
        assert empty.min() is None
        assert empty.max() is None


class TestTensorFormatting:
    """Shape, nested and TeX rendering."""

    def test_shape_string(self, cube):
        assert cube.shape_string() == "(2 × 3 × 4)"

    def test_nested_string(self):
        assert str(Tensor([1, 2, 3, 4], [2, 2])) == "[[1, 2], [3, 4]]"
        assert Tensor([0.123456, 2.5], [2]).to_string() == "[0.1235, 2.5]"

    def test_tex(self, cube):
        assert Tensor([1, 2, 3, 4], [2, 2]).to_tex() == "\\begin{pmatrix} 1 & 2 \\\\ 3 & 4 \\end{pmatrix}"
        assert cube.to_tex() == "\\mathcal{T}_{2 \\times 3 \\times 4}"

    def test_to_python(self):
        assert Tensor([1, 2, 3, 4], [2, 2]).to_python() == [[1.0, 2.0], [3.0, 4.0]]
