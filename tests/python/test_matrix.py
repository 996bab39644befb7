"""
Tests for Matrix construction, element access, quadrants and elementwise arithmetic
"""

import io

import numpy as np
import pytest

import strassen_matrix as sm
from strassen_matrix import (
    IndexOutOfRangeError,
    InvalidSizeError,
    Matrix,
    MatrixError,
    SizeMismatchError,
)


# =============================================================================
# Construction
# =============================================================================

@pytest.mark.parametrize("size", [1, 2, 4, 8, 16])
def test_power_of_two_sizes_construct(size):
    """Test that power-of-two sizes build zero-filled matrices"""
    m = Matrix(size)
    assert m.size == size
    assert m.shape == (size, size)
    assert m.data.shape == (size * size,)
    assert not m.data.any()


@pytest.mark.parametrize("size", [0, 3, 5, 6, 7, 12, -4])
def test_non_power_of_two_sizes_rejected(size):
    """Test that invalid sizes raise InvalidSizeError"""
    with pytest.raises(InvalidSizeError):
        Matrix(size)


def test_error_hierarchy():
    """Test that package errors are also standard Python errors"""
    assert issubclass(InvalidSizeError, MatrixError)
    assert issubclass(InvalidSizeError, ValueError)
    assert issubclass(SizeMismatchError, ValueError)
    assert issubclass(IndexOutOfRangeError, IndexError)


def test_non_integer_size_rejected():
    with pytest.raises(TypeError):
        Matrix(2.0)
    with pytest.raises(TypeError):
        Matrix(True)


def test_numpy_integer_size_accepted():
    assert Matrix(np.int64(4)).size == 4


def test_non_integer_dtype_rejected():
    with pytest.raises(TypeError):
        Matrix(2, dtype=np.float64)
    with pytest.raises(TypeError):
        Matrix(2, dtype=np.uint8)


def test_random_values_within_default_range():
    """Test that random elements fall in the inclusive range [-9, 9]"""
    m = Matrix(16, randomize=True, seed=3)
    assert m.data.min() >= -9
    assert m.data.max() <= 9


def test_random_range_is_inclusive(monkeypatch):
    monkeypatch.setattr(sm.config, "RANDOM_LOW", 5)
    monkeypatch.setattr(sm.config, "RANDOM_HIGH", 5)
    m = Matrix.random(4, seed=0)
    assert (m.data == 5).all()


def test_empty_random_range_rejected(monkeypatch):
    monkeypatch.setattr(sm.config, "RANDOM_LOW", 1)
    monkeypatch.setattr(sm.config, "RANDOM_HIGH", 0)
    with pytest.raises(ValueError):
        Matrix.random(2, seed=0)


def test_seeded_and_injected_randomness_is_reproducible():
    """Test that seeds and injected generators give deterministic matrices"""
    assert Matrix(8, True, seed=11) == Matrix.random(8, seed=11)

    a = Matrix.random(8, rng=np.random.default_rng(5))
    b = Matrix.random(8, rng=np.random.default_rng(5))
    assert a == b


def test_randomize_refills_in_place():
    m = Matrix(4)
    m.randomize(seed=1)
    assert m == Matrix.random(4, seed=1)


def test_dtype_selection():
    m = Matrix.random(4, dtype=np.int16, seed=2)
    assert m.dtype == np.int16
    assert (m + m).dtype == np.int16


def test_identity():
    assert Matrix.identity(4).tolist() == [
        [1, 0, 0, 0],
        [0, 1, 0, 0],
        [0, 0, 1, 0],
        [0, 0, 0, 1],
    ]


def test_from_rows_and_numpy():
    m = Matrix.from_rows([[1, 2], [3, 4]])
    assert m.tolist() == [[1, 2], [3, 4]]
    assert np.array_equal(m.to_numpy(), np.array([[1, 2], [3, 4]]))

    arr = np.arange(16, dtype=np.int32).reshape(4, 4)
    n = Matrix.from_numpy(arr)
    assert n.dtype == np.int32
    arr[0, 0] = 99
    assert n.at(0, 0) == 0


def test_from_rows_rejects_bad_shapes():
    with pytest.raises(InvalidSizeError):
        Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
    with pytest.raises(InvalidSizeError):
        Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    with pytest.raises(TypeError):
        Matrix.from_rows([[1.5, 2.0], [3.0, 4.0]])


# =============================================================================
# Element access
# =============================================================================

def test_at_and_set():
    m = Matrix(4)
    m.set(2, 3, 7)
    m[1, 0] = -5
    assert m.at(2, 3) == 7
    assert m[1, 0] == -5
    assert m.data[2 * 4 + 3] == 7
    assert isinstance(m.at(2, 3), int)


@pytest.mark.parametrize("row, col", [(2, 0), (1, 2), (0, 4), (-1, 0), (0, -1), (5, 5)])
def test_out_of_range_access(row, col):
    """Test that flat indices outside the buffer raise IndexOutOfRangeError"""
    m = Matrix(2)
    with pytest.raises(IndexOutOfRangeError):
        m.at(row, col)
    with pytest.raises(IndexOutOfRangeError):
        m[row, col] = 1


def test_data_view_is_read_only():
    m = Matrix(2)
    with pytest.raises(ValueError):
        m.data[0] = 1


# =============================================================================
# Partition and combine
# =============================================================================

def test_partition_quadrants():
    m = Matrix.from_rows([
        [1, 2, 3, 4],
        [5, 6, 7, 8],
        [9, 10, 11, 12],
        [13, 14, 15, 16],
    ])
    top_left, top_right, bottom_left, bottom_right = m.quadrants()
    assert top_left.tolist() == [[1, 2], [5, 6]]
    assert top_right.tolist() == [[3, 4], [7, 8]]
    assert bottom_left.tolist() == [[9, 10], [13, 14]]
    assert bottom_right.tolist() == [[11, 12], [15, 16]]
    assert m.partition(2, 2) == bottom_right


def test_partition_copies_data():
    m = Matrix.random(4, seed=4)
    original = m.to_numpy()
    quadrant = m.partition(0, 0)
    quadrant.set(0, 0, 100)
    assert np.array_equal(m.to_numpy(), original)


def test_partition_of_1x1_rejected():
    with pytest.raises(InvalidSizeError):
        Matrix(1).partition(0, 0)


def test_partition_past_edge_rejected():
    with pytest.raises(IndexOutOfRangeError):
        Matrix(4).partition(3, 0)


@pytest.mark.parametrize("size", [2, 4, 8, 32])
def test_partition_combine_round_trip(size):
    """Test that combining the four quadrants reproduces the matrix"""
    m = Matrix.random(size, seed=size)
    k = size // 2
    rebuilt = Matrix(size)
    rebuilt.combine(m.partition(0, 0), m.partition(0, k), m.partition(k, 0), m.partition(k, k))
    assert rebuilt == m


def test_combine_rejects_wrong_quadrant_size():
    q = Matrix(2)
    with pytest.raises(SizeMismatchError):
        Matrix(8).combine(q, q, q, q)


# =============================================================================
# Elementwise arithmetic
# =============================================================================

def test_add_and_subtract():
    a = Matrix.from_rows([[1, 2], [3, 4]])
    b = Matrix.from_rows([[10, 20], [30, 40]])
    assert (a + b).tolist() == [[11, 22], [33, 44]]
    assert (b - a).tolist() == [[9, 18], [27, 36]]
    assert a.add(b) == a + b
    assert b.subtract(a) == b - a


def test_zero_identities():
    a = Matrix.random(8, seed=8)
    zero = Matrix.zeros(8)
    assert a + zero == a
    assert a - a == zero


def test_operands_not_mutated():
    a = Matrix.random(4, seed=1)
    b = Matrix.random(4, seed=2)
    a_before, b_before = a.to_numpy(), b.to_numpy()
    a + b
    a - b
    a * b
    assert np.array_equal(a.to_numpy(), a_before)
    assert np.array_equal(b.to_numpy(), b_before)


@pytest.mark.parametrize("op", ["add", "subtract"])
def test_elementwise_size_mismatch(op):
    with pytest.raises(SizeMismatchError):
        getattr(Matrix(2), op)(Matrix(4))


def test_size_mismatch_operators():
    with pytest.raises(SizeMismatchError):
        Matrix(2) + Matrix(4)
    with pytest.raises(SizeMismatchError):
        Matrix(4) - Matrix(2)


def test_non_matrix_operands():
    m = Matrix(2)
    with pytest.raises(TypeError):
        m + 1
    with pytest.raises(TypeError):
        m.add([[1, 2], [3, 4]])
    assert (m == 5) is False


def test_equality_and_hash():
    assert Matrix(2) != Matrix(4)
    assert Matrix.from_rows([[1, 0], [0, 1]]) == Matrix.identity(2)
    with pytest.raises(TypeError):
        hash(Matrix(2))


# =============================================================================
# Diagnostics
# =============================================================================

def test_format():
    m = Matrix.from_rows([[1, -2], [30, 4]])
    assert m.format() == "   1   -2 \n  30    4 \n\n"
    assert str(m) == m.format()


def test_print_to_file():
    buffer = io.StringIO()
    Matrix.identity(2).print(file=buffer)
    assert buffer.getvalue() == "   1    0 \n   0    1 \n\n"


def test_repr():
    assert repr(Matrix(2)) == "Matrix(size=2, dtype=int64)"


def test_create_matrix_and_version():
    assert sm.create_matrix(4, dtype=np.int32).dtype == np.int32
    assert sm.version() == sm.__version__


@pytest.mark.parametrize("value, stored", [(300, 44), (-129, 127), (128, -128), (2**70 + 5, 5)])
def test_set_wraps_like_arithmetic(value, stored):
    """Test that out-of-range element values wrap modulo 2**bits"""
    m = Matrix(2, dtype=np.int8)
    m.set(0, 0, value)
    assert m.at(0, 0) == stored
    wrapped = Matrix.from_numpy(np.array([[value % 256, 0], [0, 0]]), dtype=np.int8)
    assert m == wrapped


def test_set_rejects_non_integer_value():
    m = Matrix(2)
    with pytest.raises(TypeError):
        m.set(0, 0, 1.5)
    with pytest.raises(TypeError):
        m[0, 0] = "7"


@pytest.mark.parametrize("row, col", [(0.5, 0), (0, 1.0), ("1", 0), (True, 0)])
def test_non_integer_indices_rejected(row, col):
    """Test that element access requires integer coordinates"""
    m = Matrix(2)
    with pytest.raises(TypeError):
        m.at(row, col)
    with pytest.raises(TypeError):
        m[row, col] = 1


def test_numpy_integer_indices_accepted():
    m = Matrix.identity(4)
    assert m.at(np.int64(2), np.int32(2)) == 1
