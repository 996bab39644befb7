# strassen_matrix/matrix.py
"""
Square integer matrices with Strassen multiplication.

A Matrix stores ``size * size`` fixed-width signed integers in one flat,
row-major numpy buffer. ``size`` is always a power of two, which lets every
matrix be split into four equal quadrants all the way down to 1x1.

Integer arithmetic wraps modulo 2**bits of the element dtype. Wrapping is
consistent across all operations, so Strassen and the naive block multiply
return identical results even when intermediate sums overflow.
"""

import logging
import numbers
import warnings
from typing import List, Optional, Sequence, Tuple

import numpy as np

from . import config
from .core import is_power_of_two, overflow_risk

logger = logging.getLogger(__name__)


class MatrixError(Exception):
    """Base exception for strassen_matrix errors."""
    pass

class InvalidSizeError(MatrixError, ValueError):
    """Matrix size is not a power of two."""
    pass

class IndexOutOfRangeError(MatrixError, IndexError):
    """Element access outside the matrix."""
    pass

class SizeMismatchError(MatrixError, ValueError):
    """Operands of a binary operation have different sizes."""
    pass


class MatrixWarning(UserWarning):
    """Base warning category for strassen_matrix warnings."""

class MatrixOverflowRiskWarning(MatrixWarning):
    """Heuristic warning that a product may overflow its integer dtype."""


def _check_size(size) -> int:
    if isinstance(size, bool) or not isinstance(size, numbers.Integral):
        raise TypeError(f"Matrix size must be an integer, got {type(size).__name__}")
    size = int(size)
    if not is_power_of_two(size):
        raise InvalidSizeError(f"Matrix size must be a power of 2, got {size}")
    return size


class Matrix:
    """
    Square matrix of signed integers whose side length is a power of two.

    Operations that produce a matrix (partition, add, subtract, multiply,
    strassen) always return a new instance and never modify their operands.
    Only ``combine``, ``randomize`` and element assignment write into the
    receiver.
    """

    __hash__ = None

    def __init__(self, size: int, randomize: bool = False, *, dtype=None,
                 rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        """
        Create a zero-filled matrix, optionally filled with random values.

        Args:
            size: Side length, must be a power of two
            randomize: Fill every element from [config.RANDOM_LOW, config.RANDOM_HIGH]
            dtype: Signed integer element type (default: config.DEFAULT_DTYPE)
            rng: Random generator used when randomizing
            seed: Seed for a fresh generator when ``rng`` is not given

        Raises:
            InvalidSizeError: If ``size`` is not a power of two
            TypeError: If ``size`` is not an integer or ``dtype`` is not a signed integer type
        """
        self._size = _check_size(size)
        self._data = np.zeros(self._size * self._size, dtype=config.resolve_dtype(dtype))

        if randomize:
            self.randomize(rng=rng, seed=seed)

    @classmethod
    def _from_buffer(cls, size: int, data: np.ndarray) -> "Matrix":
        # Takes ownership of ``data``; callers pass a fresh buffer.
        matrix = cls.__new__(cls)
        matrix._size = size
        matrix._data = data
        return matrix

    # -------------------------------------------------------------------------
    # Alternate constructors
    # -------------------------------------------------------------------------

    @classmethod
    def zeros(cls, size: int, dtype=None) -> "Matrix":
        return cls(size, dtype=dtype)

    @classmethod
    def random(cls, size: int, dtype=None, rng: Optional[np.random.Generator] = None,
               seed: Optional[int] = None) -> "Matrix":
        return cls(size, randomize=True, dtype=dtype, rng=rng, seed=seed)

    @classmethod
    def identity(cls, size: int, dtype=None) -> "Matrix":
        matrix = cls(size, dtype=dtype)
        matrix._grid()[np.diag_indices(matrix._size)] = 1
        return matrix

    @classmethod
    def from_numpy(cls, array, dtype=None) -> "Matrix":
        """
        Copy a square 2-D integer array into a new Matrix.

        The array's own dtype is kept when it is a signed integer type and
        ``dtype`` is not given.
        """
        array = np.asarray(array)
        if array.ndim != 2 or array.shape[0] != array.shape[1]:
            raise InvalidSizeError(f"Matrix must be square, got shape {array.shape}")
        if array.dtype.kind not in "biu":
            raise TypeError(f"Matrix elements must be integers, got {array.dtype}")

        size = _check_size(array.shape[0])
        if dtype is None and np.issubdtype(array.dtype, np.signedinteger):
            dtype = array.dtype
        dtype = config.resolve_dtype(dtype)
        return cls._from_buffer(size, array.astype(dtype).reshape(-1))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], dtype=None) -> "Matrix":
        return cls.from_numpy(np.array(rows), dtype=dtype)

    # -------------------------------------------------------------------------
    # Properties and conversion
    # -------------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._size, self._size)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the flat row-major element buffer."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def _grid(self) -> np.ndarray:
        # 2-D view onto the same buffer
        return self._data.reshape(self._size, self._size)

    def to_numpy(self) -> np.ndarray:
        return self._grid().copy()

    def tolist(self) -> List[List[int]]:
        return self._grid().tolist()

    def astype(self, dtype) -> "Matrix":
        """Return a copy with elements cast to another signed integer dtype."""
        return Matrix._from_buffer(self._size, self._data.astype(config.resolve_dtype(dtype)))

    def randomize(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None) -> None:
        """
        Refill every element independently from the configured inclusive range.

        Args:
            rng: Random generator to draw from
            seed: Seed for a fresh generator when ``rng`` is not given; with
                neither, numpy seeds the generator from OS entropy
        """
        if rng is None:
            rng = np.random.default_rng(seed)
        low, high = config.RANDOM_LOW, config.RANDOM_HIGH
        config.validate_random_range(low, high)
        self._data[:] = rng.integers(low, high, size=self._data.size,
                                     dtype=self._data.dtype, endpoint=True)

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    def _index(self, row: int, col: int) -> int:
        for coordinate in (row, col):
            if isinstance(coordinate, bool) or not isinstance(coordinate, numbers.Integral):
                raise TypeError(
                    f"Matrix indices must be integers, got {type(coordinate).__name__}"
                )
        index = int(row) * self._size + int(col)
        if 0 <= index < self._data.size:
            return index
        raise IndexOutOfRangeError(
            f"Matrix.at(): index ({row}, {col}) out of range for "
            f"{self._size}x{self._size} matrix"
        )

    def at(self, row: int, col: int) -> int:
        return int(self._data[self._index(row, col)])

    def set(self, row: int, col: int, value: int) -> None:
        """
        Store ``value`` at (row, col).

        Values outside the dtype's range wrap modulo 2**bits, the same as
        matrix arithmetic and ``from_numpy`` casts.

        Raises:
            IndexOutOfRangeError: If the flat index is outside the matrix
            TypeError: If an index or the value is not an integer
        """
        index = self._index(row, col)
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise TypeError(f"Matrix elements must be integers, got {type(value).__name__}")
        info = np.iinfo(self._data.dtype)
        span = 1 << info.bits
        self._data[index] = (int(value) - info.min) % span + info.min

    def __getitem__(self, key) -> int:
        row, col = key
        return self.at(row, col)

    def __setitem__(self, key, value: int) -> None:
        row, col = key
        self.set(row, col, value)

    # -------------------------------------------------------------------------
    # Quadrants
    # -------------------------------------------------------------------------

    def partition(self, row_start: int, col_start: int) -> "Matrix":
        """
        Copy out the half-size quadrant whose top-left corner is (row_start, col_start).

        Callers pass quadrant-aligned corners: (0, 0), (0, k), (k, 0) or
        (k, k) with ``k = size // 2``.
        """
        if self._size < 2:
            raise InvalidSizeError("Cannot partition a 1x1 matrix")
        k = self._size // 2
        block = self._grid()[row_start:row_start + k, col_start:col_start + k]
        if block.shape != (k, k):
            raise IndexOutOfRangeError(
                f"Quadrant at ({row_start}, {col_start}) extends past a "
                f"{self._size}x{self._size} matrix"
            )
        return Matrix._from_buffer(k, block.flatten())

    def quadrants(self) -> Tuple["Matrix", "Matrix", "Matrix", "Matrix"]:
        """Return the (top-left, top-right, bottom-left, bottom-right) quadrants."""
        k = self._size // 2
        return (self.partition(0, 0), self.partition(0, k),
                self.partition(k, 0), self.partition(k, k))

    def combine(self, top_left: "Matrix", top_right: "Matrix",
                bottom_left: "Matrix", bottom_right: "Matrix") -> None:
        """
        Overwrite this matrix with four half-size quadrants.

        This is the inverse of ``partition``: combining the four quadrants of
        a matrix into a fresh matrix of the same size reproduces it exactly.

        Raises:
            SizeMismatchError: If any quadrant is not ``size // 2`` wide
        """
        if self._size < 2:
            raise InvalidSizeError("Cannot combine quadrants into a 1x1 matrix")
        k = self._size // 2
        for quadrant in (top_left, top_right, bottom_left, bottom_right):
            if quadrant.size != k:
                raise SizeMismatchError(
                    f"Cannot combine a {quadrant.size}x{quadrant.size} quadrant "
                    f"into a {self._size}x{self._size} matrix"
                )

        grid = self._grid()
        grid[:k, :k] = top_left._grid()
        grid[:k, k:] = top_right._grid()
        grid[k:, :k] = bottom_left._grid()
        grid[k:, k:] = bottom_right._grid()

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _require_same_size(self, other: "Matrix", operation: str) -> None:
        if not isinstance(other, Matrix):
            raise TypeError(f"Cannot {operation} Matrix and {type(other).__name__}")
        if self._size != other._size:
            raise SizeMismatchError(
                f"Cannot {operation} matrices of different size: "
                f"{self._size}x{self._size} and {other._size}x{other._size}"
            )

    def add(self, other: "Matrix") -> "Matrix":
        self._require_same_size(other, "add")
        return Matrix._from_buffer(self._size, self._data + other._data)

    def subtract(self, other: "Matrix") -> "Matrix":
        self._require_same_size(other, "subtract")
        return Matrix._from_buffer(self._size, self._data - other._data)

    def multiply(self, other: "Matrix") -> "Matrix":
        """
        Textbook recursive block multiply using eight quadrant products.

        Serves as the reference result for ``strassen`` and as its 1x1 base case.
        """
        self._require_same_size(other, "multiply")
        if self.dtype != other.dtype:
            return Matrix.multiply(*promote_operands(self, other))
        if self._size == 1:
            return Matrix._from_buffer(1, self._data * other._data)

        A11, A12, A21, A22 = self.quadrants()
        B11, B12, B21, B22 = other.quadrants()

        R11 = A11.multiply(B11) + A12.multiply(B21)
        R12 = A11.multiply(B12) + A12.multiply(B22)
        R21 = A21.multiply(B11) + A22.multiply(B21)
        R22 = A21.multiply(B12) + A22.multiply(B22)

        return _assemble(self._size, R11, R12, R21, R22)

    def strassen(self, other: "Matrix") -> "Matrix":
        """
        Multiply with Strassen's algorithm: seven recursive quadrant products
        per level instead of eight.
        """
        self._require_same_size(other, "multiply")
        if self.dtype != other.dtype:
            return Matrix.strassen(*promote_operands(self, other))
        if self._size == 1:
            return self.multiply(other)

        products = [left.strassen(right) for left, right in strassen_terms(self, other)]
        return assemble_strassen(self._size, products)

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._require_same_size(other, "multiply")
        warn_if_overflow_risk(self, other)
        logger.debug("Strassen multiply of two %dx%d matrices", self._size, self._size)
        return self.strassen(other)

    __matmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._size == other._size and np.array_equal(self._data, other._data)

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def format(self) -> str:
        """Render rows of right-aligned 4-wide integers, followed by a blank line."""
        lines = ["".join(f"{int(value):>4} " for value in row) for row in self._grid()]
        return "\n".join(lines) + "\n\n"

    def print(self, file=None) -> None:
        print(self.format(), end="", file=file)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Matrix(size={self._size}, dtype={self._data.dtype})"


# =============================================================================
# Strassen building blocks
# =============================================================================

def strassen_terms(A: Matrix, B: Matrix) -> List[Tuple[Matrix, Matrix]]:
    """
    Build the operand pairs of the seven Strassen products P1..P7.

    Returns:
        List of (left, right) pairs; P_i is ``left * right`` of entry i-1
    """
    A11, A12, A21, A22 = A.quadrants()
    B11, B12, B21, B22 = B.quadrants()

    return [
        (A11, B12 - B22),          # P1
        (A11 + A12, B22),          # P2
        (A21 + A22, B11),          # P3
        (A22, B21 - B11),          # P4
        (A11 + A22, B11 + B22),    # P5
        (A12 - A22, B21 + B22),    # P6
        (A11 - A21, B11 + B12),    # P7
    ]

def assemble_strassen(size: int, products: Sequence[Matrix]) -> Matrix:
    """Combine the seven Strassen products into a ``size`` x ``size`` result."""
    if len(products) != 7:
        raise ValueError(f"Strassen assembly needs 7 products, got {len(products)}")
    P1, P2, P3, P4, P5, P6, P7 = products

    R11 = (P5 + P4 - P2) + P6
    R12 = P1 + P2
    R21 = P3 + P4
    R22 = (P5 + P1 - P3) - P7

    return _assemble(size, R11, R12, R21, R22)

def promote_operands(A: Matrix, B: Matrix) -> Tuple[Matrix, Matrix]:
    """
    Cast both operands to their common result dtype.

    Products must be formed in the result dtype from the start: quadrant sums
    that wrapped in a narrower operand dtype would not match the widened result.
    """
    dtype = np.result_type(A.dtype, B.dtype)
    return A.astype(dtype), B.astype(dtype)

def _assemble(size: int, R11: Matrix, R12: Matrix, R21: Matrix, R22: Matrix) -> Matrix:
    result = Matrix(size, dtype=R11.dtype)
    result.combine(R11, R12, R21, R22)
    return result

def warn_if_overflow_risk(A: Matrix, B: Matrix, stacklevel: int = 3) -> bool:
    """Emit MatrixOverflowRiskWarning if ``A * B`` may overflow; return whether it did."""
    if not overflow_risk(A, B):
        return False
    dtype = np.result_type(A.dtype, B.dtype)
    warnings.warn(
        f"multiply preflight: {A.size}x{A.size} product may overflow {dtype} output; "
        f"results wrap modulo 2**{dtype.itemsize * 8}",
        MatrixOverflowRiskWarning,
        stacklevel=stacklevel,
    )
    return True
