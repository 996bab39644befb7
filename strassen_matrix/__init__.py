# strassen_matrix/__init__.py
"""
strassen_matrix: Strassen multiplication of power-of-two integer matrices

This package provides a square integer Matrix type with quadrant
partitioning, elementwise arithmetic, a naive recursive block multiply and
Strassen's seven-product multiply.
"""

from .matrix import (
    Matrix,
    MatrixError,
    InvalidSizeError,
    IndexOutOfRangeError,
    SizeMismatchError,
    MatrixWarning,
    MatrixOverflowRiskWarning,
    strassen_terms,
    assemble_strassen,
)
from .parallel import parallel_strassen

# Import submodules
from . import config
from . import core

# Version information
__version__ = "1.0.0"

# Public API
__all__ = [
    "Matrix",
    "MatrixError",
    "InvalidSizeError",
    "IndexOutOfRangeError",
    "SizeMismatchError",
    "MatrixWarning",
    "MatrixOverflowRiskWarning",
    "strassen_terms",
    "assemble_strassen",
    "parallel_strassen",
    "config",
    "core",
    "__version__",
]

def version():
    """Return version string."""
    return __version__

def create_matrix(size, **kwargs):
    """Convenience function to create a Matrix."""
    return Matrix(size, **kwargs)
