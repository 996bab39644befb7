# strassen_matrix/core.py
"""
Core utilities for the strassen_matrix package.

This module provides size validation, reproducible test-matrix generation,
timing helpers and comparison functions used by the matrix algorithms, the
command-line driver and the examples.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from . import config

logger = logging.getLogger(__name__)

# =============================================================================
# Matrix and Memory Utilities
# =============================================================================

def is_power_of_two(n: int) -> bool:
    """Return True if ``n`` is a positive integral power of two."""
    return n > 0 and (n & (n - 1)) == 0

def validate_matrix_sizes(a_size: int, b_size: int) -> int:
    """
    Validate that two square matrices can be combined elementwise or multiplied.

    Args:
        a_size: Side length of the left operand
        b_size: Side length of the right operand

    Returns:
        The shared side length

    Raises:
        SizeMismatchError: If the sizes differ
    """
    from .matrix import SizeMismatchError

    if a_size != b_size:
        raise SizeMismatchError(
            f"Matrix sizes incompatible: {a_size}x{a_size} and {b_size}x{b_size}"
        )
    return a_size

def estimate_memory_usage(size: int, dtype=None) -> Dict[str, Any]:
    """
    Estimate the element buffer size of one square matrix.

    Args:
        size: Side length of the matrix
        dtype: Element type (defaults to config.DEFAULT_DTYPE)

    Returns:
        Dictionary with memory estimates in various units
    """
    dtype = config.resolve_dtype(dtype)
    bytes_per_element = dtype.itemsize
    elements = size * size
    total_bytes = elements * bytes_per_element

    return {
        'elements': elements,
        'bytes': total_bytes,
        'kb': total_bytes / 1024,
        'mb': total_bytes / (1024**2),
        'dtype': str(dtype),
        'bytes_per_element': bytes_per_element,
        'human_readable': format_bytes(total_bytes)
    }

def format_bytes(num_bytes: int) -> str:
    """Format a byte count in human readable form."""
    value = float(num_bytes)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} PB"

def generate_test_matrices(size: int, dtype=None, seed: Optional[int] = None) -> Tuple[Any, Any]:
    """
    Generate a reproducible pair of random matrices.

    Both matrices are drawn from one generator, so the same seed always yields
    the same (A, B) pair.

    Args:
        size: Side length (power of two)
        dtype: Element type (defaults to config.DEFAULT_DTYPE)
        seed: Random seed for reproducibility, None for a fresh entropy source

    Returns:
        Tuple of (A, B) matrices
    """
    from .matrix import Matrix

    rng = np.random.default_rng(seed)
    A = Matrix.random(size, dtype=dtype, rng=rng)
    B = Matrix.random(size, dtype=dtype, rng=rng)
    return A, B

def max_abs(matrix) -> int:
    """Largest absolute element value of a matrix, as a Python int."""
    data = matrix.data
    return max(abs(int(data.min())), abs(int(data.max())))

def overflow_risk(A, B) -> bool:
    """
    Heuristic preflight check for integer overflow in ``A * B``.

    Every output element is a sum of ``size`` products, so
    ``size * max|A| * max|B|`` bounds its magnitude.

    Returns:
        True if the bound exceeds the maximum of the result dtype
    """
    result_dtype = np.result_type(A.dtype, B.dtype)
    bound = A.size * max_abs(A) * max_abs(B)
    return bound > int(np.iinfo(result_dtype).max)

# =============================================================================
# Performance Utilities
# =============================================================================

def multiplication_count(size: int, algorithm: str = "strassen") -> int:
    """
    Count scalar multiplications used to multiply two ``size``x``size`` matrices.

    Args:
        size: Side length (power of two)
        algorithm: "strassen" (7 products per level) or "naive" (8 per level)

    Returns:
        Number of scalar multiplications
    """
    branching = {"strassen": 7, "naive": 8}
    if algorithm not in branching:
        raise ValueError(f"Unknown algorithm: {algorithm!r}")
    if size <= 1:
        return 1
    return branching[algorithm] * multiplication_count(size // 2, algorithm)

class Timer:
    """
    High-resolution timer for performance measurements.

    A timer given a ``label`` logs its elapsed time at DEBUG level when stopped.
    """

    def __init__(self, label: Optional[str] = None):
        self.label = label
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args):
        self.stop()

    def start(self):
        """Start the timer."""
        self.start_time = time.perf_counter()
        self.end_time = None

    def stop(self):
        """Stop the timer."""
        self.end_time = time.perf_counter()
        if self.label is not None:
            logger.debug("%s took %.3f ms", self.label, self.elapsed_ms)

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self.start_time is None:
            raise RuntimeError("Timer not started")
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return self.elapsed * 1000

def benchmark_function(func: Callable, *args, iterations: int = 10, warmup: int = 1, **kwargs) -> Dict[str, float]:
    """
    Benchmark a function with multiple iterations.

    Args:
        func: Function to benchmark
        *args: Function arguments
        iterations: Number of timing iterations
        warmup: Number of warmup iterations
        **kwargs: Function keyword arguments

    Returns:
        Dictionary with timing statistics
    """
    if iterations < 1:
        raise ValueError("iterations must be at least 1")

    for _ in range(warmup):
        func(*args, **kwargs)

    times = []
    for _ in range(iterations):
        with Timer() as timer:
            func(*args, **kwargs)
        times.append(timer.elapsed)

    times = np.array(times)

    return {
        'mean_ms': float(np.mean(times) * 1000),
        'std_ms': float(np.std(times) * 1000),
        'min_ms': float(np.min(times) * 1000),
        'max_ms': float(np.max(times) * 1000),
        'median_ms': float(np.median(times) * 1000),
        'iterations': iterations,
        'warmup': warmup,
        'total_time_s': float(np.sum(times))
    }

# =============================================================================
# Debugging and Diagnostics
# =============================================================================

def compare_matrices(A, B) -> Dict[str, Any]:
    """
    Compare two matrices element by element.

    Args:
        A, B: Matrices to compare

    Returns:
        Dictionary with comparison results
    """
    if A.size != B.size:
        return {
            'sizes_match': False,
            'A_size': A.size,
            'B_size': B.size,
            'error': 'Size mismatch'
        }

    diff = np.abs(A.data.astype(np.int64) - B.data.astype(np.int64))
    mismatched = int(np.count_nonzero(diff))

    return {
        'sizes_match': True,
        'matrices_equal': mismatched == 0,
        'max_absolute_error': int(np.max(diff)),
        'mismatched_elements': mismatched,
        'A_stats': {'min': int(A.data.min()), 'max': int(A.data.max())},
        'B_stats': {'min': int(B.data.min()), 'max': int(B.data.max())}
    }

__all__ = [
    # Matrix utilities
    'is_power_of_two', 'validate_matrix_sizes', 'estimate_memory_usage',
    'format_bytes', 'generate_test_matrices', 'max_abs', 'overflow_risk',

    # Performance
    'multiplication_count', 'Timer', 'benchmark_function',

    # Debugging
    'compare_matrices',
]
