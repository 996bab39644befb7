# strassen_matrix/config.py
"""
Package defaults for strassen_matrix.

Each value can be overridden through an environment variable, read once at
import time.
"""

import os

import numpy as np

# ------- Tunables -------
RANDOM_LOW       = int(os.getenv("STRASSEN_RANDOM_LOW", "-9"))       # inclusive
RANDOM_HIGH      = int(os.getenv("STRASSEN_RANDOM_HIGH", "9"))       # inclusive
DEFAULT_DTYPE    = np.dtype(os.getenv("STRASSEN_DTYPE", "int64"))
PARALLEL_WORKERS = int(os.getenv("STRASSEN_PARALLEL_WORKERS", "7"))  # one per Strassen product

SUPPORTED_DTYPES = (np.int8, np.int16, np.int32, np.int64)


def validate_random_range(low: int, high: int) -> None:
    """Raise ValueError unless ``low <= high``."""
    if low > high:
        raise ValueError(f"Random range is empty: low={low} > high={high}")


def resolve_dtype(dtype=None) -> np.dtype:
    """
    Normalize a dtype argument to a supported signed integer dtype.

    Args:
        dtype: Anything numpy accepts as a dtype, or None for DEFAULT_DTYPE

    Returns:
        The resolved numpy dtype

    Raises:
        TypeError: If the dtype is not a fixed-width signed integer type
    """
    resolved = DEFAULT_DTYPE if dtype is None else np.dtype(dtype)
    if not np.issubdtype(resolved, np.signedinteger):
        raise TypeError(f"Matrix elements must be signed integers, got {resolved}")
    return resolved


def describe() -> dict:
    """Return the active configuration as a plain dictionary."""
    return {
        'random_low': RANDOM_LOW,
        'random_high': RANDOM_HIGH,
        'dtype': str(DEFAULT_DTYPE),
        'parallel_workers': PARALLEL_WORKERS,
    }


validate_random_range(RANDOM_LOW, RANDOM_HIGH)
resolve_dtype(DEFAULT_DTYPE)
