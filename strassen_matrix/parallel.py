# strassen_matrix/parallel.py
"""
Concurrent evaluation of the seven top-level Strassen products.

P1..P7 share no state, so each can be computed by a separate worker. Every
worker runs the ordinary sequential ``Matrix.strassen``, and the products are
assembled exactly as in the sequential algorithm, so results are identical.
"""

import logging
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import Optional, Tuple

from . import config
from .core import validate_matrix_sizes
from .matrix import (Matrix, assemble_strassen, promote_operands, strassen_terms,
                     warn_if_overflow_risk)

logger = logging.getLogger(__name__)


def _product(term: Tuple[Matrix, Matrix]) -> Matrix:
    left, right = term
    return left.strassen(right)


def parallel_strassen(A: Matrix, B: Matrix, max_workers: Optional[int] = None,
                      use_processes: bool = False) -> Matrix:
    """
    Multiply two matrices with Strassen's algorithm, computing P1..P7 concurrently.

    Args:
        A, B: Operands of equal power-of-two size
        max_workers: Pool size (default: config.PARALLEL_WORKERS)
        use_processes: Use a process pool instead of a thread pool

    Returns:
        The product, element-for-element equal to ``A.strassen(B)``

    Raises:
        SizeMismatchError: If the operand sizes differ
    """
    if not isinstance(A, Matrix) or not isinstance(B, Matrix):
        raise TypeError("parallel_strassen expects two Matrix operands")

    size = validate_matrix_sizes(A.size, B.size)
    warn_if_overflow_risk(A, B)
    if A.dtype != B.dtype:
        A, B = promote_operands(A, B)
    if size == 1:
        return A.strassen(B)

    workers = config.PARALLEL_WORKERS if max_workers is None else max_workers
    if workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {workers}")

    executor_cls = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
    terms = strassen_terms(A, B)
    logger.debug("Dispatching 7 Strassen products of size %d to %d %s workers",
                 size // 2, workers, "process" if use_processes else "thread")

    with executor_cls(max_workers=workers) as executor:
        products = list(executor.map(_product, terms))

    return assemble_strassen(size, products)
