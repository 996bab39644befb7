# strassen_matrix/cli.py
"""
Command-line driver: multiply two random matrices and print the result.
"""

import argparse
import logging
from typing import List, Optional

import numpy as np

from . import config, core
from .parallel import parallel_strassen

ALGORITHMS = ("strassen", "naive", "parallel")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strassen-matrix",
        description="Multiply two random power-of-two integer matrices",
    )
    parser.add_argument("size", type=int, help="Side length of the square matrices (power of two)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible matrices")
    parser.add_argument("--dtype", default=config.DEFAULT_DTYPE.name,
                        choices=[np.dtype(t).name for t in config.SUPPORTED_DTYPES],
                        help="Element type (default: %(default)s)")
    parser.add_argument("--algorithm", default="strassen", choices=ALGORITHMS,
                        help="Multiplication algorithm (default: %(default)s)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker count for the parallel algorithm")
    parser.add_argument("--check", action="store_true",
                        help="Cross-check the product against the naive multiply and NumPy")
    parser.add_argument("--quiet", action="store_true", help="Do not print the matrices")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not core.is_power_of_two(args.size):
        parser.error(f"size must be a power of 2, got {args.size}")
    if args.workers is not None and args.workers < 1:
        parser.error(f"--workers must be at least 1, got {args.workers}")

    A, B = core.generate_test_matrices(args.size, dtype=args.dtype, seed=args.seed)

    with core.Timer(f"{args.algorithm} multiply") as timer:
        if args.algorithm == "naive":
            C = A.multiply(B)
        elif args.algorithm == "parallel":
            C = parallel_strassen(A, B, max_workers=args.workers)
        else:
            C = A * B

    if not args.quiet:
        print("Matrix A:")
        A.print()
        print("Matrix B:")
        B.print()
        print("A x B:")
        C.print()

    counted = "naive" if args.algorithm == "naive" else "strassen"
    print(f"{args.algorithm} multiply of {args.size}x{args.size} matrices: "
          f"{timer.elapsed_ms:.2f} ms, "
          f"{core.multiplication_count(args.size, counted)} scalar multiplications")

    if args.check:
        naive_ok = C == A.multiply(B)
        numpy_ok = np.array_equal(C.to_numpy(), A.to_numpy() @ B.to_numpy())
        print(f"{'✓' if naive_ok else '✗'} Matches naive multiply")
        print(f"{'✓' if numpy_ok else '✗'} Matches NumPy")
        if not (naive_ok and numpy_ok):
            return 1

    return 0
