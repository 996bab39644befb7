#!/usr/bin/env python3
"""
Demo of strassen_matrix features - construction, quadrants, timing, comparison
"""
import strassen_matrix as sm

def main():
    print("🔧 Strassen Matrix Features Demo")
    print("=" * 50)

    # Concrete 2x2 product
    print("\n📐 2x2 product:")
    A = sm.Matrix.from_rows([[1, 2], [3, 4]])
    B = sm.Matrix.from_rows([[5, 6], [7, 8]])
    (A * B).print()

    # Quadrants
    print("🧩 Quadrants of a random 4x4 matrix:")
    M = sm.Matrix.random(4, seed=7)
    M.print()
    for name, quadrant in zip(["top-left", "top-right", "bottom-left", "bottom-right"], M.quadrants()):
        print(f"{name}:")
        quadrant.print()

    # Generate test matrices
    print("📊 Matrix Generation and Memory Planning:")
    A, B = sm.core.generate_test_matrices(64, seed=42)
    print(f"Generated A: {A.shape}, B: {B.shape}")
    memory_info = sm.core.estimate_memory_usage(A.size, A.dtype)
    print(f"Memory per matrix: {memory_info['human_readable']}")

    # Performance timing
    print("\n⏱️  Performance Timing:")
    with sm.core.Timer() as timer:
        C_naive = A.multiply(B)
    print(f"Naive block multiply: {timer.elapsed_ms:.2f} ms "
          f"({sm.core.multiplication_count(A.size, 'naive')} multiplications)")

    with sm.core.Timer() as timer:
        C_strassen = A * B
    print(f"Strassen multiply: {timer.elapsed_ms:.2f} ms "
          f"({sm.core.multiplication_count(A.size, 'strassen')} multiplications)")

    with sm.core.Timer() as timer:
        C_parallel = sm.parallel_strassen(A, B)
    print(f"Parallel Strassen: {timer.elapsed_ms:.2f} ms")

    # Compare results
    comparison = sm.core.compare_matrices(C_naive, C_strassen)
    print(f"Results match: {comparison['matrices_equal']}")
    print(f"Parallel matches: {C_parallel == C_strassen}")

if __name__ == "__main__":
    main()
