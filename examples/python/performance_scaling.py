# =============================================================================
# examples/python/performance_scaling.py
"""
Educational Example: Performance Scaling Analysis

This example shows how the naive block multiply and Strassen's algorithm
scale with matrix size, in time and in scalar multiplications.
"""

import strassen_matrix as sm

def performance_scaling_analysis():
    """Analyze performance scaling across different matrix sizes."""
    print("📊 Performance Scaling Analysis")
    print("=" * 40)

    sizes = [2, 4, 8, 16, 32, 64]
    iterations = 3

    naive_times = []
    strassen_times = []

    print(f"📏 Testing matrix sizes: {sizes}")
    print(f"🔄 Iterations per size: {iterations}")
    print("\nSize\tNaive (ms)\tStrassen (ms)\tNaive muls\tStrassen muls")
    print("-" * 70)

    for size in sizes:
        A, B = sm.core.generate_test_matrices(size, seed=size)

        naive = sm.core.benchmark_function(A.multiply, B, iterations=iterations)
        strassen = sm.core.benchmark_function(A.strassen, B, iterations=iterations)

        naive_times.append(naive['mean_ms'])
        strassen_times.append(strassen['mean_ms'])

        print(f"{size}\t{naive['mean_ms']:.1f}\t\t{strassen['mean_ms']:.1f}\t\t"
              f"{sm.core.multiplication_count(size, 'naive')}\t\t"
              f"{sm.core.multiplication_count(size, 'strassen')}")

    # Create performance plot
    try:
        import matplotlib.pyplot as plt

        plt.figure(figsize=(10, 4))

        # Time comparison
        plt.subplot(1, 2, 1)
        plt.loglog(sizes, naive_times, 's-', label='Naive', linewidth=2)
        plt.loglog(sizes, strassen_times, 'o-', label='Strassen', linewidth=2)
        plt.xlabel('Matrix Size')
        plt.ylabel('Time (ms)')
        plt.title('Computation Time')
        plt.legend()
        plt.grid(True, alpha=0.3)

        # Multiplication counts
        plt.subplot(1, 2, 2)
        plt.loglog(sizes, [sm.core.multiplication_count(s, 'naive') for s in sizes],
                   's-', label='Naive (8 per level)', linewidth=2)
        plt.loglog(sizes, [sm.core.multiplication_count(s, 'strassen') for s in sizes],
                   'o-', label='Strassen (7 per level)', linewidth=2)
        plt.xlabel('Matrix Size')
        plt.ylabel('Scalar multiplications')
        plt.title('Multiplication Count')
        plt.legend()
        plt.grid(True, alpha=0.3)

        plt.tight_layout()
        plt.savefig('strassen_performance_scaling.png', dpi=150, bbox_inches='tight')
        plt.show()
        print(f"\n📈 Performance plot saved as 'strassen_performance_scaling.png'")

    except ImportError:
        print("\n📈 Install matplotlib to see performance plots:")
        print("   pip install matplotlib")

if __name__ == "__main__":
    performance_scaling_analysis()
