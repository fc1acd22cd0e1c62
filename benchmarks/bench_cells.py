"""
pytest-benchmark workloads for the trampoline evaluator.

Run explicitly (not collected by the default test run):
    pytest benchmarks/bench_cells.py --benchmark-only
"""

from benchmarks.benchmark_suite import lazy_fib, lazy_increment, lazy_shared, lazy_sum


def test_map_chain(benchmark):
    assert benchmark(lazy_increment, 100_000) == 100_000


def test_flat_map_fold(benchmark):
    assert benchmark(lazy_sum, 100_000) == sum(range(100_000))


def test_shared_base(benchmark):
    assert benchmark(lazy_shared, 20) > 0


def test_memo_table_fib(benchmark):
    assert benchmark(lazy_fib, 300) > 0
