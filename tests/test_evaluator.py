"""
Tests for the trampoline evaluator.

Validates:
  - Deep map/flat_map chains evaluate without hitting the recursion limit
  - Every cell resolved on the path is memoized
  - Transform errors propagate and leave the resolved prefix memoized
  - The optional step budget and evaluation statistics
"""

import logging

import pytest
from lazypy.core.cell import LazyCell, now, apply, defer
from lazypy.core.evaluator import (
    Trampoline,
    EvaluationBudgetExceeded,
    default_trampoline,
    evaluate,
)
from lazypy.core.thunk import Done, Final, FlatMapNode, MapNode
from lazypy.recursive.binder import recursive
from lazypy.utils.helpers import CallCounter, fold_cells, map_chain


def _inc(x):
    return x + 1


class TestDepth:
    def test_million_maps(self):
        c = map_chain(now(0), _inc, 1_000_000)
        assert c.force() == 1_000_000

    def test_left_nested_flat_maps(self):
        c = fold_cells(range(100_000), 0, lambda acc, x: acc + x)
        assert c.force() == sum(range(100_000))

    def test_right_nested_defers(self):
        def count_down(n):
            if n == 0:
                return now(0)
            return defer(lambda: count_down(n - 1)).map(_inc)

        assert count_down(100_000).force() == 100_000

    def test_deep_chain_over_lazy_source(self):
        thunk = CallCounter(lambda: 1)
        c = map_chain(apply(thunk), _inc, 50_000)
        assert c.force() == 50_001
        assert thunk.calls == 1


class TestPathCompression:
    def test_intermediate_cells_memoized(self):
        c0 = apply(lambda: 1)
        c1 = c0.map(_inc)
        c2 = c1.map(_inc)
        c3 = c2.flat_map(lambda x: now(x * 10))
        assert c3.force() == 30
        for cell, expected in ((c0, 1), (c1, 2), (c2, 3), (c3, 30)):
            assert isinstance(cell._state, Final)
            assert cell._state.value == expected

    def test_forcing_intermediate_after_root_is_free(self):
        f = CallCounter(_inc)
        base = now(0)
        mid = base.map(f)
        top = mid.map(f)
        top.force()
        assert f.calls == 2
        assert mid.force() == 1
        assert f.calls == 2

    def test_flat_map_splices_state_not_cell(self):
        inner = apply(lambda: 5)
        outer = now(0).flat_map(lambda _: inner)
        assert outer.force() == 5
        assert outer.is_forced
        assert not inner.is_forced

    def test_done_state(self):
        c = LazyCell(Done(4))
        assert c.force() == 4
        assert isinstance(c._state, Final)

    def test_done_state_as_source(self):
        c = LazyCell(Done(4)).map(_inc)
        assert evaluate(c) == 5


class TestErrors:
    def test_error_propagates_unchanged(self):
        err = ValueError("boom")

        def fail(_):
            raise err

        c = now(1).map(fail)
        with pytest.raises(ValueError) as info:
            c.force()
        assert info.value is err

    def test_retry_reuses_resolved_prefix(self):
        attempts = []

        def flaky(x):
            attempts.append(x)
            if len(attempts) == 1:
                raise RuntimeError("transient")
            return x * 10

        thunk = CallCounter(lambda: 3)
        base = apply(thunk)
        mid = base.map(flaky)
        top = mid.map(_inc)

        with pytest.raises(RuntimeError):
            top.force()
        assert base.is_forced
        assert not mid.is_forced
        assert not top.is_forced
        assert isinstance(mid._state, MapNode)

        assert top.force() == 31
        assert thunk.calls == 1
        assert attempts == [3, 3]

    def test_error_in_flat_map(self):
        def fail(_):
            raise KeyError("missing")

        c = now(1).flat_map(fail)
        with pytest.raises(KeyError):
            c.force()
        assert isinstance(c._state, FlatMapNode)

    def test_flat_map_must_return_cell(self):
        c = now(1).flat_map(lambda x: x + 1)
        with pytest.raises(TypeError, match="LazyCell"):
            c.force()

    def test_invalid_state(self):
        with pytest.raises(TypeError):
            evaluate(LazyCell(object()))


class TestTrampoline:
    def setup_method(self):
        self.trampoline = Trampoline()

    def test_evaluate(self):
        c = now(5).map(_inc).map(lambda x: x * 2)
        assert self.trampoline.evaluate(c) == 12

    def test_force_with_custom_evaluator(self):
        c = map_chain(now(0), _inc, 10)
        assert c.force(evaluator=self.trampoline) == 10
        assert self.trampoline.stats.evaluations == 1

    def test_stats(self):
        c = map_chain(now(0), _inc, 10)
        self.trampoline.evaluate(c)
        stats = self.trampoline.get_stats()
        assert stats['evaluations'] == 1
        assert stats['failures'] == 0
        assert stats['cells_resolved'] == 10
        assert stats['peak_stack_depth'] == 10
        assert stats['total_steps'] == 21
        assert stats['max_steps'] is None

    def test_stats_count_failures(self):
        def fail(_):
            raise ValueError()

        with pytest.raises(ValueError):
            self.trampoline.evaluate(now(1).map(fail))
        assert self.trampoline.stats.failures == 1

    def test_final_cell_skips_evaluator(self):
        now(1).force(evaluator=self.trampoline)
        assert self.trampoline.stats.evaluations == 0

    def test_default_trampoline(self):
        assert isinstance(default_trampoline(), Trampoline)
        assert default_trampoline() is default_trampoline()
        assert default_trampoline().max_steps is None

    def test_invalid_budget(self):
        with pytest.raises(ValueError):
            Trampoline(max_steps=0)

    def test_logging(self, caplog):
        caplog.set_level(logging.DEBUG, logger="lazypy.core.evaluator")
        self.trampoline.evaluate(now(1).map(_inc))
        assert "Evaluation finished" in caplog.text


class TestStepBudget:
    def test_budget_large_enough(self):
        trampoline = Trampoline(max_steps=100)
        assert trampoline.evaluate(map_chain(now(0), _inc, 10)) == 10

    def test_budget_exceeded_on_long_chain(self):
        trampoline = Trampoline(max_steps=100)
        c = map_chain(now(0), _inc, 1000)
        with pytest.raises(EvaluationBudgetExceeded):
            c.force(evaluator=trampoline)
        assert c.force() == 1000

    def test_self_referential_cell_exceeds_budget(self):
        c = recursive(lambda self: self)
        trampoline = Trampoline(max_steps=10_000)
        with pytest.raises(EvaluationBudgetExceeded) as info:
            c.force(evaluator=trampoline)
        assert info.value.max_steps == 10_000
        assert not c.is_forced
        assert isinstance(c._state, FlatMapNode)

        with pytest.raises(EvaluationBudgetExceeded):
            c.force(evaluator=trampoline)

    def test_budget_exception_is_runtime_error(self):
        assert issubclass(EvaluationBudgetExceeded, RuntimeError)
