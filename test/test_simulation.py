"""Tests for simulation results."""

import numpy as np
import pytest

from erasure_search.simulation import SimulationResult


class TestSimulationResult:
    """Tests for failure rate bookkeeping and ordering."""

    def test_failure_rate(self) -> None:
        """Failure rate is failures over iterations."""
        result = SimulationResult(n_successes=75, n_failures=25)
        np.testing.assert_equal(result.n_iterations, 100)
        np.testing.assert_allclose(result.failure_rate, 0.25)
        np.testing.assert_allclose(result.standard_error, np.sqrt(0.25 * 0.75 / 100))

    def test_worse_result(self) -> None:
        """The sentinel has a failure rate of one."""
        worst = SimulationResult.worse_result()
        np.testing.assert_equal(worst.failure_rate, 1.0)
        np.testing.assert_equal(worst.standard_error, 0.0)

    def test_is_better_than_is_strict(self) -> None:
        """Only a strictly lower failure rate is better."""
        good = SimulationResult(n_successes=9, n_failures=1)
        bad = SimulationResult(n_successes=1, n_failures=9)
        if not good.is_better_than(bad):
            pytest.fail("Lower failure rate should be better")
        if bad.is_better_than(good):
            pytest.fail("Higher failure rate should not be better")
        if good.is_better_than(SimulationResult(n_successes=18, n_failures=2)):
            pytest.fail("Equal failure rates should not be better")

    def test_everything_beats_worse_result_but_total_failure(self) -> None:
        """Any success beats the sentinel, only failures tie with it."""
        worst = SimulationResult.worse_result()
        if not SimulationResult(n_successes=1, n_failures=99).is_better_than(worst):
            pytest.fail("A single success should beat the worst result")
        if SimulationResult(n_successes=0, n_failures=10).is_better_than(worst):
            pytest.fail("Only failures should tie with the worst result")

    def test_negative_counts_raise(self) -> None:
        """Event counts cannot be negative."""
        with pytest.raises(ValueError, match="non-negative"):
            SimulationResult(n_successes=-1, n_failures=0)
