"""Tests for the NSGA-II generational loop."""

import logging

import numpy as np
import pytest

from spindle_opt import (
    ConfigurationError,
    InvariantViolationError,
    OptimizationResult,
    dominates,
    non_dominated_sort,
    nsga2,
)


def run_toy(problem, **kwargs) -> OptimizationResult:
    return nsga2(
        init=problem["init"],
        evaluate=problem["evaluate"],
        crossover=problem["crossover"],
        mutate=problem["mutate"],
        **kwargs,
    )


class TestNSGA2Basics:
    """Tests for result shape and bookkeeping."""

    def test_population_size_is_preserved(self, toy_problem) -> None:
        """The final population has exactly pop_size individuals."""
        result = run_toy(toy_problem, pop_size=12, n_generations=5, seed=0)

        assert len(result.population) == 12
        assert result.population.x.shape == (12, 3)
        assert result.population.objectives.shape == (12, 3)

    def test_counts_generations_and_evaluations(self, toy_problem) -> None:
        """N evaluations at init plus N per generation."""
        result = run_toy(toy_problem, pop_size=8, n_generations=4, seed=0)

        assert result.generations == 4
        assert result.evaluations == 8 * 5

    def test_zero_generations_returns_ranked_initial_population(self, toy_problem) -> None:
        result = run_toy(toy_problem, pop_size=6, n_generations=0, seed=0)

        assert result.generations == 0
        assert result.evaluations == 6
        np.testing.assert_array_equal(result.rank, non_dominated_sort(result.population.objectives))

    def test_result_ranks_are_consistent(self, toy_problem) -> None:
        """Returned ranks match a fresh sort of the final objectives."""
        result = run_toy(toy_problem, pop_size=20, n_generations=5, seed=1)

        np.testing.assert_array_equal(result.rank, non_dominated_sort(result.population.objectives))
        np.testing.assert_array_equal(result.population.rank, result.rank)
        np.testing.assert_array_equal(result.population.crowding_distance, result.crowding_distance)

    def test_pareto_front_is_mutually_non_dominated(self, toy_problem) -> None:
        result = run_toy(toy_problem, pop_size=20, n_generations=5, seed=1)
        front = result.pareto_front.objectives

        assert len(front) >= 1
        for a in front:
            for b in front:
                assert not dominates(a, b)

    def test_evaluate_called_once_per_individual(self, toy_problem) -> None:
        calls = []

        def counting_evaluate(x: np.ndarray) -> np.ndarray:
            calls.append(x)
            return toy_problem["evaluate"](x)

        nsga2(
            toy_problem["init"],
            counting_evaluate,
            toy_problem["crossover"],
            toy_problem["mutate"],
            pop_size=7,
            n_generations=3,
            seed=0,
        )
        assert len(calls) == 7 * 4


class TestNSGA2Scenarios:
    """Small hand-built runs with known outcomes."""

    def test_dominating_pair_forms_the_front(self) -> None:
        """Two individuals dominating the other two make up the front after a generation."""
        good = [np.array([1.0, 2.0, 1.0]), np.array([2.0, 1.0, 1.0])]
        bad = [np.array([5.0, 5.0, 5.0]), np.array([6.0, 6.0, 6.0])]
        initial = iter(good + bad)

        result = nsga2(
            init=lambda rng: next(initial),
            evaluate=lambda x: x.copy(),
            crossover=lambda p1, p2, rng: p1.copy(),
            mutate=lambda x, rng: x.copy(),
            pop_size=4,
            n_generations=1,
            seed=3,
        )

        front = {tuple(row) for row in result.pareto_front.objectives}
        assert front == {tuple(good[0]), tuple(good[1])}
        assert len(result.population) == 4

    def test_single_individual_population(self) -> None:
        """A population of one survives with self-paired offspring."""
        result = nsga2(
            init=lambda rng: rng.random(3),
            evaluate=lambda x: x.copy(),
            crossover=lambda p1, p2, rng: (p1 + p2) / 2,
            mutate=lambda x, rng: x * 0.9,
            pop_size=1,
            n_generations=3,
            seed=0,
        )

        assert len(result.population) == 1
        assert result.rank.tolist() == [1]
        assert np.isinf(result.crowding_distance[0])


class TestNSGA2Determinism:
    """Tests for reproducibility under a fixed seed."""

    def test_same_seed_same_result(self, toy_problem) -> None:
        a = run_toy(toy_problem, pop_size=10, n_generations=5, seed=123)
        b = run_toy(toy_problem, pop_size=10, n_generations=5, seed=123)

        np.testing.assert_array_equal(a.population.x, b.population.x)
        np.testing.assert_array_equal(a.population.objectives, b.population.objectives)

    def test_different_seed_different_result(self, toy_problem) -> None:
        a = run_toy(toy_problem, pop_size=10, n_generations=5, seed=1)
        b = run_toy(toy_problem, pop_size=10, n_generations=5, seed=2)

        assert not np.array_equal(a.population.x, b.population.x)

    def test_accepts_generator(self, toy_problem) -> None:
        """A Generator seed is used directly."""
        a = run_toy(toy_problem, pop_size=10, n_generations=2, seed=np.random.default_rng(9))
        b = run_toy(toy_problem, pop_size=10, n_generations=2, seed=9)

        np.testing.assert_array_equal(a.population.x, b.population.x)


class TestNSGA2Callback:
    """Tests for the per-generation observer."""

    def test_called_for_initial_and_every_generation(self, toy_problem) -> None:
        seen = []

        def callback(result: OptimizationResult, generation: int) -> None:
            seen.append((generation, result.generations, len(result.population)))

        run_toy(toy_problem, pop_size=6, n_generations=3, seed=0, callback=callback)

        assert seen == [(0, 0, 6), (1, 1, 6), (2, 2, 6), (3, 3, 6)]

    def test_last_callback_matches_result(self, toy_problem) -> None:
        snapshots = []
        result = run_toy(
            toy_problem,
            pop_size=6,
            n_generations=2,
            seed=0,
            callback=lambda r, g: snapshots.append(r),
        )

        np.testing.assert_array_equal(snapshots[-1].population.x, result.population.x)


class TestNSGA2Validation:
    """Tests for argument validation and invariant checks."""

    def test_rejects_non_positive_pop_size(self, toy_problem) -> None:
        with pytest.raises(ConfigurationError, match="pop_size must be positive"):
            run_toy(toy_problem, pop_size=0, n_generations=1)

    def test_rejects_negative_generations(self, toy_problem) -> None:
        with pytest.raises(ConfigurationError, match="n_generations must be non-negative"):
            run_toy(toy_problem, pop_size=4, n_generations=-1)

    def test_survival_returning_wrong_size_is_invariant_violation(
        self, toy_problem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A truncation producing the wrong number of survivors aborts the run."""
        import spindle_opt.algorithm as algorithm

        def broken_survival(pop, n_survivors):
            indices = np.arange(n_survivors - 1)
            return indices, {
                "rank": np.ones(len(indices), dtype=np.int64),
                "crowding_distance": np.full(len(indices), np.inf),
            }

        monkeypatch.setattr(algorithm, "nsga2_survival", broken_survival)

        with pytest.raises(InvariantViolationError, match="expected 5"):
            run_toy(toy_problem, pop_size=5, n_generations=1, seed=0)

    def test_logs_generation_progress(self, toy_problem, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="spindle_opt"):
            run_toy(toy_problem, pop_size=6, n_generations=2, seed=0)

        assert "Generation 1/2" in caplog.text
        assert "Generation 2/2" in caplog.text
