"""Tests for variation operators and objective evaluation helpers.

Covers:
- objective_vector / check_objectives: the objective boundary
- lift / lift_parallel: per-candidate functions over populations
- sbx_crossover / uniform_crossover: two-child crossover factories
- gaussian_mutation / polynomial_mutation: mutation factories
"""

import numpy as np
import pytest

from nsga_kit.operators import (
    check_objectives,
    gaussian_mutation,
    lift,
    lift_parallel,
    objective_vector,
    polynomial_mutation,
    sbx_crossover,
    uniform_crossover,
)


def _sum_and_max(x: np.ndarray) -> np.ndarray:
    return np.array([x.sum(), x.max()])


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def unit_bounds() -> tuple[float, float]:
    return (0.0, 1.0)


@pytest.fixture
def parents() -> tuple[np.ndarray, np.ndarray]:
    return np.array([0.2, 0.4, 0.6, 0.8]), np.array([0.3, 0.5, 0.1, 0.9])


# =============================================================================
# TestObjectiveVector
# =============================================================================


class TestObjectiveVector:
    """Tests for objective_vector."""

    def test_evaluates_every_objective_in_order(self) -> None:
        """Column order follows the order of the objectives."""
        evaluate = objective_vector([np.sum, np.max, np.min], shape=(3,))
        np.testing.assert_array_equal(evaluate(np.array([1.0, 5.0, 2.0])), [8.0, 5.0, 1.0])

    def test_objectives_see_the_candidate_shape(self) -> None:
        """A flattened row is reshaped before reaching the objectives."""
        seen: list[tuple[int, ...]] = []

        def first_column_sum(x: np.ndarray) -> float:
            seen.append(x.shape)
            return float(x[:, 0].sum())

        evaluate = objective_vector([first_column_sum], shape=(2, 3))
        result = evaluate(np.arange(6, dtype=np.float64))

        assert seen == [(2, 3)]
        np.testing.assert_array_equal(result, [3.0])

    def test_returns_float64(self) -> None:
        """Integer-valued objectives are converted to floats."""
        evaluate = objective_vector([lambda x: 1, lambda x: np.int64(2)], shape=(1,))
        result = evaluate(np.zeros(1))
        assert result.dtype == np.float64


# =============================================================================
# TestCheckObjectives
# =============================================================================


class TestCheckObjectives:
    """Tests for check_objectives."""

    def test_accepts_scalar_objectives(self) -> None:
        """Scalar-valued callables pass."""
        check_objectives([np.sum, lambda x: float(x[0])], np.zeros(3))

    def test_rejects_empty_list(self) -> None:
        """At least one objective is needed."""
        with pytest.raises(ValueError, match="At least one objective function is required"):
            check_objectives([], np.zeros(3))

    def test_rejects_non_callable(self) -> None:
        """Each entry must be callable."""
        with pytest.raises(TypeError, match="objective 1 must be callable"):
            check_objectives([np.sum, 3.0], np.zeros(3))

    def test_rejects_vector_valued_objective(self) -> None:
        """An objective returning an array is reported by index."""
        with pytest.raises(ValueError, match="objective 0 must return a scalar"):
            check_objectives([lambda x: x * 2], np.zeros(3))

    def test_objective_errors_propagate(self) -> None:
        """An objective that cannot handle the start raises its own error."""

        def needs_matrix(x: np.ndarray) -> float:
            return float(x[1, 1])

        with pytest.raises(IndexError):
            check_objectives([needs_matrix], np.zeros(3))


# =============================================================================
# TestLift
# =============================================================================


class TestLift:
    """Tests for lift and lift_parallel."""

    def test_applies_to_each_row(self) -> None:
        """lift applies the function to each row."""
        lifted = lift(_sum_and_max)
        result = lifted(np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 0.0]]))

        np.testing.assert_array_equal(result, [[3.0, 2.0], [7.0, 4.0], [5.0, 5.0]])

    def test_single_row_input(self) -> None:
        """A single row yields a (1, n_out) result."""
        assert lift(_sum_and_max)(np.array([[1.0, 2.0]])).shape == (1, 2)

    def test_empty_input_raises(self) -> None:
        """Stacking zero results is an error."""
        with pytest.raises(ValueError):
            lift(_sum_and_max)(np.zeros((0, 2)))

    def test_parallel_matches_sequential(self) -> None:
        """lift_parallel returns the same rows in the same order."""
        x = np.random.default_rng(0).uniform(size=(6, 3))

        def sum_and_max(row: np.ndarray) -> np.ndarray:
            return np.array([row.sum(), row.max()])

        expected = lift(sum_and_max)(x)
        result = lift_parallel(sum_and_max, n_workers=2)(x)

        np.testing.assert_allclose(result, expected)


# =============================================================================
# TestSBXCrossover
# =============================================================================


class TestSBXCrossover:
    """Tests for the SBX crossover operator."""

    def test_returns_two_children_of_parent_shape(self, parents, unit_bounds, rng) -> None:
        """Crossover returns two arrays shaped like the parents."""
        crossover = sbx_crossover(crossover_prob=1.0, bounds=unit_bounds)
        c1, c2 = crossover(*parents, rng)
        assert c1.shape == (4,)
        assert c2.shape == (4,)

    def test_children_within_bounds(self, unit_bounds, rng) -> None:
        """Children are always clipped to the bounds."""
        crossover = sbx_crossover(crossover_prob=1.0, eta=0.5, bounds=unit_bounds)
        p1 = np.array([0.0, 1.0, 0.05, 0.95])
        p2 = np.array([1.0, 0.0, 0.9, 0.1])

        for _ in range(100):
            c1, c2 = crossover(p1, p2, rng)
            for child in (c1, c2):
                assert np.all(child >= 0.0)
                assert np.all(child <= 1.0)

    def test_children_preserve_parent_mean(self, parents, rng) -> None:
        """Unbounded SBX children are symmetric around the parents' mean."""
        crossover = sbx_crossover(crossover_prob=1.0, eta=2.0)
        c1, c2 = crossover(*parents, rng)
        np.testing.assert_allclose(c1 + c2, parents[0] + parents[1])

    def test_zero_probability_copies_parents(self, parents, rng) -> None:
        """With crossover_prob=0 the children equal the parents."""
        crossover = sbx_crossover(crossover_prob=0.0)
        c1, c2 = crossover(*parents, rng)

        np.testing.assert_array_equal(c1, parents[0])
        np.testing.assert_array_equal(c2, parents[1])
        assert c1 is not parents[0]

    def test_high_eta_produces_closer_children(self, parents) -> None:
        """A larger distribution index keeps children nearer the parents."""

        def mean_spread(eta: float) -> float:
            rng = np.random.default_rng(1)
            crossover = sbx_crossover(crossover_prob=1.0, eta=eta)
            p1, p2 = parents
            total = 0.0
            for _ in range(200):
                c1, _ = crossover(p1, p2, rng)
                total += np.mean(np.minimum(np.abs(c1 - p1), np.abs(c1 - p2)))
            return total / 200

        assert mean_spread(100.0) < mean_spread(1.0)

    def test_identical_parents_give_identical_children(self, rng) -> None:
        """Recombining a point with itself returns that point."""
        p = np.array([0.5, 0.5])
        c1, c2 = sbx_crossover(crossover_prob=1.0)(p, p.copy(), rng)
        np.testing.assert_allclose(c1, p)
        np.testing.assert_allclose(c2, p)

    def test_deterministic_with_seed(self, parents) -> None:
        """The same generator state yields the same children."""
        crossover = sbx_crossover(crossover_prob=1.0)
        a = crossover(*parents, np.random.default_rng(3))
        b = crossover(*parents, np.random.default_rng(3))
        np.testing.assert_array_equal(a[0], b[0])
        np.testing.assert_array_equal(a[1], b[1])

    def test_rejects_bad_probability(self) -> None:
        """crossover_prob must lie in [0, 1]."""
        with pytest.raises(ValueError, match="crossover_prob must be in"):
            sbx_crossover(crossover_prob=1.2)

    def test_per_variable_bounds(self, rng) -> None:
        """Array bounds clip each variable separately."""
        lower = np.array([0.0, 10.0])
        upper = np.array([1.0, 11.0])
        crossover = sbx_crossover(crossover_prob=1.0, eta=0.1, bounds=(lower, upper))

        for _ in range(50):
            c1, c2 = crossover(np.array([0.0, 10.0]), np.array([1.0, 11.0]), rng)
            assert np.all((c1 >= lower) & (c1 <= upper))
            assert np.all((c2 >= lower) & (c2 <= upper))


# =============================================================================
# TestUniformCrossover
# =============================================================================


class TestUniformCrossover:
    """Tests for the uniform crossover operator."""

    def test_children_are_complementary(self, parents, rng) -> None:
        """Each coordinate goes to one child from each parent."""
        p1, p2 = parents
        c1, c2 = uniform_crossover(crossover_prob=1.0)(p1, p2, rng)

        for i in range(len(p1)):
            assert {c1[i], c2[i]} == {p1[i], p2[i]}

    def test_zero_probability_copies_parents(self, parents, rng) -> None:
        """With crossover_prob=0 the children equal the parents."""
        c1, c2 = uniform_crossover(crossover_prob=0.0)(*parents, rng)
        np.testing.assert_array_equal(c1, parents[0])
        np.testing.assert_array_equal(c2, parents[1])

    def test_mixes_coordinates(self, rng) -> None:
        """Over many draws both parents contribute to the first child."""
        p1 = np.zeros(50)
        p2 = np.ones(50)
        c1, _ = uniform_crossover(crossover_prob=1.0)(p1, p2, rng)
        assert 0 < c1.sum() < 50


# =============================================================================
# TestGaussianMutation
# =============================================================================


class TestGaussianMutation:
    """Tests for the gaussian mutation operator."""

    def test_zero_probability_no_changes(self, rng) -> None:
        """prob=0 leaves the candidate untouched."""
        x = np.array([0.1, 0.2, 0.3])
        np.testing.assert_array_equal(gaussian_mutation(prob=0.0, strength=1.0)(x, rng), x)

    def test_full_probability_changes_every_coordinate(self, rng) -> None:
        """prob=1 perturbs every coordinate."""
        x = np.zeros(20)
        assert np.all(gaussian_mutation(prob=1.0, strength=1.0)(x, rng) != 0.0)

    def test_zero_strength_no_changes(self, rng) -> None:
        """strength=0 adds no noise."""
        x = np.array([0.1, 0.2, 0.3])
        np.testing.assert_array_equal(gaussian_mutation(prob=1.0, strength=0.0)(x, rng), x)

    def test_noise_scales_with_strength(self) -> None:
        """The spread of the result follows the strength parameter."""
        x = np.zeros(5000)
        small = gaussian_mutation(prob=1.0, strength=0.01)(x, np.random.default_rng(0))
        large = gaussian_mutation(prob=1.0, strength=1.0)(x, np.random.default_rng(0))

        assert np.std(small) == pytest.approx(0.01, rel=0.1)
        assert np.std(large) == pytest.approx(1.0, rel=0.1)

    def test_result_within_bounds(self, unit_bounds, rng) -> None:
        """Mutated values are clipped to the bounds."""
        mutate = gaussian_mutation(prob=1.0, strength=5.0, bounds=unit_bounds)
        result = mutate(np.full(100, 0.5), rng)
        assert np.all(result >= 0.0)
        assert np.all(result <= 1.0)

    def test_does_not_modify_input(self, rng) -> None:
        """The input array is left untouched."""
        x = np.array([0.1, 0.2])
        gaussian_mutation(prob=1.0, strength=1.0)(x, rng)
        np.testing.assert_array_equal(x, [0.1, 0.2])

    def test_rejects_negative_strength(self) -> None:
        """strength may not be negative."""
        with pytest.raises(ValueError, match="strength must be non-negative"):
            gaussian_mutation(strength=-0.1)


# =============================================================================
# TestPolynomialMutation
# =============================================================================


class TestPolynomialMutation:
    """Tests for the polynomial mutation operator."""

    def test_returns_correct_shape(self, unit_bounds, rng) -> None:
        """Mutation preserves the candidate shape."""
        mutate = polynomial_mutation(eta=20.0, bounds=unit_bounds)
        assert mutate(np.full(4, 0.5), rng).shape == (4,)

    def test_mutated_within_custom_bounds(self, rng) -> None:
        """Results stay within the bounds."""
        mutate = polynomial_mutation(prob=1.0, eta=1.0, bounds=(-5.0, 5.0))
        for _ in range(50):
            result = mutate(np.array([-5.0, 0.0, 5.0]), rng)
            assert np.all(result >= -5.0)
            assert np.all(result <= 5.0)

    def test_zero_probability_no_changes(self, unit_bounds, rng) -> None:
        """prob=0 leaves the candidate untouched."""
        x = np.array([0.2, 0.4, 0.6])
        np.testing.assert_array_equal(polynomial_mutation(prob=0.0, bounds=unit_bounds)(x, rng), x)

    def test_full_probability_mutates_all(self, unit_bounds, rng) -> None:
        """prob=1 moves every interior coordinate."""
        x = np.full(10, 0.5)
        result = polynomial_mutation(prob=1.0, eta=5.0, bounds=unit_bounds)(x, rng)
        assert np.all(result != x)

    def test_default_probability_is_one_over_n(self, unit_bounds) -> None:
        """Without prob, about one coordinate in n is mutated."""
        mutate = polynomial_mutation(eta=20.0, bounds=unit_bounds)
        rng = np.random.default_rng(5)
        x = np.full(10, 0.5)

        changed = sum(np.count_nonzero(mutate(x, rng) != x) for _ in range(500))

        assert changed / 500 == pytest.approx(1.0, abs=0.3)

    def test_high_eta_produces_smaller_mutations(self, unit_bounds) -> None:
        """A larger distribution index gives smaller perturbations."""
        x = np.full(1000, 0.5)
        small = polynomial_mutation(prob=1.0, eta=100.0, bounds=unit_bounds)(x, np.random.default_rng(0))
        large = polynomial_mutation(prob=1.0, eta=1.0, bounds=unit_bounds)(x, np.random.default_rng(0))

        assert np.mean(np.abs(small - x)) < np.mean(np.abs(large - x))

    def test_zero_width_variable_stays_fixed(self, rng) -> None:
        """A variable whose bounds coincide does not move."""
        bounds = (np.array([0.0, 0.3]), np.array([1.0, 0.3]))
        result = polynomial_mutation(prob=1.0, bounds=bounds)(np.array([0.5, 0.3]), rng)
        assert result[1] == 0.3

    def test_does_not_modify_input(self, unit_bounds, rng) -> None:
        """The input array is left untouched."""
        x = np.array([0.1, 0.9])
        polynomial_mutation(prob=1.0, bounds=unit_bounds)(x, rng)
        np.testing.assert_array_equal(x, [0.1, 0.9])

    def test_rejects_infinite_bounds(self) -> None:
        """Polynomial mutation needs a finite range to scale by."""
        with pytest.raises(ValueError, match="polynomial mutation requires finite bounds"):
            polynomial_mutation(bounds=(-np.inf, np.inf))
