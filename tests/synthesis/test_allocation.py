import numpy as np
import pytest

from pointpatterns.synthesis import (
    allocate_counts,
    increment_zeros,
    round_half_away,
    shift_to_positive,
)


def test_round_half_away_from_zero():
    x = np.array([0.5, 1.5, 2.5, -0.5, -1.5, 0.49, 2.51])
    assert np.array_equal(round_half_away(x), [1, 2, 3, -1, -2, 0, 3])


def test_shift_to_positive_moves_minimum_to_one():
    w = shift_to_positive(np.array([-1.0, 0.0, 2.0]))
    assert np.array_equal(w, [1.0, 2.0, 4.0])


def test_shift_to_positive_leaves_positive_vector_alone():
    w = np.array([0.5, 3.0, 2.0])
    assert np.array_equal(shift_to_positive(w), w)


def test_increment_zeros_only_touches_zeros():
    assert np.array_equal(increment_zeros(np.array([0.0, 3.0, 0.0, 1.0])), [1.0, 3.0, 1.0, 1.0])


def test_equal_weights_extra_point_goes_to_first_cluster():
    counts = allocate_counts([2, 2, 2, 2, 2], 11)
    assert counts.sum() == 11
    assert set(counts.tolist()) <= {2, 3}
    assert np.array_equal(counts, [3, 2, 2, 2, 2])


def test_over_allocation_removed_in_index_order():
    # each share is exactly 0.5 and rounds up, so two clusters give one back
    counts = allocate_counts([1, 1, 1, 1], 2)
    assert np.array_equal(counts, [0, 0, 1, 1])


def test_underflow_is_not_clamped():
    counts = allocate_counts([1, 3, 3, 3], 2)
    assert np.array_equal(counts, [-1, 1, 1, 1])
    assert counts.sum() == 2


def test_underflow_with_positive_weights_and_enough_points():
    # no shift for positive weights, so a tiny weight rounds to 0 and absorbs the excess
    counts = allocate_counts([0.001, 0.144, 1.391, 0.418], 8)
    assert np.array_equal(counts, [-1, 1, 6, 2])


def test_increment_zeros_policy():
    counts = allocate_counts([0, 3, 1], 10, make_positive=increment_zeros)
    assert np.array_equal(counts, [2, 6, 2])


@pytest.mark.parametrize("seed", range(20))
def test_total_conserved_for_random_weights(seed):
    rng = np.random.default_rng(seed)
    k = int(rng.integers(1, 40))
    total = int(rng.integers(10 * k, 5000))
    raw = rng.standard_normal(k)

    counts = allocate_counts(raw, total)

    assert counts.shape == (k,)
    assert issubclass(counts.dtype.type, np.integer)
    assert counts.sum() == total
    assert (counts >= 0).all()


@pytest.mark.parametrize("seed", range(10))
def test_total_conserved_for_poisson_weights(seed):
    rng = np.random.default_rng(seed)
    raw = rng.poisson(1.5, size=25)
    counts = allocate_counts(raw, 1000, make_positive=increment_zeros)
    assert counts.sum() == 1000
    assert (counts > 0).all()


def test_counts_close_to_proportional_share():
    raw = np.array([1.0, 2.0, 3.0, 4.0])
    counts = allocate_counts(raw, 997)
    ideal = raw / raw.sum() * 997
    assert np.all(np.abs(counts - ideal) <= 1.5)


def test_allocation_is_deterministic():
    raw = np.random.default_rng(3).standard_normal(17)
    assert np.array_equal(allocate_counts(raw, 321), allocate_counts(raw, 321))


def test_zero_total_gives_zero_counts():
    assert np.array_equal(allocate_counts([1, 2, 3], 0), [0, 0, 0])


@pytest.mark.parametrize(
    "raw, total",
    [
        ([], 10),
        ([[1, 2], [3, 4]], 10),
        ([1.0, np.nan], 10),
        ([1, 2], -1),
        ([1, 2], 2.5),
    ],
)
def test_invalid_inputs_raise(raw, total):
    with pytest.raises(ValueError):
        allocate_counts(raw, total)


def test_policy_leaving_negative_weights_raises():
    with pytest.raises(ValueError):
        allocate_counts([-1.0, 2.0], 5, make_positive=increment_zeros)
