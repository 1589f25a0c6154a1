import numpy as np
import pytest
import jax.numpy as jnp

from hackerstats.core._resampling import (
    bootstrap_replicates,
    two_sample_bootstrap_replicates,
    permutation_replicates,
    shifted_bootstrap_replicates,
)


@pytest.fixture
def sample():
    rng = np.random.RandomState(0)
    return rng.normal(10.0, 2.0, size=100)


def test_bootstrap_shape_and_reproducibility(sample):
    r1 = bootstrap_replicates(sample, "median", n_reps=500, seed=3)
    r2 = bootstrap_replicates(sample, "median", n_reps=500, seed=3)
    r3 = bootstrap_replicates(sample, "median", n_reps=500, seed=4)
    assert r1.shape == (500,)
    np.testing.assert_array_equal(np.asarray(r1), np.asarray(r2))
    assert not np.array_equal(np.asarray(r1), np.asarray(r3))


def test_bootstrap_mean_centres_on_sample_mean(sample):
    reps = np.asarray(bootstrap_replicates(sample, "mean", n_reps=5000, seed=0))
    assert reps.mean() == pytest.approx(sample.mean(), abs=0.05)
    # SE of the mean ≈ s / sqrt(n)
    se_theory = sample.std(ddof=1) / np.sqrt(sample.size)
    assert reps.std(ddof=1) == pytest.approx(se_theory, rel=0.1)


def test_bootstrap_stays_within_sample_range(sample):
    mx = np.asarray(bootstrap_replicates(sample, "max", n_reps=200))
    mn = np.asarray(bootstrap_replicates(sample, "min", n_reps=200))
    assert np.all(mx <= sample.max())
    assert np.all(mn >= sample.min())


def test_bootstrap_constant_data():
    reps = bootstrap_replicates([4.0, 4.0, 4.0], "mean", n_reps=50)
    np.testing.assert_allclose(np.asarray(reps), 4.0)


def test_zero_weight_elements_never_drawn():
    values = [1.0, 2.0, 3.0, 4.0]
    reps = bootstrap_replicates(values, "min", n_reps=300, weights=[0.0, 0.0, 1.0, 0.0])
    np.testing.assert_allclose(np.asarray(reps), 3.0)
    reps = bootstrap_replicates(values, "max", n_reps=300, weights=[1.0, 1.0, 0.0, 0.0])
    assert np.all(np.asarray(reps) <= 2.0)


def test_weighted_bootstrap_shifts_mean():
    values = np.array([0.0] * 50 + [1.0] * 50)
    weights = np.array([1.0] * 50 + [3.0] * 50)
    reps = np.asarray(bootstrap_replicates(values, "mean", n_reps=3000, weights=weights))
    # ones are drawn with probability 0.75
    assert reps.mean() == pytest.approx(0.75, abs=0.01)


def test_custom_reducer(sample):
    reps = bootstrap_replicates(sample, lambda x: jnp.mean(x ** 2), n_reps=100)
    assert reps.shape == (100,)
    assert np.all(np.asarray(reps) > 0)


def test_bootstrap_invalid_input():
    with pytest.raises(ValueError):
        bootstrap_replicates([], "mean", n_reps=10)
    with pytest.raises(ValueError):
        bootstrap_replicates([1.0, 2.0], "mean", n_reps=0)
    with pytest.raises(ValueError):
        bootstrap_replicates([1.0, 2.0], "mean", n_reps=10, weights=[1.0])


def test_two_sample_constant_groups():
    reps = two_sample_bootstrap_replicates([1.0, 1.0, 1.0], [3.0, 3.0], "mean", n_reps=40)
    np.testing.assert_allclose(np.asarray(reps), -2.0)


def test_two_sample_weight_length_checked():
    with pytest.raises(ValueError, match="weights_b"):
        two_sample_bootstrap_replicates([1.0, 2.0], [3.0, 4.0], "mean", 10, weights_b=[1.0])


def test_permutation_null_centred_on_zero():
    rng = np.random.RandomState(1)
    a = rng.normal(0.0, 1.0, 30)
    b = rng.normal(3.0, 1.0, 30)
    reps = np.asarray(permutation_replicates(a, b, "mean", n_reps=2000))
    assert reps.shape == (2000,)
    assert abs(reps.mean()) < 0.05
    observed = a.mean() - b.mean()
    assert np.all(reps > observed)


def test_permutation_preserves_pooled_values():
    # difference of sums: sum(a') - sum(b') = 2 * sum(a') - total, with a'
    # drawn from the pooled values without replacement
    a = [1.0, 2.0]
    b = [10.0, 20.0, 30.0]
    reps = np.asarray(permutation_replicates(a, b, "sum", n_reps=200))
    total = sum(a) + sum(b)
    possible = {2 * (x + y) - total for i, x in enumerate(a + b) for y in (a + b)[i + 1:]}
    for r in np.unique(np.round(reps, 8)):
        assert any(abs(r - p) < 1e-8 for p in possible)


def test_shifted_bootstrap_centres_on_null(sample):
    reps = np.asarray(shifted_bootstrap_replicates(sample, 7.0, "mean", n_reps=3000))
    assert reps.mean() == pytest.approx(7.0, abs=0.05)


def test_undefined_statistic_names_reducer_and_size():
    with pytest.raises(ValueError, match="'std' is not finite on samples of size 1"):
        bootstrap_replicates([3.0], "std", n_reps=20)
    with pytest.raises(ValueError, match="at least 2 observations"):
        two_sample_bootstrap_replicates([1.0], [2.0, 3.0], "var", n_reps=20)
    with pytest.raises(ValueError, match="at least 2 observations"):
        shifted_bootstrap_replicates([3.0], 0.0, "std", n_reps=20)


def test_shifted_bootstrap_checks_n_reps_before_reducing(sample):
    calls = []

    def counting_mean(x):
        calls.append(1)
        return jnp.mean(x)

    with pytest.raises(ValueError, match="n_reps"):
        shifted_bootstrap_replicates(sample, 0.0, counting_mean, n_reps=0)
    assert calls == []
