import math

import numpy as np
import pytest

from normpost import (
    DEFAULTS,
    PriorSpec,
    ObservationSpec,
    UpdateMethod,
    InvalidInput,
    NumericalDegeneracy,
    update,
    update_sample_size,
    update_mean_sd,
    update_full,
)


# Concrete scenarios
# --------------------------------------------------------------------

def test_sample_size_scenario(per_prior, per_observation):
    post = update_sample_size(per_prior, per_observation)
    expected = (1.9 * 91 + 14.79 * 1448) / (91 + 1448)
    assert post.mean == pytest.approx(expected, rel=1e-12)
    assert post.mean == pytest.approx(14.028, abs=1e-3)
    assert post.sd is None
    assert post.credible_interval95 is None
    assert post.method is UpdateMethod.SAMPLE_SIZE


def test_mean_sd_scenario(per_prior, per_observation):
    post = update_mean_sd(per_prior, per_observation)
    pp, op = 1 / 1.57 ** 2, 1 / 1.19 ** 2
    assert post.mean == pytest.approx((pp * 14.79 + op * 1.9) / (pp + op), rel=1e-12)
    assert post.mean == pytest.approx(6.603, abs=1e-2)
    assert post.sd == pytest.approx(0.95, abs=1e-2)
    low, high = post.credible_interval95
    assert low == pytest.approx(post.mean - 1.959964 * post.sd)
    assert high == pytest.approx(post.mean + 1.959964 * post.sd)


def test_full_scenario(per_prior, per_observation):
    post = update_full(per_prior, per_observation)
    pp = 1 / 1.57 ** 2
    op = 91 / 4.53 ** 2
    assert pp == pytest.approx(0.4057, abs=1e-4)
    assert post.precision == pytest.approx(pp + op, rel=1e-12)
    assert post.precision == pytest.approx(4.842, abs=1e-2)
    assert post.sd == pytest.approx(0.4545, abs=1e-4)
    assert post.mean == pytest.approx(pp / (pp + op) * 14.79 + op / (pp + op) * 1.9, rel=1e-12)
    assert post.mean == pytest.approx(2.980, abs=1e-2)


# Properties
# --------------------------------------------------------------------

def test_sample_size_mean_lies_between_inputs(rng):
    for _ in range(500):
        m0, m1 = rng.normal(0, 50, size=2)
        n0, n1 = rng.integers(1, 10_000, size=2)
        post = update_sample_size(PriorSpec(m0, sample_size=n0), ObservationSpec(m1, sample_size=n1))
        lo, hi = min(m0, m1), max(m0, m1)
        tol = 1e-12 * max(abs(lo), abs(hi), 1.0)
        assert lo - tol <= post.mean <= hi + tol


def test_sample_size_limits():
    prior = PriorSpec(10.0, sample_size=100)
    assert update_sample_size(prior, ObservationSpec(2.0, sample_size=0)).mean == 10.0
    assert update_sample_size(PriorSpec(10.0, sample_size=0), ObservationSpec(2.0, sample_size=5)).mean == 2.0
    big = update_sample_size(prior, ObservationSpec(2.0, sample_size=10 ** 12))
    assert big.mean == pytest.approx(2.0, abs=1e-6)


def test_mean_sd_matches_variance_form(rng):
    for _ in range(200):
        m0, m1 = rng.normal(0, 20, size=2)
        s0, s1 = rng.uniform(0.01, 10, size=2)
        post = update_mean_sd(PriorSpec(m0, sd=s0), ObservationSpec(m1, sd=s1))

        v0, v1 = s0 ** 2, s1 ** 2
        mean = (m0 * v1 + m1 * v0) / (v0 + v1)
        sd = math.sqrt(v0 * v1 / (v0 + v1))
        assert post.mean == pytest.approx(mean, rel=DEFAULTS.REL_TOL, abs=1e-12)
        assert post.sd == pytest.approx(sd, rel=DEFAULTS.REL_TOL)


def test_full_matches_mean_sd_with_standard_error(rng):
    # Observed count n with population sd tau is an observation sd of tau/sqrt(n)
    for _ in range(200):
        m0, m1 = rng.normal(0, 20, size=2)
        s0, tau = rng.uniform(0.05, 10, size=2)
        n = int(rng.integers(1, 5000))

        full = update_full(PriorSpec(m0, sd=s0, nuisance_sd=tau), ObservationSpec(m1, sample_size=n))
        two = update_mean_sd(PriorSpec(m0, sd=s0), ObservationSpec(m1, sd=tau / math.sqrt(n)))
        assert full.mean == pytest.approx(two.mean, rel=DEFAULTS.REL_TOL, abs=1e-12)
        assert full.sd == pytest.approx(two.sd, rel=DEFAULTS.REL_TOL)


@pytest.mark.parametrize("n", [10 ** 6, 10 ** 9, 10 ** 12])
def test_full_concentrates_on_observation(per_prior, n):
    post = update_full(per_prior, ObservationSpec(1.9, sample_size=n))
    assert post.mean == pytest.approx(1.9, abs=1e-2 * 10 ** 6 / n + 1e-9)
    assert post.sd == pytest.approx(4.53 / math.sqrt(n), rel=1e-3)


def test_full_sd_shrinks_with_sample_size(per_prior):
    sds = [update_full(per_prior, ObservationSpec(1.9, sample_size=n)).sd for n in (1, 10, 100, 1000)]
    assert all(a > b for a, b in zip(sds, sds[1:]))


def test_full_empty_observation_returns_prior_exactly(per_prior):
    post = update_full(per_prior, ObservationSpec(1.9, sample_size=0))
    assert post.mean == per_prior.mean
    assert post.sd == per_prior.sd


def test_results_do_not_depend_on_unused_fields():
    bare = update_mean_sd(PriorSpec(3.0, sd=2.0), ObservationSpec(5.0, sd=1.0))
    extra = update_mean_sd(PriorSpec(3.0, sample_size=7, sd=2.0, nuisance_sd=9.0),
                           ObservationSpec(5.0, sample_size=1000, sd=1.0))
    assert bare.mean == extra.mean
    assert bare.sd == extra.sd


# Required fields
# --------------------------------------------------------------------

@pytest.mark.parametrize("func, prior, obs, missing", [
    (update_sample_size, PriorSpec(1.0), ObservationSpec(2.0, sample_size=3), "prior.sample_size"),
    (update_sample_size, PriorSpec(1.0, sample_size=3), ObservationSpec(2.0, sd=1.0), "observation.sample_size"),
    (update_mean_sd, PriorSpec(1.0, sample_size=3), ObservationSpec(2.0, sd=1.0), "prior.sd"),
    (update_mean_sd, PriorSpec(1.0, sd=1.0), ObservationSpec(2.0, sample_size=3), "observation.sd"),
    (update_full, PriorSpec(1.0, sd=1.0), ObservationSpec(2.0, sample_size=3), "prior.nuisance_sd"),
    (update_full, PriorSpec(1.0, nuisance_sd=1.0), ObservationSpec(2.0, sample_size=3), "prior.sd"),
    (update_full, PriorSpec(1.0, sd=1.0, nuisance_sd=1.0), ObservationSpec(2.0, sd=1.0), "observation.sample_size"),
])
def test_missing_required_field_raises(func, prior, obs, missing):
    with pytest.raises(InvalidInput, match=missing):
        func(prior, obs)


def test_wrong_argument_types_raise():
    with pytest.raises(InvalidInput):
        update_mean_sd({"mean": 1.0, "sd": 1.0}, ObservationSpec(2.0, sd=1.0))
    with pytest.raises(InvalidInput):
        update_mean_sd(PriorSpec(1.0, sd=1.0), 2.0)


# Degenerate inputs
# --------------------------------------------------------------------

def test_sample_size_both_zero_raises():
    with pytest.raises(InvalidInput):
        update_sample_size(PriorSpec(1.0, sample_size=0), ObservationSpec(2.0, sample_size=0))


@pytest.mark.parametrize("prior, obs", [
    (PriorSpec(1.0, sd=0.0), ObservationSpec(2.0, sd=1.0)),
    (PriorSpec(1.0, sd=1.0), ObservationSpec(2.0, sd=0.0)),
])
def test_mean_sd_zero_sd_raises(prior, obs):
    with pytest.raises(InvalidInput):
        update_mean_sd(prior, obs)


@pytest.mark.parametrize("prior", [
    PriorSpec(1.0, sd=0.0, nuisance_sd=1.0),
    PriorSpec(1.0, sd=1.0, nuisance_sd=0.0),
])
def test_full_zero_sd_raises(prior):
    with pytest.raises(InvalidInput):
        update_full(prior, ObservationSpec(2.0, sample_size=10))


def test_full_zero_sd_raises_even_for_empty_observation():
    with pytest.raises(InvalidInput):
        update_full(PriorSpec(1.0, sd=1.0, nuisance_sd=0.0), ObservationSpec(2.0, sample_size=0))


@pytest.mark.parametrize("sd", [1e-200, 1e-160])
def test_tiny_sd_is_numerical_degeneracy(sd):
    with pytest.raises(NumericalDegeneracy):
        update_mean_sd(PriorSpec(1.0, sd=sd), ObservationSpec(2.0, sd=1.0))


def test_sample_size_large_means_and_counts_stay_finite():
    post = update_sample_size(PriorSpec(1e300, sample_size=10 ** 10), ObservationSpec(1e300, sample_size=10 ** 10))
    assert post.mean == pytest.approx(1e300, rel=DEFAULTS.REL_TOL)

    post = update_sample_size(PriorSpec(1.7e308, sample_size=3), ObservationSpec(1.6e308, sample_size=1))
    assert math.isfinite(post.mean)
    assert 1.6e308 <= post.mean <= 1.7e308


def test_sample_size_count_beyond_float_range():
    post = update_sample_size(PriorSpec(14.79, sample_size=1448), ObservationSpec(1.9, sample_size=10 ** 400))
    assert post.mean == pytest.approx(1.9, rel=DEFAULTS.REL_TOL)

    post = update_sample_size(PriorSpec(14.79, sample_size=10 ** 400), ObservationSpec(1.9, sample_size=10 ** 400))
    assert post.mean == pytest.approx((14.79 + 1.9) / 2, rel=DEFAULTS.REL_TOL)


def test_full_count_beyond_float_range_is_numerical_degeneracy(per_prior):
    with pytest.raises(NumericalDegeneracy, match="sample_size"):
        update_full(per_prior, ObservationSpec(1.9, sample_size=10 ** 400))


def test_full_overflowing_precision_is_numerical_degeneracy():
    prior = PriorSpec(14.79, sd=1.57, nuisance_sd=1e-5)
    with pytest.raises(NumericalDegeneracy):
        update_full(prior, ObservationSpec(1.9, sample_size=10 ** 308))


def test_degeneracy_is_not_invalid_input():
    assert not issubclass(NumericalDegeneracy, InvalidInput)
    assert issubclass(InvalidInput, ValueError)
    assert issubclass(NumericalDegeneracy, ArithmeticError)


# Dispatch
# --------------------------------------------------------------------

@pytest.mark.parametrize("method, func", [
    (UpdateMethod.SAMPLE_SIZE, update_sample_size),
    (UpdateMethod.MEAN_SD, update_mean_sd),
    (UpdateMethod.FULL, update_full),
    ("sample_size", update_sample_size),
    ("MEAN_SD", update_mean_sd),
    ("full", update_full),
])
def test_update_dispatches(per_prior, per_observation, method, func):
    assert update(per_prior, per_observation, method) == func(per_prior, per_observation)


def test_update_unknown_method(per_prior, per_observation):
    with pytest.raises(InvalidInput, match="Unknown update method"):
        update(per_prior, per_observation, "mcmc")


def test_update_validates_chosen_method_only():
    prior = PriorSpec(1.0, sample_size=10)
    obs = ObservationSpec(2.0, sample_size=10)
    assert update(prior, obs, "sample_size").mean == 1.5
    with pytest.raises(InvalidInput):
        update(prior, obs, "mean_sd")


def test_inputs_are_not_mutated(per_prior, per_observation):
    before = (per_prior, per_observation)
    for m in UpdateMethod:
        update(per_prior, per_observation, m)
    assert (per_prior, per_observation) == before
    assert np.isfinite(per_prior.mean)
