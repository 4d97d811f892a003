from __future__ import annotations

import math

import numpy as np
import pytest

from streamstat import Statistic


def _naive_variance(values) -> float:
    total = 0.0
    total_sq = 0.0
    for value in values:
        total += value
        total_sq += value * value
    n = len(values)
    return (total_sq - total * total / n) / n


def test_pop_stdev_survives_large_offset():
    rng = np.random.default_rng(20110107)
    noise = rng.uniform(-0.001, 0.001, size=10_000)
    values = 1e7 + noise

    stat = Statistic()
    stat.add_values(values)

    expected = float(np.std(values - 1e7))
    assert float(stat.pop_stdev()) == pytest.approx(expected, rel=1e-4)
    assert float(stat.variance()) == pytest.approx(expected * expected, rel=2e-4)

    # sum-of-squares loses every significant digit in this regime
    naive = _naive_variance([float(v) for v in values])
    assert naive != pytest.approx(expected * expected, rel=0.5)


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_matches_numpy_reference(seed):
    rng = np.random.default_rng(seed)
    values = rng.normal(loc=250.0, scale=30.0, size=500)

    stat = Statistic()
    for value in values:
        stat.add(value)

    assert stat.count() == len(values)
    assert stat.minimum() == values.min()
    assert stat.maximum() == values.max()
    assert all(stat.minimum() <= v <= stat.maximum() for v in values)
    assert stat.average() == pytest.approx(values.mean(), rel=1e-12)
    assert stat.average() == stat.sum() / len(values)
    assert stat.pop_stdev() == pytest.approx(np.std(values), rel=1e-9)
    assert stat.unbiased_stdev() == pytest.approx(np.std(values, ddof=1), rel=1e-9)


@pytest.mark.parametrize("n", [2, 3, 10, 257])
def test_unbiased_stdev_identity(n):
    rng = np.random.default_rng(n)
    stat = Statistic()
    stat.add_values(rng.uniform(-5.0, 5.0, size=n))

    expected = stat.pop_stdev() * math.sqrt(n / (n - 1))
    assert stat.unbiased_stdev() == pytest.approx(expected, rel=1e-12)


def test_untracked_matches_tracked_for_shared_queries():
    rng = np.random.default_rng(3)
    values = rng.integers(-1000, 1000, size=200).astype(float)

    tracked = Statistic()
    untracked = Statistic(use_std_dev=False)
    tracked.add_values(values)
    untracked.add_values(values)

    assert tracked.count() == untracked.count() == 200
    assert tracked.sum() == untracked.sum() == values.sum()
    assert tracked.minimum() == untracked.minimum()
    assert tracked.maximum() == untracked.maximum()
    assert tracked.average() == untracked.average()
    assert math.isnan(untracked.pop_stdev())


def test_float32_accumulator_stays_stable():
    rng = np.random.default_rng(11)
    noise = rng.uniform(-0.5, 0.5, size=2_000).astype(np.float32)
    values = np.float32(1000.0) + noise

    stat = Statistic(np.float32)
    stat.add_values(values)

    expected = float(np.std(values.astype(np.float64)))
    assert isinstance(stat.pop_stdev(), np.float32)
    assert float(stat.pop_stdev()) == pytest.approx(expected, rel=1e-2)
