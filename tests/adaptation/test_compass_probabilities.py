from __future__ import annotations

import numpy as np
import pytest

from qdcompass.adaptation.compass.probabilities import compute_probabilities, roulette_index
from qdcompass.foundation.exceptions import InvariantError


def test_all_zero_awards_give_uniform() -> None:
    probs = compute_probabilities(np.zeros(4), min_p=0.1)
    assert probs.tolist() == [0.25] * 4


def test_floor_lifts_minimum_to_min_p() -> None:
    probs = compute_probabilities(np.array([0.0, 1.0, 1.0]), min_p=0.05)
    assert probs.sum() == pytest.approx(1.0, abs=1e-9)
    assert probs[0] == pytest.approx(0.05)
    assert probs[1] == pytest.approx(probs[2])
    assert probs[1] == pytest.approx(0.475)


def test_no_floor_when_share_already_above_min_p() -> None:
    probs = compute_probabilities(np.array([1.0, 1.0, 2.0]), min_p=0.05)
    assert probs.tolist() == pytest.approx([0.25, 0.25, 0.5])


def test_min_p_at_one_over_n_is_uniform() -> None:
    probs = compute_probabilities(np.array([0.0, 0.3, 2.0]), min_p=1.0 / 3.0)
    assert probs.tolist() == pytest.approx([1.0 / 3.0] * 3)


def test_invalid_inputs() -> None:
    with pytest.raises(InvariantError):
        compute_probabilities(np.array([-0.1, 1.0]), min_p=0.1)
    with pytest.raises(ValueError):
        compute_probabilities(np.array([0.0, 1.0]), min_p=0.6)
    with pytest.raises(ValueError):
        compute_probabilities(np.array([0.0, 1.0]), min_p=0.0)
    with pytest.raises(ValueError):
        compute_probabilities(np.array([]), min_p=0.1)


def test_random_awards_respect_floor_and_sum() -> None:
    rng = np.random.default_rng(11)
    for _ in range(200):
        n = int(rng.integers(2, 9))
        awards = rng.exponential(size=n)
        awards -= awards.min()
        min_p = float(rng.uniform(1e-4, 1.0 / n - 1e-4))
        probs = compute_probabilities(awards, min_p)
        assert abs(probs.sum() - 1.0) < 1e-9
        assert np.all(probs >= min_p - 1e-9)
        # Ordering of awards is preserved.
        assert np.array_equal(np.argsort(probs, kind="stable"), np.argsort(awards, kind="stable"))


def test_roulette_index() -> None:
    third = np.full(3, 1.0 / 3.0)
    assert roulette_index(third, 0.5) == 1
    assert roulette_index(third, 0.0) == 0
    assert roulette_index(np.array([0.2, 0.3, 0.5]), 0.95) == 2
    assert roulette_index(np.array([0.2, 0.3, 0.5]), 1.0 + 1e-9) is None
