"""
Award-to-probability conversion with an exploration floor, and roulette sampling.
"""

from __future__ import annotations

import numpy as np

from qdcompass.foundation.exceptions import InvariantError

# min_p * N this close to 1 is treated as the uniform limit of the floor formula.
_UNIFORM_LIMIT_TOL = 1e-12


def _uniform(n: int) -> np.ndarray:
    return np.full(n, 1.0 / n, dtype=float)


def compute_probabilities(awards: np.ndarray, min_p: float) -> np.ndarray:
    """
    Turn non-negative awards into a distribution where every entry is >= min_p.

    When the smallest share min/sum already reaches min_p the awards are used
    as-is (normalized); otherwise a constant ksi is added to every award so the
    smallest probability becomes exactly min_p. Relative ordering is preserved.
    """
    a = np.asarray(awards, dtype=float).ravel()
    n = a.size
    if n == 0:
        raise ValueError("awards must contain at least one value.")
    if min_p <= 0.0:
        raise ValueError("min_p must be positive.")
    denom = 1.0 - min_p * n
    if denom < -_UNIFORM_LIMIT_TOL:
        raise ValueError(f"min_p={min_p!r} exceeds 1/{n}.")

    award_sum = float(a.sum())
    min_award = float(a.min())
    if min_award < 0.0:
        raise InvariantError("Negative award encountered.", values=a.tolist())
    if award_sum == 0.0:
        return _uniform(n)
    if denom <= _UNIFORM_LIMIT_TOL:
        # ksi grows without bound as min_p -> 1/N; the limit is uniform.
        return _uniform(n)

    ksi = 0.0
    if min_award / award_sum < min_p:
        ksi = (min_p * award_sum - min_award) / denom
    return (a + ksi) / (award_sum + ksi * n)


def roulette_index(probabilities: np.ndarray, draw: float) -> int | None:
    """
    First index whose cumulative probability reaches draw, or None if none does.
    """
    cum_sum = 0.0
    for idx, prob in enumerate(np.asarray(probabilities, dtype=float).ravel()):
        cum_sum += float(prob)
        if cum_sum >= draw:
            return idx
    return None


__all__ = ["compute_probabilities", "roulette_index"]
