"""
Quality/diversity summary of a population fitness snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class QualityDiversity:
    """
    Mean fitness (quality) and population standard deviation (diversity).
    """

    quality: float
    diversity: float

    def __sub__(self, other: QualityDiversity) -> QualityDiversity:
        return QualityDiversity(
            quality=self.quality - other.quality,
            diversity=self.diversity - other.diversity,
        )

    def as_tuple(self) -> tuple[float, float]:
        return (self.quality, self.diversity)


def population_qd(fitness_values: Sequence[float] | np.ndarray) -> QualityDiversity:
    """
    Summarize a fitness snapshot as (mean, population std).

    The standard deviation divides by N, not N - 1. Order of the values does
    not matter.
    """
    values = np.asarray(fitness_values, dtype=float).ravel()
    if values.size == 0:
        raise ValueError("fitness_values must contain at least one value.")
    if not np.all(np.isfinite(values)):
        raise ValueError("fitness_values must be finite.")
    return QualityDiversity(quality=float(values.mean()), diversity=float(values.std(ddof=0)))


__all__ = ["QualityDiversity", "population_qd"]
