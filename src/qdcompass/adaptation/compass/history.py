"""
Per-operator reward history with a sliding-window mean weight.
"""

from __future__ import annotations

from collections import deque

import numpy as np

from .metrics import QualityDiversity

NEUTRAL_WEIGHT = QualityDiversity(quality=1.0, diversity=1.0)


class RewardHistory:
    """
    Bounded FIFO of quality/diversity deltas for each operator.

    The weight of an operator is the element-wise mean of its window. Operators
    that never received feedback keep the neutral weight (1, 1).
    """

    def __init__(self, n_operators: int, window_size: int):
        if n_operators <= 0:
            raise ValueError("n_operators must be positive.")
        if window_size <= 0:
            raise ValueError("window_size must be positive.")
        self.n_operators = int(n_operators)
        self.window_size = int(window_size)
        self._entries: list[deque[QualityDiversity]] = [deque(maxlen=self.window_size) for _ in range(self.n_operators)]
        self._weights: list[QualityDiversity] = [NEUTRAL_WEIGHT] * self.n_operators

    def push(self, index: int, delta: QualityDiversity) -> QualityDiversity:
        """
        Record a delta for an operator and return its updated weight.

        The oldest entry is evicted once the window is full.
        """
        window = self._entries[self._check_index(index)]
        window.append(delta)
        arr = np.array([entry.as_tuple() for entry in window], dtype=float)
        quality, diversity = arr.mean(axis=0)
        weight = QualityDiversity(quality=float(quality), diversity=float(diversity))
        self._weights[index] = weight
        return weight

    def weight(self, index: int) -> QualityDiversity:
        return self._weights[self._check_index(index)]

    def weights(self) -> list[QualityDiversity]:
        return list(self._weights)

    def entries(self, index: int) -> list[QualityDiversity]:
        """Deltas for an operator, oldest first."""
        return list(self._entries[self._check_index(index)])

    def size(self, index: int) -> int:
        return len(self._entries[self._check_index(index)])

    def clear(self) -> None:
        for window in self._entries:
            window.clear()
        self._weights = [NEUTRAL_WEIGHT] * self.n_operators

    def as_array(self) -> np.ndarray:
        """Weights as an (n_operators, 2) array of (quality, diversity)."""
        return np.array([w.as_tuple() for w in self._weights], dtype=float)

    def __len__(self) -> int:
        return self.n_operators

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self.n_operators:
            raise IndexError(f"operator index {index} out of range for {self.n_operators} operators.")
        return index


__all__ = ["NEUTRAL_WEIGHT", "RewardHistory"]
