"""
Scalarization of (quality, diversity) weights into non-negative awards.

Each operator's weight is normalized per dimension, projected on a fixed
compass direction (cos theta, sin theta) and shifted so that the worst
operator gets an award of exactly zero.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from qdcompass.foundation.exceptions import InvariantError


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def compass_direction(theta: float) -> np.ndarray:
    """
    Unit vector (cos theta, sin theta) encoding the quality/diversity trade-off.
    """
    return np.array([math.cos(theta), math.sin(theta)], dtype=float)


def normalize_column(values: np.ndarray) -> np.ndarray:
    """
    Divide a column by its maximum.

    When the maximum is not positive, dividing by it would flip the ordering
    (or divide by zero), so the largest magnitude is used instead. An all-zero
    column is returned unchanged.
    """
    col = np.asarray(values, dtype=float)
    peak = float(col.max())
    if peak > 0.0:
        return col / peak
    magnitude = float(np.abs(col).max())
    if magnitude == 0.0:
        _logger().debug("Skipping normalization of an all-zero column.")
        return col.copy()
    _logger().debug("Column maximum %.6g is not positive; normalizing by magnitude %.6g.", peak, magnitude)
    return col / magnitude


def compute_awards(weights: np.ndarray, direction: np.ndarray) -> np.ndarray:
    """
    Scalar award per operator from an (n_operators, 2) weight array.

    The minimum award is exactly zero and all others are non-negative.
    """
    w = np.asarray(weights, dtype=float)
    if w.ndim != 2 or w.shape[1] != 2:
        raise ValueError("weights must have shape (n_operators, 2).")
    if w.shape[0] == 0:
        raise ValueError("weights must contain at least one operator.")
    d = np.asarray(direction, dtype=float)
    norm = float(np.linalg.norm(d))
    if norm == 0.0:
        raise ValueError("direction must be a non-zero vector.")

    with np.errstate(invalid="ignore", over="ignore"):
        normalized = np.column_stack([normalize_column(w[:, 0]), normalize_column(w[:, 1])])
        awards = normalized @ d / norm
    if not np.all(np.isfinite(awards)):
        raise InvariantError("Non-finite award encountered.", values=awards.tolist())
    return awards - awards.min()


__all__ = ["compass_direction", "compute_awards", "normalize_column"]
