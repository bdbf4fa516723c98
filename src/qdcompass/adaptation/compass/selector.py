"""
Compass selection engine: picks an operator each generation and attributes the
resulting change in population quality/diversity back to it.

Call sequence per generation::

    selector.report_feedback(fitness)   # first call only seeds the baseline
    op = selector.request_choice()
    ...apply op, evaluate the new population...
    selector.report_feedback(fitness)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Generic, Protocol, Sequence, TypeVar

import numpy as np

from qdcompass.foundation.exceptions import SelectionError, SelectionFailure, SequencingError

from .awards import compass_direction, compute_awards
from .config import CompassConfig
from .history import RewardHistory
from .metrics import QualityDiversity, population_qd
from .portfolio import OperatorSet
from .probabilities import compute_probabilities, roulette_index

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class UniformSource(Protocol):
    """
    Source of uniform draws in [0, 1); numpy Generators and random.Random both fit.
    """

    def random(self) -> float: ...


class OperatorSelection(Protocol[T_co]):
    """
    Protocol for adaptive operator providers driven by a generational loop.
    """

    def request_choice(self) -> T_co: ...

    def report_feedback(self, fitness_values: Sequence[float] | np.ndarray) -> object: ...


class SelectorState(str, Enum):
    COLD_START = "cold_start"
    IDLE = "idle"
    PENDING = "pending"


@dataclass(frozen=True)
class Attribution:
    """
    Reward attributed to one operator by a feedback call.
    """

    index: int
    op_id: str
    delta: QualityDiversity
    weight: QualityDiversity
    history_size: int


@dataclass(frozen=True)
class SelectionOutcome(Generic[T]):
    """
    Success value or the SelectionError that prevented it.
    """

    value: T | None = None
    error: SelectionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T | None:
        if self.error is not None:
            raise self.error
        return self.value


class CompassSelector(Generic[T]):
    """
    Adaptive operator selection steered by a quality/diversity compass.

    Each operator keeps a sliding window of the (quality, diversity) deltas
    observed after it was applied. Window means are normalized, projected on
    the compass direction and turned into a distribution with an exploration
    floor of min_p, from which the next operator is drawn.
    """

    def __init__(
        self,
        operators: OperatorSet[T] | Sequence[T],
        config: CompassConfig | None = None,
        *,
        rng: UniformSource | None = None,
    ):
        if isinstance(operators, OperatorSet):
            self.operators: OperatorSet[T] = operators
        else:
            self.operators = OperatorSet.from_operators(operators)
        self.config = config or CompassConfig()
        self.config.validate_for(len(self.operators))
        self._rng: UniformSource = rng if rng is not None else np.random.default_rng(self.config.rng_seed)
        self._direction = compass_direction(self.config.theta)
        self.history = RewardHistory(len(self.operators), self.config.window_size)
        self._previous_qd: QualityDiversity | None = None
        self._pending: int | None = None
        self._counts = [0] * len(self.operators)
        self._last_probabilities: np.ndarray | None = None

    @property
    def state(self) -> SelectorState:
        if self._previous_qd is None:
            return SelectorState.COLD_START
        if self._pending is not None:
            return SelectorState.PENDING
        return SelectorState.IDLE

    @property
    def pending_index(self) -> int | None:
        return self._pending

    @property
    def previous_qd(self) -> QualityDiversity | None:
        return self._previous_qd

    @property
    def last_probabilities(self) -> np.ndarray | None:
        """Distribution used by the most recent request_choice()."""
        return None if self._last_probabilities is None else self._last_probabilities.copy()

    def weights(self) -> list[QualityDiversity]:
        return self.history.weights()

    def awards(self) -> np.ndarray:
        return compute_awards(self.history.as_array(), self._direction)

    def probs(self) -> np.ndarray:
        return compute_probabilities(self.awards(), self.config.min_p)

    def counts(self) -> list[int]:
        """Per-operator number of choices that received feedback."""
        return list(self._counts)

    def request_choice(self) -> T:
        """
        Draw the next operator and remember it until feedback arrives.
        """
        if self._pending is not None:
            raise SequencingError(
                "Choice requested while a previous selection is still pending.",
                state=self.state.value,
            )
        probabilities = self.probs()
        draw = float(self._rng.random())
        idx = roulette_index(probabilities, draw)
        if idx is None:
            total = float(probabilities.sum())
            if self.config.on_selection_failure == "raise":
                raise SelectionFailure(draw, total)
            idx = len(probabilities) - 1
            _logger().warning(
                "Draw %.17g exceeded cumulative probability %.17g; falling back to last operator '%s'.",
                draw,
                total,
                self.operators[idx].op_id,
            )
        self._pending = idx
        self._last_probabilities = probabilities
        _logger().debug(
            "Selected operator '%s' (p=%.4f, draw=%.4f).",
            self.operators[idx].op_id,
            probabilities[idx],
            draw,
        )
        return self.operators[idx].operator

    def report_feedback(self, fitness_values: Sequence[float] | np.ndarray) -> Attribution | None:
        """
        Attribute the quality/diversity change since the last snapshot to the pending operator.

        The very first call only stores the baseline snapshot and returns None.
        """
        if self._previous_qd is not None and self._pending is None:
            raise SequencingError("Feedback reported with no pending selection.", state=self.state.value)

        qd = population_qd(fitness_values)
        if self._previous_qd is None:
            if self._pending is not None:
                _logger().debug("Baseline not yet set; dropping pending choice %d.", self._pending)
            self._previous_qd = qd
            self._pending = None
            _logger().debug("Baseline snapshot quality=%.6g diversity=%.6g.", qd.quality, qd.diversity)
            return None

        idx = self._pending
        assert idx is not None
        delta = qd - self._previous_qd
        weight = self.history.push(idx, delta)
        self._counts[idx] += 1
        self._previous_qd = qd
        self._pending = None
        _logger().debug(
            "Operator '%s' delta=(%.6g, %.6g) weight=(%.6g, %.6g).",
            self.operators[idx].op_id,
            delta.quality,
            delta.diversity,
            weight.quality,
            weight.diversity,
        )
        return Attribution(
            index=idx,
            op_id=self.operators[idx].op_id,
            delta=delta,
            weight=weight,
            history_size=self.history.size(idx),
        )

    def try_request_choice(self) -> SelectionOutcome[T]:
        """
        request_choice() returning a SelectionOutcome instead of raising SelectionError.
        """
        try:
            return SelectionOutcome(value=self.request_choice())
        except SelectionError as exc:
            return SelectionOutcome(error=exc)

    def try_report_feedback(self, fitness_values: Sequence[float] | np.ndarray) -> SelectionOutcome[Attribution]:
        """
        report_feedback() returning a SelectionOutcome instead of raising SelectionError.
        """
        try:
            return SelectionOutcome(value=self.report_feedback(fitness_values))
        except SelectionError as exc:
            return SelectionOutcome(error=exc)


__all__ = [
    "Attribution",
    "CompassSelector",
    "OperatorSelection",
    "SelectionOutcome",
    "SelectorState",
    "UniformSource",
]
