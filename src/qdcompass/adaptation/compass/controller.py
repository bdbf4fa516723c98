"""
Controller for driving several compass selectors from one generational loop.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Mapping, Sequence

import numpy as np

from qdcompass.foundation.exceptions import ConfigurationError, SequencingError

from .config import CompassConfig
from .metrics import population_qd
from .portfolio import OperatorSet
from .selector import CompassSelector, SelectorState


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceRow:
    step: int
    selector: str
    op_id: str
    op_name: str
    probability: float
    delta_quality: float
    delta_diversity: float
    weight_quality: float
    weight_diversity: float


@dataclass(frozen=True)
class SummaryRow:
    selector: str
    op_id: str
    op_name: str
    pulls: int
    usage_fraction: float
    weight_quality: float
    weight_diversity: float


@dataclass
class CompassController:
    """
    Feeds one fitness snapshot per generation to every named selector.

    A typical setup pairs a selector over mutation operators with one over
    crossover operators; both observe the same population.
    """

    selectors: dict[str, CompassSelector[Any]]
    _current_step: int | None = field(default=None, init=False)
    _chosen_probs: dict[str, float] = field(default_factory=dict, init=False)
    _trace_rows: list[TraceRow] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        if not self.selectors:
            raise ConfigurationError("CompassController requires at least one selector.")
        self.selectors = dict(self.selectors)

    @classmethod
    def from_config(
        cls,
        operator_sets: Mapping[str, OperatorSet[Any] | Sequence[Any]],
        config: CompassConfig | Mapping[str, Any] | None = None,
    ) -> CompassController:
        """
        Build one selector per named operator set, each with its own random stream.
        """
        if not isinstance(config, CompassConfig):
            config = CompassConfig.from_dict(config)
        names = list(operator_sets)
        seeds = np.random.SeedSequence(config.rng_seed).spawn(len(names))
        selectors = {
            name: CompassSelector(operator_sets[name], config, rng=np.random.default_rng(seed))
            for name, seed in zip(names, seeds)
        }
        return cls(selectors)

    def choose(self, step: int) -> dict[str, Any]:
        """
        Request one operator from every selector for generation step.
        """
        self._current_step = int(step)
        chosen: dict[str, Any] = {}
        for name, selector in self.selectors.items():
            chosen[name] = selector.request_choice()
            idx = selector.pending_index
            probs = selector.last_probabilities
            if idx is not None and probs is not None:
                self._chosen_probs[name] = float(probs[idx])
        return chosen

    def observe(self, step: int, fitness_values: Sequence[float] | np.ndarray) -> list[TraceRow]:
        """
        Report the same fitness snapshot to every selector.

        Returns one row per selector whose pending choice was rewarded; the
        baseline call before the first choice returns no rows. Either every
        selector records the snapshot or none does.
        """
        if self._current_step is not None and int(step) != self._current_step:
            raise ValueError("observe() step does not match the step of the pending choices.")
        idle = [name for name, selector in self.selectors.items() if selector.state is SelectorState.IDLE]
        if idle:
            raise SequencingError(
                f"Feedback reported with no pending selection for: {', '.join(idle)}.",
                state=SelectorState.IDLE.value,
            )
        values = np.asarray(fitness_values, dtype=float)
        # Reject a bad snapshot before any selector records it.
        population_qd(values)
        rows: list[TraceRow] = []
        for name, selector in self.selectors.items():
            attribution = selector.report_feedback(values)
            if attribution is None:
                continue
            arm = selector.operators[attribution.index]
            rows.append(
                TraceRow(
                    step=int(step),
                    selector=name,
                    op_id=arm.op_id,
                    op_name=arm.name,
                    probability=self._chosen_probs.pop(name, float("nan")),
                    delta_quality=attribution.delta.quality,
                    delta_diversity=attribution.delta.diversity,
                    weight_quality=attribution.weight.quality,
                    weight_diversity=attribution.weight.diversity,
                )
            )
        self._current_step = None
        self._trace_rows.extend(rows)
        if rows:
            _logger().debug("Step %d rewarded %s.", int(step), ", ".join(f"{r.selector}={r.op_id}" for r in rows))
        return rows

    def trace_rows(self) -> list[TraceRow]:
        return list(self._trace_rows)

    def summary_rows(self) -> list[SummaryRow]:
        rows: list[SummaryRow] = []
        for name, selector in self.selectors.items():
            counts = selector.counts()
            total_pulls = sum(counts)
            weights = selector.weights()
            for idx, arm in enumerate(selector.operators):
                pulls = counts[idx]
                rows.append(
                    SummaryRow(
                        selector=name,
                        op_id=arm.op_id,
                        op_name=arm.name,
                        pulls=pulls,
                        usage_fraction=pulls / total_pulls if total_pulls > 0 else 0.0,
                        weight_quality=weights[idx].quality,
                        weight_diversity=weights[idx].diversity,
                    )
                )
        return rows


__all__ = ["CompassController", "TraceRow", "SummaryRow"]
