"""
Compass adaptive operator selection primitives.
"""

from .awards import compass_direction, compute_awards, normalize_column
from .config import CompassConfig
from .controller import CompassController, SummaryRow, TraceRow
from .history import NEUTRAL_WEIGHT, RewardHistory
from .metrics import QualityDiversity, population_qd
from .portfolio import OperatorArm, OperatorSet
from .probabilities import compute_probabilities, roulette_index
from .selector import Attribution, CompassSelector, OperatorSelection, SelectionOutcome, SelectorState, UniformSource

__all__ = [
    "CompassConfig",
    "CompassController",
    "SummaryRow",
    "TraceRow",
    "CompassSelector",
    "OperatorSelection",
    "SelectionOutcome",
    "SelectorState",
    "Attribution",
    "UniformSource",
    "OperatorArm",
    "OperatorSet",
    "NEUTRAL_WEIGHT",
    "RewardHistory",
    "QualityDiversity",
    "population_qd",
    "compass_direction",
    "compute_awards",
    "normalize_column",
    "compute_probabilities",
    "roulette_index",
]
