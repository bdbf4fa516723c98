"""
qdcompass: adaptive operator selection steered by population quality and diversity.
"""

from importlib import metadata as _metadata

from .adaptation.compass import (
    CompassConfig,
    CompassController,
    CompassSelector,
    OperatorSet,
    QualityDiversity,
    population_qd,
)
from .foundation.exceptions import (
    ConfigurationError,
    InvalidOperatorSetError,
    InvariantError,
    QDCompassError,
    SelectionError,
    SelectionFailure,
    SequencingError,
)
from .foundation.logging import configure_qdcompass_logging

try:
    __version__ = _metadata.version("qdcompass")
except _metadata.PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0+unknown"

__all__ = [
    "CompassConfig",
    "CompassController",
    "CompassSelector",
    "OperatorSet",
    "QualityDiversity",
    "population_qd",
    "QDCompassError",
    "ConfigurationError",
    "InvalidOperatorSetError",
    "SelectionError",
    "SequencingError",
    "InvariantError",
    "SelectionFailure",
    "configure_qdcompass_logging",
    "__version__",
]
