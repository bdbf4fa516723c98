from __future__ import annotations

import math

import pytest

from qdcompass.adaptation.compass.config import CompassConfig
from qdcompass.foundation.exceptions import ConfigurationError


def test_from_dict_defaults_and_roundtrip() -> None:
    assert CompassConfig.from_dict(None) == CompassConfig()
    cfg = CompassConfig.from_dict({"theta": 0.3, "window_size": 7, "min_p": 0.1, "rng_seed": 5})
    assert cfg.window_size == 7
    assert CompassConfig.from_dict(cfg.to_dict()) == cfg


def test_from_dict_theta_degrees_and_policy_case() -> None:
    cfg = CompassConfig.from_dict({"theta_degrees": 90, "on_selection_failure": "RAISE"})
    assert cfg.theta == pytest.approx(math.pi / 2)
    assert cfg.on_selection_failure == "raise"


@pytest.mark.parametrize(
    "raw",
    [
        {"unknown": 1},
        {"theta": 0.1, "theta_degrees": 10},
        {"theta": -0.1},
        {"theta": 2.0},
        {"window_size": 0},
        {"min_p": 0.0},
        {"min_p": 1.5},
        {"on_selection_failure": "retry"},
    ],
)
def test_from_dict_rejects_invalid(raw) -> None:
    with pytest.raises(ConfigurationError):
        CompassConfig.from_dict(raw)


def test_validate_for_operator_count() -> None:
    cfg = CompassConfig(min_p=0.25)
    cfg.validate_for(4)
    with pytest.raises(ConfigurationError):
        cfg.validate_for(5)
    with pytest.raises(ConfigurationError):
        CompassConfig().validate_for(1)


def test_configuration_error_carries_suggestion() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        CompassConfig(min_p=0.5).validate_for(3)
    assert excinfo.value.suggestion is not None
    assert excinfo.value.details["n_operators"] == 3
