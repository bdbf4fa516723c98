"""
Configuration helpers for compass operator selection.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any
from collections.abc import Mapping

from qdcompass.foundation.exceptions import ConfigurationError

SELECTION_FAILURE_POLICIES = ("last", "raise")

# Absorbs rounding when theta is given in degrees.
_THETA_TOL = 1e-12

COMPASS_CONFIG_KEYS = {
    "theta",
    "theta_degrees",
    "window_size",
    "min_p",
    "rng_seed",
    "on_selection_failure",
}


@dataclass(frozen=True)
class CompassConfig:
    """
    Configuration for compass-based adaptive operator selection.

    theta is the quality/diversity trade-off angle in radians (0 rewards
    quality only, pi/2 rewards diversity only). window_size bounds the reward
    history per operator and min_p is the exploration floor on every
    operator's selection probability.
    """

    theta: float = math.pi / 4
    window_size: int = 10
    min_p: float = 0.05
    rng_seed: int | None = None
    on_selection_failure: str = "last"

    def __post_init__(self) -> None:
        if not math.isfinite(self.theta) or self.theta < 0.0 or self.theta > math.pi / 2 + _THETA_TOL:
            raise ConfigurationError(
                f"theta must be within [0, pi/2], got {self.theta!r}.",
                "Use 0 for pure quality, pi/2 for pure diversity",
                {"theta": self.theta},
            )
        if self.window_size < 1:
            raise ConfigurationError(
                f"window_size must be >= 1, got {self.window_size!r}.",
                details={"window_size": self.window_size},
            )
        if not math.isfinite(self.min_p) or self.min_p <= 0.0 or self.min_p > 1.0:
            raise ConfigurationError(
                f"min_p must be within (0, 1], got {self.min_p!r}.",
                details={"min_p": self.min_p},
            )
        if self.on_selection_failure not in SELECTION_FAILURE_POLICIES:
            raise ConfigurationError(
                f"Unknown on_selection_failure policy '{self.on_selection_failure}'.",
                f"Available policies: {', '.join(SELECTION_FAILURE_POLICIES)}",
            )

    def validate_for(self, n_operators: int) -> None:
        """
        Check the config against the size of the operator set it will drive.
        """
        if n_operators < 2:
            raise ConfigurationError(
                f"Compass selection requires at least 2 operators, got {n_operators}.",
                details={"n_operators": n_operators},
            )
        # min_p == 1/N is accepted: the floor then degenerates to uniform.
        if self.min_p * n_operators > 1.0 + 1e-12:
            raise ConfigurationError(
                f"min_p={self.min_p!r} is too large for {n_operators} operators.",
                f"Use min_p <= 1/{n_operators} ({1.0 / n_operators:.6g})",
                {"min_p": self.min_p, "n_operators": n_operators},
            )

    @classmethod
    def from_dict(cls, config: Mapping[str, Any] | None) -> CompassConfig:
        """
        Create a config instance from a dictionary.
        """
        if not config:
            return cls()
        unexpected = set(config) - COMPASS_CONFIG_KEYS
        if unexpected:
            raise ConfigurationError(f"Unsupported compass config keys: {sorted(unexpected)}")
        if "theta" in config and "theta_degrees" in config:
            raise ConfigurationError("Provide either theta or theta_degrees, not both.")
        if config.get("theta_degrees") is not None:
            theta = math.radians(float(config["theta_degrees"]))
        else:
            theta = float(config.get("theta", math.pi / 4))
        rng_seed = config.get("rng_seed")
        return cls(
            theta=theta,
            window_size=int(config.get("window_size", 10)),
            min_p=float(config.get("min_p", 0.05)),
            rng_seed=None if rng_seed is None else int(rng_seed),
            on_selection_failure=str(config.get("on_selection_failure", "last")).lower(),
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the config to a JSON-serializable dictionary.
        """
        return {
            "theta": self.theta,
            "window_size": self.window_size,
            "min_p": self.min_p,
            "rng_seed": self.rng_seed,
            "on_selection_failure": self.on_selection_failure,
        }


__all__ = ["CompassConfig", "COMPASS_CONFIG_KEYS", "SELECTION_FAILURE_POLICIES"]
