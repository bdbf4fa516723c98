"""
qdcompass exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All qdcompass-specific exceptions inherit from QDCompassError for easy catching.

Example:
    try:
        operator = selector.request_choice()
    except SelectionError as e:
        logger.error("Aborting run: %s", e)
        logger.error("Suggestion: %s", e.suggestion)
"""

from __future__ import annotations

from typing import Any


class QDCompassError(Exception):
    """
    Base exception for all qdcompass errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(QDCompassError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidOperatorSetError(ConfigurationError):
    """Raised when the registered operators cannot form a selectable set."""

    def __init__(self, message: str, n_operators: int | None = None) -> None:
        suggestion = "Register at least two operators with unique, non-empty ids"
        super().__init__(message, suggestion, {"n_operators": n_operators})


# =============================================================================
# Selection Errors
# =============================================================================


class SelectionError(QDCompassError):
    """
    Base class for contract violations raised while selecting operators.

    Adaptive state can no longer be trusted once one of these is raised; the
    embedding optimizer is expected to abort the current run.
    """

    pass


class SequencingError(SelectionError):
    """Raised when request_choice/report_feedback are called out of order."""

    def __init__(self, message: str, state: str | None = None) -> None:
        suggestion = "Alternate request_choice() and report_feedback() once per generation"
        super().__init__(message, suggestion, {"state": state})


class InvariantError(SelectionError):
    """Raised when award or probability computation breaks an internal invariant."""

    def __init__(self, message: str, values: Any = None) -> None:
        suggestion = "Check that fitness values are finite; this usually indicates a logic bug"
        super().__init__(message, suggestion, {"values": values})


class SelectionFailure(SelectionError):
    """Raised when roulette sampling does not reach the random draw."""

    def __init__(self, draw: float, total: float) -> None:
        message = f"No operator chosen for draw {draw!r} (cumulative probability {total!r})."
        suggestion = "Use on_selection_failure='last' to fall back to the last operator"
        super().__init__(message, suggestion, {"draw": draw, "total": total})


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Base
    "QDCompassError",
    # Configuration
    "ConfigurationError",
    "InvalidOperatorSetError",
    # Selection
    "SelectionError",
    "SequencingError",
    "InvariantError",
    "SelectionFailure",
]
