"""
Error types for the intake quality gate.

Malformed report data is never an error here: it degrades to minimum scores.
Rejections are results, not exceptions. What remains is programmer error,
chiefly a mis-tuned constant in ``thresholds``.
"""

from dataclasses import dataclass
from typing import Optional


class IntakeError(Exception):
    """Base class for errors raised by the intake package."""


@dataclass
class ConfigurationError(IntakeError, ValueError):
    """A tuned constant violates an ordering or positivity rule."""
    setting: str
    message: str
    value: Optional[object] = None

    def __str__(self):
        if self.value is None:
            return f"{self.setting}: {self.message}"
        return f"{self.setting}: {self.message} (got {self.value!r})"
