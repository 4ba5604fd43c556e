"""Named engine constants.

The defaults travel through the engine inside an ``EngineLimits`` value;
services build one from configuration.
"""
from __future__ import annotations

from dataclasses import dataclass

CLOSURE_EPSILON = 0.01  # balances at or below this are paid off
DEFAULT_MAX_MONTHS = 600  # 50 years


@dataclass(frozen=True)
class EngineLimits:
    """Closure threshold and termination bound for one projection run."""
    closure_epsilon: float = CLOSURE_EPSILON
    max_months: int = DEFAULT_MAX_MONTHS

    def with_max_months(self, max_months: int | None) -> EngineLimits:
        """Return a copy with ``max_months`` overridden when provided."""
        if max_months is None:
            return self
        return EngineLimits(closure_epsilon=self.closure_epsilon, max_months=max_months)
