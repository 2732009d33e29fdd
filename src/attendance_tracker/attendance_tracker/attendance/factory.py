from __future__ import annotations

from dataclasses import dataclass

from .strategies.auto_strategy import AutoClosureStrategy
from .strategies.base import ClosureStrategy
from .strategies.manual_strategy import ManualClosureStrategy


@dataclass
class ClosureStrategyFactory:
    """Factory Pattern: choose how a session is closed based on who closes it."""

    def for_clock_out(self) -> ClosureStrategy:
        return ManualClosureStrategy()

    def for_day_end(self) -> ClosureStrategy:
        return AutoClosureStrategy()
