from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import NT_DAILY_CEILING_HOURS
from ..core.enums import DayType
from ..shifts.model import Shift
from .strategies.base import AllocationStrategy
from .strategies.premium_strategy import PremiumStrategy
from .strategies.threshold_strategy import ThresholdStrategy


@dataclass
class AllocationStrategyFactory:
    """Factory Pattern: choose the allocation strategy for a shift."""

    ceiling_hours: float = NT_DAILY_CEILING_HOURS

    def for_shift(self, shift: Shift) -> AllocationStrategy:
        if shift.is_night_shift or shift.day_type is not DayType.WEEKDAY:
            return PremiumStrategy()
        return ThresholdStrategy(self.ceiling_hours)
