from __future__ import annotations

from typing import Sequence

from ...core.enums import DayType
from ...rates.model import RateTable
from .base import AllocationStrategy, PhaseHours, PhaseSplit


class PremiumStrategy(AllocationStrategy):
    """Weekend, public holiday or night shift: every hour is OT at one premium rate."""

    def split(self, phases: Sequence[PhaseHours]) -> list[PhaseSplit]:
        return [PhaseSplit(phase=p.phase, nt=0.0, ot=p.hours) for p in phases]

    def labour_cost(self, *, nt_hours: float, ot_hours: float, day_type: DayType, rates: RateTable) -> float:
        total = nt_hours + ot_hours
        if not total:
            return 0.0
        return total * rates.premium_rate(day_type)
