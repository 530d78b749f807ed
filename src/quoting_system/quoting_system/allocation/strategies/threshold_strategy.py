from __future__ import annotations

from typing import Sequence

from ...core.constants import NT_DAILY_CEILING_HOURS
from ...core.enums import DayType
from ...rates.model import RateTable
from .base import AllocationStrategy, PhaseHours, PhaseSplit


class ThresholdStrategy(AllocationStrategy):
    """Weekday day shift: NT up to the daily ceiling, consumed phase by phase."""

    def __init__(self, ceiling_hours: float = NT_DAILY_CEILING_HOURS):
        self._ceiling = float(ceiling_hours)

    def split(self, phases: Sequence[PhaseHours]) -> list[PhaseSplit]:
        consumed = 0.0
        out: list[PhaseSplit] = []
        for p in phases:
            nt = max(0.0, min(p.hours, self._ceiling - consumed))
            out.append(PhaseSplit(phase=p.phase, nt=nt, ot=p.hours - nt))
            consumed += p.hours
        return out

    def labour_cost(self, *, nt_hours: float, ot_hours: float, day_type: DayType, rates: RateTable) -> float:
        # Travel and site hours share the site rates.
        cost = 0.0
        if nt_hours:
            cost += nt_hours * rates.require("site_normal")
        if ot_hours:
            cost += ot_hours * rates.premium_rate(day_type)
        return cost
