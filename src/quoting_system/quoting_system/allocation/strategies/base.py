from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from ...core.enums import AllocationPhase, DayType
from ...rates.model import RateTable


@dataclass(frozen=True)
class PhaseHours:
    phase: AllocationPhase
    hours: float


@dataclass(frozen=True)
class PhaseSplit:
    phase: AllocationPhase
    nt: float
    ot: float


class AllocationStrategy(ABC):
    """Strategy Pattern: how a shift's phases are split and priced."""

    @abstractmethod
    def split(self, phases: Sequence[PhaseHours]) -> list[PhaseSplit]:
        raise NotImplementedError

    @abstractmethod
    def labour_cost(self, *, nt_hours: float, ot_hours: float, day_type: DayType, rates: RateTable) -> float:
        raise NotImplementedError
