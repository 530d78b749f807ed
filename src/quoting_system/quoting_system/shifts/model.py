from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..common.validators import require_non_negative
from ..core.enums import DayType
from ..core.exceptions import InvalidShiftInput


@dataclass(frozen=True)
class Shift:
    """Domain entity: one work shift on a quote."""

    date: str
    day_type: DayType
    start_time: str
    finish_time: str
    travel_in: float = 0.0
    travel_out: float = 0.0
    is_night_shift: bool = False
    vehicle: bool = False
    per_diem: bool = False
    tech: str = ""
    shift_id: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Shift":
        """Build from the camelCase JSON shape used by the quoting UI."""
        try:
            day_type = DayType(data.get("dayType", DayType.WEEKDAY.value))
        except ValueError:
            raise InvalidShiftInput(f"Unknown day type: {data.get('dayType')!r}")

        raw_id = data.get("id")
        try:
            shift_id = int(raw_id) if raw_id is not None else None
        except (TypeError, ValueError):
            raise InvalidShiftInput(f"Invalid shift id: {raw_id!r}")

        return cls(
            date=str(data.get("date") or ""),
            day_type=day_type,
            start_time=str(data.get("startTime") or ""),
            finish_time=str(data.get("finishTime") or ""),
            travel_in=require_non_negative(data.get("travelIn", 0) or 0, "travelIn", error=InvalidShiftInput),
            travel_out=require_non_negative(data.get("travelOut", 0) or 0, "travelOut", error=InvalidShiftInput),
            is_night_shift=bool(data.get("isNightShift", False)),
            vehicle=bool(data.get("vehicle", False)),
            per_diem=bool(data.get("perDiem", False)),
            tech=str(data.get("tech") or ""),
            shift_id=shift_id,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "date": self.date,
            "dayType": self.day_type.value,
            "startTime": self.start_time,
            "finishTime": self.finish_time,
            "travelIn": self.travel_in,
            "travelOut": self.travel_out,
            "isNightShift": self.is_night_shift,
            "vehicle": self.vehicle,
            "perDiem": self.per_diem,
            "tech": self.tech,
        }


@dataclass(frozen=True)
class ShiftBreakdown:
    """NT/OT hours per phase. The six buckets sum to total_hours."""

    travel_in_nt: float = 0.0
    travel_in_ot: float = 0.0
    site_nt: float = 0.0
    site_ot: float = 0.0
    travel_out_nt: float = 0.0
    travel_out_ot: float = 0.0
    total_hours: float = 0.0
    site_hours: float = 0.0
    elapsed_hours: float = 0.0

    @property
    def nt_hours(self) -> float:
        return self.travel_in_nt + self.site_nt + self.travel_out_nt

    @property
    def ot_hours(self) -> float:
        return self.travel_in_ot + self.site_ot + self.travel_out_ot

    def to_dict(self) -> dict:
        return {
            "travelInNT": self.travel_in_nt,
            "travelInOT": self.travel_in_ot,
            "siteNT": self.site_nt,
            "siteOT": self.site_ot,
            "travelOutNT": self.travel_out_nt,
            "travelOutOT": self.travel_out_ot,
            "totalHours": self.total_hours,
            "siteHours": self.site_hours,
            "elapsedHours": self.elapsed_hours,
        }


@dataclass(frozen=True)
class AllocationResult:
    breakdown: ShiftBreakdown = field(default_factory=ShiftBreakdown)
    cost: float = 0.0

    def to_dict(self) -> dict:
        return {"breakdown": self.breakdown.to_dict(), "cost": self.cost}
