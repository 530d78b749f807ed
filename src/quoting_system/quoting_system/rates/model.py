from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from ..common.validators import require_non_negative
from ..core.enums import DayType
from ..core.exceptions import InvalidRateTable

# snake_case field -> camelCase key of the JSON rate config
_JSON_KEYS = {
    "site_normal": "siteNormal",
    "site_overtime": "siteOvertime",
    "weekend": "weekend",
    "public_holiday": "publicHoliday",
    "travel": "travel",
    "travel_overtime": "travelOvertime",
    "vehicle": "vehicle",
    "per_diem": "perDiem",
    "office_reporting": "officeReporting",
    "travel_charge": "travelCharge",
    "travel_charge_ex_brisbane": "travelChargeExBrisbane",
    "standard_day_rate": "standardDayRate",
    "weekend_day_rate": "weekendDayRate",
}


@dataclass(frozen=True)
class RateTable:
    """Flat snapshot of dollar rates.

    A rate left as None is treated as missing; asking for it through
    ``require`` raises InvalidRateTable, so a partial table can still price
    shifts that never touch the missing rate.
    """

    site_normal: Optional[float] = None
    site_overtime: Optional[float] = None
    weekend: Optional[float] = None
    public_holiday: Optional[float] = None
    travel: Optional[float] = None
    travel_overtime: Optional[float] = None
    vehicle: Optional[float] = None
    per_diem: Optional[float] = None
    office_reporting: Optional[float] = None
    travel_charge: Optional[float] = None
    travel_charge_ex_brisbane: Optional[float] = None
    standard_day_rate: Optional[float] = None
    weekend_day_rate: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RateTable":
        """Build from camelCase (JSON) or snake_case keys; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise InvalidRateTable("Rate table must be a mapping")

        values: dict[str, Optional[float]] = {}
        for name, json_key in _JSON_KEYS.items():
            raw = data.get(json_key, data.get(name))
            if raw is None:
                continue
            values[name] = require_non_negative(raw, json_key, error=InvalidRateTable)
        return cls(**values)

    def require(self, name: str) -> float:
        value = getattr(self, name, None)
        if value is None:
            raise InvalidRateTable(f"Missing rate: {_JSON_KEYS.get(name, name)}")
        return float(value)

    def premium_rate(self, day_type: DayType) -> float:
        """Overtime-equivalent rate for the day type."""
        if day_type is DayType.PUBLIC_HOLIDAY:
            return self.require("public_holiday")
        if day_type is DayType.WEEKEND:
            return self.require("weekend")
        if day_type is DayType.WEEKDAY:
            return self.require("site_overtime")
        raise InvalidRateTable(f"No premium rate for day type {day_type!r}")

    def merged(self, overrides: Mapping[str, Any]) -> "RateTable":
        """Copy with the given rates replaced."""
        base = {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}
        base.update(RateTable.from_mapping(overrides).to_dict(snake_case=True))
        return RateTable(**base)

    def to_dict(self, *, snake_case: bool = False) -> dict:
        out = {}
        for name, json_key in _JSON_KEYS.items():
            value = getattr(self, name)
            if value is not None:
                out[name if snake_case else json_key] = value
        return out
