from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.validators import require_non_negative
from ..core.enums import QuoteStatus
from ..core.exceptions import ValidationError
from ..rates.model import RateTable
from ..shifts.model import Shift


@dataclass(frozen=True)
class JobDetails:
    """Job metadata shown on the quote header."""

    customer: str = ""
    job_no: str = ""
    location: str = ""
    description: str = ""
    technicians: tuple[str, ...] = ("Tech 1",)
    reporting_time: float = 0.0
    include_travel_charge: bool = False
    travel_distance_km: float = 0.0
    quoted_amount: float = 0.0
    variance_reason: str = ""
    external_link: str = ""
    admin_comments: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, base: Optional["JobDetails"] = None) -> "JobDetails":
        """Build from camelCase keys, keeping ``base`` values for keys not given."""
        base = base or cls()
        techs = data.get("technicians")
        if techs is not None and not isinstance(techs, (list, tuple)):
            raise ValidationError("technicians must be a list of names")
        return cls(
            customer=str(data.get("customer", base.customer) or "").strip(),
            job_no=str(data.get("jobNo", base.job_no) or "").strip(),
            location=str(data.get("location", base.location) or ""),
            description=str(data.get("description", base.description) or ""),
            technicians=tuple(str(t) for t in techs) if techs is not None else base.technicians,
            reporting_time=require_non_negative(data.get("reportingTime", base.reporting_time) or 0, "reportingTime"),
            include_travel_charge=bool(data.get("includeTravelCharge", base.include_travel_charge)),
            travel_distance_km=require_non_negative(
                data.get("travelDistanceKm", base.travel_distance_km) or 0, "travelDistanceKm"
            ),
            quoted_amount=require_non_negative(data.get("quotedAmount", base.quoted_amount) or 0, "quotedAmount"),
            variance_reason=str(data.get("varianceReason", base.variance_reason) or ""),
            external_link=str(data.get("externalLink", base.external_link) or ""),
            admin_comments=str(data.get("adminComments", base.admin_comments) or ""),
        )

    def to_dict(self) -> dict:
        return {
            "customer": self.customer,
            "jobNo": self.job_no,
            "location": self.location,
            "description": self.description,
            "technicians": list(self.technicians),
            "reportingTime": self.reporting_time,
            "includeTravelCharge": self.include_travel_charge,
            "travelDistanceKm": self.travel_distance_km,
            "quotedAmount": self.quoted_amount,
            "varianceReason": self.variance_reason,
            "externalLink": self.external_link,
            "adminComments": self.admin_comments,
        }


@dataclass(frozen=True)
class ExtraItem:
    extra_id: int
    description: str
    cost: float = 0.0

    def to_dict(self) -> dict:
        return {"id": self.extra_id, "description": self.description, "cost": self.cost}


@dataclass(frozen=True)
class Quote:
    """Aggregate root: job details, shifts, extras and the rate snapshot."""

    quote_id: int
    quote_number: str
    rates: RateTable
    status: QuoteStatus = QuoteStatus.DRAFT
    job: JobDetails = field(default_factory=JobDetails)
    shifts: tuple[Shift, ...] = ()
    extras: tuple[ExtraItem, ...] = ()
    last_modified: Optional[datetime] = None

    @property
    def is_locked(self) -> bool:
        return self.status.is_locked

    def to_dict(self) -> dict:
        return {
            "id": self.quote_id,
            "quoteNumber": self.quote_number,
            "status": self.status.value,
            "jobDetails": self.job.to_dict(),
            "shifts": [s.to_dict() for s in self.shifts],
            "extras": [e.to_dict() for e in self.extras],
            "rates": self.rates.to_dict(),
            "lastModified": self.last_modified.isoformat() if self.last_modified else None,
        }


@dataclass(frozen=True)
class QuoteTotals:
    shift_total: float
    extras_total: float
    reporting_cost: float
    travel_charge_cost: float
    total: float
    variance: Optional[float] = None

    @property
    def variance_direction(self) -> Optional[str]:
        if self.variance is None:
            return None
        return "higher" if self.variance > 0 else "lower"

    def to_dict(self) -> dict:
        return {
            "shiftTotal": self.shift_total,
            "extrasTotal": self.extras_total,
            "reportingCost": self.reporting_cost,
            "travelChargeCost": self.travel_charge_cost,
            "total": self.total,
            "variance": self.variance,
            "varianceDirection": self.variance_direction,
        }
