from __future__ import annotations

from enum import Enum


class DayType(str, Enum):
    """Calendar context of a shift, selects the premium rate."""

    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    PUBLIC_HOLIDAY = "publicHoliday"


class QuoteStatus(str, Enum):
    """Quote lifecycle; gates editability only."""

    DRAFT = "draft"
    QUOTED = "quoted"
    INVOICE = "invoice"
    CLOSED = "closed"

    @property
    def is_locked(self) -> bool:
        return self in {QuoteStatus.QUOTED, QuoteStatus.CLOSED}


class AllocationPhase(str, Enum):
    """Ordered phases of a shift; NT time is consumed in this order."""

    TRAVEL_IN = "travelIn"
    SITE = "site"
    TRAVEL_OUT = "travelOut"
