"""Shift cost allocation.

Splits a shift's elapsed time into NT/OT hours per phase (travel-in, site,
travel-out, in that order) and prices the result against a rate table. Pure
and stateless: the same shift and rates always give the same result.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Union

from ..common.datetime_utils import elapsed_hours
from ..common.validators import require_non_negative
from ..core.enums import AllocationPhase, DayType
from ..core.exceptions import InvalidShiftInput
from ..rates.model import RateTable
from ..shifts.model import AllocationResult, Shift, ShiftBreakdown
from .factory import AllocationStrategyFactory
from .strategies.base import PhaseHours

logger = logging.getLogger(__name__)

ShiftInput = Union[Shift, Mapping[str, Any]]
RatesInput = Union[RateTable, Mapping[str, Any]]


class ShiftAllocator:
    def __init__(self, *, strategy_factory: Optional[AllocationStrategyFactory] = None):
        self._factory = strategy_factory or AllocationStrategyFactory()

    def breakdown(self, shift: ShiftInput) -> ShiftBreakdown:
        shift = _as_shift(shift)
        travel_in = require_non_negative(shift.travel_in, "travelIn", error=InvalidShiftInput)
        travel_out = require_non_negative(shift.travel_out, "travelOut", error=InvalidShiftInput)

        elapsed = elapsed_hours(shift.start_time, shift.finish_time)
        site_hours = max(0.0, elapsed - travel_in - travel_out)

        phases = (
            PhaseHours(AllocationPhase.TRAVEL_IN, travel_in),
            PhaseHours(AllocationPhase.SITE, site_hours),
            PhaseHours(AllocationPhase.TRAVEL_OUT, travel_out),
        )
        strategy = self._factory.for_shift(shift)
        split = {s.phase: s for s in strategy.split(phases)}

        t_in = split[AllocationPhase.TRAVEL_IN]
        site = split[AllocationPhase.SITE]
        t_out = split[AllocationPhase.TRAVEL_OUT]
        logger.debug(
            "shift %s %s-%s (%s): travelIn %s/%s site %s/%s travelOut %s/%s",
            shift.date, shift.start_time, shift.finish_time, type(strategy).__name__,
            t_in.nt, t_in.ot, site.nt, site.ot, t_out.nt, t_out.ot,
        )

        return ShiftBreakdown(
            travel_in_nt=t_in.nt,
            travel_in_ot=t_in.ot,
            site_nt=site.nt,
            site_ot=site.ot,
            travel_out_nt=t_out.nt,
            travel_out_ot=t_out.ot,
            total_hours=travel_in + site_hours + travel_out,
            site_hours=site_hours,
            elapsed_hours=elapsed,
        )

    def allocate(self, shift: ShiftInput, rates: RatesInput) -> AllocationResult:
        shift = _as_shift(shift)
        rates = _as_rates(rates)

        b = self.breakdown(shift)
        strategy = self._factory.for_shift(shift)
        cost = strategy.labour_cost(nt_hours=b.nt_hours, ot_hours=b.ot_hours, day_type=shift.day_type, rates=rates)

        if shift.vehicle:
            cost += rates.require("vehicle")
        if shift.per_diem:
            cost += rates.require("per_diem")

        return AllocationResult(breakdown=b, cost=cost)


def _as_shift(shift: ShiftInput) -> Shift:
    if isinstance(shift, Shift):
        if not isinstance(shift.day_type, DayType):
            try:
                return replace(shift, day_type=DayType(shift.day_type))
            except ValueError:
                raise InvalidShiftInput(f"Unknown day type: {shift.day_type!r}")
        return shift
    if isinstance(shift, Mapping):
        return Shift.from_mapping(shift)
    raise InvalidShiftInput("Shift must be a Shift or a mapping")


def _as_rates(rates: RatesInput) -> RateTable:
    if isinstance(rates, RateTable):
        return rates
    return RateTable.from_mapping(rates)


_default_allocator = ShiftAllocator()


def allocate(shift: ShiftInput, rates: RatesInput) -> AllocationResult:
    """Allocate one shift into NT/OT buckets and price it."""
    return _default_allocator.allocate(shift, rates)
