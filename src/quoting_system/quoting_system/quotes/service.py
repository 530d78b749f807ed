from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Sequence

from ..allocation.allocator import ShiftAllocator
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_non_negative
from ..core.constants import VARIANCE_TOLERANCE
from ..core.enums import QuoteStatus
from ..core.exceptions import InvalidStatusTransition, QuoteLockedError, QuoteNotFound, ValidationError
from ..rates.model import RateTable
from ..rates.service import RateService
from ..shifts.model import AllocationResult, Shift
from .model import ExtraItem, JobDetails, Quote, QuoteTotals
from .repository import QuoteRepository

logger = logging.getLogger(__name__)

# (action, current status) -> next status
_TRANSITIONS: dict[tuple[str, QuoteStatus], QuoteStatus] = {
    ("submit", QuoteStatus.DRAFT): QuoteStatus.QUOTED,
    ("convert_to_invoice", QuoteStatus.QUOTED): QuoteStatus.INVOICE,
    ("close", QuoteStatus.INVOICE): QuoteStatus.CLOSED,
    ("unlock", QuoteStatus.QUOTED): QuoteStatus.DRAFT,
    ("unlock", QuoteStatus.CLOSED): QuoteStatus.INVOICE,
}
ACTIONS = frozenset(action for action, _ in _TRANSITIONS)


class QuoteService:
    def __init__(
        self,
        quotes: QuoteRepository,
        rates: RateService,
        *,
        allocator: Optional[ShiftAllocator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._quotes = quotes
        self._rates = rates
        self._allocator = allocator or ShiftAllocator()
        self._clock = clock

    # ---- queries ----

    def get(self, quote_id: int) -> Quote:
        quote = self._quotes.get_by_id(int(quote_id))
        if not quote:
            raise QuoteNotFound(f"Quote {quote_id} not found")
        return quote

    def list_quotes(self, *, status: Optional[QuoteStatus] = None) -> Sequence[Quote]:
        return self._quotes.list_all(status=status)

    def allocations(self, quote: Quote) -> list[tuple[Shift, AllocationResult]]:
        return [(s, self._allocator.allocate(s, quote.rates)) for s in quote.shifts]

    def totals(self, quote: Quote) -> QuoteTotals:
        shift_total = sum(r.cost for _, r in self.allocations(quote))
        extras_total = sum(e.cost for e in quote.extras)

        reporting_cost = 0.0
        if quote.job.reporting_time:
            reporting_cost = quote.job.reporting_time * quote.rates.require("office_reporting")

        travel_charge_cost = 0.0
        if quote.job.include_travel_charge and quote.job.travel_distance_km:
            travel_charge_cost = quote.job.travel_distance_km * quote.rates.require("travel_charge")

        total = shift_total + extras_total + reporting_cost + travel_charge_cost

        variance = None
        if quote.job.quoted_amount > 0:
            diff = total - quote.job.quoted_amount
            if abs(diff) > VARIANCE_TOLERANCE:
                variance = diff

        return QuoteTotals(
            shift_total=shift_total,
            extras_total=extras_total,
            reporting_cost=reporting_cost,
            travel_charge_cost=travel_charge_cost,
            total=total,
            variance=variance,
        )

    # ---- lifecycle ----

    def create_quote(self, job: Optional[Mapping[str, Any]] = None) -> Quote:
        details = JobDetails.from_mapping(job or {})
        quote_id = self._quotes.next_id()
        quote = Quote(
            quote_id=quote_id,
            quote_number=f"{quote_id:05d}",
            rates=self._rates.resolve(details.customer),
            job=details,
            last_modified=self._clock(),
        )
        self._quotes.save(quote)
        return quote

    def delete_quote(self, quote_id: int) -> None:
        if not self._quotes.delete(int(quote_id)):
            raise QuoteNotFound(f"Quote {quote_id} not found")

    def transition(self, quote_id: int, action: str) -> Quote:
        quote = self.get(quote_id)
        target = _TRANSITIONS.get((action, quote.status))
        if target is None:
            raise InvalidStatusTransition(f"Cannot {action} a quote in status {quote.status.value}")

        if target == QuoteStatus.QUOTED and not quote.job.customer:
            raise ValidationError("Customer name is required before saving a quote")

        logger.info("Quote %s: %s -> %s", quote.quote_number, quote.status.value, target.value)
        return self._save(replace(quote, status=target))

    def submit(self, quote_id: int) -> Quote:
        return self.transition(quote_id, "submit")

    def convert_to_invoice(self, quote_id: int) -> Quote:
        return self.transition(quote_id, "convert_to_invoice")

    def close(self, quote_id: int) -> Quote:
        return self.transition(quote_id, "close")

    def unlock(self, quote_id: int) -> Quote:
        return self.transition(quote_id, "unlock")

    # ---- edits (gated by status) ----

    def update_job(self, quote_id: int, changes: Mapping[str, Any]) -> Quote:
        quote = self._editable(quote_id)
        job = JobDetails.from_mapping(changes, base=quote.job)

        rates = quote.rates
        if job.customer != quote.job.customer:
            # Only a saved customer table replaces the quote's current rates.
            override = self._rates.override_for(job.customer)
            if override is not None:
                rates = override
        return self._save(replace(quote, job=job, rates=rates))

    def set_rates(self, quote_id: int, rates: Mapping[str, Any] | RateTable) -> Quote:
        quote = self._editable(quote_id)
        table = rates if isinstance(rates, RateTable) else RateTable.from_mapping(rates)
        return self._save(replace(quote, rates=table))

    def add_shift(self, quote_id: int, shift: Mapping[str, Any] | Shift) -> Shift:
        quote = self._editable(quote_id)
        shift = shift if isinstance(shift, Shift) else Shift.from_mapping(shift)
        # Validate times/travel before storing.
        self._allocator.breakdown(shift)

        next_id = max((s.shift_id or 0 for s in quote.shifts), default=0) + 1
        default_tech = quote.job.technicians[0] if quote.job.technicians else ""
        shift = replace(shift, shift_id=next_id, tech=shift.tech or default_tech)
        self._save(replace(quote, shifts=quote.shifts + (shift,)))
        return shift

    def update_shift(self, quote_id: int, shift_id: int, changes: Mapping[str, Any]) -> Shift:
        quote = self._editable(quote_id)
        current = self._find_shift(quote, shift_id)
        updated = Shift.from_mapping({**current.to_dict(), **changes, "id": current.shift_id})
        self._allocator.breakdown(updated)

        shifts = tuple(updated if s.shift_id == current.shift_id else s for s in quote.shifts)
        self._save(replace(quote, shifts=shifts))
        return updated

    def remove_shift(self, quote_id: int, shift_id: int) -> None:
        quote = self._editable(quote_id)
        current = self._find_shift(quote, shift_id)
        self._save(replace(quote, shifts=tuple(s for s in quote.shifts if s.shift_id != current.shift_id)))

    def add_extra(self, quote_id: int, *, description: str, cost: Any) -> ExtraItem:
        quote = self._editable(quote_id)
        extra = ExtraItem(
            extra_id=max((e.extra_id for e in quote.extras), default=0) + 1,
            description=require_non_empty(description, "Description"),
            cost=require_non_negative(cost, "Cost"),
        )
        self._save(replace(quote, extras=quote.extras + (extra,)))
        return extra

    def remove_extra(self, quote_id: int, extra_id: int) -> None:
        quote = self._editable(quote_id)
        extras = tuple(e for e in quote.extras if e.extra_id != int(extra_id))
        if len(extras) == len(quote.extras):
            raise ValidationError(f"Extra {extra_id} not found")
        self._save(replace(quote, extras=extras))

    def rename_technician(self, quote_id: int, index: int, new_name: str) -> Quote:
        """Rename a technician and re-point the shifts assigned to them."""
        quote = self._editable(quote_id)
        techs = list(quote.job.technicians)
        if not 0 <= int(index) < len(techs):
            raise ValidationError("Technician index out of range")

        new_name = require_non_empty(new_name, "Technician")
        old_name = techs[int(index)]
        techs[int(index)] = new_name
        shifts = tuple(replace(s, tech=new_name) if s.tech == old_name else s for s in quote.shifts)
        return self._save(replace(quote, job=replace(quote.job, technicians=tuple(techs)), shifts=shifts))

    # ---- helpers ----

    def _editable(self, quote_id: int) -> Quote:
        quote = self.get(quote_id)
        if quote.is_locked:
            raise QuoteLockedError(f"Quote {quote.quote_number} is {quote.status.value}; unlock it to edit")
        return quote

    @staticmethod
    def _find_shift(quote: Quote, shift_id: int) -> Shift:
        for s in quote.shifts:
            if s.shift_id == int(shift_id):
                return s
        raise ValidationError(f"Shift {shift_id} not found")

    def _save(self, quote: Quote) -> Quote:
        quote = replace(quote, last_modified=self._clock())
        self._quotes.save(quote)
        return quote
