from __future__ import annotations

from datetime import datetime

import pytest

from src.quoting_system.quoting_system.core.enums import QuoteStatus
from src.quoting_system.quoting_system.core.exceptions import (
    InvalidShiftInput,
    InvalidStatusTransition,
    InvalidTimeFormat,
    QuoteLockedError,
    QuoteNotFound,
    ValidationError,
)
from src.quoting_system.quoting_system.quotes.memory_quote_repository import InMemoryQuoteRepository
from src.quoting_system.quoting_system.quotes.service import QuoteService
from src.quoting_system.quoting_system.rates.repository import InMemoryCustomerRateRepository
from src.quoting_system.quoting_system.rates.service import RateService

RATES = {
    "siteNormal": 100,
    "siteOvertime": 150,
    "weekend": 200,
    "publicHoliday": 250,
    "officeReporting": 160,
    "travel": 80,
    "travelOvertime": 100,
    "travelCharge": 1.3,
    "vehicle": 50,
    "perDiem": 100,
}

WEEKDAY_SHIFT = {
    "date": "2023-10-27",
    "dayType": "weekday",
    "startTime": "08:00",
    "finishTime": "16:00",
    "travelIn": 0.5,
    "travelOut": 0.5,
}


def fixed_clock():
    return datetime(2026, 2, 1, 10, 0, 0)


def make_service() -> tuple[QuoteService, RateService]:
    rate_service = RateService(InMemoryCustomerRateRepository())
    rate_service.set_defaults(RATES)
    return QuoteService(InMemoryQuoteRepository(), rate_service, clock=fixed_clock), rate_service


def test_create_quote_uses_default_rates_and_starts_as_draft():
    svc, _ = make_service()
    quote = svc.create_quote({"customer": "Acme", "jobNo": "J123"})

    assert quote.status == QuoteStatus.DRAFT
    assert quote.quote_number == "00001"
    assert quote.rates.site_normal == 100
    assert quote.last_modified == fixed_clock()
    assert svc.get(quote.quote_id) == quote


def test_create_quote_uses_customer_override_rates():
    svc, rates = make_service()
    rates.set_customer_rates("Acme", {**RATES, "siteNormal": 120})

    quote = svc.create_quote({"customer": "Acme"})
    assert quote.rates.site_normal == 120


def test_changing_customer_picks_up_their_rates():
    svc, rates = make_service()
    rates.set_customer_rates("Beta", {**RATES, "siteNormal": 130})
    quote = svc.create_quote({"customer": "Acme"})

    updated = svc.update_job(quote.quote_id, {"customer": "Beta"})
    assert updated.rates.site_normal == 130
    assert updated.job.customer == "Beta"


def test_add_shift_assigns_id_and_default_tech():
    svc, _ = make_service()
    quote = svc.create_quote({"customer": "Acme", "technicians": ["Alex", "Sam"]})

    first = svc.add_shift(quote.quote_id, WEEKDAY_SHIFT)
    second = svc.add_shift(quote.quote_id, {**WEEKDAY_SHIFT, "tech": "Sam"})

    assert (first.shift_id, first.tech) == (1, "Alex")
    assert (second.shift_id, second.tech) == (2, "Sam")
    assert len(svc.get(quote.quote_id).shifts) == 2


def test_add_shift_rejects_bad_input():
    svc, _ = make_service()
    quote = svc.create_quote()

    with pytest.raises(InvalidTimeFormat):
        svc.add_shift(quote.quote_id, {**WEEKDAY_SHIFT, "startTime": "8am"})
    with pytest.raises(InvalidShiftInput):
        svc.add_shift(quote.quote_id, {**WEEKDAY_SHIFT, "travelIn": -1})
    with pytest.raises(InvalidShiftInput):
        svc.add_shift(quote.quote_id, {**WEEKDAY_SHIFT, "dayType": "holiday"})


def test_update_and_remove_shift():
    svc, _ = make_service()
    quote = svc.create_quote()
    shift = svc.add_shift(quote.quote_id, WEEKDAY_SHIFT)

    updated = svc.update_shift(quote.quote_id, shift.shift_id, {"finishTime": "18:00"})
    assert updated.finish_time == "18:00"
    assert updated.shift_id == shift.shift_id

    svc.remove_shift(quote.quote_id, shift.shift_id)
    assert svc.get(quote.quote_id).shifts == ()

    with pytest.raises(ValidationError):
        svc.remove_shift(quote.quote_id, shift.shift_id)


def test_totals_include_shifts_extras_reporting_and_travel_charge():
    svc, _ = make_service()
    quote = svc.create_quote(
        {"customer": "Acme", "reportingTime": 1, "includeTravelCharge": True, "travelDistanceKm": 100}
    )
    svc.add_shift(quote.quote_id, WEEKDAY_SHIFT)
    svc.add_extra(quote.quote_id, description="Crane hire", cost=200)

    totals = svc.totals(svc.get(quote.quote_id))

    assert totals.shift_total == pytest.approx(825)
    assert totals.extras_total == pytest.approx(200)
    assert totals.reporting_cost == pytest.approx(160)
    assert totals.travel_charge_cost == pytest.approx(130)
    assert totals.total == pytest.approx(1315)
    assert totals.variance is None


def test_travel_charge_only_when_included():
    svc, _ = make_service()
    quote = svc.create_quote({"includeTravelCharge": False, "travelDistanceKm": 100})
    assert svc.totals(quote).travel_charge_cost == 0


def test_variance_against_quoted_amount():
    svc, _ = make_service()
    quote = svc.create_quote({"customer": "Acme", "quotedAmount": 1000})
    svc.add_shift(quote.quote_id, {**WEEKDAY_SHIFT, "finishTime": "18:00"})

    totals = svc.totals(svc.get(quote.quote_id))
    assert totals.total == pytest.approx(1125)
    assert totals.variance == pytest.approx(125)
    assert totals.variance_direction == "higher"


def test_extras_reject_negative_cost_and_blank_description():
    svc, _ = make_service()
    quote = svc.create_quote()

    with pytest.raises(ValidationError):
        svc.add_extra(quote.quote_id, description="Parts", cost=-5)
    with pytest.raises(ValidationError):
        svc.add_extra(quote.quote_id, description=" ", cost=5)


def test_submit_requires_customer():
    svc, _ = make_service()
    quote = svc.create_quote()

    with pytest.raises(ValidationError):
        svc.submit(quote.quote_id)


def test_full_lifecycle_with_unlocks():
    svc, _ = make_service()
    quote = svc.create_quote({"customer": "Acme"})
    qid = quote.quote_id

    assert svc.submit(qid).status == QuoteStatus.QUOTED
    with pytest.raises(QuoteLockedError):
        svc.add_shift(qid, WEEKDAY_SHIFT)

    assert svc.unlock(qid).status == QuoteStatus.DRAFT
    svc.submit(qid)
    assert svc.convert_to_invoice(qid).status == QuoteStatus.INVOICE

    svc.add_shift(qid, WEEKDAY_SHIFT)
    assert svc.close(qid).status == QuoteStatus.CLOSED
    with pytest.raises(QuoteLockedError):
        svc.set_rates(qid, RATES)

    assert svc.unlock(qid).status == QuoteStatus.INVOICE


def test_invalid_transitions():
    svc, _ = make_service()
    quote = svc.create_quote({"customer": "Acme"})

    with pytest.raises(InvalidStatusTransition):
        svc.close(quote.quote_id)
    with pytest.raises(InvalidStatusTransition):
        svc.unlock(quote.quote_id)
    with pytest.raises(InvalidStatusTransition):
        svc.transition(quote.quote_id, "archive")


def test_lifecycle_does_not_change_cost():
    svc, _ = make_service()
    quote = svc.create_quote({"customer": "Acme"})
    svc.add_shift(quote.quote_id, WEEKDAY_SHIFT)

    before = svc.totals(svc.get(quote.quote_id)).total
    after = svc.totals(svc.submit(quote.quote_id)).total
    assert before == after


def test_rename_technician_updates_assigned_shifts():
    svc, _ = make_service()
    quote = svc.create_quote({"technicians": ["Tech 1", "Tech 2"]})
    svc.add_shift(quote.quote_id, {**WEEKDAY_SHIFT, "tech": "Tech 2"})

    updated = svc.rename_technician(quote.quote_id, 1, "Jordan")

    assert updated.job.technicians == ("Tech 1", "Jordan")
    assert updated.shifts[0].tech == "Jordan"


def test_unknown_quote():
    svc, _ = make_service()
    with pytest.raises(QuoteNotFound):
        svc.get(42)
    with pytest.raises(QuoteNotFound):
        svc.delete_quote(42)


def test_list_quotes_by_status():
    svc, _ = make_service()
    a = svc.create_quote({"customer": "A"})
    svc.create_quote({"customer": "B"})
    svc.submit(a.quote_id)

    assert [q.job.customer for q in svc.list_quotes(status=QuoteStatus.QUOTED)] == ["A"]
    assert len(svc.list_quotes()) == 2


def test_changing_to_customer_without_override_keeps_quote_rates():
    svc, _ = make_service()
    quote = svc.create_quote({"customer": "Acme"})
    svc.set_rates(quote.quote_id, {**RATES, "siteNormal": 1})

    updated = svc.update_job(quote.quote_id, {"customer": "Brand New Co"})

    assert updated.job.customer == "Brand New Co"
    assert updated.rates.site_normal == 1


def test_technicians_must_be_a_list():
    svc, _ = make_service()
    with pytest.raises(ValidationError):
        svc.create_quote({"technicians": "Alex"})
