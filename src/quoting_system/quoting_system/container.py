from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .allocation.allocator import ShiftAllocator
from .allocation.factory import AllocationStrategyFactory
from .core.constants import DEFAULT_RATES
from .quotes.memory_quote_repository import InMemoryQuoteRepository
from .quotes.service import QuoteService
from .rates.model import RateTable
from .rates.repository import InMemoryCustomerRateRepository
from .rates.service import RateService
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    quotes_repo: InMemoryQuoteRepository
    customer_rates_repo: InMemoryCustomerRateRepository

    allocator: ShiftAllocator
    rate_service: RateService
    quote_service: QuoteService
    report_service: ReportService


def build_container(*, default_rates: Optional[Mapping[str, Any]] = None) -> Container:
    defaults = RateTable.from_mapping({**DEFAULT_RATES, **(default_rates or {})})

    quotes_repo = InMemoryQuoteRepository()
    customer_rates_repo = InMemoryCustomerRateRepository()

    allocator = ShiftAllocator(strategy_factory=AllocationStrategyFactory())
    rate_service = RateService(customer_rates_repo, defaults=defaults)
    quote_service = QuoteService(quotes_repo, rate_service, allocator=allocator)
    report_service = ReportService(quote_service)

    return Container(
        quotes_repo=quotes_repo,
        customer_rates_repo=customer_rates_repo,
        allocator=allocator,
        rate_service=rate_service,
        quote_service=quote_service,
        report_service=report_service,
    )
