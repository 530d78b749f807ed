from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_RATES
from ..core.exceptions import ValidationError
from .model import RateTable
from .repository import CustomerRateRepository

logger = logging.getLogger(__name__)


class RateService:
    """Resolves the active rate table: customer override or global default."""

    def __init__(self, customer_rates: CustomerRateRepository, *, defaults: Optional[RateTable] = None):
        self._customer_rates = customer_rates
        self._defaults = defaults or RateTable.from_mapping(DEFAULT_RATES)

    @property
    def defaults(self) -> RateTable:
        return self._defaults

    def set_defaults(self, rates: Mapping[str, Any] | RateTable) -> RateTable:
        self._defaults = rates if isinstance(rates, RateTable) else RateTable.from_mapping(rates)
        return self._defaults

    def reset_defaults(self) -> RateTable:
        self._defaults = RateTable.from_mapping(DEFAULT_RATES)
        return self._defaults

    def set_customer_rates(self, customer: str, rates: Mapping[str, Any] | RateTable) -> RateTable:
        customer = require_non_empty(str(customer or ""), "Customer")
        table = rates if isinstance(rates, RateTable) else RateTable.from_mapping(rates)
        self._customer_rates.save_for_customer(customer, table)
        logger.info("Saved rate override for customer %s", customer)
        return table

    def update_defaults(self, changes: Mapping[str, Any]) -> RateTable:
        """Replace only the given default rates."""
        self._defaults = self._defaults.merged(changes)
        return self._defaults

    def delete_customer_rates(self, customer: str) -> None:
        customer = require_non_empty(str(customer or ""), "Customer")
        if not self._customer_rates.delete_for_customer(customer):
            raise ValidationError(f"No rate override for customer {customer}")
        logger.info("Deleted rate override for customer %s", customer)

    def override_for(self, customer: Optional[str]) -> Optional[RateTable]:
        """The customer's own table, or None when they have none."""
        customer = str(customer or "").strip()
        if not customer:
            return None
        return self._customer_rates.get_for_customer(customer)

    def resolve(self, customer: Optional[str] = None) -> RateTable:
        override = self.override_for(customer)
        return override if override is not None else self._defaults
