from __future__ import annotations

from typing import Optional, Protocol

from .model import RateTable


class CustomerRateRepository(Protocol):
    def get_for_customer(self, customer: str) -> Optional[RateTable]:
        raise NotImplementedError

    def save_for_customer(self, customer: str, rates: RateTable) -> None:
        raise NotImplementedError

    def delete_for_customer(self, customer: str) -> bool:
        raise NotImplementedError


class InMemoryCustomerRateRepository:
    """Customer override tables keyed by customer name (case-insensitive)."""

    def __init__(self) -> None:
        self._by_customer: dict[str, RateTable] = {}

    @staticmethod
    def _key(customer: str) -> str:
        return str(customer or "").strip().lower()

    def get_for_customer(self, customer: str) -> Optional[RateTable]:
        return self._by_customer.get(self._key(customer))

    def save_for_customer(self, customer: str, rates: RateTable) -> None:
        self._by_customer[self._key(customer)] = rates

    def delete_for_customer(self, customer: str) -> bool:
        return self._by_customer.pop(self._key(customer), None) is not None
