from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import QuoteStatus
from .model import Quote


class QuoteRepository(Protocol):
    def next_id(self) -> int:
        raise NotImplementedError

    def get_by_id(self, quote_id: int) -> Optional[Quote]:
        raise NotImplementedError

    def save(self, quote: Quote) -> None:
        """Insert or replace by quote_id."""

        raise NotImplementedError

    def delete(self, quote_id: int) -> bool:
        raise NotImplementedError

    def list_all(self, *, status: Optional[QuoteStatus] = None) -> Sequence[Quote]:
        raise NotImplementedError
