from __future__ import annotations

import threading
from typing import Optional, Sequence

from ..core.enums import QuoteStatus
from .model import Quote


class InMemoryQuoteRepository:
    """Process-local quote store; the app's persistence lives outside this package."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._quotes: dict[int, Quote] = {}
        self._last_id = 0

    def next_id(self) -> int:
        with self._lock:
            self._last_id += 1
            return self._last_id

    def get_by_id(self, quote_id: int) -> Optional[Quote]:
        return self._quotes.get(int(quote_id))

    def save(self, quote: Quote) -> None:
        with self._lock:
            self._quotes[quote.quote_id] = quote

    def delete(self, quote_id: int) -> bool:
        with self._lock:
            return self._quotes.pop(int(quote_id), None) is not None

    def list_all(self, *, status: Optional[QuoteStatus] = None) -> Sequence[Quote]:
        items = [q for q in self._quotes.values() if status is None or q.status == status]
        items.sort(key=lambda q: q.quote_id, reverse=True)
        return items
