from __future__ import annotations
import threading
from time import time
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Union

CACHE_TTL_SECONDS = 60

GENERAL = "general"
SYMBOL_FIELDS = ("news", "price")


class CacheEntry(NamedTuple):
    """Immutable cached payload. The empty entry (never fetched) has no data and no ``fetched_at``."""
    data: Any = None
    fetched_at: Optional[float] = None

    @classmethod
    def empty(cls) -> "CacheEntry":
        return cls()


class SymbolCache:
    """News and price entries for one ticker. They age independently."""

    __slots__ = ("symbol", "news", "price")

    def __init__(self, symbol: str):
        self.symbol = symbol
        self.news = CacheEntry.empty()
        self.price = CacheEntry.empty()

    def __repr__(self):
        return f"SymbolCache({self.symbol!r}, news={self.news.fetched_at}, price={self.price.fetched_at})"


class CacheStore:
    """
    Two-tier in-memory cache: one general-news entry plus a lazily created
    SymbolCache per ticker. Entries are replaced wholesale, never mutated.

    Stale entries are never evicted; they are treated as invalid and
    overwritten on the next refresh, so the symbol table grows with every
    distinct ticker requested.
    """

    def __init__(self, ttl_seconds: float = CACHE_TTL_SECONDS, clock: Callable[[], float] = time):
        self.ttl = ttl_seconds
        self._clock = clock
        self._general = CacheEntry.empty()
        self._symbols: Dict[str, SymbolCache] = {}
        self._general_lock = threading.Lock()
        self._symbols_lock = threading.Lock()

    @staticmethod
    def _normalize(key: str) -> str:
        return (key or '').strip().upper()

    def is_valid(self, entry: Optional[CacheEntry]) -> bool:
        if entry is None or entry.fetched_at is None:
            return False
        return self._clock() - entry.fetched_at < self.ttl

    def get(self, key: str) -> Union[CacheEntry, SymbolCache]:
        if key == GENERAL:
            return self._general
        symbol = self._normalize(key)
        if not symbol:
            raise ValueError("symbol is required")
        with self._symbols_lock:
            record = self._symbols.get(symbol)
            if record is None:
                record = self._symbols[symbol] = SymbolCache(symbol)
            return record

    def put(self, key: str, data: Any, field: Optional[str] = None) -> CacheEntry:
        if key == GENERAL:
            entry = CacheEntry(data, self._clock())
            with self._general_lock:
                self._general = entry
            return entry

        if field not in SYMBOL_FIELDS:
            raise ValueError(f"field must be one of {SYMBOL_FIELDS}, got {field!r}")
        record = self.get(key)
        entry = CacheEntry(data, self._clock())
        with self._symbols_lock:
            setattr(record, field, entry)
        return entry

    def symbols(self) -> List[str]:
        with self._symbols_lock:
            return list(self._symbols)

    def __len__(self):
        with self._symbols_lock:
            return len(self._symbols)
