from __future__ import annotations
import datetime
import logging
from typing import Any, Callable, Dict, Optional, Tuple

from services.errors import InvalidSymbolError
from utils.cache import GENERAL, CacheStore

logger = logging.getLogger(__name__)

NEWS_WINDOW_DAYS = 7


def _utc_today() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


def _normalize_symbol(symbol: str) -> str:
    return (symbol or '').strip().upper()


def _extract_price(quote: Dict[str, Any]) -> Optional[float]:
    # 'c' is the current price; Finnhub sends 0 for unknown symbols
    price = quote.get("c")
    if not price or isinstance(price, bool) or not isinstance(price, (int, float)):
        return None
    return price


class NewsService:
    """
    Serves general and per-symbol news from the cache, refreshing stale
    entries from the upstream client. Each sub-fetch writes its own cache
    entry as soon as it succeeds.
    """

    def __init__(self, store: CacheStore, client, today: Callable[[], datetime.date] = _utc_today):
        self.store = store
        self.client = client
        self._today = today

    def get_general_news(self) -> Any:
        entry = self.store.get(GENERAL)
        if self.store.is_valid(entry):
            logger.info("Cache hit: general news")
            return entry.data

        logger.info("Fetching general news (Finnhub)")
        news = self.client.general_news("general")
        self.store.put(GENERAL, news)
        return news

    def news_window(self) -> Tuple[datetime.date, datetime.date]:
        end = self._today()
        return end - datetime.timedelta(days=NEWS_WINDOW_DAYS), end

    def _resolve_news(self, symbol: str) -> Tuple[Any, bool]:
        entry = self.store.get(symbol).news
        if self.store.is_valid(entry):
            logger.info(f"Cache hit: news for {symbol}")
            return entry.data, False

        start, end = self.news_window()
        logger.info(f"Fetching company news (Finnhub) for {symbol} {start}..{end}")
        news = self.client.company_news(symbol, start, end)
        self.store.put(symbol, news, field="news")
        return news, True

    def _resolve_price(self, symbol: str) -> Tuple[Optional[float], bool]:
        entry = self.store.get(symbol).price
        if self.store.is_valid(entry):
            logger.info(f"Cache hit: price for {symbol}")
            return entry.data, False

        logger.info(f"Fetching quote (Finnhub) for {symbol}")
        price = _extract_price(self.client.quote(symbol))
        self.store.put(symbol, price, field="price")
        return price, True

    def get_symbol_news(self, symbol: str) -> Dict[str, Any]:
        symbol = _normalize_symbol(symbol)
        if not symbol:
            raise InvalidSymbolError("symbol is required")
        self.store.get(symbol)

        news, news_fetched = self._resolve_news(symbol)
        price, price_fetched = self._resolve_price(symbol)

        if not isinstance(news, list):
            logger.warning(f"Unexpected news payload for {symbol}: {type(news).__name__}, returning no articles")
            news = []

        return {
            "symbol": symbol,
            "price": price,
            "news": news,
            "source": "api" if news_fetched or price_fetched else "cache",
        }
