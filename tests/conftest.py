"""
Shared pytest fixtures.

clock
    Manually advanced time source for the cache store.
upstream
    In-memory stand-in for FinnhubClient that records every call.
store / service
    A CacheStore on the fake clock and a NewsService over it.
client
    Flask test client wired to ``store`` and ``upstream``.
"""
import datetime

import pytest

from app import create_app
from services.errors import ConfigurationError
from services.news import NewsService
from utils.cache import CacheStore

TODAY = datetime.date(2024, 3, 15)

GENERAL_NEWS = [
    {"id": 1, "headline": "Markets rally", "source": "Reuters", "datetime": 1710500000, "url": "https://example.com/1"},
    {"id": 2, "headline": "Fed holds rates", "source": "CNBC", "datetime": 1710490000, "url": "https://example.com/2"},
]


def company_news(symbol):
    return [{"id": 10, "headline": f"{symbol} headline", "source": "Finnhub", "datetime": 1710400000,
             "url": f"https://example.com/{symbol}", "related": symbol}]


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeUpstream:
    """Records calls; per-endpoint results or exceptions can be queued."""

    def __init__(self, api_key="test-key"):
        self.api_key = api_key
        self.calls = []
        self.general = GENERAL_NEWS
        self.news = {}
        self.quotes = {}
        self.errors = {}

    @property
    def configured(self):
        return bool(self.api_key)

    def _call(self, name, *args):
        if not self.api_key:
            raise ConfigurationError("FINNHUB_API_KEY environment variable is not set")
        self.calls.append((name,) + args)
        err = self.errors.pop(name, None)
        if err is not None:
            raise err

    def general_news(self, category="general"):
        self._call("general_news", category)
        return self.general

    def company_news(self, symbol, start, end):
        self._call("company_news", symbol, start, end)
        return self.news.get(symbol, company_news(symbol))

    def quote(self, symbol):
        self._call("quote", symbol)
        return self.quotes.get(symbol, {"c": 187.5, "d": 1.2, "dp": 0.64, "pc": 186.3})


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def store(clock):
    return CacheStore(ttl_seconds=60, clock=clock)


@pytest.fixture
def service(store, upstream):
    return NewsService(store, upstream, today=lambda: TODAY)


@pytest.fixture
def app(store, upstream):
    app = create_app({"TESTING": True}, store=store, client=upstream)
    app.extensions["news_service"]._today = lambda: TODAY
    return app


@pytest.fixture
def client(app):
    return app.test_client()
