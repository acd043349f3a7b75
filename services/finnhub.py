from __future__ import annotations
import datetime
import logging
from typing import Any, Dict, Optional

import requests

from services.errors import ConfigurationError, RateLimited, UpstreamError
from utils.config import DEFAULT_FINNHUB_BASE_URL

logger = logging.getLogger(__name__)


class FinnhubClient:
    """
    Thin wrapper over the Finnhub REST API.
    Reference: https://finnhub.io/docs/api

    Returns decoded JSON as-is; classification of failures is the only
    interpretation done here.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_FINNHUB_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get(self, path: str, params: Dict[str, Any]) -> Any:
        if not self.api_key:
            raise ConfigurationError("FINNHUB_API_KEY environment variable is not set")

        url = f"{self.base_url}{path}"
        logger.info(f"Finnhub request: {path} {params}")
        try:
            resp = self.session.get(url, params={**params, "token": self.api_key}, timeout=self.timeout)
        except requests.RequestException as e:
            # str(e) carries the full URL, token included
            logger.error(f"Finnhub request failed: {path}: {e.__class__.__name__}")
            raise UpstreamError(
                f"Finnhub API error: upstream unreachable ({e.__class__.__name__})",
                details={"path": path},
            ) from None

        if resp.status_code == 429:
            logger.warning(f"Finnhub rate limit hit on {path}")
            raise RateLimited(details={"path": path})
        if not 200 <= resp.status_code < 300:
            reason = resp.reason or f"HTTP {resp.status_code}"
            logger.warning(f"Finnhub {path} returned {resp.status_code} {reason}")
            raise UpstreamError(
                f"Finnhub API error: {reason}",
                details={"path": path, "status": resp.status_code},
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            logger.error(f"Finnhub {path} returned a non-JSON body: {e}")
            raise UpstreamError("Finnhub API error: invalid JSON response", details={"path": path})

    def general_news(self, category: str = "general") -> Any:
        return self._get("/news", {"category": category})

    def company_news(self, symbol: str, start: datetime.date, end: datetime.date) -> Any:
        return self._get("/company-news", {
            "symbol": symbol,
            "from": start.isoformat(),
            "to": end.isoformat(),
        })

    def quote(self, symbol: str) -> Dict[str, Any]:
        data = self._get("/quote", {"symbol": symbol})
        if not isinstance(data, dict):
            raise UpstreamError("Finnhub API error: malformed quote response", details={"symbol": symbol})
        return data
