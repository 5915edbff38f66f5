"""
CoinGecko price feed: GET /coins/markets on the public REST API.

One request per call; no retry, no caching. Failures raise PriceFeedError and
are never swallowed here; the tracker decides how to degrade.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd
import requests

from coinfolio_core.config import Settings
from coinfolio_core.errors import PriceFeedError
from coinfolio_core.feeds.base import DEFAULT_PER_PAGE, DEFAULT_VS_CURRENCY, MARKET_COLUMNS, PriceFeed

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
MARKETS_ENDPOINT = "/coins/markets"
API_KEY_HEADER = "x-cg-demo-api-key"


class CoinGeckoPriceFeed(PriceFeed):
    """
    Live market data from CoinGecko.

    - api_key: optional demo key, sent as the x-cg-demo-api-key header.
    - timeout: seconds per request; None waits indefinitely.
    - session: requests.Session (or compatible) to reuse connections; one is created if omitted.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: str | None = None,
        *,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers["Accept"] = "application/json"
        if api_key:
            self._session.headers[API_KEY_HEADER] = api_key

    @classmethod
    def from_settings(cls, settings: Settings, *, session: requests.Session | None = None) -> "CoinGeckoPriceFeed":
        return cls(settings.api_base_url, settings.api_key, timeout=settings.timeout, session=session)

    def _build_params(
        self,
        ids: list[str] | None,
        vs_currency: str,
        per_page: int,
        page: int,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"vs_currency": vs_currency}
        if ids:
            params["ids"] = ",".join(ids)
        params.update(
            {
                "order": "market_cap_desc",
                "per_page": per_page,
                "page": page,
                "sparkline": "false",
            }
        )
        return params

    def get_market_data(
        self,
        ids: list[str] | None = None,
        *,
        vs_currency: str = DEFAULT_VS_CURRENCY,
        per_page: int = DEFAULT_PER_PAGE,
        page: int = 1,
    ) -> pd.DataFrame:
        url = f"{self.base_url}{MARKETS_ENDPOINT}"
        params = self._build_params(ids, vs_currency, per_page, page)
        logger.debug("GET %s params=%s", url, params)

        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise PriceFeedError(f"API request failed: {e!s}") from e

        if not 200 <= response.status_code < 300:
            raise PriceFeedError(f"API request failed with status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise PriceFeedError("API response is not valid JSON") from e
        if not isinstance(payload, list):
            raise PriceFeedError(f"Unexpected API response: expected a list, got {type(payload).__name__}")

        rows = [{col: item.get(col) for col in MARKET_COLUMNS} for item in payload if isinstance(item, dict)]
        logger.info("Fetched %d market rows (vs_currency=%s)", len(rows), vs_currency)
        return pd.DataFrame(rows, columns=list(MARKET_COLUMNS))
