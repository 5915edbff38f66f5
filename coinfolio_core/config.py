"""
Settings read from the environment.

All variables are optional; defaults target the public CoinGecko API and a
local storage directory.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

API_BASE_URL_ENV = "COINFOLIO_API_BASE_URL"
API_KEY_ENV = "COINFOLIO_API_KEY"
VS_CURRENCY_ENV = "COINFOLIO_VS_CURRENCY"
STORAGE_KEY_ENV = "COINFOLIO_STORAGE_KEY"
STORAGE_DIR_ENV = "COINFOLIO_STORAGE_DIR"
TIMEOUT_ENV = "COINFOLIO_TIMEOUT"


@dataclass(frozen=True)
class Settings:
    api_base_url: str = "https://api.coingecko.com/api/v3"
    api_key: str | None = None
    vs_currency: str = "usd"
    storage_key: str = "cryptoPortfolio"
    storage_dir: Path = Path("~/.coinfolio")
    timeout: float | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables. Empty values count as unset.
        Raises ValueError if COINFOLIO_TIMEOUT is set but not a positive number.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str) -> str | None:
            value = env.get(name, "").strip()
            return value or None

        timeout: float | None = None
        raw_timeout = get(TIMEOUT_ENV)
        if raw_timeout is not None:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"{TIMEOUT_ENV} must be a number of seconds, got {raw_timeout!r}") from None
            if timeout <= 0:
                raise ValueError(f"{TIMEOUT_ENV} must be positive, got {raw_timeout!r}")

        storage_dir = get(STORAGE_DIR_ENV)
        return cls(
            api_base_url=get(API_BASE_URL_ENV) or defaults.api_base_url,
            api_key=get(API_KEY_ENV),
            vs_currency=(get(VS_CURRENCY_ENV) or defaults.vs_currency).lower(),
            storage_key=get(STORAGE_KEY_ENV) or defaults.storage_key,
            storage_dir=Path(storage_dir) if storage_dir else defaults.storage_dir,
            timeout=timeout,
        )
