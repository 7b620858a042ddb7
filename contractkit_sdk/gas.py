"""
Best-effort gas price suggestions from an external oracle.
"""
import os
import logging
from typing import Optional

import requests

from ._rate_limited_log import rate_limited_log

logger = logging.getLogger(__name__)

ETH_GAS_STATION_URL = "https://ethgasstation.info/json/ethgasAPI.json"
GAS_ORACLE_URL_ENV_VAR = "CONTRACTKIT_GAS_ORACLE_URL"
DEFAULT_GAS_PRICE_GWEI = 30
GWEI = 10 ** 9


class GasPriceOracle:
    """
    Fetches a suggested gas price, falling back to a fixed default.

    The oracle responds with ``fast``, ``fastest``, ``safeLow`` and ``average``
    in units of gwei * 10. Callers never see this fail: any network, status or
    parse problem yields DEFAULT_GAS_PRICE_GWEI.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.url = url or os.environ.get(GAS_ORACLE_URL_ENV_VAR, ETH_GAS_STATION_URL)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)

    def _fallback(self, reason: str) -> int:
        rate_limited_log(
            f"Gas oracle unavailable ({reason}), using default {DEFAULT_GAS_PRICE_GWEI} gwei",
            level="warning",
            key=f"gas-oracle:{self.url}",
            logger_instance=self.logger,
        )
        return DEFAULT_GAS_PRICE_GWEI

    def suggest_gas_price_gwei(self) -> int:
        """
        Suggested gas price in whole gwei (``fast / 10``, truncated).

        Returns:
            Suggested price, or 30 if the oracle cannot be used
        """
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            return self._fallback(f"request failed: {e}")
        except ValueError as e:
            return self._fallback(f"invalid JSON: {e}")

        fast = data.get("fast") if isinstance(data, dict) else None
        if isinstance(fast, bool) or not isinstance(fast, (int, float)):
            return self._fallback(f"missing or non-numeric 'fast': {fast!r}")

        try:
            price = int(fast / 10)
        except (OverflowError, ValueError) as e:
            # inf / nan
            return self._fallback(str(e))
        self.logger.debug(f"Gas oracle suggests {price} gwei")
        return price

    def suggest_gas_price_wei(self) -> int:
        return self.suggest_gas_price_gwei() * GWEI


def suggest_gas_price_gwei() -> int:
    """Suggested gas price in gwei from the default oracle endpoint."""
    return GasPriceOracle().suggest_gas_price_gwei()
