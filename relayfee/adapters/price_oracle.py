# /relayfee/adapters/price_oracle.py
from decimal import Decimal, InvalidOperation
from typing import Protocol, runtime_checkable
import asyncio
import aiohttp

from relayfee.core.config import settings
from relayfee.core.decorators import retriable_network_call
from relayfee.core.logger import get_logger

log = get_logger(__name__)

class RateUnavailableError(Exception):
    pass


@runtime_checkable
class PriceOracle(Protocol):
    async def get_exchange_rate(self, symbol: str, target_currency: str) -> Decimal: ...


class CoinGeckoPriceOracle:
    """
    Prices source and target in an intermediary currency and returns source / target.

    Symbols with a configured fixed rate never hit the network.
    """
    def __init__(self, base_url: str | None = None, coin_ids: dict | None = None):
        self.base_url = (base_url or settings.COINGECKO_API_URL).rstrip("/")
        self.coin_ids = {k.upper(): v for k, v in (coin_ids or settings.COINGECKO_IDS).items()}
        self.http: aiohttp.ClientSession | None = None

    async def initialize(self):
        if self.http is None:
            timeout = aiohttp.ClientTimeout(total=settings.ORACLE_TIMEOUT_SECONDS)
            self.http = aiohttp.ClientSession(timeout=timeout)
            log.info("COINGECKO_PRICE_ORACLE_INITIALIZED", base_url=self.base_url)

    async def close(self):
        if self.http is not None:
            await self.http.close()
            self.http = None

    def _coin_id(self, symbol: str) -> str:
        try:
            return self.coin_ids[symbol.upper()]
        except KeyError:
            raise RateUnavailableError(f"No price source configured for {symbol}")

    @retriable_network_call
    async def _fetch_prices(self, coin_ids: tuple, vs_currency: str) -> dict:
        await self.initialize()
        url = f"{self.base_url}/simple/price"
        params = {"ids": ",".join(coin_ids), "vs_currencies": vs_currency}
        async with self.http.get(url, params=params) as resp:
            resp.raise_for_status()
            return await resp.json()

    def _price_from(self, data: dict, coin_id: str, vs_currency: str) -> Decimal:
        try:
            price = Decimal(str(data[coin_id][vs_currency]))
        except (KeyError, TypeError, InvalidOperation):
            raise RateUnavailableError(f"No {vs_currency} quote for {coin_id}")
        if price.is_nan() or price <= 0:
            raise RateUnavailableError(f"Invalid {vs_currency} quote for {coin_id}: {price}")
        return price

    async def get_exchange_rate(self, symbol: str, target_currency: str) -> Decimal:
        fixed = settings.FIXED_EXCHANGE_RATES.get(symbol.upper())
        if fixed is not None:
            return Decimal(fixed)

        source_id, target_id = self._coin_id(symbol), self._coin_id(target_currency)
        vs_currency = settings.ORACLE_INTERMEDIARY_CURRENCY
        try:
            data = await self._fetch_prices(tuple(sorted({source_id, target_id})), vs_currency)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.error("EXCHANGE_RATE_FETCH_FAILED", symbol=symbol, target=target_currency, error=str(e))
            raise RateUnavailableError(f"Could not fetch exchange rate for {symbol}") from e

        rate = self._price_from(data, source_id, vs_currency) / self._price_from(data, target_id, vs_currency)
        log.debug("EXCHANGE_RATE_FETCHED", symbol=symbol, target=target_currency, rate=str(rate))
        return rate
