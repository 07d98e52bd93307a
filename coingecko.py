import logging
from typing import Dict, Iterable, Optional

import httpx

from config import BotConfig

log = logging.getLogger(__name__)

TIMEOUT = httpx.Timeout(10.0, connect=5.0)

# тикер -> id монеты в CoinGecko
COIN_IDS: Dict[str, str] = {
    "BTC": "bitcoin",
    "USDT": "tether",
    "TRX": "tron",
    "XMR": "monero",
    "DOGE": "dogecoin",
}


class PriceSourceError(Exception):
    """Не удалось получить котировку."""


class CoinGeckoClient:
    """Котировки в TRY через CoinGecko /simple/price и конвертация по ним."""

    def __init__(self, config: BotConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._base = config.coingecko_api_base.rstrip("/")
        self._vs = config.fiat.lower()
        self._transport = transport

    async def _fetch_simple_price(self, ids: list[str]) -> dict:
        url = f"{self._base}/simple/price"
        params = {"ids": ",".join(ids), "vs_currencies": self._vs}
        try:
            async with httpx.AsyncClient(timeout=TIMEOUT, transport=self._transport) as client:
                r = await client.get(url, params=params)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPError as e:
            raise PriceSourceError(f"CoinGecko request failed: {e}") from e
        except ValueError as e:
            raise PriceSourceError(f"CoinGecko returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise PriceSourceError(f"unexpected CoinGecko payload: {data!r}")
        return data

    async def get_coin_prices(self, codes: Iterable[str]) -> Dict[str, float]:
        """{"btc": 2345678.9, ...}; монеты без котировки пропускаются."""
        codes = [c.upper() for c in codes]
        unknown = [c for c in codes if c not in COIN_IDS]
        if unknown:
            raise PriceSourceError(f"unknown coin codes: {', '.join(unknown)}")

        data = await self._fetch_simple_price([COIN_IDS[c] for c in codes])
        out: Dict[str, float] = {}
        for code in codes:
            quote = (data.get(COIN_IDS[code]) or {}).get(self._vs)
            if isinstance(quote, (int, float)):
                out[code.lower()] = float(quote)
        return out

    async def _price(self, code: str) -> float:
        prices = await self.get_coin_prices([code])
        price = prices.get(code.lower())
        if not price:
            raise PriceSourceError(f"no {self._vs.upper()} quote for {code}")
        return price

    async def convert_try_to_crypto(self, amount: float, code: str) -> float:
        return amount / await self._price(code)

    async def convert_crypto_to_try(self, amount: float, code: str) -> float:
        return amount * await self._price(code)
