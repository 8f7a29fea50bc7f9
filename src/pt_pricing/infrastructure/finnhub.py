"""Finnhub REST quote client.

GET {FINNHUB_API_BASE}/quote?symbol=AAPL&token=...
    -> {"c": 189.84, "d": 1.2, "dp": 0.64, "h": ..., "l": ..., "o": ..., "pc": ..., "t": ...}

Finnhub answers unknown tickers with 200 and all-zero fields, so c <= 0 is
treated as "no quote".
"""

import logging
from decimal import Decimal, InvalidOperation

import httpx

from config.settings import settings
from src.pt_common.errors import PriceUnavailableError
from src.pt_common.money import quantize_money, to_decimal

logger = logging.getLogger(__name__)


class FinnhubPriceOracle:
    """PriceOracleProtocol over httpx.AsyncClient.

    Pass `client` to share a connection pool or to inject a MockTransport in tests.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        token: str | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=settings.FINNHUB_API_BASE,
            timeout=settings.PRICE_TIMEOUT_SECONDS,
        )
        self._token = settings.FINNHUB_TOKEN if token is None else token

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_current_price(self, symbol: str) -> Decimal:
        try:
            resp = await self._client.get(
                "/quote", params={"symbol": symbol, "token": self._token}
            )
        except httpx.TimeoutException as exc:
            logger.error("Finnhub quote timed out for %s", symbol, exc_info=True)
            raise PriceUnavailableError(symbol, "quote request timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("Finnhub quote request failed for %s", symbol, exc_info=True)
            raise PriceUnavailableError(symbol, str(exc)) from exc

        if resp.status_code == 429:
            logger.error("Finnhub rate limit hit while pricing %s", symbol)
            raise PriceUnavailableError(symbol, "rate limit exceeded")
        if resp.status_code != 200:
            logger.error("Finnhub quote for %s returned HTTP %d", symbol, resp.status_code)
            raise PriceUnavailableError(symbol, f"upstream status {resp.status_code}")

        try:
            payload = resp.json()
            price = to_decimal(payload.get("c") or 0)
        except (ValueError, TypeError, AttributeError, InvalidOperation) as exc:
            logger.error("Malformed Finnhub quote for %s: %r", symbol, resp.text)
            raise PriceUnavailableError(symbol, "malformed quote") from exc

        if price <= 0:
            logger.warning("Finnhub returned no quote for %s", symbol)
            raise PriceUnavailableError(symbol, "no quote")
        return quantize_money(price)

    async def get_current_prices(self, symbols: list[str]) -> dict[str, Decimal]:
        prices: dict[str, Decimal] = {}
        last_err: PriceUnavailableError | None = None
        for symbol in symbols:
            try:
                prices[symbol] = await self.get_current_price(symbol)
            except PriceUnavailableError as exc:
                last_err = exc
                continue
        if not prices and last_err is not None:
            raise last_err
        missing = len(symbols) - len(prices)
        if missing:
            logger.warning("Missing %d of %d quotes", missing, len(symbols))
        return prices
