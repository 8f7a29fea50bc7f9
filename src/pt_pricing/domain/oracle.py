"""PriceOracle Protocol: the trading core's view of market data.

Implementations return a price quantized to cents, or raise
PriceUnavailableError (timeouts and upstream errors included). Retry policy,
if any, belongs inside the implementation.
"""

from decimal import Decimal
from typing import Protocol


class PriceOracleProtocol(Protocol):
    async def get_current_price(self, symbol: str) -> Decimal: ...

    async def get_current_prices(self, symbols: list[str]) -> dict[str, Decimal]:
        """Quotes for the symbols that could be priced; missing ones are omitted.

        Raises PriceUnavailableError only when none of a non-empty request succeeded.
        """
        ...
