"""PortfolioApplicationService: read-only valuation of a user's holdings.

Quotes for all holdings are fetched in one oracle call. If the oracle cannot
price any of them the PriceUnavailableError propagates; a holding whose quote
alone is missing is valued at its cost basis.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_account.domain.repository import WalletRepositoryProtocol
from src.pt_account.infrastructure.persistence import WalletRepository
from src.pt_common.errors import WalletNotFoundError
from src.pt_common.money import ZERO, money_to_display, quantize_money
from src.pt_portfolio.application.schemas import HoldingItem, PortfolioSummaryResponse
from src.pt_pricing.domain.oracle import PriceOracleProtocol
from src.pt_pricing.infrastructure.finnhub import FinnhubPriceOracle
from src.pt_symbol.domain.models import normalize_symbol
from src.pt_trading.domain.models import Position
from src.pt_trading.domain.repository import PositionRepositoryProtocol
from src.pt_trading.infrastructure.persistence import PositionRepository

logger = logging.getLogger(__name__)

_HUNDRED = Decimal("100")


def _valuate(position: Position, price: Decimal | None) -> HoldingItem:
    cost_basis = quantize_money(position.cost_basis)
    if price is None:
        market_value = cost_basis
    else:
        market_value = quantize_money(price * position.shares_owned)
    unrealized = market_value - cost_basis
    percent = quantize_money(unrealized / cost_basis * _HUNDRED) if cost_basis else ZERO
    return HoldingItem(
        symbol=position.symbol,
        shares_owned=position.shares_owned,
        average_cost_basis=position.average_cost_basis,
        current_price=price,
        market_value=market_value,
        cost_basis=cost_basis,
        unrealized_profit_loss=unrealized,
        unrealized_profit_loss_percent=percent,
    )


class PortfolioApplicationService:
    def __init__(
        self,
        wallets: WalletRepositoryProtocol | None = None,
        positions: PositionRepositoryProtocol | None = None,
        oracle: PriceOracleProtocol | None = None,
    ) -> None:
        self._wallets: WalletRepositoryProtocol = wallets or WalletRepository()
        self._positions: PositionRepositoryProtocol = positions or PositionRepository()
        self._oracle: PriceOracleProtocol = oracle or FinnhubPriceOracle()

    async def get_summary(self, db: AsyncSession, user_id: str) -> PortfolioSummaryResponse:
        wallet = await self._wallets.get_wallet(db, user_id)
        if wallet is None:
            raise WalletNotFoundError(user_id)

        positions = await self._positions.list_positions(db, user_id)
        prices: dict[str, Decimal] = {}
        if positions:
            prices = await self._oracle.get_current_prices([p.symbol for p in positions])

        holdings = [_valuate(p, prices.get(p.symbol)) for p in positions]
        total_invested = sum((h.cost_basis for h in holdings), ZERO)
        total_market_value = sum((h.market_value for h in holdings), ZERO)
        total_value = wallet.cash_balance + total_market_value

        logger.debug(
            "Portfolio valued: user=%s holdings=%d priced=%d total=%s",
            user_id, len(holdings), len(prices), total_value,
        )
        return PortfolioSummaryResponse(
            user_id=user_id,
            cash_balance=wallet.cash_balance,
            cash_balance_display=money_to_display(wallet.cash_balance),
            holdings=holdings,
            total_invested=total_invested,
            total_market_value=total_market_value,
            total_unrealized_profit_loss=total_market_value - total_invested,
            total_value=total_value,
            total_value_display=money_to_display(total_value),
        )

    async def get_holding(self, db: AsyncSession, user_id: str, symbol: str) -> HoldingItem:
        """Valuation of one holding; a symbol the user does not own yields zero shares."""
        ticker = normalize_symbol(symbol)
        position = await self._positions.get_position(db, user_id, ticker)
        if position is None:
            return _valuate(Position(user_id=user_id, symbol=ticker), None)
        price = await self._oracle.get_current_price(ticker)
        return _valuate(position, price)
