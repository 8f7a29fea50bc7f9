"""TradeLedger: executes market buys/sells against a user's wallet and positions.

Every trade is one DB transaction: wallet debit/credit, position upsert/delete
and the transaction-log append commit together or not at all. Trades for the
same user are serialized twice over: an in-process asyncio.Lock per user, and
the wallet row lock (SELECT ... FOR UPDATE) for other processes.

Validation (quantity, symbol, price) runs before the first write, so a
rejected order never touches state even before rollback.
"""

import asyncio
import logging
from collections import defaultdict
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.pt_account.domain.repository import WalletRepositoryProtocol
from src.pt_account.infrastructure.persistence import WalletRepository
from src.pt_common.datetime_utils import utc_now
from src.pt_common.enums import LotMatching, TransactionType
from src.pt_common.errors import (
    AppError,
    InsufficientFundsError,
    InsufficientSharesError,
    PositionNotFoundError,
    WalletNotFoundError,
)
from src.pt_common.money import quantize_money
from src.pt_pricing.domain.oracle import PriceOracleProtocol
from src.pt_pricing.infrastructure.finnhub import FinnhubPriceOracle
from src.pt_symbol.application.service import SymbolApplicationService
from src.pt_symbol.domain.repository import SymbolRegistryProtocol
from src.pt_trading.domain.cost_basis import realized_profit_loss, weighted_average_cost
from src.pt_trading.domain.models import ExecutionResult, Position
from src.pt_trading.domain.repository import (
    PositionRepositoryProtocol,
    TransactionRepositoryProtocol,
)
from src.pt_trading.infrastructure.persistence import (
    PositionRepository,
    TransactionRepository,
)
from src.pt_trading.rules.order_quantity import check_quantity
from src.pt_trading.rules.symbol_status import check_symbol_tradable

logger = logging.getLogger(__name__)


class TradeLedger:
    def __init__(
        self,
        wallets: WalletRepositoryProtocol | None = None,
        positions: PositionRepositoryProtocol | None = None,
        transactions: TransactionRepositoryProtocol | None = None,
        symbols: SymbolRegistryProtocol | None = None,
        oracle: PriceOracleProtocol | None = None,
        lot_matching: LotMatching | None = None,
    ) -> None:
        self._wallets: WalletRepositoryProtocol = wallets or WalletRepository()
        self._positions: PositionRepositoryProtocol = positions or PositionRepository()
        self._transactions: TransactionRepositoryProtocol = (
            transactions or TransactionRepository()
        )
        self._symbols: SymbolRegistryProtocol = symbols or SymbolApplicationService()
        self._oracle: PriceOracleProtocol = oracle or FinnhubPriceOracle()
        self._lot_matching = lot_matching or LotMatching(settings.PNL_LOT_MATCHING.upper())
        self._user_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @property
    def lot_matching(self) -> LotMatching:
        return self._lot_matching

    async def execute_buy(
        self,
        db: AsyncSession,
        user_id: str,
        symbol: str,
        quantity: int,
        expected_price: Decimal | None = None,
    ) -> ExecutionResult:
        check_quantity(quantity)
        try:
            ticker, price = await self._validate_and_price(db, symbol, expected_price)
            async with self._user_locks[user_id]:
                result = await self._apply_buy(db, user_id, ticker, quantity, price)
                await db.commit()
        except AppError as exc:
            await db.rollback()
            logger.warning(
                "Buy rejected: user=%s symbol=%s qty=%d code=%d %s",
                user_id, symbol, quantity, exc.code, exc.message,
            )
            raise
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Buy executed: user=%s symbol=%s qty=%d price=%s cash=%s shares=%d",
            user_id, ticker, quantity, price,
            result.new_cash_balance, result.new_shares_owned,
        )
        return result

    async def execute_sell(
        self,
        db: AsyncSession,
        user_id: str,
        symbol: str,
        quantity: int,
        expected_price: Decimal | None = None,
    ) -> ExecutionResult:
        check_quantity(quantity)
        try:
            ticker, price = await self._validate_and_price(db, symbol, expected_price)
            async with self._user_locks[user_id]:
                result = await self._apply_sell(db, user_id, ticker, quantity, price)
                await db.commit()
        except AppError as exc:
            await db.rollback()
            logger.warning(
                "Sell rejected: user=%s symbol=%s qty=%d code=%d %s",
                user_id, symbol, quantity, exc.code, exc.message,
            )
            raise
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Sell executed: user=%s symbol=%s qty=%d price=%s pnl=%s cash=%s shares=%d",
            user_id, ticker, quantity, price, result.transaction.profit_loss,
            result.new_cash_balance, result.new_shares_owned,
        )
        return result

    async def _validate_and_price(
        self, db: AsyncSession, symbol: str, expected_price: Decimal | None
    ) -> tuple[str, Decimal]:
        resolved = await check_symbol_tradable(self._symbols, symbol, db)
        price = await self._oracle.get_current_price(resolved.symbol)
        if expected_price is not None and expected_price != price:
            # Market order: executes at the oracle price regardless
            logger.info(
                "Price moved for %s: expected=%s execution=%s",
                resolved.symbol, expected_price, price,
            )
        return resolved.symbol, price

    async def _apply_buy(
        self,
        db: AsyncSession,
        user_id: str,
        symbol: str,
        quantity: int,
        price: Decimal,
    ) -> ExecutionResult:
        total_cost = quantize_money(price * quantity)

        wallet = await self._wallets.lock_wallet(db, user_id)
        if wallet is None:
            raise WalletNotFoundError(user_id)
        if wallet.cash_balance < total_cost:
            raise InsufficientFundsError(total_cost, wallet.cash_balance)

        wallet = await self._wallets.debit(db, user_id, total_cost)

        position = await self._positions.lock_position(db, user_id, symbol)
        if position is None:
            position = Position(user_id=user_id, symbol=symbol)
        position.average_cost_basis = weighted_average_cost(
            position.average_cost_basis, position.shares_owned, total_cost, quantity
        )
        position.shares_owned += quantity
        position = await self._positions.save_position(db, position)

        transaction = await self._transactions.append(
            db,
            user_id=user_id,
            symbol=symbol,
            tx_type=TransactionType.BUY,
            quantity=quantity,
            price_per_share=price,
            total_amount=total_cost,
            profit_loss=None,
            executed_at=utc_now(),
        )
        return ExecutionResult(
            transaction=transaction,
            new_cash_balance=wallet.cash_balance,
            new_shares_owned=position.shares_owned,
        )

    async def _apply_sell(
        self,
        db: AsyncSession,
        user_id: str,
        symbol: str,
        quantity: int,
        price: Decimal,
    ) -> ExecutionResult:
        # Wallet row lock first: it is the per-user serialization point
        wallet = await self._wallets.lock_wallet(db, user_id)
        if wallet is None:
            raise WalletNotFoundError(user_id)

        position = await self._positions.lock_position(db, user_id, symbol)
        if position is None:
            raise PositionNotFoundError(symbol)
        if quantity > position.shares_owned:
            raise InsufficientSharesError(symbol, position.shares_owned, quantity)

        proceeds = quantize_money(price * quantity)
        # History is read before the SELL row exists
        history = await self._transactions.list_for_symbol(db, user_id, symbol)
        profit_loss = realized_profit_loss(history, quantity, price, self._lot_matching)

        wallet = await self._wallets.credit(db, user_id, proceeds)

        new_shares = position.shares_owned - quantity
        if new_shares == 0:
            await self._positions.delete_position(db, user_id, symbol)
        else:
            position.shares_owned = new_shares
            await self._positions.save_position(db, position)

        transaction = await self._transactions.append(
            db,
            user_id=user_id,
            symbol=symbol,
            tx_type=TransactionType.SELL,
            quantity=quantity,
            price_per_share=price,
            total_amount=proceeds,
            profit_loss=profit_loss,
            executed_at=utc_now(),
        )
        return ExecutionResult(
            transaction=transaction,
            new_cash_balance=wallet.cash_balance,
            new_shares_owned=new_shares,
        )
