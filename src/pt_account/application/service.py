"""WalletApplicationService: thin composition layer.

create_wallet and add_cash commit their own transaction; get_balance is
read-only. Trade debits/credits do not go through here: TradeLedger drives
the repository directly inside its own transaction.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.pt_account.application.schemas import AddCashResponse, WalletBalanceResponse
from src.pt_account.domain.repository import WalletRepositoryProtocol
from src.pt_account.infrastructure.persistence import WalletRepository
from src.pt_common.errors import InvalidAmountError, WalletNotFoundError
from src.pt_common.money import quantize_money

logger = logging.getLogger(__name__)


class WalletApplicationService:
    def __init__(self, repo: WalletRepositoryProtocol | None = None) -> None:
        self._repo: WalletRepositoryProtocol = repo or WalletRepository()

    async def get_balance(self, db: AsyncSession, user_id: str) -> WalletBalanceResponse:
        wallet = await self._repo.get_wallet(db, user_id)
        if wallet is None:
            raise WalletNotFoundError(user_id)
        return WalletBalanceResponse.from_balance(user_id, wallet.cash_balance)

    async def create_wallet(
        self,
        db: AsyncSession,
        user_id: str,
        initial_balance: Decimal | None = None,
    ) -> WalletBalanceResponse:
        """Seed a wallet at registration. Calling it twice keeps the first balance."""
        balance = quantize_money(
            settings.DEFAULT_STARTING_BALANCE if initial_balance is None else initial_balance
        )
        if balance < 0:
            raise InvalidAmountError(balance)
        try:
            wallet = await self._repo.create_wallet(db, user_id, balance)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Wallet ready for user=%s balance=%s", user_id, wallet.cash_balance)
        return WalletBalanceResponse.from_balance(user_id, wallet.cash_balance)

    async def add_cash(
        self,
        db: AsyncSession,
        user_id: str,
        amount: Decimal,
        reason: str | None = None,
    ) -> AddCashResponse:
        amount = quantize_money(amount)
        if amount <= 0:
            raise InvalidAmountError(amount)
        try:
            wallet = await self._repo.credit(db, user_id, amount)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Cash added: user=%s amount=%s reason=%s new_balance=%s",
            user_id, amount, reason, wallet.cash_balance,
        )
        return AddCashResponse.from_result(wallet.cash_balance, amount)
