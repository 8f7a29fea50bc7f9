"""Repository Protocol: dependency inversion for testability.

Unit tests inject a fake or mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_account.domain.models import Wallet


class WalletRepositoryProtocol(Protocol):
    async def get_wallet(self, db: AsyncSession, user_id: str) -> Wallet | None: ...

    async def lock_wallet(self, db: AsyncSession, user_id: str) -> Wallet | None:
        """Same as get_wallet but holds a row lock until the transaction ends."""
        ...

    async def create_wallet(
        self, db: AsyncSession, user_id: str, initial_balance: Decimal
    ) -> Wallet: ...

    async def debit(self, db: AsyncSession, user_id: str, amount: Decimal) -> Wallet: ...

    async def credit(self, db: AsyncSession, user_id: str, amount: Decimal) -> Wallet: ...
