"""Repository Protocols for positions and the transaction log."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_common.enums import TransactionType
from src.pt_trading.domain.models import Position, Transaction


class PositionRepositoryProtocol(Protocol):
    async def get_position(
        self, db: AsyncSession, user_id: str, symbol: str
    ) -> Position | None: ...

    async def lock_position(
        self, db: AsyncSession, user_id: str, symbol: str
    ) -> Position | None: ...

    async def list_positions(self, db: AsyncSession, user_id: str) -> list[Position]: ...

    async def save_position(self, db: AsyncSession, position: Position) -> Position: ...

    async def delete_position(self, db: AsyncSession, user_id: str, symbol: str) -> None: ...


class TransactionRepositoryProtocol(Protocol):
    async def append(
        self,
        db: AsyncSession,
        user_id: str,
        symbol: str,
        tx_type: TransactionType,
        quantity: int,
        price_per_share: Decimal,
        total_amount: Decimal,
        profit_loss: Decimal | None,
        executed_at: datetime,
    ) -> Transaction: ...

    async def list_for_symbol(
        self, db: AsyncSession, user_id: str, symbol: str
    ) -> list[Transaction]:
        """Chronological (executed_at ASC, id ASC)."""
        ...

    async def list_by_user(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
    ) -> list[Transaction]:
        """Newest first (executed_at DESC, id DESC)."""
        ...
