"""WalletRepository: concrete implementation of WalletRepositoryProtocol.

Balance mutations are single UPDATE ... RETURNING statements. A debit that
returns 0 rows means the balance check failed (or the wallet is missing).

Transaction ownership: the CALLER (application service or TradeLedger) is
responsible for committing or rolling back.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_account.domain.models import Wallet
from src.pt_common.errors import InsufficientFundsError, WalletNotFoundError

_WALLET_COLUMNS = "user_id, cash_balance, created_at, updated_at"

_GET_WALLET_SQL = text(f"""
    SELECT {_WALLET_COLUMNS}
    FROM wallets
    WHERE user_id = :user_id
""")

_LOCK_WALLET_SQL = text(f"""
    SELECT {_WALLET_COLUMNS}
    FROM wallets
    WHERE user_id = :user_id
    FOR UPDATE
""")

_CREATE_WALLET_SQL = text(f"""
    INSERT INTO wallets (user_id, cash_balance)
    VALUES (:user_id, :cash_balance)
    ON CONFLICT (user_id) DO UPDATE
        SET updated_at = NOW()
    RETURNING {_WALLET_COLUMNS}
""")

_DEBIT_SQL = text(f"""
    UPDATE wallets
    SET cash_balance = cash_balance - :amount,
        updated_at = NOW()
    WHERE user_id = :user_id AND cash_balance >= :amount
    RETURNING {_WALLET_COLUMNS}
""")

_CREDIT_SQL = text(f"""
    UPDATE wallets
    SET cash_balance = cash_balance + :amount,
        updated_at = NOW()
    WHERE user_id = :user_id
    RETURNING {_WALLET_COLUMNS}
""")


def _row_to_wallet(row: object) -> Wallet:
    return Wallet(
        user_id=row.user_id,  # type: ignore[attr-defined]
        cash_balance=row.cash_balance,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class WalletRepository:
    """Concrete repository: all mutations atomic at the SQL level."""

    async def get_wallet(self, db: AsyncSession, user_id: str) -> Wallet | None:
        row = (await db.execute(_GET_WALLET_SQL, {"user_id": user_id})).fetchone()
        return _row_to_wallet(row) if row else None

    async def lock_wallet(self, db: AsyncSession, user_id: str) -> Wallet | None:
        row = (await db.execute(_LOCK_WALLET_SQL, {"user_id": user_id})).fetchone()
        return _row_to_wallet(row) if row else None

    async def create_wallet(
        self, db: AsyncSession, user_id: str, initial_balance: Decimal
    ) -> Wallet:
        # Idempotent: an existing wallet keeps its balance
        row = (
            await db.execute(
                _CREATE_WALLET_SQL,
                {"user_id": user_id, "cash_balance": initial_balance},
            )
        ).fetchone()
        if row is None:
            raise WalletNotFoundError(user_id)
        return _row_to_wallet(row)

    async def debit(self, db: AsyncSession, user_id: str, amount: Decimal) -> Wallet:
        row = (
            await db.execute(_DEBIT_SQL, {"user_id": user_id, "amount": amount})
        ).fetchone()
        if row is None:
            current = await self.get_wallet(db, user_id)
            if current is None:
                raise WalletNotFoundError(user_id)
            raise InsufficientFundsError(amount, current.cash_balance)
        return _row_to_wallet(row)

    async def credit(self, db: AsyncSession, user_id: str, amount: Decimal) -> Wallet:
        row = (
            await db.execute(_CREDIT_SQL, {"user_id": user_id, "amount": amount})
        ).fetchone()
        if row is None:
            raise WalletNotFoundError(user_id)
        return _row_to_wallet(row)
