"""PositionRepository and TransactionRepository: raw SQL, caller owns the transaction.

Positions with zero shares are never stored: the ledger deletes the row
instead (the CHECK constraint enforces shares_owned > 0).
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_common.enums import TransactionType
from src.pt_common.errors import InternalError
from src.pt_trading.domain.models import Position, Transaction

# ---------------------------------------------------------------------------
# SQL: positions
# ---------------------------------------------------------------------------

_POSITION_COLUMNS = "user_id, symbol, shares_owned, average_cost_basis, created_at, updated_at"

_GET_POSITION_SQL = text(f"""
    SELECT {_POSITION_COLUMNS}
    FROM positions
    WHERE user_id = :user_id AND symbol = :symbol
""")

_LOCK_POSITION_SQL = text(f"""
    SELECT {_POSITION_COLUMNS}
    FROM positions
    WHERE user_id = :user_id AND symbol = :symbol
    FOR UPDATE
""")

_LIST_POSITIONS_SQL = text(f"""
    SELECT {_POSITION_COLUMNS}
    FROM positions
    WHERE user_id = :user_id
    ORDER BY symbol
""")

_UPSERT_POSITION_SQL = text(f"""
    INSERT INTO positions (user_id, symbol, shares_owned, average_cost_basis)
    VALUES (:user_id, :symbol, :shares_owned, :average_cost_basis)
    ON CONFLICT (user_id, symbol) DO UPDATE
        SET shares_owned       = EXCLUDED.shares_owned,
            average_cost_basis = EXCLUDED.average_cost_basis,
            updated_at = NOW()
    RETURNING {_POSITION_COLUMNS}
""")

_DELETE_POSITION_SQL = text("""
    DELETE FROM positions
    WHERE user_id = :user_id AND symbol = :symbol
""")

# ---------------------------------------------------------------------------
# SQL: transactions (append-only)
# ---------------------------------------------------------------------------

_TX_COLUMNS = (
    "id, user_id, symbol, type, quantity, price_per_share, total_amount,"
    " profit_loss, executed_at"
)

_INSERT_TX_SQL = text(f"""
    INSERT INTO transactions
        (user_id, symbol, type, quantity, price_per_share,
         total_amount, profit_loss, executed_at)
    VALUES
        (:user_id, :symbol, :type, :quantity, :price_per_share,
         :total_amount, :profit_loss, :executed_at)
    RETURNING {_TX_COLUMNS}
""")

_LIST_TX_FOR_SYMBOL_SQL = text(f"""
    SELECT {_TX_COLUMNS}
    FROM transactions
    WHERE user_id = :user_id AND symbol = :symbol
    ORDER BY executed_at ASC, id ASC
""")

_LIST_TX_BY_USER_SQL = text(f"""
    SELECT {_TX_COLUMNS}
    FROM transactions
    WHERE user_id = :user_id
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < :cursor_id)
    ORDER BY executed_at DESC, id DESC
    LIMIT :limit
""")


def _row_to_position(row: object) -> Position:
    return Position(
        user_id=row.user_id,  # type: ignore[attr-defined]
        symbol=row.symbol,  # type: ignore[attr-defined]
        shares_owned=row.shares_owned,  # type: ignore[attr-defined]
        average_cost_basis=row.average_cost_basis,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_transaction(row: object) -> Transaction:
    return Transaction(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        symbol=row.symbol,  # type: ignore[attr-defined]
        type=TransactionType(row.type),  # type: ignore[attr-defined]
        quantity=row.quantity,  # type: ignore[attr-defined]
        price_per_share=row.price_per_share,  # type: ignore[attr-defined]
        total_amount=row.total_amount,  # type: ignore[attr-defined]
        profit_loss=row.profit_loss,  # type: ignore[attr-defined]
        executed_at=row.executed_at,  # type: ignore[attr-defined]
    )


class PositionRepository:
    async def get_position(
        self, db: AsyncSession, user_id: str, symbol: str
    ) -> Position | None:
        row = (
            await db.execute(_GET_POSITION_SQL, {"user_id": user_id, "symbol": symbol})
        ).fetchone()
        return _row_to_position(row) if row else None

    async def lock_position(
        self, db: AsyncSession, user_id: str, symbol: str
    ) -> Position | None:
        row = (
            await db.execute(_LOCK_POSITION_SQL, {"user_id": user_id, "symbol": symbol})
        ).fetchone()
        return _row_to_position(row) if row else None

    async def list_positions(self, db: AsyncSession, user_id: str) -> list[Position]:
        rows = (await db.execute(_LIST_POSITIONS_SQL, {"user_id": user_id})).fetchall()
        return [_row_to_position(r) for r in rows]

    async def save_position(self, db: AsyncSession, position: Position) -> Position:
        row = (
            await db.execute(
                _UPSERT_POSITION_SQL,
                {
                    "user_id": position.user_id,
                    "symbol": position.symbol,
                    "shares_owned": position.shares_owned,
                    "average_cost_basis": position.average_cost_basis,
                },
            )
        ).fetchone()
        if row is None:
            raise InternalError("Position upsert returned no rows")
        return _row_to_position(row)

    async def delete_position(self, db: AsyncSession, user_id: str, symbol: str) -> None:
        await db.execute(_DELETE_POSITION_SQL, {"user_id": user_id, "symbol": symbol})


class TransactionRepository:
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
    ) -> Transaction:
        row = (
            await db.execute(
                _INSERT_TX_SQL,
                {
                    "user_id": user_id,
                    "symbol": symbol,
                    "type": tx_type.value,
                    "quantity": quantity,
                    "price_per_share": price_per_share,
                    "total_amount": total_amount,
                    "profit_loss": profit_loss,
                    "executed_at": executed_at,
                },
            )
        ).fetchone()
        if row is None:
            raise InternalError("Transaction insert returned no rows")
        return _row_to_transaction(row)

    async def list_for_symbol(
        self, db: AsyncSession, user_id: str, symbol: str
    ) -> list[Transaction]:
        rows = (
            await db.execute(
                _LIST_TX_FOR_SYMBOL_SQL, {"user_id": user_id, "symbol": symbol}
            )
        ).fetchall()
        return [_row_to_transaction(r) for r in rows]

    async def list_by_user(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
    ) -> list[Transaction]:
        rows = (
            await db.execute(
                _LIST_TX_BY_USER_SQL,
                {"user_id": user_id, "cursor_id": cursor_id, "limit": limit},
            )
        ).fetchall()
        return [_row_to_transaction(r) for r in rows]
