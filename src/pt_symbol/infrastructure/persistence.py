"""SymbolRepository: symbol catalog queries and the enabled toggle."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_symbol.domain.models import Symbol

_SYMBOL_COLUMNS = "symbol, name, exchange, currency, mic, enabled, created_at, updated_at"

_GET_SQL = text(f"""
    SELECT {_SYMBOL_COLUMNS}
    FROM symbols
    WHERE symbol = :symbol
""")

_LIST_SQL = text(f"""
    SELECT {_SYMBOL_COLUMNS}
    FROM symbols
    WHERE (CAST(:enabled AS BOOLEAN) IS NULL OR enabled = :enabled)
    ORDER BY symbol
""")

_SET_ENABLED_SQL = text(f"""
    UPDATE symbols
    SET enabled = :enabled,
        updated_at = NOW()
    WHERE symbol = :symbol
    RETURNING {_SYMBOL_COLUMNS}
""")


def _row_to_symbol(row: object) -> Symbol:
    return Symbol(
        symbol=row.symbol,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        exchange=row.exchange,  # type: ignore[attr-defined]
        currency=row.currency,  # type: ignore[attr-defined]
        mic=row.mic,  # type: ignore[attr-defined]
        enabled=row.enabled,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class SymbolRepository:
    async def get_by_symbol(self, db: AsyncSession, symbol: str) -> Symbol | None:
        row = (await db.execute(_GET_SQL, {"symbol": symbol})).fetchone()
        return _row_to_symbol(row) if row else None

    async def list_symbols(
        self, db: AsyncSession, enabled: bool | None
    ) -> list[Symbol]:
        rows = (await db.execute(_LIST_SQL, {"enabled": enabled})).fetchall()
        return [_row_to_symbol(r) for r in rows]

    async def set_enabled(
        self, db: AsyncSession, symbol: str, enabled: bool
    ) -> Symbol | None:
        row = (
            await db.execute(_SET_ENABLED_SQL, {"symbol": symbol, "enabled": enabled})
        ).fetchone()
        return _row_to_symbol(row) if row else None
