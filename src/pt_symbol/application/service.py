"""SymbolApplicationService: catalog lookups and the trading enabled flag.

resolve() is the registry contract the trading core depends on: it either
returns the Symbol (enabled or not) or raises SymbolNotFoundError.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_common.errors import SymbolNotFoundError
from src.pt_symbol.application.schemas import SymbolItem, SymbolListResponse
from src.pt_symbol.domain.models import Symbol, normalize_symbol
from src.pt_symbol.domain.repository import SymbolRepositoryProtocol
from src.pt_symbol.infrastructure.persistence import SymbolRepository

logger = logging.getLogger(__name__)


class SymbolApplicationService:
    def __init__(self, repo: SymbolRepositoryProtocol | None = None) -> None:
        self._repo: SymbolRepositoryProtocol = repo or SymbolRepository()

    async def resolve(self, db: AsyncSession, symbol: str) -> Symbol:
        ticker = normalize_symbol(symbol)
        found = await self._repo.get_by_symbol(db, ticker)
        if found is None:
            raise SymbolNotFoundError(ticker)
        return found

    async def list_symbols(
        self, db: AsyncSession, enabled: bool | None = None
    ) -> SymbolListResponse:
        symbols = await self._repo.list_symbols(db, enabled)
        return SymbolListResponse(items=[SymbolItem.from_domain(s) for s in symbols])

    async def set_enabled(
        self, db: AsyncSession, symbol: str, enabled: bool
    ) -> SymbolItem:
        ticker = normalize_symbol(symbol)
        try:
            updated = await self._repo.set_enabled(db, ticker, enabled)
            if updated is None:
                raise SymbolNotFoundError(ticker)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Symbol %s trading %s", ticker, "enabled" if enabled else "disabled")
        return SymbolItem.from_domain(updated)
