"""Repository Protocol: dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_symbol.domain.models import Symbol


class SymbolRepositoryProtocol(Protocol):
    async def get_by_symbol(self, db: AsyncSession, symbol: str) -> Symbol | None: ...

    async def list_symbols(
        self, db: AsyncSession, enabled: bool | None
    ) -> list[Symbol]: ...

    async def set_enabled(
        self, db: AsyncSession, symbol: str, enabled: bool
    ) -> Symbol | None: ...


class SymbolRegistryProtocol(Protocol):
    """What the trading core needs from the catalog: resolve or raise SymbolNotFoundError."""

    async def resolve(self, db: AsyncSession, symbol: str) -> Symbol: ...
