from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_common.errors import SymbolDisabledError
from src.pt_symbol.domain.models import Symbol
from src.pt_symbol.domain.repository import SymbolRegistryProtocol


async def check_symbol_tradable(
    registry: SymbolRegistryProtocol, symbol: str, db: AsyncSession
) -> Symbol:
    """Resolve the ticker and reject it when trading is switched off.

    SymbolNotFoundError comes from the registry itself.
    """
    resolved = await registry.resolve(db, symbol)
    if not resolved.enabled:
        raise SymbolDisabledError(resolved.symbol)
    return resolved
