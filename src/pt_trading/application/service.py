"""TradingApplicationService: binds order requests to the TradeLedger.

Transaction boundaries live in the ledger; this layer only maps request
schemas in and response schemas out, and serves the read-only history.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_trading.application.schemas import (
    BuyOrderRequest,
    SellOrderRequest,
    TradeExecutionResponse,
    TransactionItem,
    TransactionListResponse,
    cursor_decode,
    cursor_encode,
)
from src.pt_trading.domain.ledger import TradeLedger
from src.pt_trading.domain.repository import TransactionRepositoryProtocol
from src.pt_trading.infrastructure.persistence import TransactionRepository

MAX_PAGE_SIZE = 100


class TradingApplicationService:
    def __init__(
        self,
        ledger: TradeLedger | None = None,
        transactions: TransactionRepositoryProtocol | None = None,
    ) -> None:
        self._ledger = ledger or TradeLedger()
        self._transactions: TransactionRepositoryProtocol = (
            transactions or TransactionRepository()
        )

    async def buy(
        self, db: AsyncSession, user_id: str, request: BuyOrderRequest
    ) -> TradeExecutionResponse:
        result = await self._ledger.execute_buy(
            db, user_id, request.symbol, request.quantity, request.expected_price
        )
        return TradeExecutionResponse.from_result(result)

    async def sell(
        self, db: AsyncSession, user_id: str, request: SellOrderRequest
    ) -> TradeExecutionResponse:
        result = await self._ledger.execute_sell(
            db, user_id, request.symbol, request.quantity, request.expected_price
        )
        return TradeExecutionResponse.from_result(result)

    async def list_transactions(
        self,
        db: AsyncSession,
        user_id: str,
        cursor: str | None = None,
        limit: int = 20,
    ) -> TransactionListResponse:
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        txs = await self._transactions.list_by_user(db, user_id, cursor_id, limit + 1)
        has_more = len(txs) > limit
        page = txs[:limit]

        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return TransactionListResponse(
            items=[TransactionItem.from_domain(t) for t in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )
