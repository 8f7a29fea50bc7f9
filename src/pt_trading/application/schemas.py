"""Pydantic schemas and cursor utilities for trade execution and history."""

import base64
import json
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from src.pt_common.datetime_utils import to_iso
from src.pt_common.enums import TransactionType
from src.pt_common.money import money_to_display
from src.pt_trading.domain.models import ExecutionResult, Transaction

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a transaction id into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None if malformed."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class _OrderRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=20)
    quantity: int = Field(..., gt=0)
    # Price the client saw when placing the order; execution uses the live quote
    expected_price: Decimal | None = Field(None, gt=0, decimal_places=2)

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("symbol must not be blank")
        return v


class BuyOrderRequest(_OrderRequest):
    pass


class SellOrderRequest(_OrderRequest):
    pass


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

_VERBS = {TransactionType.BUY: "bought", TransactionType.SELL: "sold"}


def trade_message(tx_type: TransactionType, quantity: int, symbol: str, price: Decimal) -> str:
    """'Successfully bought 10 shares of AAPL at $100.00 per share'."""
    return (
        f"Successfully {_VERBS[tx_type]} {quantity} shares of {symbol}"
        f" at {money_to_display(price)} per share"
    )


class TradeExecutionResponse(BaseModel):
    transaction_id: int
    symbol: str
    quantity: int
    execution_price: Decimal
    total_amount: Decimal
    transaction_type: Literal["BUY", "SELL"]
    new_cash_balance: Decimal
    new_cash_balance_display: str
    new_shares_owned: int
    profit_loss: Decimal | None
    executed_at: str
    message: str

    @classmethod
    def from_result(cls, result: ExecutionResult) -> "TradeExecutionResponse":
        tx = result.transaction
        return cls(
            transaction_id=tx.id,
            symbol=tx.symbol,
            quantity=tx.quantity,
            execution_price=tx.price_per_share,
            total_amount=tx.total_amount,
            transaction_type=tx.type.value,
            new_cash_balance=result.new_cash_balance,
            new_cash_balance_display=money_to_display(result.new_cash_balance),
            new_shares_owned=result.new_shares_owned,
            profit_loss=tx.profit_loss,
            executed_at=to_iso(tx.executed_at),
            message=trade_message(tx.type, tx.quantity, tx.symbol, tx.price_per_share),
        )


class TransactionItem(BaseModel):
    id: int
    symbol: str
    transaction_type: str
    quantity: int
    price_per_share: Decimal
    total_amount: Decimal
    total_amount_display: str
    profit_loss: Decimal | None
    executed_at: str

    @classmethod
    def from_domain(cls, tx: Transaction) -> "TransactionItem":
        return cls(
            id=tx.id,
            symbol=tx.symbol,
            transaction_type=tx.type.value,
            quantity=tx.quantity,
            price_per_share=tx.price_per_share,
            total_amount=tx.total_amount,
            total_amount_display=money_to_display(tx.total_amount),
            profit_loss=tx.profit_loss,
            executed_at=to_iso(tx.executed_at),
        )


class TransactionListResponse(BaseModel):
    items: list[TransactionItem]
    next_cursor: str | None
    has_more: bool
