"""Domain models for pt_trading: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.pt_common.enums import TransactionType


@dataclass
class Position:
    user_id: str
    symbol: str
    shares_owned: int = 0
    average_cost_basis: Decimal = Decimal("0")   # dollars per share, 4 dp
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def cost_basis(self) -> Decimal:
        return self.average_cost_basis * self.shares_owned


@dataclass
class Transaction:
    id: int                          # BIGSERIAL
    user_id: str
    symbol: str
    type: TransactionType
    quantity: int
    price_per_share: Decimal
    total_amount: Decimal            # quantity * price_per_share
    executed_at: datetime
    profit_loss: Decimal | None = None   # SELL only; None when cost basis is unknown


@dataclass
class ExecutionResult:
    transaction: Transaction
    new_cash_balance: Decimal
    new_shares_owned: int
