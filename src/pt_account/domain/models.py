"""Domain models for pt_account: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Wallet:
    user_id: str
    cash_balance: Decimal   # dollars, 2 dp, never negative
    created_at: datetime | None = None
    updated_at: datetime | None = None
