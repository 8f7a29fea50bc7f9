"""Pydantic schemas for wallet operations."""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.pt_common.money import money_to_display

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AddCashRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, decimal_places=2, description="Dollars to add")
    reason: str | None = Field(None, max_length=200)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class WalletBalanceResponse(BaseModel):
    user_id: str
    cash_balance: Decimal
    cash_balance_display: str

    @classmethod
    def from_balance(cls, user_id: str, cash_balance: Decimal) -> "WalletBalanceResponse":
        return cls(
            user_id=user_id,
            cash_balance=cash_balance,
            cash_balance_display=money_to_display(cash_balance),
        )


class AddCashResponse(BaseModel):
    cash_balance: Decimal
    cash_balance_display: str
    added: Decimal
    added_display: str

    @classmethod
    def from_result(cls, cash_balance: Decimal, added: Decimal) -> "AddCashResponse":
        return cls(
            cash_balance=cash_balance,
            cash_balance_display=money_to_display(cash_balance),
            added=added,
            added_display=money_to_display(added),
        )
