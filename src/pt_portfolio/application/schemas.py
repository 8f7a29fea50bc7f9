"""Pydantic schemas for portfolio valuation."""

from decimal import Decimal

from pydantic import BaseModel


class HoldingItem(BaseModel):
    symbol: str
    shares_owned: int
    average_cost_basis: Decimal
    # None when no quote was available; market_value then falls back to cost_basis
    current_price: Decimal | None
    market_value: Decimal
    cost_basis: Decimal
    unrealized_profit_loss: Decimal
    unrealized_profit_loss_percent: Decimal


class PortfolioSummaryResponse(BaseModel):
    user_id: str
    cash_balance: Decimal
    cash_balance_display: str
    holdings: list[HoldingItem]
    total_invested: Decimal
    total_market_value: Decimal
    total_unrealized_profit_loss: Decimal
    total_value: Decimal
    total_value_display: str
