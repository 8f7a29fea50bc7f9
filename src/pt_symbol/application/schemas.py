"""Pydantic schemas for the symbol catalog."""

from pydantic import BaseModel

from src.pt_symbol.domain.models import Symbol


class SymbolItem(BaseModel):
    symbol: str
    name: str
    exchange: str | None
    currency: str | None
    enabled: bool

    @classmethod
    def from_domain(cls, s: Symbol) -> "SymbolItem":
        return cls(
            symbol=s.symbol,
            name=s.name,
            exchange=s.exchange,
            currency=s.currency,
            enabled=s.enabled,
        )


class SymbolListResponse(BaseModel):
    items: list[SymbolItem]
