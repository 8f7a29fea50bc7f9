"""Domain models for pt_symbol: pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Symbol:
    symbol: str
    name: str
    exchange: str | None = None
    currency: str | None = None
    mic: str | None = None
    enabled: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


def normalize_symbol(raw: str) -> str:
    """' aapl ' -> 'AAPL'."""
    return raw.strip().upper()
