"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class TransactionType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class LotMatching(str, Enum):
    """How a SELL is matched against BUY lots when computing realized P/L."""
    REPLAY = "REPLAY"   # re-walk the whole BUY history on every sell
    FIFO = "FIFO"       # skip shares already consumed by earlier sells
