"""Cost-basis arithmetic: weighted average on buys, lot matching on sells."""

import logging
from collections.abc import Iterable
from decimal import Decimal

from src.pt_common.enums import LotMatching, TransactionType
from src.pt_common.money import ZERO, quantize_cost, quantize_money
from src.pt_trading.domain.models import Transaction

logger = logging.getLogger(__name__)


def weighted_average_cost(
    old_avg: Decimal, old_shares: int, total_cost: Decimal, quantity: int
) -> Decimal:
    """(old_avg * old_shares + total_cost) / (old_shares + quantity), 4 dp HALF_UP."""
    new_shares = old_shares + quantity
    if new_shares <= 0:
        raise ValueError(f"Resulting share count must be positive, got {new_shares}")
    return quantize_cost((old_avg * old_shares + total_cost) / new_shares)


def realized_profit_loss(
    history: Iterable[Transaction],
    quantity: int,
    sell_price: Decimal,
    mode: LotMatching = LotMatching.REPLAY,
) -> Decimal | None:
    """Realized P/L for selling `quantity` shares at `sell_price`.

    `history` must be chronological and must not contain the sell being priced.
    Returns None when the BUY lots cannot cover `quantity`.
    """
    ordered = list(history)
    buys = [t for t in ordered if t.type == TransactionType.BUY]

    # Shares to skip at the head of the BUY lots
    consumed = 0
    if mode == LotMatching.FIFO:
        consumed = sum(t.quantity for t in ordered if t.type == TransactionType.SELL)

    remaining = quantity
    total_cost = ZERO
    for buy in buys:
        if remaining == 0:
            break
        available = buy.quantity
        if consumed:
            skipped = min(consumed, available)
            consumed -= skipped
            available -= skipped
            if available == 0:
                continue
        used = min(remaining, available)
        total_cost += buy.price_per_share * used
        remaining -= used

    if remaining > 0:
        logger.debug(
            "BUY history short by %d shares (mode=%s); P/L left undetermined",
            remaining, mode.value,
        )
        return None
    return quantize_money(sell_price * quantity - total_cost)
