"""In-memory fakes for the trading core.

FakeSession.rollback() restores the store to its state at the last commit, so
tests can assert that a failed trade leaves nothing behind.
"""

import copy
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.pt_account.domain.models import Wallet
from src.pt_common.enums import LotMatching
from src.pt_common.errors import InsufficientFundsError, PriceUnavailableError, WalletNotFoundError
from src.pt_symbol.application.service import SymbolApplicationService
from src.pt_symbol.domain.models import Symbol
from src.pt_trading.domain.ledger import TradeLedger
from src.pt_trading.domain.models import Position, Transaction


@dataclass
class InMemoryStore:
    wallets: dict[str, Wallet] = field(default_factory=dict)
    positions: dict[tuple[str, str], Position] = field(default_factory=dict)
    transactions: list[Transaction] = field(default_factory=list)
    symbols: dict[str, Symbol] = field(default_factory=dict)

    def snapshot(self) -> "InMemoryStore":
        return copy.deepcopy(self)

    def restore(self, other: "InMemoryStore") -> None:
        self.wallets = copy.deepcopy(other.wallets)
        self.positions = copy.deepcopy(other.positions)
        self.transactions = copy.deepcopy(other.transactions)
        self.symbols = copy.deepcopy(other.symbols)


class FakeSession:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._checkpoint = store.snapshot()
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self._checkpoint = self._store.snapshot()
        self.commits += 1

    async def rollback(self) -> None:
        self._store.restore(self._checkpoint)
        self.rollbacks += 1


class FakeWalletRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_wallet(self, db, user_id):  # type: ignore[no-untyped-def]
        w = self._store.wallets.get(user_id)
        return replace(w) if w else None

    async def lock_wallet(self, db, user_id):  # type: ignore[no-untyped-def]
        return await self.get_wallet(db, user_id)

    async def create_wallet(self, db, user_id, initial_balance):  # type: ignore[no-untyped-def]
        w = self._store.wallets.setdefault(user_id, Wallet(user_id, initial_balance))
        return replace(w)

    async def debit(self, db, user_id, amount):  # type: ignore[no-untyped-def]
        w = self._store.wallets.get(user_id)
        if w is None:
            raise WalletNotFoundError(user_id)
        if w.cash_balance < amount:
            raise InsufficientFundsError(amount, w.cash_balance)
        w.cash_balance -= amount
        return replace(w)

    async def credit(self, db, user_id, amount):  # type: ignore[no-untyped-def]
        w = self._store.wallets.get(user_id)
        if w is None:
            raise WalletNotFoundError(user_id)
        w.cash_balance += amount
        return replace(w)


class FakePositionRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_position(self, db, user_id, symbol):  # type: ignore[no-untyped-def]
        p = self._store.positions.get((user_id, symbol))
        return replace(p) if p else None

    async def lock_position(self, db, user_id, symbol):  # type: ignore[no-untyped-def]
        return await self.get_position(db, user_id, symbol)

    async def list_positions(self, db, user_id):  # type: ignore[no-untyped-def]
        return [
            replace(p)
            for (uid, _), p in sorted(self._store.positions.items())
            if uid == user_id
        ]

    async def save_position(self, db, position):  # type: ignore[no-untyped-def]
        assert position.shares_owned > 0, "zero-share positions must be deleted"
        self._store.positions[(position.user_id, position.symbol)] = replace(position)
        return replace(position)

    async def delete_position(self, db, user_id, symbol):  # type: ignore[no-untyped-def]
        self._store.positions.pop((user_id, symbol), None)


class FakeTransactionRepository:
    """Hands out strictly increasing executed_at values so ordering is deterministic."""

    _EPOCH = datetime(2026, 1, 5, 14, 30, tzinfo=timezone.utc)

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def append(  # type: ignore[no-untyped-def]
        self, db, user_id, symbol, tx_type, quantity, price_per_share,
        total_amount, profit_loss, executed_at,
    ):
        next_id = len(self._store.transactions) + 1
        tx = Transaction(
            id=next_id,
            user_id=user_id,
            symbol=symbol,
            type=tx_type,
            quantity=quantity,
            price_per_share=price_per_share,
            total_amount=total_amount,
            profit_loss=profit_loss,
            executed_at=self._EPOCH + timedelta(seconds=next_id),
        )
        self._store.transactions.append(tx)
        return replace(tx)

    async def list_for_symbol(self, db, user_id, symbol):  # type: ignore[no-untyped-def]
        txs = [
            t for t in self._store.transactions
            if t.user_id == user_id and t.symbol == symbol
        ]
        return sorted(txs, key=lambda t: (t.executed_at, t.id))

    async def list_by_user(self, db, user_id, cursor_id, limit):  # type: ignore[no-untyped-def]
        txs = [
            t for t in self._store.transactions
            if t.user_id == user_id and (cursor_id is None or t.id < cursor_id)
        ]
        txs.sort(key=lambda t: (t.executed_at, t.id), reverse=True)
        return txs[:limit]


class FakeSymbolRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_symbol(self, db, symbol):  # type: ignore[no-untyped-def]
        s = self._store.symbols.get(symbol)
        return replace(s) if s else None

    async def list_symbols(self, db, enabled):  # type: ignore[no-untyped-def]
        return [
            replace(s) for _, s in sorted(self._store.symbols.items())
            if enabled is None or s.enabled == enabled
        ]

    async def set_enabled(self, db, symbol, enabled):  # type: ignore[no-untyped-def]
        s = self._store.symbols.get(symbol)
        if s is None:
            return None
        s.enabled = enabled
        return replace(s)


class FakePriceOracle:
    def __init__(self) -> None:
        self.prices: dict[str, Decimal] = {}
        self.calls: list[str] = []

    async def get_current_price(self, symbol: str) -> Decimal:
        self.calls.append(symbol)
        if symbol not in self.prices:
            raise PriceUnavailableError(symbol, "no quote")
        return self.prices[symbol]

    async def get_current_prices(self, symbols: list[str]) -> dict[str, Decimal]:
        found = {s: self.prices[s] for s in symbols if s in self.prices}
        if symbols and not found:
            raise PriceUnavailableError(",".join(symbols), "no quotes")
        return found


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> InMemoryStore:
    s = InMemoryStore()
    for ticker, name in (("AAPL", "Apple Inc"), ("MSFT", "Microsoft Corp")):
        s.symbols[ticker] = Symbol(symbol=ticker, name=name, exchange="NASDAQ", currency="USD")
    s.symbols["HALT"] = Symbol(symbol="HALT", name="Halted Corp", enabled=False)
    s.wallets["user-1"] = Wallet(user_id="user-1", cash_balance=Decimal("1000.00"))
    return s


@pytest.fixture
def db(store: InMemoryStore) -> FakeSession:
    return FakeSession(store)


@pytest.fixture
def oracle() -> FakePriceOracle:
    o = FakePriceOracle()
    o.prices["AAPL"] = Decimal("100.00")
    o.prices["MSFT"] = Decimal("300.00")
    o.prices["HALT"] = Decimal("5.00")
    return o


@pytest.fixture
def wallet_repo(store: InMemoryStore) -> FakeWalletRepository:
    return FakeWalletRepository(store)


@pytest.fixture
def position_repo(store: InMemoryStore) -> FakePositionRepository:
    return FakePositionRepository(store)


@pytest.fixture
def tx_repo(store: InMemoryStore) -> FakeTransactionRepository:
    return FakeTransactionRepository(store)


@pytest.fixture
def symbol_service(store: InMemoryStore) -> SymbolApplicationService:
    return SymbolApplicationService(repo=FakeSymbolRepository(store))


@pytest.fixture
def make_ledger(wallet_repo, position_repo, tx_repo, symbol_service, oracle):  # type: ignore[no-untyped-def]
    def _make(lot_matching: LotMatching = LotMatching.REPLAY) -> TradeLedger:
        return TradeLedger(
            wallets=wallet_repo,
            positions=position_repo,
            transactions=tx_repo,
            symbols=symbol_service,
            oracle=oracle,
            lot_matching=lot_matching,
        )

    return _make


@pytest.fixture
def ledger(make_ledger) -> TradeLedger:  # type: ignore[no-untyped-def]
    return make_ledger()
