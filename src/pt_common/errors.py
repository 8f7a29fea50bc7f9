"""Unified error codes and custom exceptions.

Error code ranges:
  2xxx: Wallet
  3xxx: Symbol
  4xxx: Order / Pricing
  5xxx: Position
  9xxx: System

Every business rule violation raised by the trading core is an AppError.
Anything else (driver errors, bugs) propagates as-is.
"""

from decimal import Decimal


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 2xxx: Wallet ---

class InsufficientFundsError(AppError):
    def __init__(self, required: Decimal, available: Decimal) -> None:
        self.required = required
        self.available = available
        super().__init__(
            2001,
            f"Insufficient funds: required ${required}, available ${available}",
            422,
        )


class WalletNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(2002, f"Wallet not found for user {user_id}", 404)


class InvalidAmountError(AppError):
    def __init__(self, amount: Decimal) -> None:
        super().__init__(2003, f"Amount must be positive, got {amount}", 422)


# --- 3xxx: Symbol ---

class SymbolNotFoundError(AppError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(3001, f"Symbol not found: {symbol}", 404)


class SymbolDisabledError(AppError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(3002, f"Trading is disabled for symbol: {symbol}", 422)


# --- 4xxx: Order / Pricing ---

class InvalidQuantityError(AppError):
    def __init__(self, quantity: int) -> None:
        super().__init__(4001, f"Quantity must be a positive integer, got {quantity}", 422)


class PriceUnavailableError(AppError):
    """Quote could not be obtained. The underlying failure is chained as __cause__."""

    def __init__(self, symbol: str, detail: str | None = None) -> None:
        self.symbol = symbol
        message = f"Price unavailable for {symbol}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(4002, message, 503)


# --- 5xxx: Position ---

class PositionNotFoundError(AppError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(5001, f"No open position for symbol: {symbol}", 404)


class InsufficientSharesError(AppError):
    def __init__(self, symbol: str, owned: int, requested: int) -> None:
        self.symbol = symbol
        self.owned = owned
        self.requested = requested
        super().__init__(
            5002,
            f"Insufficient shares of {symbol}: owned {owned}, requested {requested}",
            422,
        )


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
