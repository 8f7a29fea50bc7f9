"""Tests for pt_common.enums: values must match DB CHECK constraints."""

import pytest

from src.pt_common.enums import LotMatching, TransactionType


class TestTransactionType:
    def test_is_str(self) -> None:
        assert isinstance(TransactionType.BUY, str)
        assert TransactionType.BUY == "BUY"
        assert TransactionType.SELL == "SELL"

    def test_only_buy_and_sell(self) -> None:
        assert {t.value for t in TransactionType} == {"BUY", "SELL"}

    def test_unknown_value_rejected(self) -> None:
        with pytest.raises(ValueError):
            TransactionType("SHORT")


class TestLotMatching:
    def test_values(self) -> None:
        assert LotMatching("REPLAY") is LotMatching.REPLAY
        assert LotMatching("FIFO") is LotMatching.FIFO
