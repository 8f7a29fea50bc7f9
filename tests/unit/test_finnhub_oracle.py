"""Unit tests for FinnhubPriceOracle over httpx.MockTransport."""

from decimal import Decimal

import httpx
import pytest

from src.pt_common.errors import PriceUnavailableError
from src.pt_pricing.infrastructure.finnhub import FinnhubPriceOracle

BASE = "https://finnhub.test/api/v1"


def _oracle(handler) -> FinnhubPriceOracle:  # type: ignore[no-untyped-def]
    client = httpx.AsyncClient(base_url=BASE, transport=httpx.MockTransport(handler))
    return FinnhubPriceOracle(client=client, token="test-token")


def _quotes(prices: dict[str, object]):  # type: ignore[no-untyped-def]
    def handler(request: httpx.Request) -> httpx.Response:
        symbol = request.url.params["symbol"]
        return httpx.Response(200, json={"c": prices.get(symbol, 0), "pc": 1})

    return handler


class TestGetCurrentPrice:
    async def test_returns_quantized_price(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"c": 189.845, "d": 1.2, "pc": 188.6})

        oracle = _oracle(handler)
        price = await oracle.get_current_price("AAPL")

        assert price == Decimal("189.85")
        assert seen[0].url.path == "/api/v1/quote"
        assert seen[0].url.params["symbol"] == "AAPL"
        assert seen[0].url.params["token"] == "test-token"
        await oracle.aclose()

    async def test_zero_quote_is_unavailable(self) -> None:
        oracle = _oracle(_quotes({}))
        with pytest.raises(PriceUnavailableError) as exc_info:
            await oracle.get_current_price("ZZZZ")
        assert exc_info.value.code == 4002
        assert exc_info.value.symbol == "ZZZZ"

    async def test_missing_field_is_unavailable(self) -> None:
        oracle = _oracle(lambda request: httpx.Response(200, json={}))
        with pytest.raises(PriceUnavailableError):
            await oracle.get_current_price("AAPL")

    async def test_malformed_json(self) -> None:
        oracle = _oracle(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(PriceUnavailableError) as exc_info:
            await oracle.get_current_price("AAPL")
        assert "malformed" in exc_info.value.message
        assert exc_info.value.__cause__ is not None

    async def test_rate_limited(self) -> None:
        oracle = _oracle(lambda request: httpx.Response(429, json={"error": "limit"}))
        with pytest.raises(PriceUnavailableError) as exc_info:
            await oracle.get_current_price("AAPL")
        assert "rate limit" in exc_info.value.message

    async def test_server_error(self) -> None:
        oracle = _oracle(lambda request: httpx.Response(502))
        with pytest.raises(PriceUnavailableError) as exc_info:
            await oracle.get_current_price("AAPL")
        assert "502" in exc_info.value.message

    async def test_timeout_is_chained(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        oracle = _oracle(handler)
        with pytest.raises(PriceUnavailableError) as exc_info:
            await oracle.get_current_price("AAPL")
        assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)

    async def test_connect_error_is_chained(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        oracle = _oracle(handler)
        with pytest.raises(PriceUnavailableError) as exc_info:
            await oracle.get_current_price("AAPL")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestGetCurrentPrices:
    async def test_omits_missing_quotes(self) -> None:
        oracle = _oracle(_quotes({"AAPL": 190, "MSFT": 410.5}))
        prices = await oracle.get_current_prices(["AAPL", "MSFT", "ZZZZ"])
        assert prices == {"AAPL": Decimal("190.00"), "MSFT": Decimal("410.50")}

    async def test_all_missing_raises(self) -> None:
        oracle = _oracle(_quotes({}))
        with pytest.raises(PriceUnavailableError):
            await oracle.get_current_prices(["ZZZZ", "YYYY"])

    async def test_empty_request(self) -> None:
        oracle = _oracle(_quotes({}))
        assert await oracle.get_current_prices([]) == {}
