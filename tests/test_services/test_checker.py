"""Tests for single and batch token checks."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from src.parsers.goplus.client import GoPlusClient
from src.risk.models import ContractInfo, RiskLevel
from src.services.checker import (
    BatchCheckError,
    StaticAttributeSource,
    TokenChecker,
    check_tokens,
)

TOKEN_A = "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"
TOKEN_B = "0xbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"


class FakeSource:
    """Attribute source stub: records per address, failures per address."""

    def __init__(
        self,
        records: dict[str, dict] | None = None,
        failing: set[str] | None = None,
        delay: float = 0.0,
    ) -> None:
        self._records = records or {}
        self._failing = failing or set()
        self._delay = delay
        self.calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch_attributes(self, chain: str, address: str):
        self.calls.append((chain, address))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delay)
            if address in self._failing:
                raise RuntimeError(f"upstream down for {address}")
            return self._records.get(address)
        finally:
            self.in_flight -= 1


class TestSingleCheck:
    @pytest.mark.asyncio
    async def test_uses_source_record(self, scam_record) -> None:
        checker = TokenChecker(FakeSource({TOKEN_A: scam_record}))
        result = await checker.check("eth", TOKEN_A)

        assert result.address == TOKEN_A
        assert result.chain == "eth"
        assert result.is_honeypot is True
        assert result.risk_level == RiskLevel.CRITICAL

    @pytest.mark.asyncio
    async def test_absent_data_degrades(self) -> None:
        checker = TokenChecker(FakeSource())
        result = await checker.check("eth", TOKEN_A)

        assert result.contract == ContractInfo.empty()
        assert result.risks == ()
        assert result.risk_score == 0
        assert result.risk_level == RiskLevel.SAFE
        assert result.is_honeypot is False

    @pytest.mark.asyncio
    async def test_hard_failure_propagates(self) -> None:
        checker = TokenChecker(FakeSource(failing={TOKEN_A}))
        with pytest.raises(RuntimeError):
            await checker.check("eth", TOKEN_A)

    def test_rejects_zero_concurrency(self) -> None:
        with pytest.raises(ValueError):
            TokenChecker(FakeSource(), concurrency=0)


class TestBatch:
    @pytest.mark.asyncio
    async def test_order_with_absent_item(self, scam_record) -> None:
        """B has no data: results stay [A, B] and B reads clean."""
        source = FakeSource({TOKEN_A: scam_record})
        results = await check_tokens([(TOKEN_A, "eth"), (TOKEN_B, "bsc")], source)

        assert [r.address for r in results] == [TOKEN_A, TOKEN_B]
        assert [r.chain for r in results] == ["eth", "bsc"]
        assert results[0].is_honeypot is True
        assert results[1].contract == ContractInfo.empty()
        assert results[1].risk_score == 0

    @pytest.mark.parametrize(
        "failure",
        [httpx.ReadError("connection reset"), httpx.ConnectTimeout("timed out")],
    )
    @pytest.mark.asyncio
    async def test_order_with_failed_fetch(self, scam_record, failure) -> None:
        """B's GoPlus request fails: results stay [A, B], B reads clean, nothing raises."""

        async def fake_get(url, params):
            address = params["contract_addresses"]
            if address == TOKEN_B:
                raise failure
            resp = MagicMock()
            resp.status_code = 200
            resp.json.return_value = {"code": 1, "message": "OK", "result": {address: scam_record}}
            return resp

        goplus = GoPlusClient(max_rps=100.0)
        goplus._client = AsyncMock()
        goplus._client.get = AsyncMock(side_effect=fake_get)

        with patch("src.parsers.goplus.client.asyncio.sleep", new=AsyncMock()):
            results = await check_tokens([(TOKEN_A, "eth"), (TOKEN_B, "bsc")], goplus)

        assert [r.address for r in results] == [TOKEN_A, TOKEN_B]
        assert results[0].is_honeypot is True
        assert results[1].contract == ContractInfo.empty()
        assert results[1].token_info is None
        assert results[1].risk_level == RiskLevel.SAFE

    @pytest.mark.asyncio
    async def test_order_independent_of_completion(self) -> None:
        """Later items finishing first does not reorder output."""

        class SlowFirst(FakeSource):
            async def fetch_attributes(self, chain, address):
                await asyncio.sleep(0.05 if address == "t0" else 0.0)
                return {"is_open_source": "1", "token_name": address, "holder_count": "100"}

        pairs = [(f"t{i}", "eth") for i in range(4)]
        results = await TokenChecker(SlowFirst()).check_many(pairs)
        assert [r.address for r in results] == ["t0", "t1", "t2", "t3"]

    @pytest.mark.asyncio
    async def test_window_caps_in_flight(self) -> None:
        source = FakeSource(delay=0.01)
        pairs = [(f"0x{i:040x}", "eth") for i in range(12)]

        results = await TokenChecker(source, concurrency=5).check_many(pairs)

        assert len(results) == 12
        assert source.max_in_flight == 5
        assert [c[1] for c in source.calls] == [p[0] for p in pairs]

    @pytest.mark.asyncio
    async def test_empty_batch(self) -> None:
        assert await check_tokens([], FakeSource()) == []

    @pytest.mark.asyncio
    async def test_hard_failure_after_all_windows(self) -> None:
        """A failure in the first window does not stop later windows."""
        source = FakeSource(failing={"t1", "t6"})
        pairs = [(f"t{i}", "eth") for i in range(8)]

        with pytest.raises(BatchCheckError) as exc_info:
            await TokenChecker(source, concurrency=5).check_many(pairs)

        assert len(source.calls) == 8
        err = exc_info.value
        assert err.index == 1
        assert err.address == "t1"
        assert err.chain == "eth"
        assert isinstance(err.cause, RuntimeError)


class TestStaticSource:
    @pytest.mark.asyncio
    async def test_lookup_is_case_insensitive(self, clean_record) -> None:
        source = StaticAttributeSource({("ETH", TOKEN_A.upper()): clean_record})
        assert await source.fetch_attributes("eth", TOKEN_A) == clean_record
        assert await source.fetch_attributes("bsc", TOKEN_A) is None

    @pytest.mark.asyncio
    async def test_empty_source_degrades(self) -> None:
        checker = TokenChecker(StaticAttributeSource())
        result = await checker.check("eth", TOKEN_A)
        assert result.risk_level == RiskLevel.SAFE
