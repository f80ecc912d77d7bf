"""GoPlus Security API client: EVM token security records."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from loguru import logger

from src.parsers.goplus.models import GoPlusResponse, resolve_chain_id
from src.parsers.rate_limiter import RateLimiter

BASE_URL = "https://api.gopluslabs.io/api/v1/token_security"
MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 3.0]


class GoPlusClient:
    """Async HTTP client for the GoPlus token_security endpoint.

    ``fetch_attributes`` returns the raw record, or None when GoPlus has no
    usable data (unsupported chain, unknown token, HTTP error, transport
    failure, malformed body, retries exhausted). It never raises for upstream
    trouble: the caller scores a missing record as clean.
    """

    def __init__(
        self,
        *,
        base_url: str = BASE_URL,
        api_key: str = "",
        timeout: float = 10.0,
        max_rps: float = 0.5,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._rate_limiter = RateLimiter(max_rps)
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = api_key
        self._client = httpx.AsyncClient(timeout=timeout, headers=headers)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GoPlusClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def fetch_attributes(self, chain: str, address: str) -> dict[str, Any] | None:
        """Fetch the raw security record for one token."""
        chain_id = resolve_chain_id(chain)
        if chain_id is None:
            logger.debug(f"[GOPLUS] Unsupported chain {chain!r}")
            return None

        url = f"{self._base_url}/{chain_id}"
        params = {"contract_addresses": address}

        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.get(url, params=params)

                if resp.status_code == 429:
                    if attempt >= MAX_RETRIES:
                        logger.warning(f"[GOPLUS] Rate limited after retries for {address[:12]}")
                        return None
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[GOPLUS] Rate limited, waiting {delay}s")
                    await asyncio.sleep(delay)
                    continue

                if resp.status_code != 200:
                    logger.debug(f"[GOPLUS] HTTP {resp.status_code} for {address[:12]}")
                    return None

                return _parse_record(resp, address)

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[GOPLUS] {type(e).__name__}, retry in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    logger.warning(f"[GOPLUS] Failed after retries for {address[:12]}: {e}")
                    return None
            except httpx.HTTPError as e:
                logger.warning(f"[GOPLUS] {type(e).__name__} for {address[:12]}: {e}")
                return None

        return None


def _parse_record(resp: httpx.Response, address: str) -> dict[str, Any] | None:
    """Unwrap {code, result: {address: {...}}}; None when GoPlus has nothing usable."""
    try:
        parsed = GoPlusResponse.model_validate(resp.json())
    except ValueError as e:
        # ValidationError is a ValueError, and so is a JSON decode failure
        logger.warning(f"[GOPLUS] Malformed response for {address[:12]}: {e}")
        return None

    if not parsed.ok:
        logger.debug(f"[GOPLUS] code={parsed.code} message={parsed.message!r} for {address[:12]}")
        return None

    record = parsed.record_for(address)
    if not record:
        logger.debug(f"[GOPLUS] No record for {address[:12]}")
        return None
    return record
