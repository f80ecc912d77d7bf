"""Token checker: attribute source → normalizer → risk engine.

Single checks never fail on missing data: an absent record degrades to a
clean ContractInfo. Batches run in fixed windows so that at most
``concurrency`` lookups are in flight against the attribute source.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from loguru import logger

from src.risk.engine import check_token
from src.risk.models import TokenCheck
from src.risk.normalizer import normalize

DEFAULT_CONCURRENCY = 5


class AttributeSource(Protocol):
    """Anything that can supply a raw GoPlus-shaped record per token.

    Return None for "no data", which includes unsupported chains and network
    failures. Raising is reserved for a hard failure the caller must see.
    """

    async def fetch_attributes(self, chain: str, address: str) -> Mapping[str, Any] | None: ...


class StaticAttributeSource:
    """In-memory records keyed by (chain, address). Offline mode and fixtures."""

    def __init__(self, records: Mapping[tuple[str, str], Mapping[str, Any]] | None = None) -> None:
        self._records = {
            (chain.lower(), address.lower()): record
            for (chain, address), record in (records or {}).items()
        }

    async def fetch_attributes(self, chain: str, address: str) -> Mapping[str, Any] | None:
        return self._records.get((chain.lower(), address.lower()))


class BatchCheckError(Exception):
    """A hard fetch failure inside a batch (first one in input order)."""

    def __init__(self, index: int, chain: str, address: str, cause: BaseException) -> None:
        super().__init__(f"Check failed for item {index} ({chain}:{address}): {cause}")
        self.index = index
        self.chain = chain
        self.address = address
        self.cause = cause


class TokenChecker:
    def __init__(self, source: AttributeSource, *, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self._source = source
        self._concurrency = concurrency

    async def check(self, chain: str, address: str) -> TokenCheck:
        """Check one token. Absent data degrades; an exception from the source propagates."""
        raw = await self._source.fetch_attributes(chain, address)
        if raw is None:
            logger.debug(f"[CHECK] No attributes for {chain}:{address}, using clean record")
        contract, token_info = normalize(raw)
        result = check_token(address, chain, contract, token_info)
        logger.debug(
            f"[CHECK] {chain}:{address} score={result.risk_score} "
            f"level={result.risk_level.value} honeypot={result.is_honeypot}"
        )
        return result

    async def check_many(self, pairs: Iterable[tuple[str, str]]) -> list[TokenCheck]:
        """Check (address, chain) pairs; output order matches input order.

        Every window runs to completion even if an item fails, then the first
        failure (by input position) is raised as ``BatchCheckError``.
        """
        items: Sequence[tuple[str, str]] = list(pairs)
        outcomes: list[TokenCheck | BaseException] = []

        for start in range(0, len(items), self._concurrency):
            window = items[start:start + self._concurrency]
            outcomes.extend(
                await asyncio.gather(
                    *(self.check(chain, address) for address, chain in window),
                    return_exceptions=True,
                )
            )

        results: list[TokenCheck] = []
        for index, outcome in enumerate(outcomes):
            if isinstance(outcome, BaseException):
                address, chain = items[index]
                logger.warning(f"[CHECK] Batch item {index} ({chain}:{address}) failed: {outcome}")
                raise BatchCheckError(index, chain, address, outcome) from outcome
            results.append(outcome)
        return results


async def check_tokens(
    pairs: Iterable[tuple[str, str]],
    source: AttributeSource,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[TokenCheck]:
    """Batch check (address, chain) pairs against ``source``."""
    return await TokenChecker(source, concurrency=concurrency).check_many(pairs)
