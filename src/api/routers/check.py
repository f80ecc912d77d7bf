"""Token check endpoints: single and batch."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from config.settings import settings
from src.api.dependencies import get_checker
from src.api.schemas import BatchCheckRequest, TokenCheckOut
from src.services.checker import BatchCheckError, TokenChecker

router = APIRouter(prefix="/check", tags=["check"])


@router.post("/batch", response_model=list[TokenCheckOut])
async def check_batch(
    body: BatchCheckRequest,
    checker: TokenChecker = Depends(get_checker),
) -> list[TokenCheckOut]:
    """Check many tokens; results keep request order."""
    if len(body.tokens) > settings.batch_max_tokens:
        raise HTTPException(
            status_code=422,
            detail=f"At most {settings.batch_max_tokens} tokens per batch",
        )

    pairs = [(t.address, t.chain) for t in body.tokens]
    try:
        results = await checker.check_many(pairs)
    except BatchCheckError as e:
        logger.error(f"[API] Batch of {len(pairs)} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Batch check failed",
        ) from e

    logger.info(f"[API] Batch checked {len(results)} tokens")
    return [TokenCheckOut.from_check(r) for r in results]


@router.get("/{chain}/{address}", response_model=TokenCheckOut)
async def check_single(
    chain: str,
    address: str,
    checker: TokenChecker = Depends(get_checker),
) -> TokenCheckOut:
    """Check one token. Missing or failed upstream data still yields a (clean) result."""
    result = await checker.check(chain, address)
    logger.info(
        f"[API] {chain}:{address} score={result.risk_score} level={result.risk_level.value}"
    )
    return TokenCheckOut.from_check(result)
