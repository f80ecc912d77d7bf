"""Risk scoring, classification and verdicts.

Everything here is pure: the same ContractInfo/TokenInfo pair always
yields the same findings, score, level and verdicts.
"""

from __future__ import annotations

import time
from collections.abc import Iterable

from src.risk.models import (
    ContractInfo,
    Risk,
    RiskLevel,
    Severity,
    TokenCheck,
    TokenInfo,
)
from src.risk.rules import evaluate_risks

SEVERITY_WEIGHTS: dict[Severity, int] = {
    Severity.LOW: 5,
    Severity.MEDIUM: 15,
    Severity.HIGH: 25,
    Severity.CRITICAL: 40,
}
MAX_SCORE = 100

# (upper bound exclusive, level); anything at or above the last bound is critical
LEVEL_BANDS: tuple[tuple[int, RiskLevel], ...] = (
    (15, RiskLevel.SAFE),
    (35, RiskLevel.LOW),
    (55, RiskLevel.MEDIUM),
    (75, RiskLevel.HIGH),
)

HONEYPOT_SELL_TAX = 50.0
RUG_PULL_SCORE = 70


def score(risks: Iterable[Risk]) -> int:
    """Sum severity weights, clamped to 0..100."""
    total = sum(SEVERITY_WEIGHTS[r.severity] for r in risks)
    return min(MAX_SCORE, total)


def classify(risk_score: int) -> RiskLevel:
    for upper, level in LEVEL_BANDS:
        if risk_score < upper:
            return level
    return RiskLevel.CRITICAL


def check_honeypot(contract: ContractInfo) -> bool:
    """Honeypot verdict straight from attributes, independent of findings."""
    if contract.is_honeypot or contract.honeypot_with_same_creator:
        return True
    if contract.cannot_sell_all:
        return True
    return contract.sell_tax is not None and contract.sell_tax > HONEYPOT_SELL_TAX


def check_rug_pull(risk_score: int, is_honeypot: bool) -> bool:
    """High aggregate risk, or a confirmed honeypot, counts as a rug pull."""
    return risk_score >= RUG_PULL_SCORE or is_honeypot


def check_token(
    address: str,
    chain: str,
    contract: ContractInfo,
    token_info: TokenInfo | None = None,
    *,
    now_ms: int | None = None,
) -> TokenCheck:
    """Full security check for one token.

    ``address`` and ``chain`` are passed through untouched.
    """
    risks = evaluate_risks(contract, token_info)
    risk_score = score(risks)
    is_honeypot = check_honeypot(contract)

    return TokenCheck(
        address=address,
        chain=chain,
        is_honeypot=is_honeypot,
        is_rug_pull=check_rug_pull(risk_score, is_honeypot),
        risk_score=risk_score,
        risk_level=classify(risk_score),
        risks=tuple(risks),
        contract=contract,
        token_info=token_info,
        timestamp=now_ms if now_ms is not None else int(time.time() * 1000),
    )
