"""Declarative risk rule table.

Rules are evaluated in declaration order and each fires at most once, so the
order of ``RULES`` is the order of findings in every TokenCheck. Groups run
critical → high → medium → low, with holder-distribution rules placed after
the contract-only medium rules.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from src.risk.models import ContractInfo, Risk, Severity, TokenInfo

Predicate = Callable[[ContractInfo, TokenInfo | None], bool]
SeverityFn = Callable[[ContractInfo, TokenInfo | None], Severity]
Describer = Callable[[ContractInfo, TokenInfo | None], str]

TAX_THRESHOLD = 10.0
TAX_CRITICAL = 30.0
CREATOR_THRESHOLD = 10.0
CREATOR_HIGH = 30.0
TOP10_THRESHOLD = 50.0
TOP10_HIGH = 70.0
MIN_HOLDERS = 50


@dataclass(frozen=True)
class Rule:
    """One check: predicate, severity (fixed or tiered) and description."""

    type: str
    predicate: Predicate
    severity: Severity | SeverityFn
    description: str | Describer

    def evaluate(self, contract: ContractInfo, token_info: TokenInfo | None = None) -> Risk | None:
        if not self.predicate(contract, token_info):
            return None

        severity = self.severity
        if not isinstance(severity, Severity):
            severity = severity(contract, token_info)

        description = self.description
        if not isinstance(description, str):
            description = description(contract, token_info)

        return Risk(type=self.type, severity=severity, description=description)


def _flag(name: str) -> Predicate:
    return lambda c, _t: bool(getattr(c, name))


def _above(value: float | None, threshold: float) -> bool:
    """Unset values never cross a threshold."""
    return value is not None and value > threshold


def _tiered(
    get: Callable[[ContractInfo, TokenInfo | None], float | None],
    threshold: float,
    base: Severity,
    escalated: Severity,
) -> SeverityFn:
    return lambda c, t: escalated if _above(get(c, t), threshold) else base


def _sell_tax(c: ContractInfo, _t: TokenInfo | None) -> float | None:
    return c.sell_tax


def _buy_tax(c: ContractInfo, _t: TokenInfo | None) -> float | None:
    return c.buy_tax


def _creator_pct(_c: ContractInfo, t: TokenInfo | None) -> float | None:
    return t.creator_percent if t else None


def _top10_pct(_c: ContractInfo, t: TokenInfo | None) -> float | None:
    return t.top10_holder_percent if t else None


def _few_holders(_c: ContractInfo, t: TokenInfo | None) -> bool:
    return t is not None and t.holder_count is not None and t.holder_count < MIN_HOLDERS


RULES: tuple[Rule, ...] = (
    # Critical: trading is blocked or the contract can vanish
    Rule(
        "cannot_sell",
        _flag("cannot_sell_all"),
        Severity.CRITICAL,
        "Holders cannot sell their entire balance",
    ),
    Rule(
        "cannot_buy",
        _flag("cannot_buy"),
        Severity.CRITICAL,
        "Token cannot be bought",
    ),
    Rule(
        "self_destruct",
        _flag("self_destruct"),
        Severity.CRITICAL,
        "Contract can self-destruct",
    ),
    # High
    Rule(
        "unverified",
        lambda c, _t: not c.verified,
        Severity.HIGH,
        "Contract source code is not verified",
    ),
    Rule(
        "mintable",
        _flag("mintable"),
        Severity.HIGH,
        "Token supply can be increased (mintable)",
    ),
    Rule(
        "hidden_owner",
        _flag("hidden_owner"),
        Severity.HIGH,
        "Contract has a hidden owner",
    ),
    Rule(
        "external_call",
        _flag("external_call"),
        Severity.HIGH,
        "Contract makes external calls that can alter its behavior",
    ),
    Rule(
        "high_sell_tax",
        lambda c, t: _above(_sell_tax(c, t), TAX_THRESHOLD),
        _tiered(_sell_tax, TAX_CRITICAL, Severity.HIGH, Severity.CRITICAL),
        lambda c, _t: f"High sell tax: {c.sell_tax:.1f}%",
    ),
    Rule(
        "high_buy_tax",
        lambda c, t: _above(_buy_tax(c, t), TAX_THRESHOLD),
        _tiered(_buy_tax, TAX_CRITICAL, Severity.HIGH, Severity.CRITICAL),
        lambda c, _t: f"High buy tax: {c.buy_tax:.1f}%",
    ),
    # Medium
    Rule(
        "ownership",
        lambda c, _t: not c.renounced and bool(c.owner),
        Severity.MEDIUM,
        "Contract ownership has not been renounced",
    ),
    Rule(
        "pausable",
        _flag("pausable"),
        Severity.MEDIUM,
        "Contract can be paused, blocking transfers",
    ),
    Rule(
        "blacklist",
        _flag("blacklist"),
        Severity.MEDIUM,
        "Contract has blacklist functionality",
    ),
    Rule(
        "proxy",
        _flag("proxy"),
        Severity.MEDIUM,
        "Contract is upgradeable (proxy pattern)",
    ),
    Rule(
        "slippage_modifiable",
        _flag("slippage_modifiable"),
        Severity.MEDIUM,
        "Owner can modify trading tax",
    ),
    # Holder distribution (requires TokenInfo)
    Rule(
        "creator_concentration",
        lambda c, t: _above(_creator_pct(c, t), CREATOR_THRESHOLD),
        _tiered(_creator_pct, CREATOR_HIGH, Severity.MEDIUM, Severity.HIGH),
        lambda _c, t: f"Creator holds {t.creator_percent:.1f}% of supply",
    ),
    Rule(
        "holder_concentration",
        lambda c, t: _above(_top10_pct(c, t), TOP10_THRESHOLD),
        _tiered(_top10_pct, TOP10_HIGH, Severity.MEDIUM, Severity.HIGH),
        lambda _c, t: f"Top 10 holders own {t.top10_holder_percent:.1f}% of supply",
    ),
    Rule(
        "low_holders",
        _few_holders,
        Severity.LOW,
        lambda _c, t: f"Only {t.holder_count} holders",
    ),
    # Low
    Rule(
        "anti_whale",
        _flag("anti_whale"),
        Severity.LOW,
        "Contract limits transaction or wallet size (anti-whale)",
    ),
    Rule(
        "trading_cooldown",
        _flag("trading_cooldown"),
        Severity.LOW,
        "Contract enforces a trading cooldown",
    ),
)


def evaluate_risks(
    contract: ContractInfo,
    token_info: TokenInfo | None = None,
    rules: Sequence[Rule] = RULES,
) -> list[Risk]:
    """Run every rule in order, collecting the ones that fire."""
    risks: list[Risk] = []
    for rule in rules:
        risk = rule.evaluate(contract, token_info)
        if risk is not None:
            risks.append(risk)
    return risks
