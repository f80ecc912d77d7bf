"""Value objects for token security checks.

Wire shape is camelCase (``to_dict``), matching what the HTTP API returns.
Optional numeric fields use ``None`` for "unset" so that a missing tax
is never confused with a 0% tax.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskLevel(str, Enum):
    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def is_renounced_owner(owner: str | None) -> bool:
    """Owner absent or the zero address = ownership renounced."""
    return not owner or owner.lower() == ZERO_ADDRESS


@dataclass(frozen=True)
class ContractInfo:
    """Security-relevant contract properties at check time.

    Defaults describe a contract with no detected risk: every risk flag off,
    source verified, no owner (so ownership reads as renounced). The
    normalizer sets every field explicitly from the provider record.
    """

    verified: bool = True
    renounced: bool = True
    owner: str | None = None
    creator: str | None = None
    mintable: bool = False
    pausable: bool = False
    blacklist: bool = False
    whitelist: bool = False
    proxy: bool = False
    self_destruct: bool = False
    external_call: bool = False
    buy_tax: float | None = None  # percentage (0-100)
    sell_tax: float | None = None  # percentage (0-100)
    cannot_buy: bool = False
    cannot_sell_all: bool = False
    slippage_modifiable: bool = False
    hidden_owner: bool = False
    anti_whale: bool = False
    trading_cooldown: bool = False
    # Upstream verdicts, read only by the honeypot check
    is_honeypot: bool = False
    honeypot_with_same_creator: bool = False

    @classmethod
    def empty(cls) -> ContractInfo:
        """Degraded record used when the attribute source has no data.

        Missing data reads as "no risk detected", not as "unknown risk".
        """
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "verified": self.verified,
            "renounced": self.renounced,
            "owner": self.owner,
            "creator": self.creator,
            "mintable": self.mintable,
            "pausable": self.pausable,
            "blacklist": self.blacklist,
            "whitelist": self.whitelist,
            "proxy": self.proxy,
            "selfDestruct": self.self_destruct,
            "externalCall": self.external_call,
            "buyTax": self.buy_tax,
            "sellTax": self.sell_tax,
            "cannotBuy": self.cannot_buy,
            "cannotSellAll": self.cannot_sell_all,
            "slippageModifiable": self.slippage_modifiable,
            "hiddenOwner": self.hidden_owner,
            "antiWhale": self.anti_whale,
            "tradingCooldown": self.trading_cooldown,
        }


@dataclass(frozen=True)
class TokenInfo:
    """Supply and holder distribution data."""

    name: str | None = None
    symbol: str | None = None
    total_supply: str | None = None  # raw decimal string, may exceed float precision
    decimals: int | None = None
    holder_count: int | None = None
    lp_holder_count: int | None = None
    lp_total_supply: str | None = None
    creator_percent: float | None = None  # 0-100
    owner_percent: float | None = None  # 0-100
    top10_holder_percent: float | None = None  # sum of shares, not capped at 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "totalSupply": self.total_supply,
            "decimals": self.decimals,
            "holderCount": self.holder_count,
            "lpHolderCount": self.lp_holder_count,
            "lpTotalSupply": self.lp_total_supply,
            "creatorPercent": self.creator_percent,
            "ownerPercent": self.owner_percent,
            "top10HolderPercent": self.top10_holder_percent,
        }


@dataclass(frozen=True)
class Risk:
    type: str
    severity: Severity
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "severity": self.severity.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class TokenCheck:
    """Result of one token check. Built once, never mutated."""

    address: str
    chain: str
    is_honeypot: bool
    is_rug_pull: bool
    risk_score: int
    risk_level: RiskLevel
    risks: tuple[Risk, ...]
    contract: ContractInfo
    token_info: TokenInfo | None = None
    timestamp: int = field(default=0)  # epoch ms

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "chain": self.chain,
            "isHoneypot": self.is_honeypot,
            "isRugPull": self.is_rug_pull,
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level.value,
            "risks": [r.to_dict() for r in self.risks],
            "contract": self.contract.to_dict(),
            "tokenInfo": self.token_info.to_dict() if self.token_info else None,
            "timestamp": self.timestamp,
        }
