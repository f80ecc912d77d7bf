"""Request/response models for the check API (camelCase on the wire)."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.risk.models import TokenCheck


class TokenRef(BaseModel):
    chain: str = Field(..., min_length=1, max_length=32)
    address: str = Field(..., min_length=1, max_length=128)


class BatchCheckRequest(BaseModel):
    tokens: list[TokenRef]


class RiskOut(BaseModel):
    type: str
    severity: str
    description: str


class ContractOut(BaseModel):
    verified: bool
    renounced: bool
    owner: str | None = None
    creator: str | None = None
    mintable: bool
    pausable: bool
    blacklist: bool
    whitelist: bool
    proxy: bool
    selfDestruct: bool
    externalCall: bool
    buyTax: float | None = None
    sellTax: float | None = None
    cannotBuy: bool
    cannotSellAll: bool
    slippageModifiable: bool
    hiddenOwner: bool
    antiWhale: bool
    tradingCooldown: bool


class TokenInfoOut(BaseModel):
    name: str | None = None
    symbol: str | None = None
    totalSupply: str | None = None
    decimals: int | None = None
    holderCount: int | None = None
    lpHolderCount: int | None = None
    lpTotalSupply: str | None = None
    creatorPercent: float | None = None
    ownerPercent: float | None = None
    top10HolderPercent: float | None = None


class TokenCheckOut(BaseModel):
    address: str
    chain: str
    isHoneypot: bool
    isRugPull: bool
    riskScore: int
    riskLevel: str
    risks: list[RiskOut]
    contract: ContractOut
    tokenInfo: TokenInfoOut | None = None
    timestamp: int

    @classmethod
    def from_check(cls, check: TokenCheck) -> TokenCheckOut:
        return cls.model_validate(check.to_dict())


class HealthResponse(BaseModel):
    status: str
    timestamp: int
