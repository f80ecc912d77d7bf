"""Data models for GoPlus Security token_security responses."""

from typing import Any

from pydantic import BaseModel

# GoPlus chain ids for the EVM token_security endpoint
CHAIN_IDS: dict[str, str] = {
    "eth": "1",
    "ethereum": "1",
    "bsc": "56",
    "polygon": "137",
    "arbitrum": "42161",
    "base": "8453",
    "optimism": "10",
    "avalanche": "43114",
    "fantom": "250",
    "linea": "59144",
    "zksync": "324",
}

SUCCESS_CODE = 1


def resolve_chain_id(chain: str) -> str | None:
    """Chain name ('eth', 'BSC') or numeric id ('56') → GoPlus chain id."""
    key = chain.strip().lower()
    if key in CHAIN_IDS:
        return CHAIN_IDS[key]
    if key in CHAIN_IDS.values():
        return key
    return None


class GoPlusResponse(BaseModel):
    """Envelope: {code, message, result: {address: {...fields...}}}.

    Field values inside ``result`` stay raw (strings, holder lists) and are
    decoded by ``src.risk.normalizer``.
    """

    code: int = 0
    message: str = ""
    result: dict[str, dict[str, Any]] | None = None

    model_config = {"extra": "allow"}

    @property
    def ok(self) -> bool:
        return self.code == SUCCESS_CODE

    def record_for(self, address: str) -> dict[str, Any] | None:
        if not self.result:
            return None
        return self.result.get(address.lower()) or self.result.get(address)
