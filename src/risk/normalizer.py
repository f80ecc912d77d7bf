"""GoPlus token_security record → ContractInfo / TokenInfo.

GoPlus encodes flags as "1"/"0" strings and taxes/percentages as decimal
strings on a 0.0-1.0 scale. Every field degrades on its own: a malformed
value becomes False (flags) or None (numbers), never an error.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.risk.models import ContractInfo, TokenInfo, is_renounced_owner

TOP_HOLDERS_WINDOW = 10
# Any of these on a record means there is token-level data to report
TOKEN_INFO_KEYS = ("holder_count", "creator_percent", "owner_percent")


def _parse_bool(val: Any) -> bool:
    """GoPlus '1' = True; anything else (missing, '0', '', garbage) = False."""
    return val == "1"


def _parse_percent(val: Any) -> float | None:
    """Parse a 0.0-1.0 fraction string to a 0-100 percentage."""
    if val is None or val == "":
        return None
    try:
        return float(val) * 100
    except (ValueError, TypeError):
        return None


def _parse_int(val: Any) -> int | None:
    if val is None or val == "":
        return None
    try:
        return int(val)
    except (ValueError, TypeError):
        return None


def _parse_str(val: Any) -> str | None:
    if val is None or val == "":
        return None
    return str(val)


def _top_holders_percent(holders: Any) -> float | None:
    """Sum the first 10 holder shares as supplied (GoPlus sorts by balance)."""
    if not isinstance(holders, list):
        return None

    total = 0.0
    for holder in holders[:TOP_HOLDERS_WINDOW]:
        if not isinstance(holder, Mapping):
            continue
        pct = _parse_percent(holder.get("percent"))
        if pct is not None:
            total += pct
    return total


def normalize_contract(raw: Mapping[str, Any]) -> ContractInfo:
    owner = _parse_str(raw.get("owner_address"))
    return ContractInfo(
        verified=_parse_bool(raw.get("is_open_source")),
        renounced=is_renounced_owner(owner),
        owner=owner,
        creator=_parse_str(raw.get("creator_address")),
        mintable=_parse_bool(raw.get("is_mintable")),
        pausable=_parse_bool(raw.get("transfer_pausable")),
        blacklist=_parse_bool(raw.get("is_blacklisted")),
        whitelist=_parse_bool(raw.get("is_whitelisted")),
        proxy=_parse_bool(raw.get("is_proxy")),
        self_destruct=_parse_bool(raw.get("selfdestruct")),
        external_call=_parse_bool(raw.get("external_call")),
        buy_tax=_parse_percent(raw.get("buy_tax")),
        sell_tax=_parse_percent(raw.get("sell_tax")),
        cannot_buy=_parse_bool(raw.get("cannot_buy")),
        cannot_sell_all=_parse_bool(raw.get("cannot_sell_all")),
        slippage_modifiable=_parse_bool(raw.get("slippage_modifiable")),
        hidden_owner=_parse_bool(raw.get("hidden_owner")),
        anti_whale=_parse_bool(raw.get("is_anti_whale")),
        trading_cooldown=_parse_bool(raw.get("trading_cooldown")),
        is_honeypot=_parse_bool(raw.get("is_honeypot")),
        honeypot_with_same_creator=_parse_bool(raw.get("honeypot_with_same_creator")),
    )


def normalize_token_info(raw: Mapping[str, Any]) -> TokenInfo | None:
    """Build TokenInfo when the record carries holder or concentration data, else None."""
    holders = raw.get("holders")
    if not isinstance(holders, list) and all(
        raw.get(key) in (None, "") for key in TOKEN_INFO_KEYS
    ):
        return None

    return TokenInfo(
        name=_parse_str(raw.get("token_name")),
        symbol=_parse_str(raw.get("token_symbol")),
        total_supply=_parse_str(raw.get("total_supply")),
        decimals=_parse_int(raw.get("decimals")),
        holder_count=_parse_int(raw.get("holder_count")),
        lp_holder_count=_parse_int(raw.get("lp_holder_count")),
        lp_total_supply=_parse_str(raw.get("lp_total_supply")),
        creator_percent=_parse_percent(raw.get("creator_percent")),
        owner_percent=_parse_percent(raw.get("owner_percent")),
        top10_holder_percent=_top_holders_percent(holders),
    )


def normalize(
    raw: Mapping[str, Any] | None,
) -> tuple[ContractInfo, TokenInfo | None]:
    """Convert a raw provider record.

    Only a missing record (None) degrades to the clean profile. A record that
    is present but empty decodes field by field like any other.
    """
    if raw is None:
        return ContractInfo.empty(), None
    return normalize_contract(raw), normalize_token_info(raw)
