"""Shared test fixtures."""

from typing import Any

import pytest

ZERO = "0x0000000000000000000000000000000000000000"
OWNER = "0x1111111111111111111111111111111111111111"


@pytest.fixture
def clean_record() -> dict[str, Any]:
    """GoPlus record for a well-behaved token."""
    return {
        "is_open_source": "1",
        "owner_address": ZERO,
        "creator_address": "0x2222222222222222222222222222222222222222",
        "is_mintable": "0",
        "transfer_pausable": "0",
        "is_blacklisted": "0",
        "is_whitelisted": "0",
        "is_proxy": "0",
        "selfdestruct": "0",
        "external_call": "0",
        "buy_tax": "0",
        "sell_tax": "0",
        "cannot_buy": "0",
        "cannot_sell_all": "0",
        "slippage_modifiable": "0",
        "hidden_owner": "0",
        "is_anti_whale": "0",
        "trading_cooldown": "0",
        "is_honeypot": "0",
        "honeypot_with_same_creator": "0",
        "token_name": "Clean Token",
        "token_symbol": "CLN",
        "total_supply": "1000000000",
        "holder_count": "5400",
        "lp_holder_count": "12",
        "lp_total_supply": "3162.27",
        "creator_percent": "0.001",
        "owner_percent": "0",
        "holders": [{"address": f"0x{i:040x}", "percent": "0.02"} for i in range(12)],
    }


@pytest.fixture
def scam_record() -> dict[str, Any]:
    """GoPlus record for an obvious honeypot."""
    return {
        "is_open_source": "0",
        "owner_address": OWNER,
        "is_mintable": "1",
        "transfer_pausable": "1",
        "is_blacklisted": "1",
        "is_proxy": "1",
        "buy_tax": "0.05",
        "sell_tax": "0.99",
        "cannot_sell_all": "1",
        "is_honeypot": "1",
        "holder_count": "12",
        "creator_percent": "0.45",
        "holders": [{"address": OWNER, "percent": "0.8"}],
    }
