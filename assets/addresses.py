"""
Token addresses for Ethereum mainnet.
This file contains the address book used to turn token symbols into contract addresses.
"""
import copy
import json
import os
import re
from typing import Dict, Optional

# Matches a literal Ethereum address, e.g. 0xdAC17F958D2ee523a2206206994597C13D831ec7
ETHEREUM_ADDRESS = re.compile(r"^0x[a-fA-F0-9]{40}$")

# Address book keyed by network name, then by symbol.
# Upgradeable tokens are listed under their proxy name (e.g. "OUSDProxy").
ADDRESSES = {
    "mainnet": {
        # Stablecoins
        "USDT": "0xdAC17F958D2ee523a2206206994597C13D831ec7",
        "USDC": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "DAI": "0x6B175474E89094C44Da98b954EedeAC495271d0F",
        "LUSD": "0x5f98805A4E8be255a32880FDeC7F6728C6568bA0",

        # ETH and liquid staking tokens
        "WETH": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        "stETH": "0xae7ab96520DE3A18E5e111B5EaAb095312D7fE84",
        "rETH": "0xae78736Cd615f374D3085123A210448E74Fc6393",
        "frxETH": "0x5E8422345238F34275888049021821E8E08CAa1f",
        "sfrxETH": "0xac3E018457B222d93114458476f3E3416Abbe38F",

        # Origin tokens (upgradeable proxies)
        "OUSDProxy": "0x2A8e1E676Ec238d8A992307B495b45B3fEAa5e86",
        "OETHProxy": "0x856c4Efb76C1D1AE02e20CEB03A2A6a08b0b8dC3",
        "WOUSDProxy": "0xD2af830E8CBdFed6CC11Bab697bB25496ed6FA62",
        "WOETHProxy": "0xDcEe70654261AF21C44c093C300eD3Bb97b78192",
        "OGN": "0x8207c1FfC5B6804F6024322CcF34F29c3541Ae26",

        # Reward tokens
        "CRV": "0xD533a949740bb3306d119CC777fa900bA034cd52",
        "CVX": "0x4e3FBD56CD56c3e72c1403e103b45Db9da5B9D2B",
        "BAL": "0xba100000625a3754423978a60c9317c58a424e3D",
        "AURA": "0xC0c293ce456fF0ED870ADd98a0828Dd4d2903DBF",
    },
}


def is_ethereum_address(value) -> bool:
    """Return True if the value looks like a literal Ethereum address."""
    if not isinstance(value, str):
        return False
    return ETHEREUM_ADDRESS.match(value) is not None


def load_address_table(path: Optional[str] = None) -> Dict[str, Dict[str, str]]:
    """
    Build the address table, optionally overlaid with entries from a JSON file.

    Args:
        path: Path to a JSON object of the form {"mainnet": {"SYMBOL": "0x..."}}.
            Entries in the file replace bundled entries with the same symbol.

    Returns:
        A new address table; the bundled ADDRESSES dictionary is never modified.

    Raises:
        FileNotFoundError: If the override file doesn't exist
        ValueError: If the override file isn't a JSON object of objects of strings
    """
    table = copy.deepcopy(ADDRESSES)
    if not path:
        return table

    if not os.path.exists(path):
        raise FileNotFoundError(f"Address file not found: {path}")

    try:
        with open(path, 'r') as f:
            overrides = json.load(f)
    except json.JSONDecodeError:
        raise ValueError(f"Invalid JSON in address file: {path}")

    if not isinstance(overrides, dict):
        raise ValueError(f"Address file must contain a JSON object: {path}")

    for network, entries in overrides.items():
        if not isinstance(entries, dict):
            raise ValueError(f"Addresses for network '{network}' must be a JSON object")
        for symbol, address in entries.items():
            if not isinstance(address, str):
                raise ValueError(f"Address for {symbol} on '{network}' must be a string, got {address!r}")
        table.setdefault(network, {}).update(entries)

    return table


def get_symbol_by_address(address: str, network: str = "mainnet", addresses=None) -> Optional[str]:
    """
    Get the symbol registered for an address.

    Args:
        address: The token address (any case)
        network: The network to search
        addresses: Address table to search, defaults to ADDRESSES

    Returns:
        The symbol or None if not found
    """
    table = (addresses if addresses is not None else ADDRESSES).get(network, {})
    address = address.lower()
    for symbol, addr in table.items():
        if addr.lower() == address:
            return symbol
    return None
