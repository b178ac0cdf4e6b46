"""
Shared fixtures for the asset resolver tests.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).parent.parent))

import assets.resolver  # noqa: E402
import evm.connection  # noqa: E402

USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
OUSD = "0x2A8e1E676Ec238d8A992307B495b45B3fEAa5e86"
CRV = "0xD533a949740bb3306d119CC777fa900bA034cd52"
UNLISTED = "0x1111111111111111111111111111111111111111"


@pytest.fixture(autouse=True)
def reset_globals():
    """Drop the process-wide resolver and connection between tests."""
    assets.resolver.asset_resolver = None
    evm.connection.evm_connection = None
    yield
    assets.resolver.asset_resolver = None
    evm.connection.evm_connection = None


@pytest.fixture
def address_table():
    return {"mainnet": {"USDT": USDT, "OUSDProxy": OUSD, "CRV": CRV}}


@pytest.fixture
def make_contract():
    """Build a contract handle double whose symbol() and decimals() calls are awaitable."""
    def _make(address, onchain_symbol="USDT", decimals=6):
        contract = MagicMock()
        contract.address = address
        contract.functions.symbol.return_value.call = AsyncMock(return_value=onchain_symbol)
        contract.functions.decimals.return_value.call = AsyncMock(return_value=decimals)
        return contract
    return _make


@pytest.fixture
def contract_factory(make_contract):
    """A contract factory double that records each (address, abi, signer) call."""
    factory = MagicMock(side_effect=lambda address, abi, signer: make_contract(address))
    return factory
