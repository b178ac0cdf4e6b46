"""
Tests for symbol resolution.
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from web3 import AsyncWeb3, AsyncHTTPProvider

from assets.abi_utils import ERC20_ABI_NAME, load_abi
from assets.resolver import (
    AssetResolver,
    ResolutionError,
    get_asset_resolver,
    initialize_asset_resolver,
    resolve_address,
    resolve_asset,
    web3_contract_factory,
)
from tests.conftest import CRV, OUSD, UNLISTED, USDT

SIGNER = object()


@pytest.fixture
def resolver(address_table, contract_factory):
    return AssetResolver(addresses=address_table, abi=[], contract_factory=contract_factory)


# ============================================
# resolve_address
# ============================================
def test_resolve_address_finds_symbol_in_table(resolver):
    assert resolver.resolve_address("USDT") == USDT


def test_resolve_address_falls_back_to_proxy_entry(resolver):
    assert resolver.resolve_address("OUSD") == OUSD


def test_resolve_address_prefers_exact_symbol_over_proxy():
    table = {"mainnet": {"OUSD": USDT, "OUSDProxy": OUSD}}
    resolver = AssetResolver(addresses=table, abi=[])
    assert resolver.resolve_address("OUSD") == USDT


def test_resolve_address_passes_through_unknown_symbol(resolver):
    assert resolver.resolve_address(UNLISTED) == UNLISTED
    assert resolver.resolve_address("NOTATOKEN") == "NOTATOKEN"


def test_resolve_address_with_empty_table_passes_through():
    resolver = AssetResolver(addresses={}, abi=[])
    assert resolver.resolve_address(UNLISTED) == UNLISTED


@pytest.mark.parametrize("symbol", ["", None])
def test_resolve_address_rejects_falsy_symbol(resolver, symbol):
    with pytest.raises(ResolutionError, match="Failed to resolve symbol"):
        resolver.resolve_address(symbol)


def test_resolution_error_is_a_value_error():
    assert issubclass(ResolutionError, ValueError)


def test_resolve_address_is_repeatable(resolver):
    assert resolver.resolve_address("CRV") == resolver.resolve_address("CRV") == CRV


def test_resolve_address_ignores_other_networks():
    table = {"mainnet": {}, "holesky": {"USDT": UNLISTED}}
    resolver = AssetResolver(addresses=table, abi=[])
    assert resolver.resolve_address("USDT") == "USDT"


def test_resolve_address_logs_mapping(resolver, caplog):
    with caplog.at_level(logging.INFO, logger="assets.resolver"):
        resolver.resolve_address("OUSD")
    assert f"Resolved OUSD to {OUSD}" in caplog.text


def test_resolve_address_does_not_log_failures(resolver, caplog):
    with caplog.at_level(logging.INFO, logger="assets.resolver"):
        with pytest.raises(ResolutionError):
            resolver.resolve_address("")
    assert caplog.records == []


# ============================================
# resolve_asset
# ============================================
@pytest.mark.asyncio
async def test_resolve_asset_ticker_builds_contract_without_live_read(resolver, contract_factory):
    asset = await resolver.resolve_asset("CRV", SIGNER)

    contract_factory.assert_called_once_with(CRV, [], SIGNER)
    assert asset.address == CRV
    asset.functions.symbol.assert_not_called()


@pytest.mark.asyncio
async def test_resolve_asset_proxy_symbol(resolver, contract_factory):
    asset = await resolver.resolve_asset("OUSD", SIGNER)
    assert asset.address == OUSD
    contract_factory.assert_called_once_with(OUSD, [], SIGNER)


@pytest.mark.asyncio
async def test_resolve_asset_ticker_logs_mapping(resolver, caplog):
    with caplog.at_level(logging.INFO, logger="assets.resolver"):
        await resolver.resolve_asset("USDT", SIGNER)
    assert f"Resolved USDT to {USDT}" in caplog.text


@pytest.mark.asyncio
async def test_resolve_asset_literal_address_reads_onchain_symbol(resolver, caplog):
    with caplog.at_level(logging.INFO, logger="assets.resolver"):
        asset = await resolver.resolve_asset(UNLISTED, SIGNER)

    assert asset.address == UNLISTED
    asset.functions.symbol.return_value.call.assert_awaited_once()
    assert f"Resolved {UNLISTED} to USDT asset" in caplog.text
    assert f"Resolved {UNLISTED} to {UNLISTED}" not in caplog.text


@pytest.mark.asyncio
async def test_resolve_asset_literal_address_propagates_call_errors(address_table, make_contract):
    contract = make_contract(UNLISTED)
    contract.functions.symbol.return_value.call = AsyncMock(side_effect=ConnectionError("RPC unreachable"))
    resolver = AssetResolver(addresses=address_table, abi=[], contract_factory=lambda *args: contract)

    with pytest.raises(ConnectionError, match="RPC unreachable"):
        await resolver.resolve_asset(UNLISTED, SIGNER)


@pytest.mark.asyncio
async def test_resolve_asset_rejects_empty_symbol(resolver, contract_factory):
    with pytest.raises(ResolutionError):
        await resolver.resolve_asset("", SIGNER)
    contract_factory.assert_not_called()


@pytest.mark.asyncio
async def test_resolve_asset_returns_new_handle_each_call(resolver, contract_factory):
    first = await resolver.resolve_asset("USDT", SIGNER)
    second = await resolver.resolve_asset("USDT", SIGNER)
    assert first is not second
    assert contract_factory.call_count == 2


# ============================================
# Defaults and the web3 contract factory
# ============================================
def test_resolver_defaults_to_bundled_table_and_abi():
    resolver = AssetResolver()
    assert resolver.network == "mainnet"
    assert resolver.resolve_address("stETH") == "0xae7ab96520DE3A18E5e111B5EaAb095312D7fE84"
    assert resolver.abi == load_abi(ERC20_ABI_NAME)
    assert resolver.contract_factory is web3_contract_factory


def test_web3_contract_factory_checksums_address():
    w3 = AsyncWeb3(AsyncHTTPProvider("http://127.0.0.1:8545"))
    contract = web3_contract_factory(USDT.lower(), load_abi(ERC20_ABI_NAME), w3)

    assert contract.address == USDT
    assert hasattr(contract.functions, "symbol")
    assert hasattr(contract.functions, "decimals")


def test_web3_contract_factory_passes_signer_through():
    signer = MagicMock()
    web3_contract_factory(USDT, [], signer)
    signer.eth.contract.assert_called_once_with(address=USDT, abi=[])


# ============================================
# Module-level resolver
# ============================================
def test_get_asset_resolver_creates_default_once():
    resolver = get_asset_resolver()
    assert resolver is get_asset_resolver()
    assert resolve_address("USDT") == USDT


def test_initialize_asset_resolver_replaces_global(address_table):
    resolver = initialize_asset_resolver(addresses={"mainnet": {"USDT": UNLISTED}}, abi=[])
    assert get_asset_resolver() is resolver
    assert resolve_address("USDT") == UNLISTED


@pytest.mark.asyncio
async def test_module_resolve_asset_uses_global_resolver(address_table, contract_factory):
    initialize_asset_resolver(addresses=address_table, abi=[], contract_factory=contract_factory)
    asset = await resolve_asset("CRV", SIGNER)
    assert asset.address == CRV
