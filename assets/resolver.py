"""
Asset resolution functions.
These functions turn token symbols such as OUSD, USDT, stETH or CRV into
contract addresses and ERC20 contract handles.
"""
import logging
from web3 import Web3

from assets.abi_utils import ERC20_ABI_NAME, load_abi
from assets.addresses import ADDRESSES, is_ethereum_address

logger = logging.getLogger(__name__)


class ResolutionError(ValueError):
    """Raised when a symbol cannot be resolved to an address."""


def web3_contract_factory(address, abi, signer):
    """
    Create a web3 contract instance bound to a signer.

    Args:
        address: The contract address
        abi: The contract ABI
        signer: An AsyncWeb3 instance, with or without a signing account

    Returns:
        An AsyncContract instance
    """
    # web3 only accepts checksummed addresses
    if Web3.is_address(address):
        address = Web3.to_checksum_address(address)
    return signer.eth.contract(address=address, abi=abi)


class AssetResolver:
    """Resolves token symbols against an address table"""

    def __init__(self, addresses=None, abi=None, network="mainnet", contract_factory=None):
        """
        Initialize the resolver

        Args:
            addresses (dict, optional): Address table keyed by network, then symbol.
                Defaults to the bundled table.
            abi (list, optional): Token ABI for contract handles. Defaults to IERC20Metadata.
            network (str): Network whose addresses are used.
            contract_factory (callable, optional): Called as (address, abi, signer) to
                build a contract handle. Defaults to web3_contract_factory.
        """
        self.addresses = addresses if addresses is not None else ADDRESSES
        self.abi = abi if abi is not None else load_abi(ERC20_ABI_NAME)
        self.network = network
        self.contract_factory = contract_factory or web3_contract_factory

    def _lookup(self, symbol):
        table = self.addresses.get(self.network, {})
        asset_address = table.get(symbol) or table.get(f"{symbol}Proxy") or symbol
        if not asset_address:
            raise ResolutionError(f'Failed to resolve symbol "{symbol}" to an address')
        return asset_address

    def resolve_address(self, symbol):
        """
        Resolve a token symbol to an address.

        Symbols missing from the table are looked up again with a "Proxy" suffix.
        Anything still unresolved is returned as given, so literal addresses pass through.

        Args:
            symbol: Token symbol of the asset, e.g. OUSD, USDT, stETH, CRV

        Returns:
            The asset address

        Raises:
            ResolutionError: If nothing non-empty could be resolved
        """
        asset_address = self._lookup(symbol)
        logger.info(f"Resolved {symbol} to {asset_address}")
        return asset_address

    async def resolve_asset(self, symbol, signer):
        """
        Resolve a token symbol to an ERC20 contract handle.

        When the symbol is itself an address, the contract's on-chain symbol is
        read and logged. Errors from that call are not caught.

        Args:
            symbol: Token symbol of the asset or a literal address
            signer: Signing or read-only context passed to the contract factory

        Returns:
            The contract handle

        Raises:
            ResolutionError: If nothing non-empty could be resolved
        """
        asset_address = self._lookup(symbol)
        literal_address = is_ethereum_address(symbol)
        if not literal_address:
            logger.info(f"Resolved {symbol} to {asset_address}")

        asset = self.contract_factory(asset_address, self.abi, signer)

        if literal_address:
            onchain_symbol = await asset.functions.symbol().call()
            logger.info(f"Resolved {symbol} to {onchain_symbol} asset")
        return asset


# Global instance that can be imported and used throughout the application
asset_resolver = None


def initialize_asset_resolver(addresses=None, abi=None, network="mainnet", contract_factory=None):
    """Initialize the global asset resolver"""
    global asset_resolver
    asset_resolver = AssetResolver(addresses, abi, network, contract_factory)
    return asset_resolver


def get_asset_resolver():
    """Get the global asset resolver, initializing with the bundled table if needed"""
    global asset_resolver
    if asset_resolver is None:
        asset_resolver = initialize_asset_resolver()
    return asset_resolver


def resolve_address(symbol):
    """Resolve a token symbol to an address using the global resolver."""
    return get_asset_resolver().resolve_address(symbol)


async def resolve_asset(symbol, signer):
    """Resolve a token symbol to an ERC20 contract handle using the global resolver."""
    return await get_asset_resolver().resolve_asset(symbol, signer)
