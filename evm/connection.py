"""
EVM Connection Module
This module handles the connection to Ethereum mainnet and builds the signer
contexts that token contract handles are bound to.
"""

import os
import time
import logging
from eth_account import Account
from web3 import AsyncWeb3, AsyncHTTPProvider
from web3.middleware import SignAndSendRawMiddlewareBuilder

logger = logging.getLogger(__name__)

# Default RPC URL to use if none is specified
DEFAULT_RPC_URL = 'https://ethereum-rpc.publicnode.com'


def load_account(private_key=None):
    """
    Load an Ethereum account from a private key.

    Args:
        private_key (str, optional): The private key to use. If None, uses the PRIVATE_KEY environment variable.

    Returns:
        A LocalAccount instance

    Raises:
        ValueError: If no private key is available
    """
    if not private_key:
        private_key = os.environ.get('PRIVATE_KEY')
        if not private_key:
            raise ValueError("No private key provided and PRIVATE_KEY environment variable not set")

    # Ensure private key has 0x prefix
    if not private_key.startswith('0x'):
        private_key = '0x' + private_key

    return Account.from_key(private_key)


class EVMConnection:
    """Class to manage the mainnet connection and signer contexts"""

    def __init__(self, rpc_url=None):
        """
        Initialize the EVM connection

        Args:
            rpc_url (str, optional): RPC endpoint URL. If not provided, will use environment variable or default.
        """
        self.rpc_url = rpc_url or os.environ.get('EVM_RPC_URL', DEFAULT_RPC_URL)
        self.web3 = AsyncWeb3(AsyncHTTPProvider(self.rpc_url))
        self.connected = False
        self.signers = {}
        self.network_info = {
            'name': 'mainnet',
            'chain_id': None,
            'latest_block': None,
            'connection_time': None
        }

    async def connect(self):
        """Check the connection to the RPC endpoint and record network information"""
        try:
            start_time = time.time()
            self.connected = await self.web3.is_connected()
            if not self.connected:
                logger.warning(f"RPC endpoint {self.rpc_url} is not reachable")
                return False

            self.network_info['connection_time'] = time.time() - start_time
            self.network_info['chain_id'] = await self.web3.eth.chain_id
            self.network_info['latest_block'] = await self.web3.eth.block_number
            return True
        except Exception as e:
            self.connected = False
            logger.error(f"Connection error: {str(e)}")
            return False

    def get_connection_status(self):
        """Get the current connection status and network information"""
        return {
            'connected': self.connected,
            'rpc_url': self.rpc_url,
            'network': self.network_info
        }

    def get_signer(self, private_key=None):
        """
        Get the context token contracts are bound to.

        With a private key (argument or PRIVATE_KEY), returns an AsyncWeb3 instance that
        signs and sends transactions from that account. Otherwise returns the read-only instance.
        Signers are built once per account address.
        """
        try:
            account = load_account(private_key)
        except ValueError:
            logger.info("No private key available, using read-only provider")
            return self.web3

        if account.address in self.signers:
            return self.signers[account.address]

        signer = AsyncWeb3(AsyncHTTPProvider(self.rpc_url))
        signer.middleware_onion.inject(SignAndSendRawMiddlewareBuilder.build(account), layer=0)
        signer.eth.default_account = account.address
        logger.info(f"Created signer for address: {account.address}")

        self.signers[account.address] = signer
        return signer


# Global instance that can be imported and used throughout the application
evm_connection = None


def initialize_evm_connection(rpc_url=None):
    """Initialize the global EVM connection"""
    global evm_connection
    evm_connection = EVMConnection(rpc_url)
    return evm_connection


def get_evm_connection():
    """Get the global EVM connection instance, initializing if needed"""
    global evm_connection
    if evm_connection is None:
        evm_connection = initialize_evm_connection()
    return evm_connection
