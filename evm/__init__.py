"""
EVM Package
This package provides the mainnet connection and signer contexts used by asset resolution.
"""

from evm.connection import initialize_evm_connection, get_evm_connection, load_account, EVMConnection

__all__ = ['initialize_evm_connection', 'get_evm_connection', 'load_account', 'EVMConnection']
