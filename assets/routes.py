"""
Asset Routes Module
This module provides Flask routes for resolving token symbols.
"""

import logging
from flask import Blueprint, jsonify, request
from web3.exceptions import InvalidAddress

from assets.addresses import get_symbol_by_address
from assets.resolver import ResolutionError, get_asset_resolver
from evm.connection import get_evm_connection

logger = logging.getLogger(__name__)

# Create a Blueprint for asset routes
assets_bp = Blueprint('assets', __name__)


def _symbol_arg():
    symbol = request.args.get('symbol', '').strip()
    return symbol or None


@assets_bp.errorhandler(ResolutionError)
def handle_resolution_error(error):
    return jsonify({'error': str(error)}), 404


@assets_bp.route('/api/assets/address', methods=['GET'])
def asset_address():
    """Resolve a token symbol to its address"""
    symbol = _symbol_arg()
    if not symbol:
        return jsonify({'error': 'Symbol is required'}), 400

    address = get_asset_resolver().resolve_address(symbol)
    return jsonify({
        'symbol': symbol,
        'address': address
    })


@assets_bp.route('/api/assets/token', methods=['GET'])
async def asset_token():
    """Resolve a token symbol to a contract and read its on-chain metadata"""
    symbol = _symbol_arg()
    if not symbol:
        return jsonify({'error': 'Symbol is required'}), 400

    signer = get_evm_connection().get_signer()

    try:
        asset = await get_asset_resolver().resolve_asset(symbol, signer)
        # resolve_asset only reads symbol() for literal addresses and doesn't return it
        token_symbol = await asset.functions.symbol().call()
        decimals = await asset.functions.decimals().call()
    except ResolutionError:
        raise
    except InvalidAddress as e:
        logger.warning(f"{symbol} is not a contract address: {str(e)}")
        return jsonify({'error': f'Failed to resolve symbol "{symbol}" to a contract address'}), 404
    except Exception as e:
        logger.error(f"Failed to read token metadata for {symbol}: {str(e)}")
        return jsonify({'error': f'Failed to read token metadata: {str(e)}'}), 502

    return jsonify({
        'symbol': symbol,
        'address': asset.address,
        'token_symbol': token_symbol,
        'decimals': decimals
    })


@assets_bp.route('/api/assets/symbol', methods=['GET'])
def asset_symbol():
    """Find the registered symbol for a token address"""
    address = request.args.get('address')
    if not address:
        return jsonify({'error': 'Address is required'}), 400

    resolver = get_asset_resolver()
    symbol = get_symbol_by_address(address, resolver.network, resolver.addresses)
    if symbol is None:
        return jsonify({'error': f'No symbol registered for {address}'}), 404

    return jsonify({
        'address': address,
        'symbol': symbol
    })


def register_asset_routes(app):
    """Register asset routes with the Flask app"""
    app.register_blueprint(assets_bp)
