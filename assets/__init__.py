"""
Assets Package
This package resolves token symbols to addresses and ERC20 contract handles.
"""

from assets.resolver import (
    AssetResolver,
    ResolutionError,
    get_asset_resolver,
    initialize_asset_resolver,
    resolve_address,
    resolve_asset,
)

__all__ = [
    'AssetResolver',
    'ResolutionError',
    'get_asset_resolver',
    'initialize_asset_resolver',
    'resolve_address',
    'resolve_asset',
]
