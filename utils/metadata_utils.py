"""
Configuration utilities for the asset resolver service.
Values come from the environment (including a .env file) and fall back to the VM metadata server.
"""
import os
import requests
from dotenv import load_dotenv

from evm.connection import DEFAULT_RPC_URL

# Load environment variables from .env file if it exists
load_dotenv()

METADATA_URL = "http://metadata.google.internal/computeMetadata/v1/instance/attributes/{key}"


def get_metadata(metadata_key, timeout=5):
    """Get an attribute from the VM metadata server, or None if it is unavailable."""
    try:
        response = requests.get(
            METADATA_URL.format(key=metadata_key),
            headers={"Metadata-Flavor": "Google"},
            timeout=timeout,
        )
    except requests.exceptions.RequestException:
        return None

    if response.status_code != 200:
        return None
    return response.text


def get_env_var(var_name, default=None, required=False):
    """Get an environment variable with fallback to metadata."""
    value = os.environ.get(var_name)

    if not value:
        value = get_metadata(var_name)

    if not value:
        if required and default is None:
            raise ValueError(f"Required variable {var_name} is not set in environment or metadata")
        value = default

    return value


def _as_bool(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_settings():
    """
    Load the service configuration.

    Returns:
        A dictionary with rpc_url, address_file, log_level, cloud_logging and port
    """
    return {
        'rpc_url': get_env_var("EVM_RPC_URL", default=DEFAULT_RPC_URL),
        'address_file': get_env_var("ASSET_ADDRESSES_FILE"),
        'log_level': get_env_var("LOG_LEVEL", default="INFO"),
        'cloud_logging': _as_bool(get_env_var("ENABLE_CLOUD_LOGGING", default="true")),
        'port': int(get_env_var("PORT", default="8080")),
    }
