import json
import os
from typing import Dict, List, Optional, Tuple

# Directory where ABI files are stored
ABI_DIR = os.path.join(os.path.dirname(__file__), 'abis')

# ABI used for every token contract handle
ERC20_ABI_NAME = "IERC20Metadata"

# Parsed ABIs keyed by (directory, contract name)
_abi_cache: Dict[Tuple[str, str], List[Dict]] = {}


def load_abi(contract_name: str, abi_dir: str = ABI_DIR) -> List[Dict]:
    """
    Load an ABI from a JSON file by contract name.

    The file may hold either a bare ABI list or a compiler build artifact
    with the ABI under an "abi" key.

    Args:
        contract_name: Name of the contract (e.g., 'IERC20Metadata')
        abi_dir: Directory holding the ABI files

    Returns:
        The ABI as a list of entries

    Raises:
        FileNotFoundError: If the ABI file doesn't exist
        ValueError: If the file isn't valid JSON or holds no ABI
    """
    cache_key = (abi_dir, contract_name)
    if cache_key in _abi_cache:
        return _abi_cache[cache_key]

    file_path = os.path.join(abi_dir, f"{contract_name}.json")
    try:
        with open(file_path, 'r') as f:
            document = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"ABI file not found: {file_path}")
    except json.JSONDecodeError:
        raise ValueError(f"Invalid JSON in ABI file: {file_path}")

    # Build artifacts wrap the ABI alongside bytecode and metadata
    if isinstance(document, dict):
        document = document.get('abi')

    if not isinstance(document, list):
        raise ValueError(f"No ABI found in file: {file_path}")

    _abi_cache[cache_key] = document
    return document


def get_function_abi(contract_name: str, function_name: str, abi_dir: str = ABI_DIR) -> Optional[Dict]:
    """
    Get the ABI for a specific function in a contract.

    Args:
        contract_name: Name of the contract
        function_name: Name of the function to find

    Returns:
        The function ABI or None if not found
    """
    abi = load_abi(contract_name, abi_dir)

    for item in abi:
        if item.get('type') == 'function' and item.get('name') == function_name:
            return item

    return None


def clear_abi_cache():
    """Forget all loaded ABIs."""
    _abi_cache.clear()
