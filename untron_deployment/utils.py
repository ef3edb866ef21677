import json
from pathlib import Path
from typing import Any, Optional

import yaml
from eth_typing import ChecksumAddress
from eth_utils import is_address, to_checksum_address

from untron_deployment.constants import UNRESOLVED_ADDRESS
from untron_deployment.exceptions import ConfigurationError


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def _load_json(filepath: Path) -> dict:
    """Loads a JSON file."""
    with open(filepath, "r") as file:
        return json.load(file)


def is_unresolved(address: Any) -> bool:
    """Returns True if the address is the placeholder for a not yet known contract."""
    return address == UNRESOLVED_ADDRESS


def checksum_address(value: Any, name: str) -> ChecksumAddress:
    """Validates an address-like value and returns it checksummed."""
    if not isinstance(value, str) or not is_address(value):
        raise ConfigurationError(f"{name} is not a valid address: '{value}'")
    return to_checksum_address(value)


def optional_address(value: Optional[str], name: str) -> Optional[ChecksumAddress]:
    """Same as checksum_address, but an absent or empty value resolves to None."""
    if not value:
        return None
    return checksum_address(value.strip(), name)
